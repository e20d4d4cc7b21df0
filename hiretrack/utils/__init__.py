"""Utility functions and classes."""

from hiretrack.utils.filters import filter_applications, filter_jobs
from hiretrack.utils.freshness import LatestOnly
from hiretrack.utils.validators import (
    ValidationResult,
    validate_applicant_input,
    validate_job_input,
    validate_upload,
)

__all__ = [
    "LatestOnly",
    "ValidationResult",
    "filter_applications",
    "filter_jobs",
    "validate_applicant_input",
    "validate_job_input",
    "validate_upload",
]
