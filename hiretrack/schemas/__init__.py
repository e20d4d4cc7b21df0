"""Pydantic schemas for request/response validation."""

from hiretrack.schemas.application import (
    APPLICATION_STATUSES,
    DOCUMENT_SLOTS,
    ApplicantInput,
    Application,
    ApplicationDocuments,
    ApplicationUpdate,
    Failed,
    PendingUpload,
    StatusChange,
    Uploaded,
    UploadOutcome,
)
from hiretrack.schemas.job import JOB_STATUSES, JOB_TYPES, Job, JobInput, JobUpdate
from hiretrack.schemas.user import Session, User

__all__ = [
    "APPLICATION_STATUSES",
    "DOCUMENT_SLOTS",
    "JOB_STATUSES",
    "JOB_TYPES",
    "ApplicantInput",
    "Application",
    "ApplicationDocuments",
    "ApplicationUpdate",
    "Failed",
    "Job",
    "JobInput",
    "JobUpdate",
    "PendingUpload",
    "Session",
    "StatusChange",
    "UploadOutcome",
    "Uploaded",
    "User",
]
