"""Validation logic for submissions, postings and uploads."""

import re
from dataclasses import dataclass, field

from hiretrack.schemas.application import ApplicantInput
from hiretrack.schemas.job import JOB_TYPES, JobInput

APPLICANT_REQUIRED_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "phone",
    "experience",
    "education",
)
JOB_REQUIRED_FIELDS = ("title", "department", "location", "description")

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


@dataclass
class ValidationResult:
    """Result of validation process."""

    is_valid: bool
    error: str | None = None
    fields: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def _missing(obj, names) -> list[str]:
    return [name for name in names if not str(getattr(obj, name) or "").strip()]


def validate_applicant_input(data: ApplicantInput) -> ValidationResult:
    """Check the identity fields every application must carry."""
    missing = _missing(data, APPLICANT_REQUIRED_FIELDS)
    if missing:
        return ValidationResult(
            is_valid=False,
            error=f"Required fields are empty: {', '.join(missing)}",
            fields=missing,
        )

    if not _EMAIL_RE.match(data.email.strip()):
        return ValidationResult(
            is_valid=False,
            error=f"Email address is malformed: {data.email}",
            fields=["email"],
        )

    warnings = []
    if "resume" not in data.documents:
        warnings.append("No resume attached")

    return ValidationResult(is_valid=True, warnings=warnings)


def validate_job_input(data: JobInput) -> ValidationResult:
    """Check a posting before it is created."""
    missing = _missing(data, JOB_REQUIRED_FIELDS)
    if missing:
        return ValidationResult(
            is_valid=False,
            error=f"Required fields are empty: {', '.join(missing)}",
            fields=missing,
        )

    if data.type not in JOB_TYPES:
        return ValidationResult(
            is_valid=False,
            error=f"Job type must be one of {', '.join(JOB_TYPES)}",
            fields=["type"],
        )

    return ValidationResult(is_valid=True)


def validate_upload(
    size: int,
    content_type: str | None,
    max_bytes: int,
    allowed_types: list[str],
) -> ValidationResult:
    """Validate an attachment against the size ceiling and type allow-list."""
    if size > max_bytes:
        limit_mb = max_bytes / (1024 * 1024)
        return ValidationResult(
            is_valid=False,
            error=f"File size must be less than {limit_mb:g}MB",
            fields=["size"],
        )

    if content_type not in allowed_types:
        return ValidationResult(
            is_valid=False,
            error="Please upload PDF, DOC, DOCX, or TXT files only",
            fields=["type"],
        )

    return ValidationResult(is_valid=True)


def sanitize_filename(name: str) -> str:
    """Replace characters that are unsafe in blob paths."""
    cleaned = _UNSAFE_FILENAME_CHARS.sub("_", name or "")
    return cleaned or "file"
