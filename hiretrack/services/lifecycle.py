"""Lifecycle rules for applications and jobs.

Everything here is pure: functions take a record and return a new one,
leaving persistence to the services that call them.
"""

from collections.abc import Mapping
from datetime import UTC, datetime

from hiretrack.core.exceptions import InvalidTransitionError, ValidationError
from hiretrack.schemas.application import (
    APPLICATION_STATUSES,
    ApplicantInput,
    Application,
    ApplicationDocuments,
    DocumentMeta,
    Failed,
    PendingUpload,
    StatusChange,
    Uploaded,
    UploadOutcome,
)
from hiretrack.schemas.job import JOB_STATUSES, Job, JobInput
from hiretrack.utils.validators import validate_applicant_input, validate_job_input

# Opt-in guard rails; the default policy lets HR move any application anywhere.
STRICT_TRANSITIONS: Mapping[str, frozenset[str]] = {
    "pending": frozenset({"reviewed", "rejected"}),
    "reviewed": frozenset({"interviewed", "rejected"}),
    "interviewed": frozenset({"hired", "rejected"}),
    "hired": frozenset(),
    "rejected": frozenset(),
}


def _utc_now() -> datetime:
    return datetime.now(UTC)


def submit(data: ApplicantInput, now: datetime | None = None) -> Application:
    """Build a new pending application from applicant input."""
    result = validate_applicant_input(data)
    if not result.is_valid:
        raise ValidationError(result.fields, result.error)

    stamp = now or _utc_now()
    documents = ApplicationDocuments(
        **{
            slot: PendingUpload(
                name=meta.name,
                size=meta.size,
                mime_type=meta.mime_type,
                uploaded_at=stamp,
            )
            for slot, meta in data.documents.items()
        }
    )

    return Application(
        first_name=data.first_name.strip(),
        last_name=data.last_name.strip(),
        email=data.email.strip(),
        phone=data.phone.strip(),
        experience=data.experience,
        education=data.education,
        skills=list(data.skills),
        salary=data.salary or None,
        cover_letter=data.cover_letter or None,
        position=data.position.strip(),
        applicant_id=data.applicant_id,
        status="pending",
        applied_date=stamp,
        status_history=[],
        documents=documents,
    )


def transition_status(
    application: Application,
    new_status: str,
    changed_by: str,
    notes: str | None = None,
    now: datetime | None = None,
    transitions: Mapping[str, frozenset[str]] | None = None,
) -> Application:
    """Move an application to ``new_status`` and append one history entry.

    Without a ``transitions`` table every move is legal, including moving to
    the current status and out of ``hired`` or ``rejected``. ``notes``
    replaces the stored notes only when non-empty.
    """
    if new_status not in APPLICATION_STATUSES:
        raise ValidationError(["status"], f"Unknown application status: {new_status}")

    if transitions is not None and new_status not in transitions.get(
        application.status, frozenset()
    ):
        raise InvalidTransitionError(application.status, new_status)

    changed_at = now or _utc_now()
    if application.status_history:
        changed_at = max(changed_at, application.status_history[-1].changed_at)

    entry = StatusChange(
        status=new_status,
        changed_at=changed_at,
        changed_by=changed_by,
        notes=notes,
    )
    update = {
        "status": new_status,
        "status_history": [*application.status_history, entry],
    }
    if notes:
        update["notes"] = notes
    return application.model_copy(update=update)


def attach_document(
    application: Application,
    slot: str,
    meta: DocumentMeta,
    now: datetime | None = None,
) -> Application:
    """Put a fresh ``pending_upload`` entry into ``slot``, replacing any previous one."""
    pending = PendingUpload(
        name=meta.name,
        size=meta.size,
        mime_type=meta.mime_type,
        uploaded_at=now or _utc_now(),
    )
    documents = application.documents.model_copy(update={slot: pending})
    return application.model_copy(update={"documents": documents})


def record_upload_outcome(
    application: Application,
    slot: str,
    outcome: UploadOutcome,
) -> Application:
    """Record the blob store result for one slot, leaving everything else alone."""
    current = getattr(application.documents, slot, None)
    if current is None:
        raise ValidationError([slot], f"No document recorded in slot {slot}")

    base = {
        "name": current.name,
        "size": current.size,
        "mime_type": current.mime_type,
        "uploaded_at": current.uploaded_at,
    }
    if outcome.succeeded:
        document = Uploaded(**base, url=outcome.url)
    else:
        document = Failed(**base, reason=outcome.reason)

    documents = application.documents.model_copy(update={slot: document})
    return application.model_copy(update={"documents": documents})


def create_job(data: JobInput, now: datetime | None = None) -> Job:
    """Build a new active job posting."""
    result = validate_job_input(data)
    if not result.is_valid:
        raise ValidationError(result.fields, result.error)

    return Job(
        title=data.title.strip(),
        department=data.department.strip(),
        location=data.location.strip(),
        type=data.type,
        description=data.description,
        requirements=list(data.requirements),
        benefits=list(data.benefits),
        salary_range=data.salary_range or None,
        status="active",
        created_date=now or _utc_now(),
    )


def set_job_status(job: Job, new_status: str) -> Job:
    if new_status not in JOB_STATUSES:
        raise ValidationError(["status"], f"Unknown job status: {new_status}")
    return job.model_copy(update={"status": new_status})


def visible_on_public_board(job: Job) -> bool:
    return job.status == "active"
