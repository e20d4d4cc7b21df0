"""Application submission, review and attachment upload."""

import logging

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile

from hiretrack.core.exceptions import (
    CollaboratorError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
    collaborator_exception,
    forbidden_exception,
    not_found_exception,
    validation_exception,
)
from hiretrack.schemas.application import (
    APPLICATION_STATUSES,
    ApplicantInput,
    Application,
    ApplicationList,
    ApplicationStats,
    ApplicationUpdate,
    DocumentSlot,
    StatusChangeRequest,
)
from hiretrack.schemas.user import User
from hiretrack.services.application_service import ApplicationService
from hiretrack.services.dependencies import (
    STAFF_ROLES,
    get_application_service,
    get_document_service,
    get_job_service,
    optional_user,
    require_staff,
    require_user,
    staff_name,
)
from hiretrack.services.document_service import DocumentService
from hiretrack.services.job_service import JobService
from hiretrack.services.lifecycle import visible_on_public_board
from hiretrack.utils.filters import ALL, application_stats, count_by_status, filter_applications

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/applications", tags=["applications"])


def _is_staff(user: User | None) -> bool:
    return user is not None and user.role in STAFF_ROLES


def _can_access(user: User | None, application: Application) -> bool:
    """Staff see everything; applicants see their own submissions."""
    if _is_staff(user):
        return True
    return user is not None and application.applicant_id == user.uid


@router.post("", response_model=Application, status_code=201)
async def submit_application(
    data: ApplicantInput,
    job_id: str | None = Query(default=None, alias="jobId"),
    service: ApplicationService = Depends(get_application_service),
    jobs: JobService = Depends(get_job_service),
    user: User | None = Depends(optional_user),
):
    """Submit an application from the public form or as an HR manual entry.

    With ``jobId`` the position is taken from that posting, which must be
    open on the public board.
    """
    try:
        if job_id:
            job = await jobs.get(job_id)
            if not visible_on_public_board(job):
                raise not_found_exception("Job is not accepting applications")
            data = data.model_copy(update={"position": job.title})

        applicant_id = user.uid if user is not None and user.role == "applicant" else None
        data = data.model_copy(update={"applicant_id": applicant_id})
        return await service.create(data)
    except NotFoundError:
        raise not_found_exception("Job not found")
    except ValidationError as e:
        raise validation_exception(e)
    except CollaboratorError as e:
        raise collaborator_exception(e)


@router.get("", response_model=ApplicationList)
async def list_applications(
    status: str = Query(default=ALL),
    search: str = Query(default="", description="Name, position or email"),
    service: ApplicationService = Depends(get_application_service),
    user: User = Depends(require_staff),
):
    """All applications for review, with status tab counts."""
    try:
        applications = await service.list_all()
    except CollaboratorError as e:
        raise collaborator_exception(e)

    return ApplicationList(
        items=filter_applications(applications, status, search),
        counts=count_by_status(applications, APPLICATION_STATUSES),
    )


@router.get("/mine", response_model=list[Application])
async def my_applications(
    service: ApplicationService = Depends(get_application_service),
    user: User = Depends(require_user),
):
    """Applications submitted by the signed-in applicant."""
    try:
        return await service.list_for_applicant(user.uid)
    except CollaboratorError as e:
        raise collaborator_exception(e)


@router.get("/stats", response_model=ApplicationStats)
async def stats(
    service: ApplicationService = Depends(get_application_service),
    user: User = Depends(require_staff),
):
    try:
        applications = await service.list_all()
    except CollaboratorError as e:
        raise collaborator_exception(e)

    return application_stats(applications)


@router.get("/{application_id}", response_model=Application)
async def get_application(
    application_id: str,
    service: ApplicationService = Depends(get_application_service),
    user: User = Depends(require_user),
):
    try:
        application = await service.get(application_id)
    except NotFoundError:
        raise not_found_exception("Application not found")
    except CollaboratorError as e:
        raise collaborator_exception(e)

    if not _can_access(user, application):
        raise forbidden_exception()
    return application


@router.patch("/{application_id}", response_model=Application)
async def update_application(
    application_id: str,
    updates: ApplicationUpdate,
    service: ApplicationService = Depends(get_application_service),
    user: User = Depends(require_staff),
):
    try:
        return await service.update(application_id, updates)
    except NotFoundError:
        raise not_found_exception("Application not found")
    except ValidationError as e:
        raise validation_exception(e)
    except CollaboratorError as e:
        raise collaborator_exception(e)


@router.post("/{application_id}/status", response_model=Application)
async def change_status(
    application_id: str,
    request: StatusChangeRequest,
    service: ApplicationService = Depends(get_application_service),
    user: User = Depends(require_staff),
):
    """Move an application through the pipeline, recording who did it."""
    try:
        return await service.update_status(
            application_id, request.status, staff_name(user), request.notes
        )
    except NotFoundError:
        raise not_found_exception("Application not found")
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=e.message)
    except ValidationError as e:
        raise validation_exception(e)
    except CollaboratorError as e:
        raise collaborator_exception(e)


@router.delete("/{application_id}")
async def delete_application(
    application_id: str,
    service: ApplicationService = Depends(get_application_service),
    user: User = Depends(require_staff),
):
    try:
        await service.delete(application_id)
    except NotFoundError:
        raise not_found_exception("Application not found")
    except CollaboratorError as e:
        raise collaborator_exception(e)

    logger.info(f"{user.email} deleted application {application_id}")
    return {"deleted": True, "id": application_id}


@router.post("/{application_id}/documents/{slot}", response_model=Application)
async def upload_document(
    application_id: str,
    slot: DocumentSlot,
    file: UploadFile = File(...),
    service: ApplicationService = Depends(get_application_service),
    documents: DocumentService = Depends(get_document_service),
    user: User | None = Depends(optional_user),
):
    """Upload one attachment.

    Rejected or failed uploads come back as a ``failed`` slot; the
    application itself is kept either way. Submissions made without an
    account accept uploads from anyone holding the application id.
    """
    try:
        application = await service.get(application_id)
    except NotFoundError:
        raise not_found_exception("Application not found")
    except CollaboratorError as e:
        raise collaborator_exception(e)

    if application.applicant_id and not _can_access(user, application):
        raise forbidden_exception()

    # One byte past the ceiling is enough to reject the file
    data = await file.read(documents.max_bytes + 1)
    uploader_id = user.uid if user is not None and not _is_staff(user) else None
    try:
        return await documents.upload(
            application_id,
            slot,
            file.filename or "file",
            file.content_type,
            data,
            uploader_id=uploader_id,
            size=file.size,
        )
    except NotFoundError:
        raise not_found_exception("Application not found")
    except ValidationError as e:
        raise validation_exception(e)
    except CollaboratorError as e:
        raise collaborator_exception(e)
