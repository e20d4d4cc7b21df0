"""HR job management."""

import logging

from fastapi import APIRouter, Depends, Query

from hiretrack.core.exceptions import (
    CollaboratorError,
    NotFoundError,
    ValidationError,
    collaborator_exception,
    not_found_exception,
    validation_exception,
)
from hiretrack.schemas.job import (
    JOB_STATUSES,
    Job,
    JobInput,
    JobList,
    JobStatusRequest,
    JobUpdate,
)
from hiretrack.schemas.user import User
from hiretrack.services.dependencies import get_job_service, require_staff
from hiretrack.services.job_service import JobService
from hiretrack.utils.filters import ALL, count_by_status, filter_jobs

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get("", response_model=JobList)
async def list_jobs(
    status: str = Query(default=ALL),
    search: str = Query(default=""),
    department: str = Query(default=ALL),
    job_type: str = Query(default=ALL, alias="type"),
    service: JobService = Depends(get_job_service),
    user: User = Depends(require_staff),
):
    """All postings with application counts and status tab counts."""
    try:
        jobs = await service.list_all(with_counts=True)
    except CollaboratorError as e:
        raise collaborator_exception(e)

    return JobList(
        items=filter_jobs(jobs, status, search, department, job_type),
        counts=count_by_status(jobs, JOB_STATUSES),
    )


@router.post("", response_model=Job, status_code=201)
async def create_job(
    data: JobInput,
    service: JobService = Depends(get_job_service),
    user: User = Depends(require_staff),
):
    try:
        job = await service.create(data)
    except ValidationError as e:
        raise validation_exception(e)
    except CollaboratorError as e:
        raise collaborator_exception(e)

    logger.info(f"{user.email} posted job {job.id}")
    return job


@router.get("/{job_id}", response_model=Job)
async def get_job(
    job_id: str,
    service: JobService = Depends(get_job_service),
    user: User = Depends(require_staff),
):
    try:
        return await service.get(job_id)
    except NotFoundError:
        raise not_found_exception("Job not found")
    except CollaboratorError as e:
        raise collaborator_exception(e)


@router.patch("/{job_id}", response_model=Job)
async def update_job(
    job_id: str,
    updates: JobUpdate,
    service: JobService = Depends(get_job_service),
    user: User = Depends(require_staff),
):
    """Edit a posting. Existing applications keep the title they applied under."""
    try:
        return await service.update(job_id, updates)
    except NotFoundError:
        raise not_found_exception("Job not found")
    except ValidationError as e:
        raise validation_exception(e)
    except CollaboratorError as e:
        raise collaborator_exception(e)


@router.post("/{job_id}/status", response_model=Job)
async def set_job_status(
    job_id: str,
    request: JobStatusRequest,
    service: JobService = Depends(get_job_service),
    user: User = Depends(require_staff),
):
    """Pause, close or reopen a posting."""
    try:
        return await service.set_status(job_id, request.status)
    except NotFoundError:
        raise not_found_exception("Job not found")
    except CollaboratorError as e:
        raise collaborator_exception(e)


@router.delete("/{job_id}")
async def delete_job(
    job_id: str,
    service: JobService = Depends(get_job_service),
    user: User = Depends(require_staff),
):
    try:
        await service.delete(job_id)
    except NotFoundError:
        raise not_found_exception("Job not found")
    except CollaboratorError as e:
        raise collaborator_exception(e)

    logger.info(f"{user.email} deleted job {job_id}")
    return {"deleted": True, "id": job_id}
