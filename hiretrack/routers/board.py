"""Public job board."""

from fastapi import APIRouter, Depends, Query

from hiretrack.core.exceptions import (
    CollaboratorError,
    NotFoundError,
    collaborator_exception,
    not_found_exception,
)
from hiretrack.schemas.job import BoardFacets, Job
from hiretrack.services.dependencies import get_job_service
from hiretrack.services.job_service import JobService
from hiretrack.services.lifecycle import visible_on_public_board
from hiretrack.utils.filters import ALL, board_facets, filter_jobs

router = APIRouter(prefix="/board", tags=["board"])


@router.get("/jobs", response_model=list[Job])
async def list_open_jobs(
    search: str = Query(default="", description="Title, department or location"),
    department: str = Query(default=ALL),
    job_type: str = Query(default=ALL, alias="type"),
    service: JobService = Depends(get_job_service),
):
    """Active postings, optionally narrowed by search and facets."""
    try:
        jobs = await service.list_public()
    except CollaboratorError as e:
        raise collaborator_exception(e)

    return filter_jobs(jobs, search_term=search, department=department, job_type=job_type)


@router.get("/facets", response_model=BoardFacets)
async def facets(service: JobService = Depends(get_job_service)):
    """Departments and types offered by active postings."""
    try:
        jobs = await service.list_public()
    except CollaboratorError as e:
        raise collaborator_exception(e)

    return board_facets(jobs)


@router.get("/jobs/{job_id}", response_model=Job)
async def get_open_job(job_id: str, service: JobService = Depends(get_job_service)):
    try:
        job = await service.get(job_id)
    except NotFoundError:
        raise not_found_exception("Job not found")
    except CollaboratorError as e:
        raise collaborator_exception(e)

    if not visible_on_public_board(job):
        raise not_found_exception("Job not found")
    return job
