"""Job posting service backed by the document store."""

import logging
import uuid
from datetime import UTC, datetime

from pydantic import ValidationError as SchemaError
from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError

from hiretrack.core.exceptions import CollaboratorError, NotFoundError, ValidationError
from hiretrack.core.storage import async_session
from hiretrack.models.application import ApplicationRecord
from hiretrack.models.job import JobRecord
from hiretrack.schemas.job import Job, JobInput, JobUpdate
from hiretrack.services.lifecycle import create_job, set_job_status, visible_on_public_board
from hiretrack.utils.validators import validate_job_input

logger = logging.getLogger(__name__)

_CONTENT_FIELDS = {
    "title",
    "department",
    "location",
    "type",
    "description",
    "requirements",
    "benefits",
    "salary_range",
}


def _to_domain(record: JobRecord) -> Job:
    try:
        return Job.model_validate({**record.data, "id": record.id})
    except SchemaError as e:
        raise CollaboratorError("persistence", f"Malformed job {record.id}: {e}") from e


def _write(record: JobRecord, job: Job) -> None:
    record.title = job.title
    record.status = job.status
    created = job.created_date
    if created.tzinfo is not None:
        created = created.astimezone(UTC).replace(tzinfo=None)
    record.created_date = created
    record.data = job.model_dump(
        mode="json", by_alias=True, exclude={"id", "application_count"}
    )


class JobService:
    """Stores postings and applies the job rules."""

    def __init__(self, session_factory=async_session):
        self.session_factory = session_factory

    async def create(self, data: JobInput, now: datetime | None = None) -> Job:
        job = create_job(data, now=now)
        job_id = uuid.uuid4().hex
        record = JobRecord(id=job_id)
        _write(record, job)

        try:
            async with self.session_factory() as session:
                session.add(record)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Database error creating job: {e}")
            raise CollaboratorError("persistence", str(e)) from e

        logger.info(f"Job {job_id} created: {job.title}")
        return job.model_copy(update={"id": job_id})

    async def get(self, job_id: str) -> Job:
        try:
            async with self.session_factory() as session:
                record = await session.get(JobRecord, job_id)
        except SQLAlchemyError as e:
            logger.error(f"Database error fetching job {job_id}: {e}")
            raise CollaboratorError("persistence", str(e)) from e

        if record is None:
            raise NotFoundError("Job", job_id)
        return _to_domain(record)

    async def list_all(self, with_counts: bool = False) -> list[Job]:
        """All postings, newest first, optionally with application counts.

        Counts match applications by position title.
        """
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(JobRecord).order_by(JobRecord.created_date.desc())
                )
                records = result.scalars().all()
                counts: dict[str, int] = {}
                if with_counts:
                    rows = await session.execute(
                        select(ApplicationRecord.position, func.count()).group_by(
                            ApplicationRecord.position
                        )
                    )
                    counts = {position: count for position, count in rows.all()}
        except SQLAlchemyError as e:
            logger.error(f"Database error listing jobs: {e}")
            raise CollaboratorError("persistence", str(e)) from e

        jobs = [_to_domain(record) for record in records]
        if with_counts:
            jobs = [
                job.model_copy(update={"application_count": counts.get(job.title, 0)})
                for job in jobs
            ]
        return jobs

    async def list_public(self) -> list[Job]:
        """Postings shown on the public job board."""
        return [job for job in await self.list_all() if visible_on_public_board(job)]

    async def _mutate(self, job_id: str, change) -> Job:
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    record = await session.scalar(
                        select(JobRecord).where(JobRecord.id == job_id).with_for_update()
                    )
                    if record is None:
                        raise NotFoundError("Job", job_id)
                    updated = change(_to_domain(record))
                    _write(record, updated)
        except SQLAlchemyError as e:
            logger.error(f"Database error updating job {job_id}: {e}")
            raise CollaboratorError("persistence", str(e)) from e
        return updated

    async def update(self, job_id: str, updates: JobUpdate) -> Job:
        """Edit posting content. Submitted applications keep their position text."""
        changes = {
            key: value
            for key, value in updates.model_dump(exclude_unset=True).items()
            if value is not None or key == "salary_range"
        }

        def apply(job: Job) -> Job:
            updated = job.model_copy(update=changes)
            check = validate_job_input(
                JobInput(**updated.model_dump(include=_CONTENT_FIELDS))
            )
            if not check.is_valid:
                raise ValidationError(check.fields, check.error)
            return updated

        job = await self._mutate(job_id, apply)
        logger.info(f"Job {job_id} updated: {sorted(changes)}")
        return job

    async def set_status(self, job_id: str, new_status: str) -> Job:
        job = await self._mutate(job_id, lambda j: set_job_status(j, new_status))
        logger.info(f"Job {job_id} status set to {new_status}")
        return job

    async def delete(self, job_id: str) -> None:
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    delete(JobRecord).where(JobRecord.id == job_id)
                )
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Database error deleting job {job_id}: {e}")
            raise CollaboratorError("persistence", str(e)) from e

        if result.rowcount == 0:
            raise NotFoundError("Job", job_id)
        logger.info(f"Job {job_id} deleted")
