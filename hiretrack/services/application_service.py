"""Application service backed by the document store."""

import logging
import uuid
from collections.abc import Callable, Mapping
from datetime import UTC, datetime

from pydantic import ValidationError as SchemaError
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from hiretrack.core.config import settings
from hiretrack.core.exceptions import CollaboratorError, NotFoundError, ValidationError
from hiretrack.core.storage import async_session
from hiretrack.models.application import ApplicationRecord
from hiretrack.schemas.application import (
    ApplicantInput,
    Application,
    ApplicationUpdate,
    DocumentMeta,
    UploadOutcome,
)
from hiretrack.services.lifecycle import (
    STRICT_TRANSITIONS,
    attach_document,
    record_upload_outcome,
    submit,
    transition_status,
)
from hiretrack.utils.validators import APPLICANT_REQUIRED_FIELDS, validate_applicant_input

logger = logging.getLogger(__name__)


def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        value = value.astimezone(UTC).replace(tzinfo=None)
    return value


def _to_domain(record: ApplicationRecord) -> Application:
    try:
        return Application.model_validate({**record.data, "id": record.id})
    except SchemaError as e:
        raise CollaboratorError(
            "persistence", f"Malformed application {record.id}: {e}"
        ) from e


def _write(record: ApplicationRecord, application: Application) -> None:
    record.status = application.status
    record.position = application.position
    record.applicant_id = application.applicant_id
    record.applied_date = _naive_utc(application.applied_date)
    record.data = application.model_dump(mode="json", by_alias=True, exclude={"id"})


class ApplicationService:
    """Persists applications and applies lifecycle rules to stored records."""

    def __init__(
        self,
        transitions: Mapping[str, frozenset[str]] | None = None,
        session_factory=async_session,
    ):
        self.transitions = transitions
        self.session_factory = session_factory

    async def create(
        self, data: ApplicantInput, applicant_id: str | None = None
    ) -> Application:
        """Validate and store a new pending application."""
        application = submit(data)
        if applicant_id:
            application = application.model_copy(update={"applicant_id": applicant_id})

        application_id = uuid.uuid4().hex
        record = ApplicationRecord(id=application_id)
        _write(record, application)

        try:
            async with self.session_factory() as session:
                session.add(record)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Database error creating application: {e}")
            raise CollaboratorError("persistence", str(e)) from e

        logger.info(
            f"Application {application_id} created for position '{application.position}'"
        )
        return application.model_copy(update={"id": application_id})

    async def get(self, application_id: str) -> Application:
        try:
            async with self.session_factory() as session:
                record = await session.get(ApplicationRecord, application_id)
        except SQLAlchemyError as e:
            logger.error(f"Database error fetching application {application_id}: {e}")
            raise CollaboratorError("persistence", str(e)) from e

        if record is None:
            raise NotFoundError("Application", application_id)
        return _to_domain(record)

    async def _list(self, *criteria) -> list[Application]:
        query = (
            select(ApplicationRecord)
            .where(*criteria)
            .order_by(ApplicationRecord.applied_date.desc())
        )
        try:
            async with self.session_factory() as session:
                result = await session.execute(query)
                records = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Database error listing applications: {e}")
            raise CollaboratorError("persistence", str(e)) from e
        return [_to_domain(record) for record in records]

    async def list_all(self) -> list[Application]:
        """All applications, newest first."""
        return await self._list()

    async def list_by_status(self, status: str) -> list[Application]:
        return await self._list(ApplicationRecord.status == status)

    async def list_for_applicant(self, applicant_id: str) -> list[Application]:
        """Applications submitted by one signed-in applicant."""
        return await self._list(ApplicationRecord.applicant_id == applicant_id)

    async def _mutate(
        self,
        application_id: str,
        change: Callable[[Application], Application],
    ) -> Application:
        """Re-read, change and write one application inside a single transaction."""
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    record = await session.scalar(
                        select(ApplicationRecord)
                        .where(ApplicationRecord.id == application_id)
                        .with_for_update()
                    )
                    if record is None:
                        raise NotFoundError("Application", application_id)
                    updated = change(_to_domain(record))
                    _write(record, updated)
        except SQLAlchemyError as e:
            logger.error(f"Database error updating application {application_id}: {e}")
            raise CollaboratorError("persistence", str(e)) from e
        return updated

    async def update(
        self, application_id: str, updates: ApplicationUpdate
    ) -> Application:
        """Edit applicant fields; lifecycle fields are not reachable from here."""
        changes = updates.model_dump(exclude_unset=True)

        def apply(application: Application) -> Application:
            merged = {**application.model_dump(), **changes}
            try:
                updated = Application.model_validate(merged)
            except SchemaError as e:
                fields = [str(err["loc"][0]) for err in e.errors() if err["loc"]]
                raise ValidationError(fields, f"Invalid update: {e}") from e

            check = validate_applicant_input(
                ApplicantInput(**updated.model_dump(include=set(APPLICANT_REQUIRED_FIELDS)))
            )
            if not check.is_valid:
                raise ValidationError(check.fields, check.error)
            return updated

        application = await self._mutate(application_id, apply)
        logger.info(f"Application {application_id} updated: {sorted(changes)}")
        return application

    async def update_status(
        self,
        application_id: str,
        new_status: str,
        changed_by: str,
        notes: str | None = None,
    ) -> Application:
        """Transition status and append to the audit trail."""
        application = await self._mutate(
            application_id,
            lambda app: transition_status(
                app,
                new_status,
                changed_by,
                notes=notes,
                transitions=self.transitions,
            ),
        )
        logger.info(
            f"Application {application_id} moved to {new_status} by {changed_by}"
        )
        return application

    async def attach_document(
        self, application_id: str, slot: str, meta: DocumentMeta
    ) -> Application:
        """Mark ``slot`` as awaiting upload of the described file."""
        return await self._mutate(
            application_id, lambda app: attach_document(app, slot, meta)
        )

    async def record_upload(
        self, application_id: str, slot: str, outcome: UploadOutcome
    ) -> Application:
        application = await self._mutate(
            application_id, lambda app: record_upload_outcome(app, slot, outcome)
        )
        result = "uploaded" if outcome.succeeded else f"failed ({outcome.reason})"
        logger.info(f"Application {application_id} {slot}: {result}")
        return application

    async def delete(self, application_id: str) -> None:
        """Remove an application for good. Stored files are left in place."""
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    delete(ApplicationRecord).where(
                        ApplicationRecord.id == application_id
                    )
                )
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Database error deleting application {application_id}: {e}")
            raise CollaboratorError("persistence", str(e)) from e

        if result.rowcount == 0:
            raise NotFoundError("Application", application_id)
        logger.info(f"Application {application_id} deleted")


def create_application_service() -> ApplicationService:
    """Create application service using the configured transition policy."""
    transitions = STRICT_TRANSITIONS if settings.strict_status_transitions else None
    return ApplicationService(transitions=transitions)
