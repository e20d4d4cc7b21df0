"""Attachment upload flow for applications."""

import logging

from hiretrack.core.config import settings
from hiretrack.core.exceptions import CollaboratorError, UploadError
from hiretrack.schemas.application import Application, DocumentMeta, UploadOutcome
from hiretrack.services.application_service import ApplicationService
from hiretrack.services.blob_store import BlobStore, build_blob_path
from hiretrack.utils.validators import validate_upload

logger = logging.getLogger(__name__)

COLLECTION = "applications"


class DocumentService:
    """Stores one attachment and records the outcome on its slot.

    A rejected or failed upload leaves the slot ``failed`` and never changes
    the application's status.
    """

    def __init__(
        self,
        applications: ApplicationService,
        blob_store: BlobStore,
        max_bytes: int | None = None,
        allowed_types: list[str] | None = None,
    ):
        self.applications = applications
        self.blob_store = blob_store
        self.max_bytes = max_bytes or settings.upload_max_bytes
        self.allowed_types = allowed_types or settings.allowed_type_list

    async def upload(
        self,
        application_id: str,
        slot: str,
        filename: str,
        content_type: str | None,
        data: bytes,
        uploader_id: str | None = None,
        size: int | None = None,
    ) -> Application:
        """Record the attachment, store it and record the outcome.

        ``size`` is the declared size when ``data`` was cut off at the
        ceiling; oversize files are rejected without being stored.
        """
        meta = DocumentMeta(
            name=filename,
            size=max(size or 0, len(data)),
            mime_type=content_type or "application/octet-stream",
        )
        application = await self.applications.attach_document(application_id, slot, meta)

        try:
            url = await self._store(application, slot, meta, data, uploader_id)
            outcome = UploadOutcome.uploaded(url)
        except UploadError as e:
            logger.warning(f"Upload rejected for application {application_id}: {e.message}")
            outcome = UploadOutcome.failed(e.reason)

        return await self.applications.record_upload(application_id, slot, outcome)

    async def _store(
        self,
        application: Application,
        slot: str,
        meta: DocumentMeta,
        data: bytes,
        uploader_id: str | None,
    ) -> str:
        check = validate_upload(meta.size, meta.mime_type, self.max_bytes, self.allowed_types)
        if not check.is_valid:
            raise UploadError(slot, check.error)

        owner = uploader_id or application.applicant_id or application.id
        path = build_blob_path(COLLECTION, slot, owner, meta.name)
        try:
            return await self.blob_store.store(data, path, meta.mime_type)
        except CollaboratorError as e:
            raise UploadError(slot, e.detail) from e
