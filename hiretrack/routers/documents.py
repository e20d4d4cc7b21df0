"""Download of stored attachments."""

import mimetypes

from fastapi import APIRouter, Depends, Response

from hiretrack.core.exceptions import (
    CollaboratorError,
    NotFoundError,
    collaborator_exception,
    forbidden_exception,
    not_found_exception,
)
from hiretrack.schemas.user import User
from hiretrack.services.blob_store import BlobStore
from hiretrack.services.dependencies import STAFF_ROLES, blob_store_dep, require_user

router = APIRouter(prefix="/documents", tags=["documents"])

_UNSAFE_SEGMENTS = ("", ".", "..")


def _is_safe(path: str) -> bool:
    return not any(part in _UNSAFE_SEGMENTS for part in path.replace("\\", "/").split("/"))


def _owner_of(path: str) -> str | None:
    # <collection>/<slot>/<owner>/<file>
    parts = path.split("/")
    return parts[2] if len(parts) >= 4 else None


@router.get("/{path:path}")
async def download_document(
    path: str,
    blob_store: BlobStore = Depends(blob_store_dep),
    user: User = Depends(require_user),
):
    """Serve a stored file to staff or to the applicant who uploaded it."""
    if not _is_safe(path):
        raise forbidden_exception()
    if user.role not in STAFF_ROLES and _owner_of(path) != user.uid:
        raise forbidden_exception()

    try:
        data = await blob_store.open(path)
    except NotFoundError:
        raise not_found_exception("Document not found")
    except CollaboratorError as e:
        raise collaborator_exception(e)

    media_type = mimetypes.guess_type(path)[0] or "application/octet-stream"
    filename = path.rsplit("/", 1)[-1]
    return Response(
        content=data,
        media_type=media_type,
        headers={"Content-Disposition": f'inline; filename="{filename}"'},
    )
