"""FastAPI dependencies for services and the signed-in principal."""

from fastapi import Cookie, Depends, Header

from hiretrack.core.exceptions import (
    CollaboratorError,
    collaborator_exception,
    forbidden_exception,
    unauthorized_exception,
)
from hiretrack.schemas.user import User
from hiretrack.services.application_service import (
    ApplicationService,
    create_application_service,
)
from hiretrack.services.blob_store import BlobStore, get_blob_store
from hiretrack.services.document_service import DocumentService
from hiretrack.services.identity import IdentityService, session_channel
from hiretrack.services.job_service import JobService
from hiretrack.services.user_service import UserService

SESSION_COOKIE = "hiretrack_session"
STAFF_ROLES = ("hr", "admin")


def get_application_service() -> ApplicationService:
    return create_application_service()


def get_job_service() -> JobService:
    return JobService()


def get_user_service() -> UserService:
    return UserService()


def get_identity_service(
    users: UserService = Depends(get_user_service),
) -> IdentityService:
    return IdentityService(users, session_channel)


def blob_store_dep() -> BlobStore:
    return get_blob_store()


def get_document_service(
    applications: ApplicationService = Depends(get_application_service),
    blob_store: BlobStore = Depends(blob_store_dep),
) -> DocumentService:
    return DocumentService(applications, blob_store)


def session_token(
    authorization: str | None = Header(None),
    hiretrack_session: str | None = Cookie(None),
) -> str | None:
    """Session token from a Bearer header or the session cookie."""
    if authorization and authorization.lower().startswith("bearer "):
        return authorization[7:].strip() or None
    return hiretrack_session


async def optional_user(
    token: str | None = Depends(session_token),
    identity: IdentityService = Depends(get_identity_service),
) -> User | None:
    if not token:
        return None
    try:
        return await identity.current_user(token)
    except CollaboratorError as e:
        raise collaborator_exception(e)


async def require_user(user: User | None = Depends(optional_user)) -> User:
    if user is None:
        raise unauthorized_exception()
    return user


async def require_staff(user: User = Depends(require_user)) -> User:
    """HR or admin principal."""
    if user.role not in STAFF_ROLES:
        raise forbidden_exception()
    return user


def staff_name(user: User) -> str:
    return user.display_name or user.email
