"""Authentication router for the email/password identity provider."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from hiretrack.core.config import settings
from hiretrack.core.exceptions import (
    AuthenticationError,
    CollaboratorError,
    ValidationError,
    collaborator_exception,
    unauthorized_exception,
    validation_exception,
)
from hiretrack.schemas.user import Session, SignInRequest, SignUpRequest, User
from hiretrack.services.dependencies import (
    SESSION_COOKIE,
    get_identity_service,
    require_user,
    session_token,
)
from hiretrack.services.identity import IdentityService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _set_session_cookie(response: Response, session: Session) -> None:
    response.set_cookie(
        key=SESSION_COOKIE,
        value=session.token,
        max_age=settings.session_ttl_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )


@router.post("/signup", response_model=Session, status_code=201)
async def sign_up(
    request: SignUpRequest,
    response: Response,
    identity: IdentityService = Depends(get_identity_service),
):
    """Register a new account and sign it in."""
    try:
        session = await identity.sign_up(request)
    except ValidationError as e:
        raise validation_exception(e)
    except CollaboratorError as e:
        raise collaborator_exception(e)

    _set_session_cookie(response, session)
    return session


@router.post("/login", response_model=Session)
async def login(
    request: SignInRequest,
    response: Response,
    identity: IdentityService = Depends(get_identity_service),
):
    """Sign in with email and password."""
    try:
        session = await identity.sign_in(request.email, request.password, request.flow)
    except AuthenticationError as e:
        raise unauthorized_exception(e.detail)
    except CollaboratorError as e:
        raise collaborator_exception(e)

    _set_session_cookie(response, session)
    return session


@router.post("/logout")
async def logout(
    response: Response,
    token: str | None = Depends(session_token),
    identity: IdentityService = Depends(get_identity_service),
):
    """End the current session."""
    if not token:
        raise HTTPException(status_code=400, detail="No active session")
    try:
        await identity.sign_out(token)
    except CollaboratorError as e:
        raise collaborator_exception(e)

    response.delete_cookie(SESSION_COOKIE)
    return {"signed_out": True}


@router.get("/me", response_model=User)
async def me(user: User = Depends(require_user)):
    """Profile of the signed-in principal."""
    return user
