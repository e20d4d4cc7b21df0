"""Identity provider: credentials, sessions and session-change notifications."""

import inspect
import logging
import secrets
import uuid
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass

from passlib.context import CryptContext
from redis.exceptions import RedisError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from hiretrack.core.config import settings
from hiretrack.core.exceptions import AuthenticationError, CollaboratorError, ValidationError
from hiretrack.core.redis_client import SessionStore
from hiretrack.core.storage import async_session
from hiretrack.models.user import Credential
from hiretrack.schemas.user import Role, Session, SignInFlow, SignUpRequest, User
from hiretrack.services.user_service import UserService
from hiretrack.utils.freshness import LatestOnly

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def resolve_role(
    email: str,
    existing_profile: User | None,
    flow: SignInFlow = "hr",
    admin_emails: Iterable[str] | None = None,
) -> Role:
    """Decide the role for a principal.

    A stored profile keeps its role forever. Otherwise allow-listed emails
    become ``admin`` and everyone else takes the role of the portal they
    signed in through.
    """
    if existing_profile is not None:
        return existing_profile.role

    if admin_emails is None:
        admin_emails = settings.admin_email_list
    allow_list = {e.strip().lower() for e in admin_emails}
    if (email or "").strip().lower() in allow_list:
        return "admin"
    return "applicant" if flow == "applicant" else "hr"


@dataclass(frozen=True)
class Principal:
    """What the identity provider knows about a signed-in subject."""

    uid: str
    email: str


SessionListener = Callable[[Principal | None], Awaitable[None] | None]


class SessionChannel:
    """Broadcasts sign-in and sign-out events to subscribers."""

    def __init__(self) -> None:
        self._listeners: list[SessionListener] = []

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register ``listener``; the returned callable unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def publish(self, principal: Principal | None) -> None:
        for listener in list(self._listeners):
            result = listener(principal)
            if inspect.isawaitable(result):
                await result


class SessionContext:
    """Holds the current principal's profile for one consumer.

    Profile loads triggered by session changes can overlap; only the most
    recent one is allowed to set :attr:`current`.
    """

    def __init__(self, load_profile: Callable[[str], Awaitable[User | None]]):
        self._load_profile = load_profile
        self._loads = LatestOnly()
        self.current: User | None = None

    def bind(self, channel: SessionChannel) -> Callable[[], None]:
        return channel.subscribe(self.handle)

    async def handle(self, principal: Principal | None) -> bool:
        """Apply a session change; returns False when the load went stale."""
        if principal is None:
            self._loads.cancel()
            self.current = None
            return True

        profile, is_current = await self._loads.run(self._load_profile(principal.uid))
        if is_current:
            self.current = profile
        else:
            logger.debug(f"Discarded stale profile load for {principal.uid}")
        return is_current


class IdentityService:
    """Email/password identity provider with Redis-backed sessions."""

    def __init__(
        self,
        users: UserService,
        channel: SessionChannel,
        session_factory=async_session,
    ):
        self.users = users
        self.channel = channel
        self.session_factory = session_factory

    def on_session_change(self, listener: SessionListener) -> Callable[[], None]:
        return self.channel.subscribe(listener)

    async def _find_credential(self, email: str) -> Credential | None:
        try:
            async with self.session_factory() as session:
                return await session.scalar(
                    select(Credential).where(Credential.email == email)
                )
        except SQLAlchemyError as e:
            logger.error(f"Database error reading credentials: {e}")
            raise CollaboratorError("identity", str(e)) from e

    async def _open_session(self, user: User) -> Session:
        token = secrets.token_urlsafe(32)
        try:
            await SessionStore.set(token, user.uid)
        except RedisError as e:
            logger.error(f"Session store error: {e}")
            raise CollaboratorError("identity", str(e)) from e
        await self.channel.publish(Principal(uid=user.uid, email=user.email))
        return Session(token=token, user=user)

    async def _ensure_profile(
        self,
        uid: str,
        email: str,
        flow: SignInFlow,
        details: SignUpRequest | None = None,
    ) -> User:
        """Return the stored profile, creating it on first sign-in."""
        existing = await self.users.get_profile(uid)
        if existing is not None:
            return existing

        display_name = (details.display_name if details else None) or email.split("@")[0]
        profile = User(
            uid=uid,
            email=email,
            display_name=display_name,
            role=resolve_role(email, None, flow),
            first_name=details.first_name if details else None,
            last_name=details.last_name if details else None,
            phone=details.phone if details else None,
        )
        logger.info(f"Created profile for {email} with role {profile.role}")
        return await self.users.save_profile(profile)

    async def sign_up(self, request: SignUpRequest) -> Session:
        """Register credentials, create the profile and open a session."""
        email = request.email.strip().lower()
        if "@" not in email:
            raise ValidationError(["email"], f"Email address is malformed: {request.email}")
        if await self._find_credential(email) is not None:
            raise ValidationError(["email"], "Email is already registered")

        uid = uuid.uuid4().hex
        try:
            async with self.session_factory() as session:
                session.add(
                    Credential(
                        uid=uid,
                        email=email,
                        password_hash=pwd_context.hash(request.password),
                    )
                )
                await session.commit()
        except IntegrityError as e:
            raise ValidationError(["email"], "Email is already registered") from e
        except SQLAlchemyError as e:
            logger.error(f"Database error creating credentials: {e}")
            raise CollaboratorError("identity", str(e)) from e

        user = await self._ensure_profile(uid, email, request.flow, request)
        logger.info(f"Signed up {email}")
        return await self._open_session(user)

    async def sign_in(self, email: str, password: str, flow: SignInFlow = "hr") -> Session:
        email = email.strip().lower()
        credential = await self._find_credential(email)
        if credential is None or not pwd_context.verify(password, credential.password_hash):
            logger.warning(f"Failed sign-in for {email}")
            raise AuthenticationError("Invalid email or password")

        user = await self._ensure_profile(credential.uid, email, flow)
        logger.info(f"Signed in {email} as {user.role}")
        return await self._open_session(user)

    async def sign_out(self, token: str) -> None:
        try:
            await SessionStore.delete(token)
        except RedisError as e:
            logger.error(f"Session store error: {e}")
            raise CollaboratorError("identity", str(e)) from e
        await self.channel.publish(None)

    async def current_user(self, token: str) -> User | None:
        """Resolve a session token to the signed-in profile."""
        try:
            uid = await SessionStore.get(token)
        except RedisError as e:
            logger.error(f"Session store error: {e}")
            raise CollaboratorError("identity", str(e)) from e
        if uid is None:
            return None
        return await self.users.get_profile(uid)


session_channel = SessionChannel()
