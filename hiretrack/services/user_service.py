"""User profile service."""

import logging
from datetime import UTC, datetime

from sqlalchemy.exc import SQLAlchemyError

from hiretrack.core.exceptions import CollaboratorError
from hiretrack.core.storage import async_session
from hiretrack.models.user import UserProfile
from hiretrack.schemas.user import User

logger = logging.getLogger(__name__)


def _to_domain(record: UserProfile) -> User:
    created = record.created_at
    if created is not None and created.tzinfo is None:
        created = created.replace(tzinfo=UTC)
    return User(
        uid=record.uid,
        email=record.email,
        display_name=record.display_name,
        role=record.role,
        first_name=record.first_name,
        last_name=record.last_name,
        phone=record.phone,
        created_at=created,
    )


class UserService:
    """Reads and writes profiles in the ``users`` collection."""

    def __init__(self, session_factory=async_session):
        self.session_factory = session_factory

    async def get_profile(self, uid: str) -> User | None:
        try:
            async with self.session_factory() as session:
                record = await session.get(UserProfile, uid)
        except SQLAlchemyError as e:
            logger.error(f"Database error fetching profile {uid}: {e}")
            raise CollaboratorError("persistence", str(e)) from e
        return _to_domain(record) if record else None

    async def save_profile(self, user: User) -> User:
        """Create or replace a profile. ``created_at`` is kept once set."""
        try:
            async with self.session_factory() as session:
                record = await session.get(UserProfile, user.uid)
                if record is None:
                    created = user.created_at or datetime.now(UTC)
                    record = UserProfile(
                        uid=user.uid,
                        created_at=created.astimezone(UTC).replace(tzinfo=None),
                    )
                    session.add(record)
                record.email = user.email
                record.display_name = user.display_name
                record.role = user.role
                record.first_name = user.first_name
                record.last_name = user.last_name
                record.phone = user.phone
                await session.commit()
                await session.refresh(record)
                saved = _to_domain(record)
        except SQLAlchemyError as e:
            logger.error(f"Database error saving profile {user.uid}: {e}")
            raise CollaboratorError("persistence", str(e)) from e
        return saved
