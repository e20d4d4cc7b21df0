"""Core application components."""

from hiretrack.core.config import settings
from hiretrack.core.exceptions import (
    AuthenticationError,
    CollaboratorError,
    HireTrackError,
    ValidationError,
)
from hiretrack.core.storage import Base, async_session, init_models

__all__ = [
    "AuthenticationError",
    "Base",
    "CollaboratorError",
    "HireTrackError",
    "ValidationError",
    "async_session",
    "init_models",
    "settings",
]
