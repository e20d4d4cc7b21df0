"""Database models."""

from hiretrack.models.application import ApplicationRecord
from hiretrack.models.job import JobRecord
from hiretrack.models.user import Credential, UserProfile

__all__ = [
    "ApplicationRecord",
    "Credential",
    "JobRecord",
    "UserProfile",
]
