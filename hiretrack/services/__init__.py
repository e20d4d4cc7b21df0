"""Application services."""

from hiretrack.services.application_service import (
    ApplicationService,
    create_application_service,
)
from hiretrack.services.document_service import DocumentService
from hiretrack.services.identity import IdentityService, resolve_role
from hiretrack.services.job_service import JobService
from hiretrack.services.user_service import UserService

__all__ = [
    "ApplicationService",
    "DocumentService",
    "IdentityService",
    "JobService",
    "UserService",
    "create_application_service",
    "resolve_role",
]
