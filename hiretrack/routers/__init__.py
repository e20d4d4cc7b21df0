"""API routers."""

from hiretrack.routers.applications import router as applications_router
from hiretrack.routers.auth import router as auth_router
from hiretrack.routers.board import router as board_router
from hiretrack.routers.documents import router as documents_router
from hiretrack.routers.jobs import router as jobs_router

__all__ = [
    "applications_router",
    "auth_router",
    "board_router",
    "documents_router",
    "jobs_router",
]
