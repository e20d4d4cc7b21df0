"""HireTrack - job application tracking service."""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hiretrack.core.config import settings
from hiretrack.core.exceptions import CollaboratorError
from hiretrack.core.redis_client import close_redis
from hiretrack.core.storage import init_models
from hiretrack.routers import (
    applications_router,
    auth_router,
    board_router,
    documents_router,
    jobs_router,
)
from hiretrack.services.identity import (
    IdentityService,
    Principal,
    SessionContext,
    session_channel,
)
from hiretrack.services.user_service import UserService

log_level = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


# Profile of the most recently signed-in principal
latest_session = SessionContext(UserService().get_profile)


async def _log_session_change(principal: Principal | None) -> None:
    try:
        applied = await latest_session.handle(principal)
    except CollaboratorError as e:
        logger.warning(f"Could not load profile for session change: {e.message}")
        return

    if principal is None:
        logger.info("Session ended")
    elif applied and latest_session.current is not None:
        logger.info(
            f"Session started for {principal.email} as {latest_session.current.role}"
        )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Initializing application...")
    await init_models()
    identity = IdentityService(UserService(), session_channel)
    unsubscribe = identity.on_session_change(_log_session_change)
    logger.info(
        f"Application initialized (blob backend: {settings.blob_backend}, "
        f"strict transitions: {settings.strict_status_transitions})"
    )

    yield

    logger.info("Shutting down...")
    unsubscribe()
    await close_redis()
    logger.info("Shutdown complete")


app = FastAPI(
    title="HireTrack",
    description="Job postings, applications and the hiring pipeline",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(board_router)
app.include_router(jobs_router)
app.include_router(applications_router)
app.include_router(documents_router)


@app.get("/api")
async def api_info():
    """API information endpoint."""
    return {
        "message": "HireTrack API",
        "version": "1.0.0",
        "docs": "/docs",
        "status": "active",
        "strict_status_transitions": settings.strict_status_transitions,
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "hiretrack"}
