"""Database connection and storage utilities."""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import NullPool

from hiretrack.core.config import settings

_database_url = str(settings.database_url)

# SQLite connections are bound to the loop that opened them.
engine: AsyncEngine = create_async_engine(
    _database_url,
    echo=False,
    pool_pre_ping=True,
    **({"poolclass": NullPool} if _database_url.startswith("sqlite") else {}),
)

async_session = sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


async def init_models() -> None:
    """Create tables for every registered model."""
    import hiretrack.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_models() -> None:
    """Drop every table. Used by the test suite."""
    import hiretrack.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
