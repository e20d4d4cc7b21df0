"""Application record model."""

from datetime import UTC, datetime

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from hiretrack.core.storage import Base


def _utc_now() -> datetime:
    """Return current UTC time as timezone-naive datetime for DB storage."""
    return datetime.now(UTC).replace(tzinfo=None)


class ApplicationRecord(Base):
    """Stored application document.

    ``data`` holds the whole record as written on the wire; the other
    columns duplicate the fields that are queried or ordered on.
    """

    __tablename__ = "applications"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    position: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    applicant_id: Mapped[str | None] = mapped_column(
        String(128), nullable=True, index=True
    )
    applied_date: Mapped[datetime] = mapped_column(
        DateTime, default=_utc_now, nullable=False, index=True
    )
    data: Mapped[dict] = mapped_column(JSON, nullable=False)
