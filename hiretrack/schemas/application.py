"""Schemas for applications, their documents and status history."""

from dataclasses import dataclass
from datetime import datetime
from typing import Annotated, Literal, get_args

from pydantic import ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel, to_snake

from hiretrack.schemas.common import CamelModel

ApplicationStatus = Literal["pending", "reviewed", "interviewed", "hired", "rejected"]
DocumentSlot = Literal["resume", "cover_letter", "portfolio"]

APPLICATION_STATUSES: tuple[str, ...] = get_args(ApplicationStatus)
DOCUMENT_SLOTS: tuple[str, ...] = get_args(DocumentSlot)


class _DocumentBase(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    name: str
    size: int = Field(ge=0)
    mime_type: str
    uploaded_at: datetime


class PendingUpload(_DocumentBase):
    """File chosen by the applicant but not yet durably stored."""

    status: Literal["pending_upload"] = "pending_upload"


class Uploaded(_DocumentBase):
    """File stored and retrievable at ``url``."""

    status: Literal["uploaded"] = "uploaded"
    url: str


class Failed(_DocumentBase):
    """Upload rejected or lost; no url exists."""

    status: Literal["failed"] = "failed"
    reason: str | None = None


Document = Annotated[PendingUpload | Uploaded | Failed, Field(discriminator="status")]


class ApplicationDocuments(CamelModel):
    resume: Document | None = None
    cover_letter: Document | None = None
    portfolio: Document | None = None


class DocumentMeta(CamelModel):
    """Attachment metadata supplied with a submission."""

    name: str
    size: int = Field(ge=0)
    mime_type: str = "application/octet-stream"


@dataclass(frozen=True)
class UploadOutcome:
    """Result of the blob store step for one slot."""

    url: str | None = None
    reason: str | None = None

    @classmethod
    def uploaded(cls, url: str) -> "UploadOutcome":
        return cls(url=url)

    @classmethod
    def failed(cls, reason: str) -> "UploadOutcome":
        return cls(reason=reason)

    @property
    def succeeded(self) -> bool:
        return self.url is not None


class StatusChange(CamelModel):
    """One entry of the append-only status audit trail."""

    status: ApplicationStatus
    changed_at: datetime
    changed_by: str
    notes: str | None = None


class Application(CamelModel):
    """One applicant's submission for one job."""

    id: str | None = None
    first_name: str
    last_name: str
    email: str
    phone: str
    experience: str
    education: str
    skills: list[str] = Field(default_factory=list)
    salary: str | None = None
    cover_letter: str | None = None
    position: str
    applicant_id: str | None = None
    status: ApplicationStatus = "pending"
    applied_date: datetime
    notes: str | None = None
    interview_date: datetime | None = None
    status_history: list[StatusChange] = Field(default_factory=list)
    documents: ApplicationDocuments = Field(default_factory=ApplicationDocuments)


class ApplicantInput(CamelModel):
    """Submission payload from the public form or an HR manual entry."""

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    experience: str = ""
    education: str = ""
    skills: list[str] | str = Field(default_factory=list)
    salary: str | None = None
    cover_letter: str | None = None
    position: str = ""
    applicant_id: str | None = None
    documents: dict[DocumentSlot, DocumentMeta] = Field(default_factory=dict)

    @field_validator("skills", mode="before")
    @classmethod
    def split_skills(cls, value):
        """Accept the form's comma-separated string as well as a list."""
        if value is None:
            return []
        if isinstance(value, str):
            value = value.split(",")
        return [s.strip() for s in value if s and s.strip()]

    @field_validator("documents", mode="before")
    @classmethod
    def slot_names(cls, value):
        """Accept slot keys in the same camelCase the records are returned in."""
        if isinstance(value, dict):
            return {to_snake(key): meta for key, meta in value.items()}
        return value


class ApplicationUpdate(CamelModel):
    """HR edit of non-lifecycle fields."""

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    experience: str | None = None
    education: str | None = None
    skills: list[str] | None = None
    salary: str | None = None
    cover_letter: str | None = None
    position: str | None = None
    interview_date: datetime | None = None


class StatusChangeRequest(CamelModel):
    status: ApplicationStatus
    notes: str | None = None


class ApplicationStats(CamelModel):
    """Dashboard totals."""

    total: int = 0
    pending: int = 0
    reviewed: int = 0
    interviewed: int = 0
    hired: int = 0
    rejected: int = 0
    active: int = 0


class ApplicationList(CamelModel):
    """Filtered applications plus the per-status tab counts."""

    items: list[Application]
    counts: dict[str, int]
