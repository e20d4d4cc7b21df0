"""Schemas for job postings."""

from datetime import datetime
from typing import Literal, get_args

from pydantic import Field

from hiretrack.schemas.common import CamelModel

JobType = Literal["full-time", "part-time", "contract", "internship"]
JobStatus = Literal["active", "paused", "closed"]

JOB_TYPES: tuple[str, ...] = get_args(JobType)
JOB_STATUSES: tuple[str, ...] = get_args(JobStatus)


class Job(CamelModel):
    """A posted position."""

    id: str | None = None
    title: str
    department: str
    location: str
    type: JobType
    description: str
    requirements: list[str] = Field(default_factory=list)
    benefits: list[str] = Field(default_factory=list)
    salary_range: str | None = None
    status: JobStatus = "active"
    created_date: datetime
    application_count: int | None = None


class JobInput(CamelModel):
    """Payload for a new posting. ``type`` is checked by the job rules."""

    title: str = ""
    department: str = ""
    location: str = ""
    type: str = ""
    description: str = ""
    requirements: list[str] = Field(default_factory=list)
    benefits: list[str] = Field(default_factory=list)
    salary_range: str | None = None


class JobUpdate(CamelModel):
    title: str | None = None
    department: str | None = None
    location: str | None = None
    type: JobType | None = None
    description: str | None = None
    requirements: list[str] | None = None
    benefits: list[str] | None = None
    salary_range: str | None = None


class JobStatusRequest(CamelModel):
    status: JobStatus


class BoardFacets(CamelModel):
    """Distinct filter values among publicly visible jobs."""

    departments: list[str] = Field(default_factory=list)
    types: list[str] = Field(default_factory=list)


class JobList(CamelModel):
    """Filtered jobs plus the per-status tab counts."""

    items: list[Job]
    counts: dict[str, int]
