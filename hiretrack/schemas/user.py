"""Schemas for principals and sessions."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from hiretrack.schemas.common import CamelModel

Role = Literal["hr", "admin", "applicant"]
SignInFlow = Literal["hr", "applicant"]


class User(CamelModel):
    """An authenticated principal's profile."""

    uid: str
    email: str
    display_name: str = ""
    role: Role
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    created_at: datetime | None = None


class SignUpRequest(CamelModel):
    email: str
    password: str = Field(min_length=6)
    display_name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    flow: SignInFlow = "applicant"


class SignInRequest(CamelModel):
    email: str
    password: str
    flow: SignInFlow = "hr"


class Session(CamelModel):
    """A signed-in principal and the token that identifies the session."""

    token: str
    user: User
