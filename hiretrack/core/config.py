"""Application configuration management."""

from typing import Literal

from pydantic import AnyUrl, ConfigDict, Field
from pydantic_settings import BaseSettings

DEFAULT_ALLOWED_TYPES = (
    "application/pdf,"
    "application/msword,"
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document,"
    "text/plain"
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: AnyUrl

    # Sessions
    redis_url: str = "redis://localhost:6379/0"
    session_ttl_seconds: int = Field(default=86400, ge=60)
    cookie_secure: bool = Field(
        default=True,
        description="Set to False for local HTTP development",
    )

    # Roles
    admin_emails: str = Field(
        default="",
        description="Comma-separated emails that receive the admin role on first sign-in",
    )

    # Uploads
    upload_max_bytes: int = Field(default=10 * 1024 * 1024, ge=1)
    upload_allowed_types: str = DEFAULT_ALLOWED_TYPES
    blob_backend: Literal["local", "s3"] = "local"
    upload_dir: str = "uploads"
    public_base_url: str = ""

    # S3-compatible bucket (R2, MinIO, AWS)
    s3_bucket: str | None = None
    s3_endpoint: str | None = None
    s3_region: str | None = None
    s3_access_key: str | None = None
    s3_secret_key: str | None = None

    # Lifecycle
    strict_status_transitions: bool = False

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def admin_email_list(self) -> list[str]:
        return [e.strip().lower() for e in self.admin_emails.split(",") if e.strip()]

    @property
    def allowed_type_list(self) -> list[str]:
        return [t.strip() for t in self.upload_allowed_types.split(",") if t.strip()]


settings = Settings()
