"""Blob storage for application attachments."""

import asyncio
import logging
from abc import ABC, abstractmethod
from datetime import UTC, datetime
from functools import lru_cache
from pathlib import Path

import aiofiles
import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from hiretrack.core.config import settings
from hiretrack.core.exceptions import CollaboratorError, NotFoundError
from hiretrack.utils.validators import sanitize_filename

logger = logging.getLogger(__name__)

DOWNLOAD_PREFIX = "/documents"


def build_blob_path(
    collection: str,
    slot: str,
    owner_id: str,
    filename: str,
    now: datetime | None = None,
) -> str:
    """Return ``<collection>/<slot>/<owner>/<timestamp>_<filename>``."""
    stamp = int((now or datetime.now(UTC)).timestamp() * 1000)
    return f"{collection}/{slot}/{sanitize_filename(owner_id)}/{stamp}_{sanitize_filename(filename)}"


class BlobStore(ABC):
    """Stores file bytes and hands back a URL the API can serve them from."""

    def __init__(self, base_url: str = ""):
        self.base_url = base_url.rstrip("/")

    def url_for(self, path: str) -> str:
        return f"{self.base_url}{DOWNLOAD_PREFIX}/{path}"

    @abstractmethod
    async def store(self, data: bytes, path: str, content_type: str) -> str:
        """Persist ``data`` at ``path`` and return its retrievable URL."""

    @abstractmethod
    async def open(self, path: str) -> bytes:
        """Return the bytes stored at ``path``."""


class LocalBlobStore(BlobStore):
    """Blob store on the local filesystem."""

    def __init__(self, root: str | Path, base_url: str = ""):
        super().__init__(base_url)
        self.root = Path(root).resolve()

    def _resolve(self, path: str) -> Path:
        target = (self.root / path).resolve()
        if not target.is_relative_to(self.root):
            raise NotFoundError("Document", path)
        return target

    async def store(self, data: bytes, path: str, content_type: str) -> str:
        target = self._resolve(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(target, "wb") as out:
                await out.write(data)
        except OSError as e:
            logger.error(f"Local blob write failed for {path}: {e}")
            raise CollaboratorError("blob", str(e)) from e
        logger.debug(f"Stored {len(data)} bytes at {target}")
        return self.url_for(path)

    async def open(self, path: str) -> bytes:
        target = self._resolve(path)
        if not target.is_file():
            raise NotFoundError("Document", path)
        try:
            async with aiofiles.open(target, "rb") as src:
                return await src.read()
        except OSError as e:
            logger.error(f"Local blob read failed for {path}: {e}")
            raise CollaboratorError("blob", str(e)) from e


class S3BlobStore(BlobStore):
    """Blob store on an S3-compatible bucket (R2, MinIO, AWS)."""

    def __init__(self, client, bucket: str, base_url: str = ""):
        super().__init__(base_url)
        self.client = client
        self.bucket = bucket

    async def store(self, data: bytes, path: str, content_type: str) -> str:
        try:
            await asyncio.to_thread(
                self.client.put_object,
                Bucket=self.bucket,
                Key=path,
                Body=data,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"S3 upload failed for {path}: {e!r}")
            raise CollaboratorError("blob", str(e)) from e
        return self.url_for(path)

    async def open(self, path: str) -> bytes:
        try:
            response = await asyncio.to_thread(
                self.client.get_object, Bucket=self.bucket, Key=path
            )
            return await asyncio.to_thread(response["Body"].read)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in ("NoSuchKey", "404"):
                raise NotFoundError("Document", path) from e
            logger.error(f"S3 download failed for {path}: {e!r}")
            raise CollaboratorError("blob", str(e)) from e
        except BotoCoreError as e:
            logger.error(f"S3 download failed for {path}: {e!r}")
            raise CollaboratorError("blob", str(e)) from e


def _s3_client():
    return boto3.client(
        "s3",
        endpoint_url=settings.s3_endpoint or None,
        aws_access_key_id=settings.s3_access_key,
        aws_secret_access_key=settings.s3_secret_key,
        config=Config(signature_version="s3v4"),
        region_name=settings.s3_region or None,
    )


@lru_cache
def get_blob_store() -> BlobStore:
    """Get the configured blob store instance."""
    if settings.blob_backend == "s3":
        if not settings.s3_bucket:
            raise ValueError("S3_BUCKET must be set when BLOB_BACKEND is s3")
        return S3BlobStore(_s3_client(), settings.s3_bucket, settings.public_base_url)
    return LocalBlobStore(settings.upload_dir, settings.public_base_url)
