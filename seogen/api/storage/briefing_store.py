"""Briefing file storage backed by an S3-compatible bucket (MinIO client).

Read-only from the pipeline's perspective: files are uploaded elsewhere and
referenced by path in ``briefingFiles``.
"""

import asyncio
import logging
import re

from minio import Minio
from minio.error import S3Error
from urllib3.exceptions import HTTPError as TransportError

from seogen.api import config

logger = logging.getLogger(__name__)

PATH_TRAVERSAL_PATTERN = re.compile(r"\.\./|\.\.\\|%2e%2e|%252e", re.I)


class BriefingStoreError(Exception):
    """Base exception for briefing storage operations."""


class BriefingNotFoundError(BriefingStoreError):
    """Briefing file does not exist in the bucket."""


def validate_briefing_path(path: str) -> str:
    """Reject empty paths and path traversal.

    Returns:
        The path without leading slashes

    Raises:
        BriefingStoreError: If the path is not acceptable
    """
    cleaned = (path or "").strip().lstrip("/")
    if not cleaned:
        raise BriefingStoreError("Empty briefing path is not allowed")
    if PATH_TRAVERSAL_PATTERN.search(cleaned) or "\0" in cleaned:
        logger.warning(f"Path traversal attempt detected in briefing path: {cleaned[:50]}")
        raise BriefingStoreError("Invalid briefing path: path traversal detected")
    return cleaned


class BriefingStore:
    """Downloads briefing files from the briefing bucket."""

    def __init__(
        self,
        endpoint: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
        secure: bool | None = None,
        bucket: str | None = None,
        client: Minio | None = None,
    ):
        """Initialize.

        Args:
            endpoint: Storage endpoint (default: STORAGE_ENDPOINT)
            access_key: Access key (default: STORAGE_ACCESS_KEY)
            secret_key: Secret key (default: STORAGE_SECRET_KEY)
            secure: Use HTTPS (default: STORAGE_SECURE)
            bucket: Bucket name (default: BRIEFING_BUCKET)
            client: Pre-built Minio client
        """
        self.endpoint = endpoint or config.STORAGE_ENDPOINT
        self.access_key = access_key or config.STORAGE_ACCESS_KEY
        self.secret_key = secret_key or config.STORAGE_SECRET_KEY
        self.secure = secure if secure is not None else config.STORAGE_SECURE
        self.bucket = bucket or config.BRIEFING_BUCKET
        self._client = client

    @property
    def client(self) -> Minio:
        """Lazy initialization of the Minio client."""
        if self._client is None:
            self._client = Minio(
                endpoint=self.endpoint,
                access_key=self.access_key,
                secret_key=self.secret_key,
                secure=self.secure,
            )
        return self._client

    def _read_object(self, object_name: str) -> bytes:
        response = self.client.get_object(bucket_name=self.bucket, object_name=object_name)
        try:
            return response.read()
        finally:
            response.close()
            response.release_conn()

    async def download_text(self, path: str) -> str:
        """Download one briefing file as text.

        Raises:
            BriefingNotFoundError: If the object does not exist
            BriefingStoreError: On any other storage failure, including an
                unreachable endpoint or an invalid client configuration
        """
        object_name = validate_briefing_path(path)
        try:
            content = await asyncio.to_thread(self._read_object, object_name)
        except S3Error as e:
            if e.code == "NoSuchKey":
                raise BriefingNotFoundError(f"Briefing not found: {object_name}") from e
            raise BriefingStoreError(f"Failed to download briefing: {e}") from e
        except (TransportError, OSError, ValueError) as e:
            raise BriefingStoreError(f"Storage unavailable for {object_name}: {e}") from e
        return content.decode("utf-8", errors="replace")
