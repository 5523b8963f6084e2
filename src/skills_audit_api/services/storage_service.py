"""Blob storage client for releasing uploaded certificates and images."""

import logging
from typing import ClassVar, Protocol
from urllib.parse import quote, urlparse

import httpx

from skills_audit_api.utils.secure_logging import log_error

logger = logging.getLogger(__name__)

STORAGE_TIMEOUT = 10.0


class BlobStorage(Protocol):
    """Removes stored blobs by the reference the upload flow handed out."""

    async def delete(self, ref: str) -> bool:
        """Delete the blob behind a reference. True if it was removed."""
        ...


class StorageService:
    """Blob storage backed by a bucket JSON API over HTTP.

    References are public object URLs of the form
    ``https://storage.googleapis.com/<bucket>/<object name>``.
    """

    # Shared HTTP client for connection reuse (class-level)
    _http_client: ClassVar[httpx.AsyncClient | None] = None

    def __init__(self, api_base: str, bucket: str, token: str = "") -> None:
        """Initialize storage client for one bucket."""
        self.api_base = api_base.rstrip("/")
        self.bucket = bucket
        self.token = token

    @classmethod
    def _get_http_client(cls) -> httpx.AsyncClient:
        """Get or create shared HTTP client."""
        if cls._http_client is None or cls._http_client.is_closed:
            cls._http_client = httpx.AsyncClient(timeout=httpx.Timeout(STORAGE_TIMEOUT))
        return cls._http_client

    @classmethod
    async def close_client(cls) -> None:
        """Close the shared HTTP client. Call on application shutdown."""
        if cls._http_client and not cls._http_client.is_closed:
            await cls._http_client.aclose()
            cls._http_client = None

    def object_name(self, ref: str) -> str | None:
        """Extract the object name from a blob reference.

        Args:
            ref: Public object URL

        Returns:
            Object name inside the bucket, or None if the reference is unusable
        """
        path = urlparse(ref).path.lstrip("/")
        prefix = f"{self.bucket}/"
        if path.startswith(prefix):
            path = path[len(prefix):]
        return path or None

    async def delete(self, ref: str) -> bool:
        """Delete the object behind a reference.

        Args:
            ref: Public object URL

        Returns:
            True if the storage API confirmed the deletion
        """
        name = self.object_name(ref)
        if not name or not self.bucket:
            logger.warning("Cannot resolve blob reference for deletion")
            return False

        client = self._get_http_client()
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        url = f"{self.api_base}/b/{quote(self.bucket, safe='')}/o/{quote(name, safe='')}"

        try:
            response = await client.delete(url, headers=headers)
        except httpx.HTTPError as e:
            log_error(logger, "Error deleting blob", e)
            return False

        if response.is_success:
            logger.info("Blob deleted")
            return True

        logger.error(f"Blob deletion failed: HTTP {response.status_code}")
        return False
