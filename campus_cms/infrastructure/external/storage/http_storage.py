"""HTTP object storage (Bunny-style zone): PUT to upload, DELETE to remove.

Uses the shared httpx.AsyncClient from app.state. Paths are derived from
public URLs by stripping storage_public_url.
"""

from __future__ import annotations

import httpx

from campus_cms.infrastructure.exceptions import StorageDeleteError, StorageUploadError
from campus_cms.infrastructure.external.storage.protocol import StoredFile
from campus_cms.shared.telemetry import get_logger

logger = get_logger(__name__)


class HttpObjectStorage:
    """Object storage over a PUT/DELETE HTTP API authenticated by AccessKey header."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        host: str,
        zone: str,
        access_key: str,
        public_url: str,
        timeout: float = 30.0,
    ) -> None:
        self._client = client
        self._base = f"{host.rstrip('/')}/{zone.strip('/')}"
        self._access_key = access_key
        self._public_url = public_url.rstrip("/")
        self._timeout = timeout

    def path_from_url(self, url: str) -> str | None:
        """Storage path for a public URL, or None if the URL is not ours."""
        prefix = self._public_url + "/"
        if not url.startswith(prefix):
            return None
        path = url[len(prefix) :].split("?", 1)[0]
        return path or None

    async def upload(
        self,
        data: bytes,
        folder: str,
        filename: str,
        content_type: str,
    ) -> StoredFile:
        """PUT data to {zone}/{folder}/{filename}."""
        path = f"{folder.strip('/')}/{filename}"
        try:
            response = await self._client.put(
                f"{self._base}/{path}",
                content=data,
                headers={"AccessKey": self._access_key, "Content-Type": content_type},
                timeout=self._timeout,
            )
        except httpx.HTTPError as e:
            raise StorageUploadError(path, str(e)) from e
        if response.status_code >= 300:
            raise StorageUploadError(path, f"HTTP {response.status_code}")
        logger.debug("Uploaded %s (%s bytes)", path, len(data))
        return StoredFile(url=f"{self._public_url}/{path}", name=filename)

    async def delete(self, url: str) -> bool:
        """DELETE the file behind a public URL. Returns False when not found."""
        path = self.path_from_url(url)
        if path is None:
            logger.warning("Not deleting %s: outside storage public URL", url)
            return False
        try:
            response = await self._client.delete(
                f"{self._base}/{path}",
                headers={"AccessKey": self._access_key},
                timeout=self._timeout,
            )
        except httpx.HTTPError as e:
            raise StorageDeleteError(path, str(e)) from e
        if response.status_code == 404:
            return False
        if response.status_code >= 300:
            raise StorageDeleteError(path, f"HTTP {response.status_code}")
        logger.debug("Deleted %s", path)
        return True
