"""Local filesystem storage with path validation and atomic writes."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import aiofiles
import aiofiles.os

from campus_cms.infrastructure.exceptions import (
    StorageDeleteError,
    StoragePermissionError,
    StorageUploadError,
)
from campus_cms.infrastructure.external.storage.protocol import StoredFile


class LocalObjectStorage:
    """Local filesystem storage with atomic writes and path traversal protection.

    Paths are validated against storage_root. Writes use temp file + rename.
    Public URLs are public_url + relative path (served by a static mount
    or reverse proxy).
    """

    def __init__(self, storage_root: str, public_url: str) -> None:
        """Initialize local storage.

        Args:
            storage_root: Base directory for all files.
            public_url: Base URL the files are served under.
        """
        self.storage_root = Path(storage_root).resolve()
        self.public_url = public_url.rstrip("/")
        self.storage_root.mkdir(parents=True, exist_ok=True, mode=0o750)

    def _get_full_path(self, storage_ref: str) -> Path:
        """Resolve and validate path under storage_root. Raises StoragePermissionError if traversal."""
        full_path = (self.storage_root / storage_ref).resolve()
        try:
            full_path.relative_to(self.storage_root)
        except ValueError as e:
            raise StoragePermissionError(storage_ref, "path_validation") from e
        return full_path

    def path_from_url(self, url: str) -> str | None:
        """Relative storage path for a public URL, or None if the URL is not ours."""
        prefix = self.public_url + "/"
        if not url.startswith(prefix):
            return None
        return url[len(prefix) :].split("?", 1)[0] or None

    async def upload(
        self,
        data: bytes,
        folder: str,
        filename: str,
        content_type: str,
    ) -> StoredFile:
        """Write data atomically to storage_root/folder/filename."""
        storage_ref = f"{folder.strip('/')}/{filename}"
        target_path = self._get_full_path(storage_ref)
        target_path.parent.mkdir(parents=True, exist_ok=True, mode=0o750)
        temp_fd, temp_path = tempfile.mkstemp(
            dir=target_path.parent,
            prefix=".tmp_",
            suffix=target_path.suffix,
        )
        os.close(temp_fd)
        try:
            async with aiofiles.open(temp_path, "wb") as f:
                await f.write(data)
            os.chmod(temp_path, 0o640)
            os.replace(temp_path, target_path)
        except OSError as e:
            raise StorageUploadError(storage_ref, str(e)) from e
        finally:
            if Path(temp_path).exists():
                os.unlink(temp_path)
        return StoredFile(url=f"{self.public_url}/{storage_ref}", name=filename)

    async def delete(self, url: str) -> bool:
        """Delete file by public URL. Returns True if deleted."""
        storage_ref = self.path_from_url(url)
        if storage_ref is None:
            return False
        file_path = self._get_full_path(storage_ref)
        if not file_path.exists():
            return False
        try:
            await aiofiles.os.remove(file_path)
        except OSError as e:
            raise StorageDeleteError(storage_ref, str(e)) from e
        return True
