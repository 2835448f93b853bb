"""Object storage protocol (DIP). Implementations: HttpObjectStorage, LocalObjectStorage."""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class StoredFile:
    """Result of an upload: public URL plus the stored file name."""

    url: str
    name: str


class ObjectStorageProtocol(Protocol):
    """Protocol for object storage backends (HTTP zone, local filesystem).

    Files are addressed by their public URL; backends derive the storage
    path from it.
    """

    async def upload(
        self,
        data: bytes,
        folder: str,
        filename: str,
        content_type: str,
    ) -> StoredFile:
        """Store data under folder/filename and return its public URL."""
        ...

    async def delete(self, url: str) -> bool:
        """Delete file by public URL. Returns True if deleted, False if not found."""
        ...
