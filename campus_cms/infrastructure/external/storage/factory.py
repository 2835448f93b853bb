"""Storage service factory: creates the HTTP or local backend from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from campus_cms.infrastructure.external.storage.protocol import ObjectStorageProtocol

if TYPE_CHECKING:
    from campus_cms.core.config import Settings


class StorageFactory:
    """Factory for storage service instances based on configuration."""

    @staticmethod
    def create_storage_service(
        settings: "Settings", http_client: httpx.AsyncClient | None = None
    ) -> ObjectStorageProtocol:
        """Create storage service from settings.

        Args:
            settings: Application settings.
            http_client: Shared client; required for the http backend.

        Returns:
            HttpObjectStorage or LocalObjectStorage.

        Raises:
            ValueError: Unknown backend or missing required config.
        """
        backend = settings.storage_backend.lower()

        if backend == "local":
            from campus_cms.infrastructure.external.storage.local_storage import (
                LocalObjectStorage,
            )

            if not settings.storage_root:
                raise ValueError("STORAGE_ROOT required for local backend")
            return LocalObjectStorage(
                storage_root=settings.storage_root,
                public_url=settings.storage_public_url,
            )
        if backend == "http":
            from campus_cms.infrastructure.external.storage.http_storage import (
                HttpObjectStorage,
            )

            if http_client is None:
                raise ValueError("http storage backend requires a shared httpx client")
            assert settings.storage_access_key is not None
            return HttpObjectStorage(
                client=http_client,
                host=settings.storage_host,
                zone=settings.storage_zone,
                access_key=settings.storage_access_key.get_secret_value(),
                public_url=settings.storage_public_url,
                timeout=settings.storage_timeout_seconds,
            )
        raise ValueError(
            f"Unknown storage backend: {backend}. Supported: 'http', 'local'"
        )
