"""Shared plumbing for resource use cases: dependencies, uploads, paging."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Any

from campus_cms.domain.exceptions import ValidationException
from campus_cms.infrastructure.external.storage.uploads import (
    FileKind,
    IncomingFile,
    storage_filename,
    validate_upload,
)

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from campus_cms.application.services.write_pipeline import WritePipeline
    from campus_cms.core.config import Settings
    from campus_cms.infrastructure.cache.cache_protocol import CacheProtocol
    from campus_cms.infrastructure.external.storage.protocol import (
        ObjectStorageProtocol,
        StoredFile,
    )

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceContext:
    """Collaborators every resource service needs (built per request from app.state)."""

    session_factory: async_sessionmaker[AsyncSession]
    cache: CacheProtocol
    storage: ObjectStorageProtocol
    pipeline: WritePipeline
    settings: Settings


def page_offset(page: int, limit: int) -> int:
    """Row offset for a 1-based page."""
    return (page - 1) * limit


def paginated(
    data: list[dict[str, Any]], page: int, limit: int, total: int
) -> dict[str, Any]:
    """List response envelope: {data, page, limit, total}."""
    return {"data": data, "page": page, "limit": limit, "total": total}


def ensure_date_order(
    start: date | None, end: date | None, end_field: str = "end_date"
) -> None:
    """Raise ValidationException when both dates are set and end < start."""
    if start is not None and end is not None and end < start:
        raise ValidationException("End date must not be before start date", end_field)


async def store_uploads(
    ctx: ServiceContext,
    files: Sequence[tuple[IncomingFile, FileKind, str, str]],
) -> list[StoredFile]:
    """Validate then upload files; all-or-nothing.

    Args:
        ctx: Service context (storage, settings).
        files: (file, kind, folder, field) per upload.

    Returns:
        StoredFile per input, in order.

    Raises:
        StorageRejectedFileError: A file failed validation (nothing uploaded).
        StorageUploadError: An upload failed (earlier uploads are removed).
    """
    for file, kind, _folder, field in files:
        validate_upload(file, kind, ctx.settings, field)

    stored: list[StoredFile] = []
    try:
        for file, _kind, folder, _field in files:
            stored.append(
                await ctx.storage.upload(
                    file.data, folder, storage_filename(file), file.content_type
                )
            )
    except Exception:
        await ctx.pipeline.files.discard_all(s.url for s in stored)
        raise
    return stored
