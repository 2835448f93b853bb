"""Upload validation and naming: allowed types per file kind, size limits."""

from __future__ import annotations

import secrets
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath
from typing import TYPE_CHECKING

from campus_cms.infrastructure.exceptions import StorageRejectedFileError

if TYPE_CHECKING:
    from campus_cms.core.config import Settings

_IMAGE_TYPES: dict[str, set[str]] = {
    ".jpg": {"image/jpeg"},
    ".jpeg": {"image/jpeg"},
    ".png": {"image/png"},
    ".webp": {"image/webp"},
}
_PDF_TYPES: dict[str, set[str]] = {".pdf": {"application/pdf"}}


class FileKind(str, Enum):
    IMAGE = "image"
    DOCUMENT = "document"
    SCHOLARSHIP_DOCUMENT = "scholarship_document"
    HR_DOCUMENT = "hr_document"


@dataclass(frozen=True)
class IncomingFile:
    """File read from a multipart request, not yet stored."""

    data: bytes
    filename: str
    content_type: str

    @property
    def extension(self) -> str:
        return PurePath(self.filename).suffix.lower()


def _rules(kind: FileKind, settings: "Settings") -> tuple[dict[str, set[str]], int]:
    if kind is FileKind.IMAGE:
        return _IMAGE_TYPES, settings.max_image_size
    if kind is FileKind.SCHOLARSHIP_DOCUMENT:
        return _PDF_TYPES, settings.max_scholarship_document_size
    if kind is FileKind.HR_DOCUMENT:
        return _PDF_TYPES, settings.max_hr_document_size
    return _PDF_TYPES, settings.max_document_size


def validate_upload(
    file: IncomingFile, kind: FileKind, settings: "Settings", field: str | None = None
) -> None:
    """Reject files with a disallowed extension/MIME type, empty or over the size limit.

    Raises:
        StorageRejectedFileError: Mapped to 400 by the exception handlers.
    """
    allowed, max_size = _rules(kind, settings)
    mime_types = allowed.get(file.extension)
    if mime_types is None:
        raise StorageRejectedFileError(
            file.filename,
            f"extension must be one of {', '.join(sorted(allowed))}",
            field,
        )
    if file.content_type not in mime_types:
        raise StorageRejectedFileError(
            file.filename, f"content type {file.content_type} not allowed", field
        )
    if not file.data:
        raise StorageRejectedFileError(file.filename, "file is empty", field)
    if len(file.data) > max_size:
        raise StorageRejectedFileError(
            file.filename, f"file exceeds {max_size // 1024} KB", field
        )


def storage_filename(file: IncomingFile) -> str:
    """Collision-resistant stored name: <epoch ms>-<random hex><ext>."""
    return f"{int(time.time() * 1000)}-{secrets.token_hex(8)}{file.extension}"
