"""Infrastructure exceptions for object storage operations.

Storage errors extend CmsException so presentation can map them
to HTTP responses consistently.
"""

from campus_cms.domain.exceptions import CmsException


class StorageException(CmsException):
    """Base exception for storage operations."""


class StorageRejectedFileError(StorageException):
    """Upload rejected before reaching storage (type or size)."""

    def __init__(self, filename: str, reason: str, field: str | None = None) -> None:
        details: dict[str, str] = {"filename": filename, "reason": reason}
        if field:
            details["field"] = field
        super().__init__(
            f"File rejected: {reason}",
            "STORAGE_REJECTED_FILE",
            details,
        )


class StorageUploadError(StorageException):
    """File upload failed."""

    def __init__(self, file_path: str, reason: str) -> None:
        super().__init__(
            f"Failed to upload file: {file_path}",
            "STORAGE_UPLOAD_ERROR",
            {"file_path": file_path},
        )
        self.reason = reason


class StorageDeleteError(StorageException):
    """File deletion failed."""

    def __init__(self, file_path: str, reason: str) -> None:
        super().__init__(
            f"Failed to delete file: {file_path}",
            "STORAGE_DELETE_ERROR",
            {"file_path": file_path},
        )
        self.reason = reason


class StoragePermissionError(StorageException):
    """Path escapes the storage root."""

    def __init__(self, file_path: str, operation: str) -> None:
        super().__init__(
            f"Permission denied for {operation} on {file_path}",
            "STORAGE_PERMISSION_ERROR",
            {"file_path": file_path, "operation": operation},
        )
