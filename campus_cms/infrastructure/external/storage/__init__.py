"""Object storage: HTTP zone and local filesystem backends.

Factory creates the backend from campus_cms.core.config. Implementations
satisfy ObjectStorageProtocol (upload, delete) and address files by their
public URL.
"""

from campus_cms.infrastructure.external.storage.factory import StorageFactory
from campus_cms.infrastructure.external.storage.protocol import (
    ObjectStorageProtocol,
    StoredFile,
)
from campus_cms.infrastructure.external.storage.uploads import (
    FileKind,
    IncomingFile,
    storage_filename,
    validate_upload,
)

__all__ = [
    "FileKind",
    "IncomingFile",
    "ObjectStorageProtocol",
    "StorageFactory",
    "StoredFile",
    "storage_filename",
    "validate_upload",
]
