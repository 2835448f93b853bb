"""Application services: the write pipeline shared by every resource."""

from campus_cms.application.services.write_pipeline import (
    Actor,
    AuditDraft,
    FileJanitor,
    Invalidation,
    WritePipeline,
)

__all__ = [
    "Actor",
    "AuditDraft",
    "FileJanitor",
    "Invalidation",
    "WritePipeline",
]
