"""Service interfaces (ports) for the application layer.

Protocols define contracts for infrastructure services (DIP). Cache and
object storage contracts live with their implementations
(CacheProtocol, ObjectStorageProtocol).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from campus_cms.application.dtos.audit_log import (
        AuditLogEntryCreate,
        AuditLogResult,
    )


class IAuditLogWriter(Protocol):
    """Protocol for the best-effort audit trail writer."""

    async def record(self, entry: AuditLogEntryCreate) -> AuditLogResult | None:
        """Append entry; return None (never raise) when the write fails."""
        ...


class ICaptchaVerifier(Protocol):
    """Protocol for public-form bot verification."""

    async def verify(self, token: str | None, remote_ip: str | None = None) -> None:
        """Raise ValidationException (rejected) or UpstreamServiceException (unreachable)."""
        ...
