"""Audit log writer: best-effort append of one entry per committed mutation.

Runs in its own session and transaction, after the business mutation has
committed, so a failed audit write never rolls back or fails the caller.
"""

from __future__ import annotations

import asyncio

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from campus_cms.application.dtos.audit_log import AuditLogEntryCreate, AuditLogResult
from campus_cms.infrastructure.persistence.repositories.audit_log_repo import (
    AuditLogRepository,
)
from campus_cms.shared.telemetry import get_logger

logger = get_logger(__name__)


class AuditLogWriter:
    """Appends audit entries; failures and timeouts are logged and swallowed."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        timeout_seconds: float = 5.0,
    ) -> None:
        self._session_factory = session_factory
        self._timeout = timeout_seconds

    async def _append(self, entry: AuditLogEntryCreate) -> AuditLogResult:
        async with self._session_factory() as session:
            async with session.begin():
                return await AuditLogRepository(session).create(entry)

    async def record(self, entry: AuditLogEntryCreate) -> AuditLogResult | None:
        """Append entry. Returns the stored row, or None when the write failed.

        Never raises: the audit trail is best-effort and must not change the
        outcome of the operation it describes.
        """
        try:
            return await asyncio.wait_for(self._append(entry), timeout=self._timeout)
        except Exception:
            logger.exception(
                "Audit log write failed (action=%s table=%s target=%s)",
                entry.action,
                entry.target_table,
                entry.target_id,
            )
            return None
