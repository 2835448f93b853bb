"""Audit trail administration: filtered listing, CSV export, range delete.

Listing and export are read straight from the store (never cached) so an
administrator always sees the entries written by the latest mutations.
"""

from __future__ import annotations

import csv
import io
from collections.abc import AsyncIterator
from dataclasses import dataclass
from datetime import date
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from campus_cms.application.dtos.audit_log import AuditLogFilters
from campus_cms.application.dtos.serialization import to_payloads
from campus_cms.application.services.write_pipeline import (
    Actor,
    AuditDraft,
    FileJanitor,
    Invalidation,
)
from campus_cms.application.use_cases.common import (
    ServiceContext,
    ensure_date_order,
    page_offset,
    paginated,
)
from campus_cms.core.constants import TABLE_AUDIT_LOGS
from campus_cms.domain.enums import AuditAction
from campus_cms.domain.exceptions import ValidationException
from campus_cms.infrastructure.persistence.repositories.audit_log_repo import (
    AuditLogRepository,
)
from campus_cms.shared.utils.datetime import format_local

AUDIT_CSV_HEADER = (
    "Actor Name",
    "Action",
    "Table",
    "Target ID",
    "IP Address",
    "User Agent",
    "Message",
    "Time",
)
_EXPORT_CHUNK_BYTES = 64 * 1024


@dataclass(frozen=True)
class AuditRangeDeletion:
    start: date
    end: date
    count: int


class AuditTrailService:
    """Read and prune the audit trail."""

    def __init__(self, ctx: ServiceContext) -> None:
        self.ctx = ctx

    async def query(self, filters: AuditLogFilters, page: int, limit: int) -> dict[str, Any]:
        """Page of entries matching filters, newest first, with the matching total."""
        if filters.action and filters.action not in AuditAction.values():
            raise ValidationException(
                f"Action must be one of: {', '.join(AuditAction.values())}", "action"
            )
        ensure_date_order(filters.start_date, filters.end_date, "end_date")
        async with self.ctx.session_factory() as session:
            repo = AuditLogRepository(session, self.ctx.settings.display_timezone)
            rows = await repo.list(filters, skip=page_offset(page, limit), limit=limit)
            total = await repo.count(filters)
        return paginated(to_payloads(rows), page, limit, total)

    async def export_csv(self) -> AsyncIterator[str]:
        """Yield CSV text chunks for the whole trail, header first, newest first."""
        tz_name = self.ctx.settings.display_timezone
        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(AUDIT_CSV_HEADER)
        async with self.ctx.session_factory() as session:
            async for entry in AuditLogRepository(session).stream_all():
                writer.writerow(
                    (
                        entry.actor_name or "",
                        entry.action,
                        entry.target_table,
                        entry.target_id or "",
                        entry.ip_address or "",
                        entry.user_agent or "",
                        entry.message,
                        format_local(entry.created_at, tz_name),
                    )
                )
                if buffer.tell() >= _EXPORT_CHUNK_BYTES:
                    yield buffer.getvalue()
                    buffer.seek(0)
                    buffer.truncate(0)
        yield buffer.getvalue()

    async def delete_in_range(self, start: date, end: date, actor: Actor) -> int:
        """Delete entries created on days start..end inclusive (display timezone).

        Exactly one new entry describing the removal is appended afterwards.

        Raises:
            ValidationException: start is after end (nothing is deleted).
            ResourceNotFoundException: no entries fall in the range.
        """
        if start > end:
            raise ValidationException("Start date must not be after end date", "startDate")

        async def mutation(
            session: AsyncSession, files: FileJanitor
        ) -> AuditRangeDeletion | None:
            repo = AuditLogRepository(session, self.ctx.settings.display_timezone)
            count = await repo.delete_in_range(start, end)
            if count == 0:
                return None
            return AuditRangeDeletion(start, end, count)

        outcome = await self.ctx.pipeline.execute(
            mutation,
            actor=actor,
            audit=lambda r: AuditDraft(
                AuditAction.DELETE,
                TABLE_AUDIT_LOGS,
                None,
                f"Deleted {r.count} audit log entries between {r.start} and {r.end}",
            ),
            invalidate=lambda r: Invalidation(),
            resource="audit log entries",
        )
        return outcome.count
