"""Audit log repository. Append-only apart from the bulk date-range delete."""

from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import date

from sqlalchemy import ColumnElement, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from campus_cms.application.dtos.audit_log import (
    AuditLogEntryCreate,
    AuditLogFilters,
    AuditLogResult,
)
from campus_cms.infrastructure.persistence.models.audit_log import AuditLog
from campus_cms.infrastructure.persistence.repositories.base import BaseRepository
from campus_cms.shared.utils.datetime import day_range, day_start, ensure_utc

_NEWEST_FIRST = (AuditLog.created_at.desc(), AuditLog.id.desc())


def _orm_to_result(row: AuditLog) -> AuditLogResult:
    """Map ORM to application DTO."""
    created_at = ensure_utc(row.created_at)
    assert created_at is not None
    return AuditLogResult(
        id=row.id,
        actor_id=row.actor_id,
        actor_name=row.actor_name,
        action=row.action,
        target_table=row.target_table,
        target_id=row.target_id,
        ip_address=row.ip_address,
        user_agent=row.user_agent,
        message=row.message,
        created_at=created_at,
    )


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def build_audit_filter(
    filters: AuditLogFilters, tz_name: str = "UTC"
) -> list[ColumnElement[bool]]:
    """WHERE conditions shared by the audit list and count queries.

    Date bounds are inclusive calendar days in tz_name: start_date keeps rows
    from its local 00:00, end_date keeps rows before the following local 00:00.
    """
    conditions: list[ColumnElement[bool]] = []
    if filters.actor_name:
        pattern = f"%{_escape_like(filters.actor_name)}%"
        conditions.append(AuditLog.actor_name.ilike(pattern, escape="\\"))
    if filters.action:
        conditions.append(AuditLog.action == filters.action)
    if filters.target_table:
        conditions.append(AuditLog.target_table == filters.target_table)
    if filters.start_date is not None:
        conditions.append(AuditLog.created_at >= day_start(filters.start_date, tz_name))
    if filters.end_date is not None:
        _, upper = day_range(filters.end_date, filters.end_date, tz_name)
        conditions.append(AuditLog.created_at < upper)
    return conditions


class AuditLogRepository(BaseRepository[AuditLog]):
    """Audit log repository. No update; deletes only by date range.

    Calendar-day filters are cut at midnight in tz_name (the zone entries
    are displayed in).
    """

    def __init__(self, db: AsyncSession, tz_name: str = "UTC") -> None:
        super().__init__(db, AuditLog)
        self.tz_name = tz_name

    async def create(self, entry: AuditLogEntryCreate) -> AuditLogResult:
        """Append one audit log entry; return created record."""
        row = AuditLog(
            actor_id=entry.actor_id,
            actor_name=entry.actor_name,
            action=entry.action,
            target_table=entry.target_table,
            target_id=entry.target_id,
            ip_address=entry.ip_address,
            user_agent=entry.user_agent,
            message=entry.message,
        )
        row = await self.add(row)
        return _orm_to_result(row)

    async def list(
        self, filters: AuditLogFilters, *, skip: int = 0, limit: int = 10
    ) -> list[AuditLogResult]:
        """List entries matching filters (newest first)."""
        rows = await self._page(
            build_audit_filter(filters, self.tz_name),
            _NEWEST_FIRST,
            offset=skip,
            limit=limit,
        )
        return [_orm_to_result(r) for r in rows]

    async def count(self, filters: AuditLogFilters) -> int:
        """Count entries matching the same filters as list()."""
        return await self._count(build_audit_filter(filters, self.tz_name))

    async def stream_all(self, batch_size: int = 500) -> AsyncIterator[AuditLogResult]:
        """Yield every entry newest first, fetched in batches."""
        stmt = select(AuditLog).order_by(*_NEWEST_FIRST)
        result = await self.db.stream_scalars(stmt.execution_options(yield_per=batch_size))
        async for row in result:
            yield _orm_to_result(row)

    async def delete_in_range(self, start: date, end: date) -> int:
        """Bulk delete entries created on days start..end inclusive; return row count."""
        lower, upper = day_range(start, end, self.tz_name)
        stmt = (
            delete(AuditLog)
            .where(AuditLog.created_at >= lower, AuditLog.created_at < upper)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return int(result.rowcount or 0)
