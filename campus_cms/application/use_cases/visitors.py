"""Visitor tracking: once-per-day visit logging, admin list, CSV export, range delete."""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass
from datetime import date
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from campus_cms.application.dtos.serialization import to_payloads
from campus_cms.application.services.write_pipeline import (
    Actor,
    AuditDraft,
    FileJanitor,
    Invalidation,
)
from campus_cms.application.use_cases.common import ServiceContext, page_offset, paginated
from campus_cms.core.constants import TABLE_VISITORS
from campus_cms.domain.enums import AuditAction
from campus_cms.domain.exceptions import ValidationException
from campus_cms.infrastructure.cache import keys
from campus_cms.infrastructure.cache.read_through import cache_aside
from campus_cms.infrastructure.persistence.models.visitor import Visitor
from campus_cms.infrastructure.persistence.repositories.resource_repos import (
    VisitorQuery,
    VisitorRepository,
)
from campus_cms.shared.utils.datetime import ensure_utc, local_today

logger = logging.getLogger(__name__)

VISITOR_CSV_HEADER = ("id", "ip_address", "user_agent", "created_at")
_EXPORT_CHUNK_BYTES = 64 * 1024

_INVALIDATE = Invalidation(
    keys=(keys.dashboard_visitors_today_key(),),
    prefixes=(keys.VISITORS_LIST_PREFIX,),
)


@dataclass(frozen=True)
class VisitOutcome:
    created: bool
    visitor_id: int


@dataclass(frozen=True)
class VisitorRangeDeletion:
    start: date
    end: date
    count: int


class VisitorService:
    """Visit logging (public) and visitor administration."""

    def __init__(self, ctx: ServiceContext) -> None:
        self.ctx = ctx

    async def log_visit(self, ip_address: str | None, user_agent: str | None) -> bool:
        """Record a visit unless this client was already seen today.

        "Today" is the calendar day in the display timezone.

        Returns:
            True when a new visit row was stored.
        """
        ip = (ip_address or "unknown")[:64]
        agent = user_agent or ""
        today = local_today(self.ctx.settings.display_timezone)

        async def mutation(session: AsyncSession, files: FileJanitor) -> VisitOutcome:
            repo = VisitorRepository(session)
            existing = await repo.find_visit(ip, agent, today)
            if existing is not None:
                return VisitOutcome(created=False, visitor_id=existing.id)
            row = await repo.add(Visitor(ip_address=ip, user_agent=agent, visited_on=today))
            return VisitOutcome(created=True, visitor_id=row.id)

        try:
            outcome = await self.ctx.pipeline.execute(
                mutation,
                actor=Actor.anonymous(ip, agent),
                audit=None,
                invalidate=lambda r: _INVALIDATE if r.created else Invalidation(),
            )
        except IntegrityError:
            # Concurrent first visit from the same client; the other insert won.
            logger.debug("Duplicate visit for %s on %s ignored", ip, today)
            return False
        return outcome.created

    async def list(self, query: VisitorQuery, page: int, limit: int) -> dict[str, Any]:
        if query.start_date and query.end_date and query.start_date > query.end_date:
            raise ValidationException("Start date must not be after end date", "start_date")

        params = {
            "page": page,
            "limit": limit,
            "start_date": query.start_date,
            "end_date": query.end_date,
            "ip_address": query.ip_address,
            "user_agent": query.user_agent,
        }

        async def load() -> dict[str, Any]:
            async with self.ctx.session_factory() as session:
                repo = VisitorRepository(session)
                rows = await repo.list_page(query, skip=page_offset(page, limit), limit=limit)
                total = await repo.count(query)
            return paginated(to_payloads(rows), page, limit, total)

        return await cache_aside(
            self.ctx.cache,
            keys.visitors_list_key(params),
            load,
            self.ctx.settings.cache_ttl_visitors,
        )

    async def export_csv(self) -> AsyncIterator[str]:
        """Yield the CSV export (header first), newest visits first."""
        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(VISITOR_CSV_HEADER)
        async with self.ctx.session_factory() as session:
            async for row in VisitorRepository(session).stream_all():
                created = ensure_utc(row.created_at)
                writer.writerow(
                    (
                        row.id,
                        row.ip_address,
                        row.user_agent,
                        created.isoformat() if created else "",
                    )
                )
                if buffer.tell() >= _EXPORT_CHUNK_BYTES:
                    yield buffer.getvalue()
                    buffer.seek(0)
                    buffer.truncate(0)
        yield buffer.getvalue()

    async def delete_in_range(self, start: date, end: date, actor: Actor) -> int:
        """Delete visits logged on days start..end inclusive."""
        if start > end:
            raise ValidationException("Start date must not be after end date", "startDate")

        async def mutation(
            session: AsyncSession, files: FileJanitor
        ) -> VisitorRangeDeletion | None:
            count = await VisitorRepository(session).delete_in_range(start, end)
            if count == 0:
                return None
            return VisitorRangeDeletion(start, end, count)

        outcome = await self.ctx.pipeline.execute(
            mutation,
            actor=actor,
            audit=lambda r: AuditDraft(
                AuditAction.DELETE,
                TABLE_VISITORS,
                None,
                f"Deleted {r.count} visitor records between {r.start} and {r.end}",
            ),
            invalidate=lambda r: _INVALIDATE,
            resource="visitor records",
        )
        return outcome.count
