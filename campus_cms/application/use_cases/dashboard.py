"""Dashboard counters: total news and today's visitors (short TTL)."""

from __future__ import annotations

from typing import Any

from campus_cms.application.use_cases.common import ServiceContext
from campus_cms.infrastructure.cache import keys
from campus_cms.infrastructure.cache.read_through import cache_aside
from campus_cms.infrastructure.persistence.repositories.news_repo import NewsRepository
from campus_cms.infrastructure.persistence.repositories.resource_repos import (
    VisitorRepository,
)
from campus_cms.shared.utils.datetime import local_today


class DashboardService:
    def __init__(self, ctx: ServiceContext) -> None:
        self.ctx = ctx

    async def summary(self) -> dict[str, Any]:
        ttl = self.ctx.settings.cache_ttl_dashboard

        async def news_total() -> int:
            async with self.ctx.session_factory() as session:
                return await NewsRepository(session).total()

        async def visitors_today() -> int:
            async with self.ctx.session_factory() as session:
                return await VisitorRepository(session).count_on(
                    local_today(self.ctx.settings.display_timezone)
                )

        return {
            "news_total": await cache_aside(
                self.ctx.cache, keys.dashboard_news_total_key(), news_total, ttl
            ),
            "visitors_today": await cache_aside(
                self.ctx.cache, keys.dashboard_visitors_today_key(), visitors_today, ttl
            ),
        }
