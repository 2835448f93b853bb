"""News repository: list variants, slug lookup and date-range delete."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from sqlalchemy import ColumnElement, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from campus_cms.application.dtos.news import NewsResult, NewsSummary
from campus_cms.infrastructure.persistence.models.news import News
from campus_cms.infrastructure.persistence.repositories.base import BaseRepository
from campus_cms.shared.utils.datetime import day_range, ensure_utc

_NEWEST_FIRST = (News.created_at.desc(), News.id.desc())


def to_news_result(row: News) -> NewsResult:
    """Map News ORM to NewsResult DTO."""
    return NewsResult(
        id=row.id,
        title=row.title,
        slug=row.slug,
        content=row.content,
        category=row.category,
        author=row.author,
        image_url=row.image_url,
        documents=list(row.documents or []),
        starts_on=row.starts_on,
        ends_on=row.ends_on,
        created_at=ensure_utc(row.created_at),  # type: ignore[arg-type]
        updated_at=ensure_utc(row.updated_at),  # type: ignore[arg-type]
    )


def to_news_summary(row: News) -> NewsSummary:
    """Map News ORM to NewsSummary DTO."""
    return NewsSummary(
        id=row.id,
        title=row.title,
        slug=row.slug,
        category=row.category,
        image_url=row.image_url,
        starts_on=row.starts_on,
        ends_on=row.ends_on,
        created_at=ensure_utc(row.created_at),  # type: ignore[arg-type]
    )


@dataclass(frozen=True)
class NewsQuery:
    """Filters for the paginated public and admin lists."""

    search: str | None = None
    category: str | None = None
    year: int | None = None


def build_news_filter(
    query: NewsQuery, tz_name: str = "UTC"
) -> list[ColumnElement[bool]]:
    """WHERE conditions shared by the news list and count queries.

    year selects entries created in that calendar year in tz_name.
    """
    conditions: list[ColumnElement[bool]] = []
    if query.search:
        escaped = query.search.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        conditions.append(News.title.ilike(f"%{escaped}%", escape="\\"))
    if query.category:
        conditions.append(News.category == query.category)
    if query.year is not None:
        lower, upper = day_range(
            date(query.year, 1, 1), date(query.year, 12, 31), tz_name
        )
        conditions.append(News.created_at >= lower)
        conditions.append(News.created_at < upper)
    return conditions


class NewsRepository(BaseRepository[News]):
    """News repository. Year and date-range filters use tz_name calendar days."""

    def __init__(self, db: AsyncSession, tz_name: str = "UTC") -> None:
        super().__init__(db, News)
        self.tz_name = tz_name

    async def get_by_slug(self, slug: str) -> News | None:
        """Return the newest entry with this slug, or None."""
        stmt = select(News).where(News.slug == slug).order_by(*_NEWEST_FIRST).limit(1)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def slug_exists(self, slug: str, exclude_id: int | None = None) -> bool:
        """True when another entry already uses slug."""
        stmt = select(News.id).where(News.slug == slug)
        if exclude_id is not None:
            stmt = stmt.where(News.id != exclude_id)
        result = await self.db.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    async def list_page(
        self, query: NewsQuery, *, skip: int, limit: int
    ) -> list[NewsSummary]:
        rows = await self._page(
            build_news_filter(query, self.tz_name),
            _NEWEST_FIRST,
            offset=skip,
            limit=limit,
        )
        return [to_news_summary(r) for r in rows]

    async def count(self, query: NewsQuery) -> int:
        return await self._count(build_news_filter(query, self.tz_name))

    async def latest_articles(
        self, limit: int, exclude_categories: tuple[str, ...]
    ) -> list[NewsSummary]:
        """Newest entries outside the given (non-article) categories."""
        stmt = (
            select(News)
            .where(News.category.not_in(exclude_categories))
            .order_by(*_NEWEST_FIRST)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return [to_news_summary(r) for r in result.scalars().all()]

    async def latest_in_category(self, category: str, limit: int) -> list[NewsSummary]:
        stmt = (
            select(News)
            .where(News.category == category)
            .order_by(*_NEWEST_FIRST)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return [to_news_summary(r) for r in result.scalars().all()]

    async def total(self) -> int:
        return await self._count([])

    async def list_in_range(self, start: date, end: date) -> list[News]:
        """Entries created on days start..end inclusive."""
        lower, upper = day_range(start, end, self.tz_name)
        stmt = select(News).where(News.created_at >= lower, News.created_at < upper)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def delete_ids(self, ids: list[int]) -> int:
        """Bulk delete by primary key; return row count."""
        if not ids:
            return 0
        stmt = (
            delete(News)
            .where(News.id.in_(ids))
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return int(result.rowcount or 0)
