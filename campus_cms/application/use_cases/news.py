"""News use cases: cached public/admin reads and pipeline-driven writes.

One table backs many cached query variants (lists per page/search/category,
latest strip, announcements, agenda, detail by slug), so every write drops
the slug keys it touched plus every news list prefix.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from campus_cms.application.dtos.news import NewsResult, NewsWrite
from campus_cms.application.dtos.serialization import to_payload, to_payloads
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
    store_uploads,
)
from campus_cms.core.constants import (
    NEWS_BY_CATEGORY_LIMIT,
    NEWS_LATEST_LIMIT,
    NEWS_NON_ARTICLE_CATEGORIES,
    STORAGE_FOLDER_NEWS_DOCUMENTS,
    STORAGE_FOLDER_NEWS_IMAGES,
    TABLE_NEWS,
)
from campus_cms.domain.enums import AuditAction
from campus_cms.domain.exceptions import ResourceNotFoundException, ValidationException
from campus_cms.infrastructure.cache import keys
from campus_cms.infrastructure.cache.read_through import cache_aside
from campus_cms.infrastructure.external.storage.uploads import FileKind, IncomingFile
from campus_cms.infrastructure.persistence.models.news import News
from campus_cms.infrastructure.persistence.repositories.news_repo import (
    NewsQuery,
    NewsRepository,
    to_news_result,
)
from campus_cms.shared.utils.sanitization import InputSanitizer, sanitize_input, slugify

ANNOUNCEMENT_CATEGORY = "announcement"
AGENDA_CATEGORY = "agenda"


@dataclass(frozen=True)
class NewsChange:
    """Update result: row state before and after."""

    before: NewsResult
    after: NewsResult


@dataclass(frozen=True)
class NewsRangeDeletion:
    start: date
    end: date
    count: int
    slugs: tuple[str, ...]


def _invalidate_news(*slugs: str) -> Invalidation:
    return Invalidation(
        keys=tuple(keys.news_slug_key(s) for s in dict.fromkeys(slugs) if s)
        + (keys.dashboard_news_total_key(),),
        prefixes=keys.NEWS_QUERY_PREFIXES,
    )


def _describe_changes(before: NewsResult, after: NewsResult) -> str:
    changes: list[str] = []
    if before.title != after.title:
        changes.append(f'title from "{before.title}" to "{after.title}"')
    if before.content != after.content:
        changes.append("content updated")
    if before.category != after.category:
        changes.append(f'category from "{before.category}" to "{after.category}"')
    if before.starts_on != after.starts_on:
        changes.append(f'start date from "{before.starts_on}" to "{after.starts_on}"')
    if before.ends_on != after.ends_on:
        changes.append(f'end date from "{before.ends_on}" to "{after.ends_on}"')
    if before.image_url != after.image_url:
        changes.append("image replaced")
    if before.documents != after.documents:
        changes.append("documents replaced")
    if not changes:
        return f"Updated news (ID: {after.id}) with no detected changes"
    return f"Updated news (ID: {after.id}): {'; '.join(changes)}"


class NewsService:
    """News reads (cache-aside) and writes (write pipeline)."""

    def __init__(self, ctx: ServiceContext) -> None:
        self.ctx = ctx
        self.ttl = ctx.settings.cache_ttl_news

    # Reads

    async def latest(self) -> list[dict[str, Any]]:
        """Newest articles, excluding announcement and agenda categories."""

        async def load() -> list[dict[str, Any]]:
            async with self.ctx.session_factory() as session:
                rows = await NewsRepository(session).latest_articles(
                    NEWS_LATEST_LIMIT, NEWS_NON_ARTICLE_CATEGORIES
                )
            return to_payloads(rows)

        return await cache_aside(
            self.ctx.cache, keys.news_latest_key(NEWS_LATEST_LIMIT), load, self.ttl
        )

    async def list_public(
        self, page: int, limit: int, search: str = "", category: str = ""
    ) -> dict[str, Any]:
        """Paginated list with optional title search and category filter."""
        query = NewsQuery(search=search or None, category=category or None)
        return await cache_aside(
            self.ctx.cache,
            keys.news_list_key(page, limit, search, category),
            lambda: self._load_page(query, page, limit),
            self.ttl,
        )

    async def list_admin(
        self,
        page: int,
        limit: int,
        search: str = "",
        category: str = "",
        year: int | None = None,
    ) -> dict[str, Any]:
        """Admin list: public filters plus creation year."""
        query = NewsQuery(search=search or None, category=category or None, year=year)
        return await cache_aside(
            self.ctx.cache,
            keys.news_admin_list_key(page, limit, search, category, year),
            lambda: self._load_page(query, page, limit),
            self.ttl,
        )

    async def _load_page(self, query: NewsQuery, page: int, limit: int) -> dict[str, Any]:
        async with self.ctx.session_factory() as session:
            repo = NewsRepository(session, self.ctx.settings.display_timezone)
            rows = await repo.list_page(query, skip=page_offset(page, limit), limit=limit)
            total = await repo.count(query)
        return paginated(to_payloads(rows), page, limit, total)

    async def announcements(self) -> list[dict[str, Any]]:
        return await self._latest_in(ANNOUNCEMENT_CATEGORY, keys.news_announcements_key)

    async def agenda(self) -> list[dict[str, Any]]:
        return await self._latest_in(AGENDA_CATEGORY, keys.news_agenda_key)

    async def _latest_in(self, category: str, key_builder: Any) -> list[dict[str, Any]]:
        async def load() -> list[dict[str, Any]]:
            async with self.ctx.session_factory() as session:
                rows = await NewsRepository(session).latest_in_category(
                    category, NEWS_BY_CATEGORY_LIMIT
                )
            return to_payloads(rows)

        return await cache_aside(self.ctx.cache, key_builder(category), load, self.ttl)

    async def get_by_slug(self, slug: str) -> dict[str, Any]:
        """Full article by slug; missing slugs are not cached."""
        slug = slugify(slug)
        if not slug:
            raise ResourceNotFoundException("news", slug)

        async def load() -> dict[str, Any] | None:
            async with self.ctx.session_factory() as session:
                row = await NewsRepository(session).get_by_slug(slug)
                return to_payload(to_news_result(row)) if row is not None else None

        payload = await cache_aside(self.ctx.cache, keys.news_slug_key(slug), load, self.ttl)
        if payload is None:
            raise ResourceNotFoundException("news", slug)
        return payload

    # Writes

    def _clean(self, data: NewsWrite) -> NewsWrite:
        ensure_date_order(data.starts_on, data.ends_on, "ends_on")
        title = sanitize_input(data.title) or ""
        if not title:
            raise ValidationException("Title is required", "title")
        content = InputSanitizer.sanitize_rich_text(data.content).strip()
        if not content:
            raise ValidationException("Content is required", "content")
        return NewsWrite(
            title=title,
            content=content,
            category=(sanitize_input(data.category) or "").lower(),
            starts_on=data.starts_on,
            ends_on=data.ends_on,
        )

    async def _unique_slug(
        self, repo: NewsRepository, title: str, exclude_id: int | None = None
    ) -> str:
        base = slugify(title) or "news"
        candidate, n = base, 2
        while await repo.slug_exists(candidate, exclude_id=exclude_id):
            candidate = f"{base}-{n}"
            n += 1
        return candidate

    async def _store(
        self, image: IncomingFile | None, documents: list[IncomingFile]
    ) -> tuple[str | None, list[dict[str, str]]]:
        uploads: list[tuple[IncomingFile, FileKind, str, str]] = []
        if image is not None:
            uploads.append((image, FileKind.IMAGE, STORAGE_FOLDER_NEWS_IMAGES, "image"))
        for doc in documents:
            uploads.append(
                (doc, FileKind.DOCUMENT, STORAGE_FOLDER_NEWS_DOCUMENTS, "documents")
            )
        stored = await store_uploads(self.ctx, uploads)
        image_url = stored[0].url if image is not None else None
        doc_stored = stored[1:] if image is not None else stored
        docs = [
            {"url": s.url, "name": f.filename} for s, f in zip(doc_stored, documents)
        ]
        return image_url, docs

    async def create(
        self,
        data: NewsWrite,
        actor: Actor,
        image: IncomingFile | None = None,
        documents: list[IncomingFile] | None = None,
    ) -> dict[str, Any]:
        """Create an entry; author is the acting admin."""
        data = self._clean(data)
        documents = documents or []
        image_url, docs = await self._store(image, documents)
        uploaded = [image_url] if image_url else []
        uploaded += [d["url"] for d in docs]

        async def mutation(session: AsyncSession, files: FileJanitor) -> NewsResult:
            repo = NewsRepository(session)
            row = News(
                title=data.title,
                slug=await self._unique_slug(repo, data.title),
                content=data.content,
                category=data.category,
                author=actor.name,
                image_url=image_url,
                documents=docs,
                starts_on=data.starts_on,
                ends_on=data.ends_on,
            )
            return to_news_result(await repo.add(row))

        result = await self.ctx.pipeline.execute(
            mutation,
            actor=actor,
            audit=lambda r: AuditDraft(
                AuditAction.UPLOAD,
                TABLE_NEWS,
                r.id,
                f'Uploaded news titled "{r.title}" in category "{r.category}"',
            ),
            invalidate=lambda r: _invalidate_news(r.slug),
            uploaded=uploaded,
        )
        return to_payload(result)

    async def update(
        self,
        news_id: int,
        data: NewsWrite,
        actor: Actor,
        image: IncomingFile | None = None,
        documents: list[IncomingFile] | None = None,
    ) -> dict[str, Any]:
        """Update an entry. A new image or document set replaces (and discards) the old."""
        data = self._clean(data)
        documents = documents or []
        image_url, docs = await self._store(image, documents)
        uploaded = [image_url] if image_url else []
        uploaded += [d["url"] for d in docs]

        async def mutation(session: AsyncSession, files: FileJanitor) -> NewsChange | None:
            repo = NewsRepository(session)
            row = await repo.get_by_id(news_id)
            if row is None:
                return None
            before = to_news_result(row)
            if image_url is not None:
                await files.discard(row.image_url)
                row.image_url = image_url
            if docs:
                await files.discard_all(d.get("url") for d in row.documents or [])
                row.documents = docs
            row.title = data.title
            row.slug = await self._unique_slug(repo, data.title, exclude_id=row.id)
            row.content = data.content
            row.category = data.category
            row.starts_on = data.starts_on
            row.ends_on = data.ends_on
            if actor.name:
                row.author = actor.name
            row = await repo.save(row)
            return NewsChange(before=before, after=to_news_result(row))

        change = await self.ctx.pipeline.execute(
            mutation,
            actor=actor,
            audit=lambda c: AuditDraft(
                AuditAction.UPDATE,
                TABLE_NEWS,
                c.after.id,
                _describe_changes(c.before, c.after),
            ),
            invalidate=lambda c: _invalidate_news(c.before.slug, c.after.slug),
            uploaded=uploaded,
            resource="news",
            resource_id=news_id,
        )
        return to_payload(change.after)

    async def delete(self, news_id: int, actor: Actor) -> None:
        """Delete an entry and (best-effort) its image and documents."""

        async def mutation(session: AsyncSession, files: FileJanitor) -> NewsResult | None:
            repo = NewsRepository(session)
            row = await repo.get_by_id(news_id)
            if row is None:
                return None
            result = to_news_result(row)
            await files.discard(row.image_url)
            await files.discard_all(d.get("url") for d in row.documents or [])
            await repo.delete(row)
            return result

        await self.ctx.pipeline.execute(
            mutation,
            actor=actor,
            audit=lambda r: AuditDraft(
                AuditAction.DELETE,
                TABLE_NEWS,
                r.id,
                f'Deleted news titled "{r.title}"',
            ),
            invalidate=lambda r: _invalidate_news(r.slug),
            resource="news",
            resource_id=news_id,
        )

    async def delete_in_range(self, start: date, end: date, actor: Actor) -> int:
        """Delete entries created on days start..end inclusive, with their files."""
        if start > end:
            raise ValidationException("Start date must not be after end date", "startDate")

        async def mutation(
            session: AsyncSession, files: FileJanitor
        ) -> NewsRangeDeletion | None:
            repo = NewsRepository(session, self.ctx.settings.display_timezone)
            rows = await repo.list_in_range(start, end)
            if not rows:
                return None
            for row in rows:
                await files.discard(row.image_url)
                await files.discard_all(d.get("url") for d in row.documents or [])
            count = await repo.delete_ids([r.id for r in rows])
            return NewsRangeDeletion(start, end, count, tuple(r.slug for r in rows))

        outcome = await self.ctx.pipeline.execute(
            mutation,
            actor=actor,
            audit=lambda r: AuditDraft(
                AuditAction.DELETE,
                TABLE_NEWS,
                None,
                f"Deleted {r.count} news entries between {r.start} and {r.end}",
            ),
            invalidate=lambda r: _invalidate_news(*r.slugs),
            resource="news",
        )
        return outcome.count
