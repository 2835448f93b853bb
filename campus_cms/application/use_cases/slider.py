"""Homepage hero slider: active and recent slides (cached), image-backed writes."""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from campus_cms.application.dtos.resources import HeroSlideResult
from campus_cms.application.dtos.serialization import to_payload, to_payloads
from campus_cms.application.services.write_pipeline import (
    Actor,
    AuditDraft,
    FileJanitor,
    Invalidation,
)
from campus_cms.application.use_cases.common import ServiceContext, store_uploads
from campus_cms.core.constants import (
    SLIDER_ACTIVE_LIMIT,
    SLIDER_ALL_LIMIT,
    STORAGE_FOLDER_SLIDER,
    TABLE_SLIDES,
)
from campus_cms.domain.enums import AuditAction
from campus_cms.domain.exceptions import ValidationException
from campus_cms.infrastructure.cache import keys
from campus_cms.infrastructure.cache.read_through import cache_aside
from campus_cms.infrastructure.external.storage.uploads import FileKind, IncomingFile
from campus_cms.infrastructure.persistence.models.hero_slide import HeroSlide
from campus_cms.infrastructure.persistence.repositories.resource_repos import (
    HeroSlideRepository,
    to_slide_result,
)
from campus_cms.shared.utils.sanitization import sanitize_input

_INVALIDATE = Invalidation(keys=(keys.slider_active_key(), keys.slider_all_key()))


def _clean_title(title: str | None) -> str:
    cleaned = sanitize_input(title) or ""
    if not cleaned:
        raise ValidationException("Title is required", "title")
    return cleaned


def _describe_update(before: HeroSlideResult, after: HeroSlideResult, replaced: bool) -> str:
    changes = []
    if before.title != after.title:
        changes.append(f'title "{before.title}" -> "{after.title}"')
    if before.is_active != after.is_active:
        changes.append("activated" if after.is_active else "deactivated")
    if replaced:
        changes.append("image replaced")
    return f'Updated slide "{before.title}": ' + ", ".join(changes)


class SliderService:
    """Hero slide reads and writes."""

    def __init__(self, ctx: ServiceContext) -> None:
        self.ctx = ctx

    async def _newest(self, key: str, limit: int, active_only: bool) -> list[dict[str, Any]]:
        async def load() -> list[dict[str, Any]]:
            async with self.ctx.session_factory() as session:
                rows = await HeroSlideRepository(session).newest(
                    limit, active_only=active_only
                )
            return to_payloads(rows)

        return await cache_aside(self.ctx.cache, key, load, self.ctx.settings.cache_ttl_slider)

    async def active(self) -> list[dict[str, Any]]:
        """Newest active slides, as shown on the homepage."""
        return await self._newest(keys.slider_active_key(), SLIDER_ACTIVE_LIMIT, True)

    async def recent(self) -> list[dict[str, Any]]:
        """Newest slides regardless of state (admin overview)."""
        return await self._newest(keys.slider_all_key(), SLIDER_ALL_LIMIT, False)

    async def _store_image(self, image: IncomingFile) -> str:
        stored = await store_uploads(
            self.ctx, [(image, FileKind.IMAGE, STORAGE_FOLDER_SLIDER, "image")]
        )
        return stored[0].url

    async def create(self, title: str, image: IncomingFile, actor: Actor) -> dict[str, Any]:
        title = _clean_title(title)
        url = await self._store_image(image)

        async def mutation(session: AsyncSession, files: FileJanitor) -> HeroSlideResult:
            row = await HeroSlideRepository(session).add(
                HeroSlide(title=title, image_url=url, is_active=True)
            )
            return to_slide_result(row)

        result = await self.ctx.pipeline.execute(
            mutation,
            actor=actor,
            audit=lambda r: AuditDraft(
                AuditAction.UPLOAD, TABLE_SLIDES, r.id, f'Uploaded slide "{r.title}"'
            ),
            invalidate=lambda r: _INVALIDATE,
            uploaded=[url],
        )
        return to_payload(result)

    async def update(
        self,
        slide_id: int,
        actor: Actor,
        *,
        title: str | None = None,
        is_active: bool | None = None,
        image: IncomingFile | None = None,
    ) -> dict[str, Any]:
        """Change only the given fields; at least one is required."""
        if title is None and is_active is None and image is None:
            raise ValidationException("Nothing to update", "title")
        new_title = _clean_title(title) if title is not None else None
        url = await self._store_image(image) if image is not None else None

        async def mutation(
            session: AsyncSession, files: FileJanitor
        ) -> tuple[HeroSlideResult, HeroSlideResult] | None:
            repo = HeroSlideRepository(session)
            row = await repo.get_by_id(slide_id)
            if row is None:
                return None
            before = to_slide_result(row)
            if new_title is not None:
                row.title = new_title
            if is_active is not None:
                row.is_active = is_active
            if url is not None:
                await files.discard(row.image_url)
                row.image_url = url
            row = await repo.save(row)
            return before, to_slide_result(row)

        _, after = await self.ctx.pipeline.execute(
            mutation,
            actor=actor,
            audit=lambda c: AuditDraft(
                AuditAction.UPDATE,
                TABLE_SLIDES,
                c[1].id,
                _describe_update(c[0], c[1], url is not None),
            ),
            invalidate=lambda c: _INVALIDATE,
            uploaded=[url] if url else [],
            resource="slide",
            resource_id=slide_id,
        )
        return to_payload(after)

    async def delete(self, slide_id: int, actor: Actor) -> None:
        async def mutation(
            session: AsyncSession, files: FileJanitor
        ) -> HeroSlideResult | None:
            repo = HeroSlideRepository(session)
            row = await repo.get_by_id(slide_id)
            if row is None:
                return None
            result = to_slide_result(row)
            await files.discard(row.image_url)
            await repo.delete(row)
            return result

        await self.ctx.pipeline.execute(
            mutation,
            actor=actor,
            audit=lambda r: AuditDraft(
                AuditAction.DELETE, TABLE_SLIDES, r.id, f'Deleted slide "{r.title}"'
            ),
            invalidate=lambda r: _INVALIDATE,
            resource="slide",
            resource_id=slide_id,
        )
