"""Scholarship use cases: list (cached) and document-backed writes."""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from campus_cms.application.dtos.resources import ScholarshipResult
from campus_cms.application.dtos.serialization import to_payload, to_payloads
from campus_cms.application.services.write_pipeline import (
    Actor,
    AuditDraft,
    FileJanitor,
    Invalidation,
)
from campus_cms.application.use_cases.common import ServiceContext, store_uploads
from campus_cms.core.constants import STORAGE_FOLDER_SCHOLARSHIPS, TABLE_SCHOLARSHIPS
from campus_cms.domain.enums import AuditAction
from campus_cms.domain.exceptions import ValidationException
from campus_cms.infrastructure.cache import keys
from campus_cms.infrastructure.cache.read_through import cache_aside
from campus_cms.infrastructure.external.storage.uploads import FileKind, IncomingFile
from campus_cms.infrastructure.persistence.models.scholarship import Scholarship
from campus_cms.infrastructure.persistence.repositories.resource_repos import (
    ScholarshipRepository,
    to_scholarship_result,
)
from campus_cms.shared.utils.sanitization import sanitize_input

_INVALIDATE = Invalidation(keys=(keys.scholarships_key(),))


def _clean(title: str, description: str) -> tuple[str, str]:
    title = sanitize_input(title) or ""
    description = sanitize_input(description) or ""
    if not title:
        raise ValidationException("Title is required", "title")
    if not description:
        raise ValidationException("Description is required", "description")
    return title, description


class ScholarshipService:
    """Scholarship reads and writes."""

    def __init__(self, ctx: ServiceContext) -> None:
        self.ctx = ctx

    async def list(self) -> list[dict[str, Any]]:
        async def load() -> list[dict[str, Any]]:
            async with self.ctx.session_factory() as session:
                rows = await ScholarshipRepository(session).list_newest()
            return to_payloads(rows)

        return await cache_aside(
            self.ctx.cache,
            keys.scholarships_key(),
            load,
            self.ctx.settings.cache_ttl_scholarship,
        )

    async def _store_document(self, document: IncomingFile) -> str:
        stored = await store_uploads(
            self.ctx,
            [
                (
                    document,
                    FileKind.SCHOLARSHIP_DOCUMENT,
                    STORAGE_FOLDER_SCHOLARSHIPS,
                    "document",
                )
            ],
        )
        return stored[0].url

    async def create(
        self, title: str, description: str, document: IncomingFile, actor: Actor
    ) -> dict[str, Any]:
        title, description = _clean(title, description)
        url = await self._store_document(document)

        async def mutation(session: AsyncSession, files: FileJanitor) -> ScholarshipResult:
            row = await ScholarshipRepository(session).add(
                Scholarship(title=title, description=description, document_url=url)
            )
            return to_scholarship_result(row)

        result = await self.ctx.pipeline.execute(
            mutation,
            actor=actor,
            audit=lambda r: AuditDraft(
                AuditAction.UPLOAD,
                TABLE_SCHOLARSHIPS,
                r.id,
                f'Uploaded scholarship "{r.title}"',
            ),
            invalidate=lambda r: _INVALIDATE,
            uploaded=[url],
        )
        return to_payload(result)

    async def update(
        self,
        scholarship_id: int,
        title: str,
        description: str,
        actor: Actor,
        document: IncomingFile | None = None,
    ) -> dict[str, Any]:
        title, description = _clean(title, description)
        url = await self._store_document(document) if document is not None else None

        async def mutation(
            session: AsyncSession, files: FileJanitor
        ) -> tuple[ScholarshipResult, ScholarshipResult] | None:
            repo = ScholarshipRepository(session)
            row = await repo.get_by_id(scholarship_id)
            if row is None:
                return None
            before = to_scholarship_result(row)
            if url is not None:
                await files.discard(row.document_url)
                row.document_url = url
            row.title = title
            row.description = description
            row = await repo.save(row)
            return before, to_scholarship_result(row)

        _, after = await self.ctx.pipeline.execute(
            mutation,
            actor=actor,
            audit=lambda c: AuditDraft(
                AuditAction.UPDATE,
                TABLE_SCHOLARSHIPS,
                c[1].id,
                f'Updated scholarship "{c[0].title}"'
                + (f' (renamed to "{c[1].title}")' if c[0].title != c[1].title else "")
                + ("; document replaced" if url else ""),
            ),
            invalidate=lambda c: _INVALIDATE,
            uploaded=[url] if url else [],
            resource="scholarship",
            resource_id=scholarship_id,
        )
        return to_payload(after)

    async def delete(self, scholarship_id: int, actor: Actor) -> None:
        async def mutation(
            session: AsyncSession, files: FileJanitor
        ) -> ScholarshipResult | None:
            repo = ScholarshipRepository(session)
            row = await repo.get_by_id(scholarship_id)
            if row is None:
                return None
            result = to_scholarship_result(row)
            await files.discard(row.document_url)
            await repo.delete(row)
            return result

        await self.ctx.pipeline.execute(
            mutation,
            actor=actor,
            audit=lambda r: AuditDraft(
                AuditAction.DELETE,
                TABLE_SCHOLARSHIPS,
                r.id,
                f'Deleted scholarship "{r.title}"',
            ),
            invalidate=lambda r: _INVALIDATE,
            resource="scholarship",
            resource_id=scholarship_id,
        )
