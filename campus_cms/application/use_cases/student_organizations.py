"""Student organization use cases: list (cached) and image-backed writes."""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from campus_cms.application.dtos.resources import StudentOrganizationResult
from campus_cms.application.dtos.serialization import to_payload, to_payloads
from campus_cms.application.services.write_pipeline import (
    Actor,
    AuditDraft,
    FileJanitor,
    Invalidation,
)
from campus_cms.application.use_cases.common import ServiceContext, store_uploads
from campus_cms.core.constants import STORAGE_FOLDER_STUDENT_ORGS, TABLE_STUDENT_ORGS
from campus_cms.domain.enums import AuditAction
from campus_cms.domain.exceptions import ValidationException
from campus_cms.infrastructure.cache import keys
from campus_cms.infrastructure.cache.read_through import cache_aside
from campus_cms.infrastructure.external.storage.uploads import FileKind, IncomingFile
from campus_cms.infrastructure.persistence.models.student_organization import (
    StudentOrganization,
)
from campus_cms.infrastructure.persistence.repositories.resource_repos import (
    StudentOrganizationRepository,
    to_student_org_result,
)
from campus_cms.shared.utils.sanitization import sanitize_input

_INVALIDATE = Invalidation(keys=(keys.student_organizations_key(),))


def _clean(name: str, description: str) -> tuple[str, str]:
    name = sanitize_input(name) or ""
    description = sanitize_input(description) or ""
    if not name:
        raise ValidationException("Organization name is required", "name")
    if not description:
        raise ValidationException("Description is required", "description")
    return name, description


class StudentOrganizationService:
    def __init__(self, ctx: ServiceContext) -> None:
        self.ctx = ctx

    async def list(self) -> list[dict[str, Any]]:
        async def load() -> list[dict[str, Any]]:
            async with self.ctx.session_factory() as session:
                rows = await StudentOrganizationRepository(session).list_ordered()
            return to_payloads(rows)

        return await cache_aside(
            self.ctx.cache,
            keys.student_organizations_key(),
            load,
            self.ctx.settings.cache_ttl_student_organizations,
        )

    async def _store_image(self, image: IncomingFile) -> str:
        stored = await store_uploads(
            self.ctx, [(image, FileKind.IMAGE, STORAGE_FOLDER_STUDENT_ORGS, "image")]
        )
        return stored[0].url

    async def create(
        self, name: str, description: str, image: IncomingFile, actor: Actor
    ) -> dict[str, Any]:
        name, description = _clean(name, description)
        url = await self._store_image(image)

        async def mutation(
            session: AsyncSession, files: FileJanitor
        ) -> StudentOrganizationResult:
            row = await StudentOrganizationRepository(session).add(
                StudentOrganization(name=name, description=description, image_url=url)
            )
            return to_student_org_result(row)

        result = await self.ctx.pipeline.execute(
            mutation,
            actor=actor,
            audit=lambda r: AuditDraft(
                AuditAction.UPLOAD,
                TABLE_STUDENT_ORGS,
                r.id,
                f'Added student organization "{r.name}"',
            ),
            invalidate=lambda r: _INVALIDATE,
            uploaded=[url],
        )
        return to_payload(result)

    async def update(
        self,
        org_id: int,
        name: str,
        description: str,
        actor: Actor,
        image: IncomingFile | None = None,
    ) -> dict[str, Any]:
        name, description = _clean(name, description)
        url = await self._store_image(image) if image is not None else None

        async def mutation(
            session: AsyncSession, files: FileJanitor
        ) -> tuple[StudentOrganizationResult, StudentOrganizationResult] | None:
            repo = StudentOrganizationRepository(session)
            row = await repo.get_by_id(org_id)
            if row is None:
                return None
            before = to_student_org_result(row)
            if url is not None:
                await files.discard(row.image_url)
                row.image_url = url
            row.name = name
            row.description = description
            row = await repo.save(row)
            return before, to_student_org_result(row)

        _, after = await self.ctx.pipeline.execute(
            mutation,
            actor=actor,
            audit=lambda c: AuditDraft(
                AuditAction.UPDATE,
                TABLE_STUDENT_ORGS,
                c[1].id,
                f'Updated student organization "{c[0].name}"'
                + (f' (renamed to "{c[1].name}")' if c[0].name != c[1].name else "")
                + ("; image replaced" if url else ""),
            ),
            invalidate=lambda c: _INVALIDATE,
            uploaded=[url] if url else [],
            resource="student organization",
            resource_id=org_id,
        )
        return to_payload(after)

    async def delete(self, org_id: int, actor: Actor) -> None:
        async def mutation(
            session: AsyncSession, files: FileJanitor
        ) -> StudentOrganizationResult | None:
            repo = StudentOrganizationRepository(session)
            row = await repo.get_by_id(org_id)
            if row is None:
                return None
            result = to_student_org_result(row)
            await files.discard(row.image_url)
            await repo.delete(row)
            return result

        await self.ctx.pipeline.execute(
            mutation,
            actor=actor,
            audit=lambda r: AuditDraft(
                AuditAction.DELETE,
                TABLE_STUDENT_ORGS,
                r.id,
                f'Deleted student organization "{r.name}"',
            ),
            invalidate=lambda r: _INVALIDATE,
            resource="student organization",
            resource_id=org_id,
        )
