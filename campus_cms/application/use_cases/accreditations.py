"""Accreditation use cases: ordered list (cached) and certificate-backed writes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from campus_cms.application.dtos.resources import AccreditationResult
from campus_cms.application.dtos.serialization import to_payload, to_payloads
from campus_cms.application.services.write_pipeline import (
    Actor,
    AuditDraft,
    FileJanitor,
    Invalidation,
)
from campus_cms.application.use_cases.common import ServiceContext, store_uploads
from campus_cms.core.constants import STORAGE_FOLDER_ACCREDITATIONS, TABLE_ACCREDITATIONS
from campus_cms.domain.enums import AuditAction
from campus_cms.domain.exceptions import ValidationException
from campus_cms.infrastructure.cache import keys
from campus_cms.infrastructure.cache.read_through import cache_aside
from campus_cms.infrastructure.external.storage.uploads import FileKind, IncomingFile
from campus_cms.infrastructure.persistence.models.accreditation import Accreditation
from campus_cms.infrastructure.persistence.repositories.resource_repos import (
    AccreditationRepository,
    to_accreditation_result,
)
from campus_cms.shared.utils.sanitization import sanitize_input

_INVALIDATE = Invalidation(keys=(keys.accreditation_list_key(),))


@dataclass(frozen=True)
class AccreditationWrite:
    study_program: str
    faculty: str
    status: str


def _clean(data: AccreditationWrite) -> AccreditationWrite:
    cleaned = AccreditationWrite(
        study_program=sanitize_input(data.study_program) or "",
        faculty=sanitize_input(data.faculty) or "",
        status=sanitize_input(data.status) or "",
    )
    for field in ("study_program", "faculty", "status"):
        if not getattr(cleaned, field):
            raise ValidationException(f"{field} is required", field)
    return cleaned


@dataclass(frozen=True)
class AccreditationChange:
    before: AccreditationResult
    after: AccreditationResult


class AccreditationService:
    """Accreditation reads and writes."""

    def __init__(self, ctx: ServiceContext) -> None:
        self.ctx = ctx

    async def list(self) -> list[dict[str, Any]]:
        async def load() -> list[dict[str, Any]]:
            async with self.ctx.session_factory() as session:
                rows = await AccreditationRepository(session).list_ordered()
            return to_payloads(rows)

        return await cache_aside(
            self.ctx.cache,
            keys.accreditation_list_key(),
            load,
            self.ctx.settings.cache_ttl_accreditation,
        )

    async def _store_certificate(self, certificate: IncomingFile) -> str:
        stored = await store_uploads(
            self.ctx,
            [
                (
                    certificate,
                    FileKind.DOCUMENT,
                    STORAGE_FOLDER_ACCREDITATIONS,
                    "certificate",
                )
            ],
        )
        return stored[0].url

    async def create(
        self, data: AccreditationWrite, certificate: IncomingFile, actor: Actor
    ) -> dict[str, Any]:
        data = _clean(data)
        url = await self._store_certificate(certificate)

        async def mutation(session: AsyncSession, files: FileJanitor) -> AccreditationResult:
            row = await AccreditationRepository(session).add(
                Accreditation(
                    study_program=data.study_program,
                    faculty=data.faculty,
                    status=data.status,
                    certificate_url=url,
                    certificate_name=certificate.filename,
                )
            )
            return to_accreditation_result(row)

        result = await self.ctx.pipeline.execute(
            mutation,
            actor=actor,
            audit=lambda r: AuditDraft(
                AuditAction.UPLOAD,
                TABLE_ACCREDITATIONS,
                r.id,
                f'Uploaded accreditation for study program "{r.study_program}" '
                f'of faculty "{r.faculty}"',
            ),
            invalidate=lambda r: _INVALIDATE,
            uploaded=[url],
        )
        return to_payload(result)

    async def update(
        self,
        accreditation_id: int,
        data: AccreditationWrite,
        actor: Actor,
        certificate: IncomingFile | None = None,
    ) -> dict[str, Any]:
        data = _clean(data)
        url = await self._store_certificate(certificate) if certificate else None

        async def mutation(
            session: AsyncSession, files: FileJanitor
        ) -> AccreditationChange | None:
            repo = AccreditationRepository(session)
            row = await repo.get_by_id(accreditation_id)
            if row is None:
                return None
            before = to_accreditation_result(row)
            if url is not None and certificate is not None:
                await files.discard(row.certificate_url)
                row.certificate_url = url
                row.certificate_name = certificate.filename
            row.study_program = data.study_program
            row.faculty = data.faculty
            row.status = data.status
            row = await repo.save(row)
            return AccreditationChange(before, to_accreditation_result(row))

        change = await self.ctx.pipeline.execute(
            mutation,
            actor=actor,
            audit=lambda c: AuditDraft(
                AuditAction.UPDATE,
                TABLE_ACCREDITATIONS,
                c.after.id,
                f'Updated accreditation for study program "{c.before.study_program}" '
                f'of faculty "{c.before.faculty}"'
                + (
                    f' (status "{c.before.status}" to "{c.after.status}")'
                    if c.before.status != c.after.status
                    else ""
                ),
            ),
            invalidate=lambda c: _INVALIDATE,
            uploaded=[url] if url else [],
            resource="accreditation",
            resource_id=accreditation_id,
        )
        return to_payload(change.after)

    async def delete(self, accreditation_id: int, actor: Actor) -> None:
        async def mutation(
            session: AsyncSession, files: FileJanitor
        ) -> AccreditationResult | None:
            repo = AccreditationRepository(session)
            row = await repo.get_by_id(accreditation_id)
            if row is None:
                return None
            result = to_accreditation_result(row)
            await files.discard(row.certificate_url)
            await repo.delete(row)
            return result

        await self.ctx.pipeline.execute(
            mutation,
            actor=actor,
            audit=lambda r: AuditDraft(
                AuditAction.DELETE,
                TABLE_ACCREDITATIONS,
                r.id,
                f'Deleted accreditation for study program "{r.study_program}" '
                f'of faculty "{r.faculty}"',
            ),
            invalidate=lambda r: _INVALIDATE,
            resource="accreditation",
            resource_id=accreditation_id,
        )
