"""Admission wave use cases: wave list (cached) and writes."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from campus_cms.application.dtos.resources import AdmissionWaveResult
from campus_cms.application.dtos.serialization import to_payload, to_payloads
from campus_cms.application.services.write_pipeline import (
    Actor,
    AuditDraft,
    FileJanitor,
    Invalidation,
)
from campus_cms.application.use_cases.common import ServiceContext, ensure_date_order
from campus_cms.core.constants import TABLE_ADMISSION_WAVES
from campus_cms.domain.enums import AuditAction
from campus_cms.domain.exceptions import ValidationException
from campus_cms.infrastructure.cache import keys
from campus_cms.infrastructure.cache.read_through import cache_aside
from campus_cms.infrastructure.persistence.models.admission_wave import AdmissionWave
from campus_cms.infrastructure.persistence.repositories.resource_repos import (
    AdmissionWaveRepository,
    to_wave_result,
)
from campus_cms.shared.utils.sanitization import sanitize_input

_INVALIDATE = Invalidation(keys=(keys.admission_waves_key(),))


@dataclass(frozen=True)
class WaveWrite:
    name: str
    starts_on: date
    ends_on: date
    registration_fee: int


def _clean(data: WaveWrite) -> WaveWrite:
    name = sanitize_input(data.name) or ""
    if not name:
        raise ValidationException("Wave name is required", "name")
    if data.registration_fee <= 0:
        raise ValidationException("Registration fee must be positive", "registration_fee")
    ensure_date_order(data.starts_on, data.ends_on, "ends_on")
    return WaveWrite(name, data.starts_on, data.ends_on, data.registration_fee)


class AdmissionWaveService:
    """Admission wave reads and writes."""

    def __init__(self, ctx: ServiceContext) -> None:
        self.ctx = ctx

    async def list(self) -> list[dict[str, Any]]:
        async def load() -> list[dict[str, Any]]:
            async with self.ctx.session_factory() as session:
                rows = await AdmissionWaveRepository(session).list_ordered()
            return to_payloads(rows)

        return await cache_aside(
            self.ctx.cache,
            keys.admission_waves_key(),
            load,
            self.ctx.settings.cache_ttl_admission,
        )

    async def create(self, data: WaveWrite, actor: Actor) -> dict[str, Any]:
        data = _clean(data)

        async def mutation(session: AsyncSession, files: FileJanitor) -> AdmissionWaveResult:
            row = await AdmissionWaveRepository(session).add(
                AdmissionWave(
                    name=data.name,
                    starts_on=data.starts_on,
                    ends_on=data.ends_on,
                    registration_fee=data.registration_fee,
                )
            )
            return to_wave_result(row)

        result = await self.ctx.pipeline.execute(
            mutation,
            actor=actor,
            audit=lambda r: AuditDraft(
                AuditAction.CREATE,
                TABLE_ADMISSION_WAVES,
                r.id,
                f'Added admission wave "{r.name}"',
            ),
            invalidate=lambda r: _INVALIDATE,
        )
        return to_payload(result)

    async def update(self, wave_id: int, data: WaveWrite, actor: Actor) -> dict[str, Any]:
        data = _clean(data)

        async def mutation(
            session: AsyncSession, files: FileJanitor
        ) -> tuple[AdmissionWaveResult, AdmissionWaveResult] | None:
            repo = AdmissionWaveRepository(session)
            row = await repo.get_by_id(wave_id)
            if row is None:
                return None
            before = to_wave_result(row)
            row.name = data.name
            row.starts_on = data.starts_on
            row.ends_on = data.ends_on
            row.registration_fee = data.registration_fee
            row = await repo.save(row)
            return before, to_wave_result(row)

        _, after = await self.ctx.pipeline.execute(
            mutation,
            actor=actor,
            audit=lambda c: AuditDraft(
                AuditAction.UPDATE,
                TABLE_ADMISSION_WAVES,
                c[1].id,
                f'Updated admission wave "{c[0].name}": {c[1].starts_on} to '
                f"{c[1].ends_on}, fee {c[1].registration_fee}",
            ),
            invalidate=lambda c: _INVALIDATE,
            resource="admission wave",
            resource_id=wave_id,
        )
        return to_payload(after)

    async def delete(self, wave_id: int, actor: Actor) -> None:
        async def mutation(
            session: AsyncSession, files: FileJanitor
        ) -> AdmissionWaveResult | None:
            repo = AdmissionWaveRepository(session)
            row = await repo.get_by_id(wave_id)
            if row is None:
                return None
            result = to_wave_result(row)
            await repo.delete(row)
            return result

        await self.ctx.pipeline.execute(
            mutation,
            actor=actor,
            audit=lambda r: AuditDraft(
                AuditAction.DELETE,
                TABLE_ADMISSION_WAVES,
                r.id,
                f'Deleted admission wave "{r.name}"',
            ),
            invalidate=lambda r: _INVALIDATE,
            resource="admission wave",
            resource_id=wave_id,
        )
