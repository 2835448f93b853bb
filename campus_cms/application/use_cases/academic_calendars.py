"""Academic calendar use cases: latest calendars (cached) and PDF-backed writes."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from campus_cms.application.dtos.resources import AcademicCalendarResult
from campus_cms.application.dtos.serialization import to_payload, to_payloads
from campus_cms.application.services.write_pipeline import (
    Actor,
    AuditDraft,
    FileJanitor,
    Invalidation,
)
from campus_cms.application.use_cases.common import ServiceContext, store_uploads
from campus_cms.core.constants import (
    ACADEMIC_CALENDAR_LATEST_LIMIT,
    STORAGE_FOLDER_ACADEMIC_CALENDARS,
    TABLE_ACADEMIC_CALENDARS,
)
from campus_cms.domain.enums import AuditAction, Semester
from campus_cms.domain.exceptions import ValidationException
from campus_cms.infrastructure.cache import keys
from campus_cms.infrastructure.cache.read_through import cache_aside
from campus_cms.infrastructure.external.storage.uploads import FileKind, IncomingFile
from campus_cms.infrastructure.persistence.models.academic_calendar import (
    AcademicCalendar,
)
from campus_cms.infrastructure.persistence.repositories.resource_repos import (
    AcademicCalendarRepository,
    to_calendar_result,
)

_ACADEMIC_YEAR = re.compile(r"^(\d{4})/(\d{4})$")

_INVALIDATE = Invalidation(keys=(keys.academic_calendar_key(),))


def validate_academic_year(value: str) -> str:
    """Accept 'YYYY/YYYY' where the second year follows the first."""
    value = value.strip()
    match = _ACADEMIC_YEAR.match(value)
    if not match or int(match.group(2)) != int(match.group(1)) + 1:
        raise ValidationException(
            "Academic year must look like 2024/2025", "academic_year"
        )
    return value


def validate_semester(value: str) -> str:
    value = value.strip().lower()
    if value not in Semester.values():
        raise ValidationException(
            f"Semester must be one of: {', '.join(Semester.values())}", "semester"
        )
    return value


@dataclass(frozen=True)
class CalendarChange:
    before: AcademicCalendarResult
    after: AcademicCalendarResult


class AcademicCalendarService:
    """Academic calendar reads and writes."""

    def __init__(self, ctx: ServiceContext) -> None:
        self.ctx = ctx

    async def latest(self) -> list[dict[str, Any]]:
        async def load() -> list[dict[str, Any]]:
            async with self.ctx.session_factory() as session:
                rows = await AcademicCalendarRepository(session).latest(
                    ACADEMIC_CALENDAR_LATEST_LIMIT
                )
            return to_payloads(rows)

        return await cache_aside(
            self.ctx.cache,
            keys.academic_calendar_key(),
            load,
            self.ctx.settings.cache_ttl_academic_calendar,
        )

    async def _store_pdf(self, pdf: IncomingFile) -> str:
        stored = await store_uploads(
            self.ctx,
            [(pdf, FileKind.DOCUMENT, STORAGE_FOLDER_ACADEMIC_CALENDARS, "pdf")],
        )
        return stored[0].url

    async def create(
        self, academic_year: str, semester: str, pdf: IncomingFile, actor: Actor
    ) -> dict[str, Any]:
        academic_year = validate_academic_year(academic_year)
        semester = validate_semester(semester)
        pdf_url = await self._store_pdf(pdf)

        async def mutation(
            session: AsyncSession, files: FileJanitor
        ) -> AcademicCalendarResult:
            row = await AcademicCalendarRepository(session).add(
                AcademicCalendar(
                    academic_year=academic_year, semester=semester, pdf_url=pdf_url
                )
            )
            return to_calendar_result(row)

        result = await self.ctx.pipeline.execute(
            mutation,
            actor=actor,
            audit=lambda r: AuditDraft(
                AuditAction.UPLOAD,
                TABLE_ACADEMIC_CALENDARS,
                r.id,
                f'Uploaded academic calendar for semester "{r.semester}" '
                f'of academic year "{r.academic_year}"',
            ),
            invalidate=lambda r: _INVALIDATE,
            uploaded=[pdf_url],
        )
        return to_payload(result)

    async def update(
        self,
        calendar_id: int,
        academic_year: str,
        semester: str,
        actor: Actor,
        pdf: IncomingFile | None = None,
    ) -> dict[str, Any]:
        academic_year = validate_academic_year(academic_year)
        semester = validate_semester(semester)
        pdf_url = await self._store_pdf(pdf) if pdf is not None else None

        async def mutation(
            session: AsyncSession, files: FileJanitor
        ) -> CalendarChange | None:
            repo = AcademicCalendarRepository(session)
            row = await repo.get_by_id(calendar_id)
            if row is None:
                return None
            before = to_calendar_result(row)
            if pdf_url is not None:
                await files.discard(row.pdf_url)
                row.pdf_url = pdf_url
            row.academic_year = academic_year
            row.semester = semester
            row = await repo.save(row)
            return CalendarChange(before, to_calendar_result(row))

        change = await self.ctx.pipeline.execute(
            mutation,
            actor=actor,
            audit=lambda c: AuditDraft(
                AuditAction.UPDATE,
                TABLE_ACADEMIC_CALENDARS,
                c.after.id,
                f'Updated academic calendar from "{c.before.semester} '
                f'{c.before.academic_year}" to "{c.after.semester} {c.after.academic_year}"'
                + ("; PDF replaced" if pdf_url else ""),
            ),
            invalidate=lambda c: _INVALIDATE,
            uploaded=[pdf_url] if pdf_url else [],
            resource="academic calendar",
            resource_id=calendar_id,
        )
        return to_payload(change.after)

    async def delete(self, calendar_id: int, actor: Actor) -> None:
        async def mutation(
            session: AsyncSession, files: FileJanitor
        ) -> AcademicCalendarResult | None:
            repo = AcademicCalendarRepository(session)
            row = await repo.get_by_id(calendar_id)
            if row is None:
                return None
            result = to_calendar_result(row)
            await files.discard(row.pdf_url)
            await repo.delete(row)
            return result

        await self.ctx.pipeline.execute(
            mutation,
            actor=actor,
            audit=lambda r: AuditDraft(
                AuditAction.DELETE,
                TABLE_ACADEMIC_CALENDARS,
                r.id,
                f'Deleted academic calendar for semester "{r.semester}" '
                f'of academic year "{r.academic_year}"',
            ),
            invalidate=lambda r: _INVALIDATE,
            resource="academic calendar",
            resource_id=calendar_id,
        )
