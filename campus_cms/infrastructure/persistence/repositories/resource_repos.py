"""Repositories for the single-table CMS resources (calendar, accreditation,
organization, admission waves, scholarships, hero slides, student
organizations, HR documents, complaints, visitors).

Each maps ORM rows to the DTOs in campus_cms.application.dtos.resources.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass
from datetime import date

from sqlalchemy import ColumnElement, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from campus_cms.application.dtos.resources import (
    AcademicCalendarResult,
    AccreditationResult,
    AdmissionWaveResult,
    ComplaintResult,
    HeroSlideResult,
    HrDocumentResult,
    OrganizationMemberResult,
    ScholarshipResult,
    StudentOrganizationResult,
    VisitorResult,
)
from campus_cms.infrastructure.persistence.models import (
    AcademicCalendar,
    Accreditation,
    AdmissionWave,
    Complaint,
    HeroSlide,
    HrDocument,
    OrganizationMember,
    Scholarship,
    StudentOrganization,
    Visitor,
)
from campus_cms.infrastructure.persistence.repositories.base import BaseRepository
from campus_cms.shared.utils.datetime import ensure_utc


def to_calendar_result(row: AcademicCalendar) -> AcademicCalendarResult:
    return AcademicCalendarResult(
        id=row.id,
        academic_year=row.academic_year,
        semester=row.semester,
        pdf_url=row.pdf_url,
        created_at=ensure_utc(row.created_at),  # type: ignore[arg-type]
        updated_at=ensure_utc(row.updated_at),  # type: ignore[arg-type]
    )


def to_accreditation_result(row: Accreditation) -> AccreditationResult:
    return AccreditationResult(
        id=row.id,
        study_program=row.study_program,
        faculty=row.faculty,
        status=row.status,
        certificate_url=row.certificate_url,
        certificate_name=row.certificate_name,
        created_at=ensure_utc(row.created_at),  # type: ignore[arg-type]
        updated_at=ensure_utc(row.updated_at),  # type: ignore[arg-type]
    )


def to_member_result(row: OrganizationMember) -> OrganizationMemberResult:
    return OrganizationMemberResult(
        id=row.id,
        name=row.name,
        position=row.position,
        display_order=row.display_order,
        created_at=ensure_utc(row.created_at),  # type: ignore[arg-type]
        updated_at=ensure_utc(row.updated_at),  # type: ignore[arg-type]
    )


def to_wave_result(row: AdmissionWave) -> AdmissionWaveResult:
    return AdmissionWaveResult(
        id=row.id,
        name=row.name,
        starts_on=row.starts_on,
        ends_on=row.ends_on,
        registration_fee=row.registration_fee,
        created_at=ensure_utc(row.created_at),  # type: ignore[arg-type]
        updated_at=ensure_utc(row.updated_at),  # type: ignore[arg-type]
    )


def to_scholarship_result(row: Scholarship) -> ScholarshipResult:
    return ScholarshipResult(
        id=row.id,
        title=row.title,
        description=row.description,
        document_url=row.document_url,
        created_at=ensure_utc(row.created_at),  # type: ignore[arg-type]
        updated_at=ensure_utc(row.updated_at),  # type: ignore[arg-type]
    )


def to_slide_result(row: HeroSlide) -> HeroSlideResult:
    return HeroSlideResult(
        id=row.id,
        title=row.title,
        image_url=row.image_url,
        is_active=row.is_active,
        created_at=ensure_utc(row.created_at),  # type: ignore[arg-type]
        updated_at=ensure_utc(row.updated_at),  # type: ignore[arg-type]
    )


def to_student_org_result(row: StudentOrganization) -> StudentOrganizationResult:
    return StudentOrganizationResult(
        id=row.id,
        name=row.name,
        description=row.description,
        image_url=row.image_url,
        created_at=ensure_utc(row.created_at),  # type: ignore[arg-type]
        updated_at=ensure_utc(row.updated_at),  # type: ignore[arg-type]
    )


def to_hr_document_result(row: HrDocument) -> HrDocumentResult:
    return HrDocumentResult(
        id=row.id,
        title=row.title,
        description=row.description,
        document_url=row.document_url,
        created_at=ensure_utc(row.created_at),  # type: ignore[arg-type]
        updated_at=ensure_utc(row.updated_at),  # type: ignore[arg-type]
    )


def to_complaint_result(row: Complaint) -> ComplaintResult:
    return ComplaintResult(
        id=row.id,
        reporter_name=row.reporter_name,
        reporter_email=row.reporter_email,
        category=row.category,
        body=row.body,
        evidence_url=row.evidence_url,
        status=row.status,
        created_at=ensure_utc(row.created_at),  # type: ignore[arg-type]
        updated_at=ensure_utc(row.updated_at),  # type: ignore[arg-type]
    )


def to_visitor_result(row: Visitor) -> VisitorResult:
    return VisitorResult(
        id=row.id,
        ip_address=row.ip_address,
        user_agent=row.user_agent,
        visited_on=row.visited_on,
        created_at=ensure_utc(row.created_at),  # type: ignore[arg-type]
    )


class AcademicCalendarRepository(BaseRepository[AcademicCalendar]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, AcademicCalendar)

    async def latest(self, limit: int) -> list[AcademicCalendarResult]:
        rows = await self._all(
            (AcademicCalendar.created_at.desc(), AcademicCalendar.id.desc()), limit
        )
        return [to_calendar_result(r) for r in rows]


class AccreditationRepository(BaseRepository[Accreditation]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Accreditation)

    async def list_ordered(self) -> list[AccreditationResult]:
        """All accreditations ordered by faculty, then study program."""
        rows = await self._all(
            (Accreditation.faculty.asc(), Accreditation.study_program.asc())
        )
        return [to_accreditation_result(r) for r in rows]


class OrganizationMemberRepository(BaseRepository[OrganizationMember]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, OrganizationMember)

    async def chart(self) -> list[OrganizationMemberResult]:
        rows = await self._all(
            (
                OrganizationMember.display_order.is_(None).asc(),
                OrganizationMember.display_order.asc(),
                OrganizationMember.id.asc(),
            )
        )
        return [to_member_result(r) for r in rows]


class AdmissionWaveRepository(BaseRepository[AdmissionWave]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, AdmissionWave)

    async def list_ordered(self) -> list[AdmissionWaveResult]:
        rows = await self._all((AdmissionWave.starts_on.asc(), AdmissionWave.id.asc()))
        return [to_wave_result(r) for r in rows]


class ScholarshipRepository(BaseRepository[Scholarship]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Scholarship)

    async def list_newest(self) -> list[ScholarshipResult]:
        rows = await self._all((Scholarship.created_at.desc(), Scholarship.id.desc()))
        return [to_scholarship_result(r) for r in rows]


class HeroSlideRepository(BaseRepository[HeroSlide]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, HeroSlide)

    async def newest(self, limit: int, *, active_only: bool = False) -> list[HeroSlideResult]:
        """Newest slides first; only active ones when active_only."""
        stmt = select(HeroSlide).order_by(HeroSlide.created_at.desc(), HeroSlide.id.desc())
        if active_only:
            stmt = stmt.where(HeroSlide.is_active.is_(True))
        result = await self.db.execute(stmt.limit(limit))
        return [to_slide_result(r) for r in result.scalars().all()]


class StudentOrganizationRepository(BaseRepository[StudentOrganization]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, StudentOrganization)

    async def list_ordered(self) -> list[StudentOrganizationResult]:
        rows = await self._all((StudentOrganization.id.asc(),))
        return [to_student_org_result(r) for r in rows]


class HrDocumentRepository(BaseRepository[HrDocument]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, HrDocument)

    async def list_newest(self) -> list[HrDocumentResult]:
        rows = await self._all((HrDocument.created_at.desc(), HrDocument.id.desc()))
        return [to_hr_document_result(r) for r in rows]


def build_complaint_filter(status: str | None) -> list[ColumnElement[bool]]:
    """WHERE conditions shared by the complaint list and count queries."""
    if status:
        return [Complaint.status == status]
    return []


class ComplaintRepository(BaseRepository[Complaint]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Complaint)

    async def list_page(
        self, status: str | None, *, skip: int, limit: int
    ) -> list[ComplaintResult]:
        rows = await self._page(
            build_complaint_filter(status),
            (Complaint.created_at.desc(), Complaint.id.desc()),
            offset=skip,
            limit=limit,
        )
        return [to_complaint_result(r) for r in rows]

    async def count(self, status: str | None) -> int:
        return await self._count(build_complaint_filter(status))


@dataclass(frozen=True)
class VisitorQuery:
    """Filters for the admin visitor list."""

    start_date: date | None = None
    end_date: date | None = None
    ip_address: str | None = None
    user_agent: str | None = None


def build_visitor_filter(query: VisitorQuery) -> list[ColumnElement[bool]]:
    """WHERE conditions shared by the visitor list and count queries."""
    conditions: list[ColumnElement[bool]] = []
    if query.start_date is not None:
        conditions.append(Visitor.visited_on >= query.start_date)
    if query.end_date is not None:
        conditions.append(Visitor.visited_on <= query.end_date)
    if query.ip_address:
        conditions.append(Visitor.ip_address.contains(query.ip_address, autoescape=True))
    if query.user_agent:
        conditions.append(Visitor.user_agent.contains(query.user_agent, autoescape=True))
    return conditions


class VisitorRepository(BaseRepository[Visitor]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Visitor)

    async def find_visit(
        self, ip_address: str, user_agent: str, visited_on: date
    ) -> Visitor | None:
        stmt = select(Visitor).where(
            Visitor.ip_address == ip_address,
            Visitor.user_agent == user_agent,
            Visitor.visited_on == visited_on,
        )
        result = await self.db.execute(stmt.limit(1))
        return result.scalar_one_or_none()

    async def list_page(
        self, query: VisitorQuery, *, skip: int, limit: int
    ) -> list[VisitorResult]:
        rows = await self._page(
            build_visitor_filter(query),
            (Visitor.created_at.desc(), Visitor.id.desc()),
            offset=skip,
            limit=limit,
        )
        return [to_visitor_result(r) for r in rows]

    async def count(self, query: VisitorQuery) -> int:
        return await self._count(build_visitor_filter(query))

    async def count_on(self, day: date) -> int:
        return await self._count([Visitor.visited_on == day])

    async def stream_all(self, batch_size: int = 500) -> AsyncIterator[VisitorResult]:
        """Yield every visit newest first, fetched in batches."""
        stmt = select(Visitor).order_by(Visitor.created_at.desc(), Visitor.id.desc())
        result = await self.db.stream_scalars(stmt.execution_options(yield_per=batch_size))
        async for row in result:
            yield to_visitor_result(row)

    async def delete_in_range(self, start: date, end: date) -> int:
        """Bulk delete visits logged on days start..end inclusive; return row count."""
        stmt = (
            delete(Visitor)
            .where(Visitor.visited_on >= start, Visitor.visited_on <= end)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return int(result.rowcount or 0)
