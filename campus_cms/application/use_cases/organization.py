"""Organization chart use cases: ordered chart (cached) and member writes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from campus_cms.application.dtos.resources import OrganizationMemberResult
from campus_cms.application.dtos.serialization import to_payload, to_payloads
from campus_cms.application.services.write_pipeline import (
    Actor,
    AuditDraft,
    FileJanitor,
    Invalidation,
)
from campus_cms.application.use_cases.common import ServiceContext
from campus_cms.core.constants import TABLE_ORGANIZATION_MEMBERS
from campus_cms.domain.enums import AuditAction
from campus_cms.domain.exceptions import ValidationException
from campus_cms.infrastructure.cache import keys
from campus_cms.infrastructure.cache.read_through import cache_aside
from campus_cms.infrastructure.persistence.models.organization_member import (
    OrganizationMember,
)
from campus_cms.infrastructure.persistence.repositories.resource_repos import (
    OrganizationMemberRepository,
    to_member_result,
)
from campus_cms.shared.utils.sanitization import sanitize_input

_INVALIDATE = Invalidation(keys=(keys.organization_chart_key(),))


@dataclass(frozen=True)
class MemberWrite:
    name: str
    position: str
    display_order: int | None = None


def _clean(data: MemberWrite) -> MemberWrite:
    name = sanitize_input(data.name) or ""
    position = sanitize_input(data.position) or ""
    if not name or not position:
        raise ValidationException("Name and position are required", "name" if not name else "position")
    if data.display_order is not None and data.display_order < 1:
        raise ValidationException("Order must be a positive number", "display_order")
    return MemberWrite(name=name, position=position, display_order=data.display_order)


class OrganizationService:
    """Organization chart reads and writes."""

    def __init__(self, ctx: ServiceContext) -> None:
        self.ctx = ctx

    async def chart(self) -> list[dict[str, Any]]:
        async def load() -> list[dict[str, Any]]:
            async with self.ctx.session_factory() as session:
                rows = await OrganizationMemberRepository(session).chart()
            return to_payloads(rows)

        return await cache_aside(
            self.ctx.cache,
            keys.organization_chart_key(),
            load,
            self.ctx.settings.cache_ttl_organization,
        )

    async def create(self, data: MemberWrite, actor: Actor) -> dict[str, Any]:
        data = _clean(data)

        async def mutation(
            session: AsyncSession, files: FileJanitor
        ) -> OrganizationMemberResult:
            row = await OrganizationMemberRepository(session).add(
                OrganizationMember(
                    name=data.name,
                    position=data.position,
                    display_order=data.display_order,
                )
            )
            return to_member_result(row)

        result = await self.ctx.pipeline.execute(
            mutation,
            actor=actor,
            audit=lambda r: AuditDraft(
                AuditAction.CREATE,
                TABLE_ORGANIZATION_MEMBERS,
                r.id,
                f'Added organization member "{r.name}" as {r.position}',
            ),
            invalidate=lambda r: _INVALIDATE,
        )
        return to_payload(result)

    async def update(self, member_id: int, data: MemberWrite, actor: Actor) -> dict[str, Any]:
        data = _clean(data)

        async def mutation(
            session: AsyncSession, files: FileJanitor
        ) -> tuple[OrganizationMemberResult, OrganizationMemberResult] | None:
            repo = OrganizationMemberRepository(session)
            row = await repo.get_by_id(member_id)
            if row is None:
                return None
            before = to_member_result(row)
            row.name = data.name
            row.position = data.position
            row.display_order = data.display_order
            row = await repo.save(row)
            return before, to_member_result(row)

        before, after = await self.ctx.pipeline.execute(
            mutation,
            actor=actor,
            audit=lambda c: AuditDraft(
                AuditAction.UPDATE,
                TABLE_ORGANIZATION_MEMBERS,
                c[1].id,
                f'Updated organization member "{c[0].name}" ({c[0].position}) '
                f'to "{c[1].name}" ({c[1].position})',
            ),
            invalidate=lambda c: _INVALIDATE,
            resource="organization member",
            resource_id=member_id,
        )
        return to_payload(after)

    async def delete(self, member_id: int, actor: Actor) -> None:
        async def mutation(
            session: AsyncSession, files: FileJanitor
        ) -> OrganizationMemberResult | None:
            repo = OrganizationMemberRepository(session)
            row = await repo.get_by_id(member_id)
            if row is None:
                return None
            result = to_member_result(row)
            await repo.delete(row)
            return result

        await self.ctx.pipeline.execute(
            mutation,
            actor=actor,
            audit=lambda r: AuditDraft(
                AuditAction.DELETE,
                TABLE_ORGANIZATION_MEMBERS,
                r.id,
                f'Removed organization member "{r.name}" ({r.position})',
            ),
            invalidate=lambda r: _INVALIDATE,
            resource="organization member",
            resource_id=member_id,
        )
