"""Organization chart API."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends

from campus_cms.api.v1.dependencies import AdminActor, get_organization_service
from campus_cms.application.use_cases.organization import MemberWrite, OrganizationService
from campus_cms.schemas.common import MessageResponse
from campus_cms.schemas.resources import (
    OrganizationMemberRequest,
    OrganizationMemberResponse,
)

router = APIRouter()

Service = Annotated[OrganizationService, Depends(get_organization_service)]


@router.get("", response_model=list[OrganizationMemberResponse])
async def organization_chart(service: Service) -> list[dict[str, Any]]:
    """Members ordered by display order (unordered members last)."""
    return await service.chart()


@router.post("", response_model=OrganizationMemberResponse, status_code=201)
async def create_member(
    body: OrganizationMemberRequest, service: Service, actor: AdminActor
) -> dict[str, Any]:
    return await service.create(
        MemberWrite(body.name, body.position, body.display_order), actor
    )


@router.put("/{member_id}", response_model=OrganizationMemberResponse)
async def update_member(
    member_id: int, body: OrganizationMemberRequest, service: Service, actor: AdminActor
) -> dict[str, Any]:
    return await service.update(
        member_id, MemberWrite(body.name, body.position, body.display_order), actor
    )


@router.delete("/{member_id}", response_model=MessageResponse)
async def delete_member(member_id: int, service: Service, actor: AdminActor) -> MessageResponse:
    await service.delete(member_id, actor)
    return MessageResponse(message="Member deleted")
