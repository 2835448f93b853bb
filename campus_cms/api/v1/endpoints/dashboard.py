"""Dashboard counters (admin)."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends

from campus_cms.api.v1.dependencies import AdminActor, get_dashboard_service
from campus_cms.application.use_cases.dashboard import DashboardService
from campus_cms.schemas.resources import DashboardResponse

router = APIRouter()


@router.get("", response_model=DashboardResponse)
async def dashboard_summary(
    service: Annotated[DashboardService, Depends(get_dashboard_service)],
    _: AdminActor,
) -> dict[str, Any]:
    """Total news and today's visitors."""
    return await service.summary()
