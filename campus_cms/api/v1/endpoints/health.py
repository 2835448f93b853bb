"""Health check endpoint: liveness plus cache availability."""

from fastapi import APIRouter, Request

from campus_cms.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check(request: Request) -> HealthResponse:
    """Return ok; cache reports 'degraded' while reads bypass an unreachable backend."""
    cache = getattr(request.app.state, "cache", None)
    available = cache is not None and cache.is_available()
    return HealthResponse(cache="available" if available else "degraded")
