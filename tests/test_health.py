"""Smoke tests for health and app wiring."""

from httpx import AsyncClient


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200, status ok and cache availability."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data.get("status") == "ok"
    assert data.get("cache") == "available"


async def test_responses_carry_request_id_and_security_headers(client: AsyncClient) -> None:
    """Middleware echoes a well-formed X-Request-ID and adds hardening headers."""
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers.get("x-request-id") == "abc-123"
    assert response.headers.get("x-content-type-options") == "nosniff"


async def test_malformed_request_id_is_replaced(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "bad id; drop table"})
    echoed = response.headers.get("x-request-id")
    assert echoed
    assert echoed != "bad id; drop table"


async def test_unknown_route_returns_json_error(client: AsyncClient) -> None:
    response = await client.get("/api/v1/does-not-exist")
    assert response.status_code == 404
    assert response.json()["error"] == "HTTP_ERROR"


async def test_hardening_headers_are_added_to_error_responses_too(client: AsyncClient) -> None:
    response = await client.get("/api/v1/no-such-route")

    assert response.status_code == 404
    assert response.headers.get("x-frame-options") == "DENY"
    assert response.headers.get("x-content-type-options") == "nosniff"
    assert "frame-ancestors 'none'" in response.headers.get("content-security-policy", "")
