"""Complaint API: anonymous submission, CAPTCHA, admin triage."""

from httpx import AsyncClient
from sqlalchemy import select

from campus_cms.infrastructure.persistence.models import AuditLog


def _form(**overrides: str) -> dict[str, str]:
    form = {
        "category": "facilities",
        "body": "The library air conditioning is broken.",
        "captchaToken": "token-123",
    }
    form.update(overrides)
    return form


async def test_anonymous_submission_is_audited_without_actor(
    client: AsyncClient, captcha, session_factory
) -> None:
    response = await client.post(
        "/api/v1/complaints", data=_form(), headers={"User-Agent": "campus-browser"}
    )

    assert response.status_code == 201
    assert response.json()["message"] == "Complaint submitted"
    assert captcha.tokens == ["token-123"]
    async with session_factory() as session:
        entry = (await session.execute(select(AuditLog))).scalar_one()
    assert entry.actor_id is None
    assert entry.actor_name is None
    assert entry.action == "create"
    assert entry.target_table == "complaints"
    assert entry.user_agent == "campus-browser"
    assert entry.message == 'Anonymous complaint submitted in category "facilities"'


async def test_rejected_captcha_stores_nothing(
    client: AsyncClient, captcha, admin_headers
) -> None:
    captcha.reject = True

    response = await client.post("/api/v1/complaints", data=_form())

    assert response.status_code == 400
    listed = await client.get("/api/v1/complaints", headers=admin_headers)
    assert listed.json()["total"] == 0


async def test_body_longer_than_limit_is_rejected(client: AsyncClient) -> None:
    response = await client.post("/api/v1/complaints", data=_form(body="x" * 1001))
    assert response.status_code == 400
    assert response.json()["details"]["field"] == "body"


async def test_invalid_email_is_rejected(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/complaints", data=_form(reporter_email="not-an-email")
    )
    assert response.status_code == 400


async def test_evidence_image_is_stored(client: AsyncClient, storage, png_file) -> None:
    response = await client.post(
        "/api/v1/complaints", data=_form(), files={"evidence": png_file}
    )
    assert response.status_code == 201
    assert storage.uploaded[0].startswith("https://files.test/complaints/")


async def test_cached_list_sees_new_submission(client: AsyncClient, admin_headers) -> None:
    await client.post("/api/v1/complaints", data=_form())
    first = await client.get("/api/v1/complaints", headers=admin_headers)
    assert first.json()["total"] == 1

    await client.post("/api/v1/complaints", data=_form(category="parking"))
    second = await client.get("/api/v1/complaints", headers=admin_headers)

    assert second.json()["total"] == 2


async def test_status_update_and_filter(client: AsyncClient, admin_headers) -> None:
    created = await client.post("/api/v1/complaints", data=_form())
    await client.post("/api/v1/complaints", data=_form(category="parking"))
    complaint_id = created.json()["id"]

    updated = await client.put(
        f"/api/v1/complaints/{complaint_id}/status",
        headers=admin_headers,
        json={"status": "Resolved"},
    )
    assert updated.status_code == 200
    assert updated.json()["status"] == "resolved"

    resolved = await client.get(
        "/api/v1/complaints", headers=admin_headers, params={"status": "resolved"}
    )
    open_ = await client.get(
        "/api/v1/complaints", headers=admin_headers, params={"status": "open"}
    )
    assert [c["id"] for c in resolved.json()["data"]] == [complaint_id]
    assert open_.json()["total"] == 1


async def test_unknown_status_is_rejected(client: AsyncClient, admin_headers) -> None:
    created = await client.post("/api/v1/complaints", data=_form())
    response = await client.put(
        f"/api/v1/complaints/{created.json()['id']}/status",
        headers=admin_headers,
        json={"status": "archived"},
    )
    assert response.status_code == 400


async def test_submissions_are_rate_limited(client: AsyncClient) -> None:
    statuses = [
        (await client.post("/api/v1/complaints", data=_form())).status_code for _ in range(6)
    ]
    assert statuses[:5] == [201] * 5
    assert statuses[5] == 429
