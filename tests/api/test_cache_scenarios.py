"""Read-through caching and write invalidation, end to end over HTTP."""

import asyncio

from httpx import AsyncClient
from sqlalchemy import select

from campus_cms.infrastructure.cache import keys
from campus_cms.infrastructure.persistence.models import AcademicCalendar, AuditLog


async def test_cached_list_is_served_without_a_store_round_trip(
    client: AsyncClient, admin_headers: dict[str, str], session_factory
) -> None:
    """Second GET within the TTL does not open a session."""
    created = await client.post(
        "/api/v1/organization",
        headers=admin_headers,
        json={"name": "Prof. Sari", "position": "Rector", "display_order": 1},
    )
    assert created.status_code == 201

    first = await client.get("/api/v1/organization")
    calls_after_first = session_factory.calls
    second = await client.get("/api/v1/organization")

    assert first.status_code == second.status_code == 200
    assert first.json() == second.json()
    assert session_factory.calls == calls_after_first


async def test_cache_expires_after_ttl(
    client: AsyncClient, admin_headers: dict[str, str], session_factory, clock, settings
) -> None:
    await client.get("/api/v1/organization")
    calls = session_factory.calls

    clock.advance(settings.cache_ttl_organization + 1)
    await client.get("/api/v1/organization")

    assert session_factory.calls == calls + 1


async def test_replacing_a_file_discards_the_old_one_and_invalidates(
    client: AsyncClient,
    admin_headers: dict[str, str],
    storage,
    cache,
    pdf_file,
) -> None:
    created = await client.post(
        "/api/v1/academic-calendars",
        headers=admin_headers,
        data={"academic_year": "2024/2025", "semester": "odd"},
        files={"pdf": pdf_file},
    )
    assert created.status_code == 201
    old_url = created.json()["pdf_url"]

    listed = await client.get("/api/v1/academic-calendars")
    assert [c["pdf_url"] for c in listed.json()] == [old_url]
    assert await cache.get(keys.academic_calendar_key()) is not None

    updated = await client.put(
        f"/api/v1/academic-calendars/{created.json()['id']}",
        headers=admin_headers,
        data={"academic_year": "2024/2025", "semester": "even"},
        files={"pdf": ("calendar-rev.pdf", pdf_file[1], "application/pdf")},
    )
    assert updated.status_code == 200
    new_url = updated.json()["pdf_url"]

    assert new_url != old_url
    assert old_url in storage.delete_requests
    assert await cache.get(keys.academic_calendar_key()) is None

    relisted = await client.get("/api/v1/academic-calendars")
    assert relisted.json()[0]["pdf_url"] == new_url
    assert relisted.json()[0]["semester"] == "even"


async def test_failed_validation_leaves_no_orphaned_upload(
    client: AsyncClient, admin_headers: dict[str, str], storage, pdf_file
) -> None:
    response = await client.post(
        "/api/v1/academic-calendars",
        headers=admin_headers,
        data={"academic_year": "2024/2026", "semester": "odd"},
        files={"pdf": pdf_file},
    )
    assert response.status_code == 400
    assert response.json()["details"]["field"] == "academic_year"
    assert storage.uploaded == []


async def test_concurrent_creates_both_appear(
    client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    await client.get("/api/v1/organization")

    responses = await asyncio.gather(
        client.post(
            "/api/v1/organization",
            headers=admin_headers,
            json={"name": "Dr. Rudi", "position": "Vice Rector I"},
        ),
        client.post(
            "/api/v1/organization",
            headers=admin_headers,
            json={"name": "Dr. Wati", "position": "Vice Rector II"},
        ),
    )
    assert [r.status_code for r in responses] == [201, 201]

    chart = await client.get("/api/v1/organization")
    assert {m["name"] for m in chart.json()} == {"Dr. Rudi", "Dr. Wati"}


async def test_delete_succeeds_when_file_removal_fails(
    client: AsyncClient,
    admin_headers: dict[str, str],
    storage,
    session_factory,
    pdf_file,
) -> None:
    created = await client.post(
        "/api/v1/academic-calendars",
        headers=admin_headers,
        data={"academic_year": "2023/2024", "semester": "short"},
        files={"pdf": pdf_file},
    )
    calendar_id = created.json()["id"]
    storage.fail_deletes = True

    response = await client.delete(
        f"/api/v1/academic-calendars/{calendar_id}", headers=admin_headers
    )

    assert response.status_code == 200
    assert created.json()["pdf_url"] in storage.delete_requests
    async with session_factory() as session:
        assert await session.get(AcademicCalendar, calendar_id) is None
        entries = (
            await session.execute(
                select(AuditLog)
                .where(AuditLog.target_table == "academic_calendars")
                .order_by(AuditLog.id)
            )
        ).scalars().all()
    assert [e.action for e in entries] == ["upload", "delete"]
    assert entries[-1].actor_name == "Dewi Admin"


async def test_write_to_missing_row_is_not_found_and_not_audited(
    client: AsyncClient, admin_headers: dict[str, str], session_factory
) -> None:
    response = await client.put(
        "/api/v1/organization/999",
        headers=admin_headers,
        json={"name": "Nobody", "position": "None"},
    )

    assert response.status_code == 404
    assert response.json()["error"] == "RESOURCE_NOT_FOUND"
    async with session_factory() as session:
        assert (await session.execute(select(AuditLog))).first() is None
