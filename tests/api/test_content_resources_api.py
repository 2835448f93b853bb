"""Calendars, accreditations, organization chart, admission waves, scholarships.

Each resource: create through the API, read it back (which fills its cache
entry), then check that update and delete drop that entry.
"""

from httpx import AsyncClient

from campus_cms.infrastructure.cache import keys


async def _assert_cached(client: AsyncClient, cache, path: str, key: str) -> list[dict]:
    response = await client.get(path)
    assert response.status_code == 200
    assert await cache.get(key) is not None
    return response.json()


async def test_academic_calendar_lifecycle(
    client: AsyncClient, admin_headers: dict[str, str], cache, storage, pdf_file
) -> None:
    key = keys.academic_calendar_key()
    created = await client.post(
        "/api/v1/academic-calendars",
        headers=admin_headers,
        data={"academic_year": "2025/2026", "semester": "Odd"},
        files={"pdf": pdf_file},
    )
    assert created.status_code == 201
    calendar = created.json()
    assert calendar["semester"] == "odd"
    assert calendar["pdf_url"].startswith("https://files.test/")

    listed = await _assert_cached(client, cache, "/api/v1/academic-calendars", key)
    assert [c["id"] for c in listed] == [calendar["id"]]

    updated = await client.put(
        f"/api/v1/academic-calendars/{calendar['id']}",
        headers=admin_headers,
        data={"academic_year": "2025/2026", "semester": "even"},
    )
    assert updated.status_code == 200
    assert updated.json()["pdf_url"] == calendar["pdf_url"]
    assert await cache.get(key) is None

    await _assert_cached(client, cache, "/api/v1/academic-calendars", key)
    deleted = await client.delete(
        f"/api/v1/academic-calendars/{calendar['id']}", headers=admin_headers
    )
    assert deleted.status_code == 200
    assert await cache.get(key) is None
    assert storage.delete_requests == [calendar["pdf_url"]]
    assert (await client.get("/api/v1/academic-calendars")).json() == []


async def test_academic_calendar_rejects_unknown_semester(
    client: AsyncClient, admin_headers: dict[str, str], storage, pdf_file
) -> None:
    response = await client.post(
        "/api/v1/academic-calendars",
        headers=admin_headers,
        data={"academic_year": "2025/2026", "semester": "winter"},
        files={"pdf": pdf_file},
    )

    assert response.status_code == 400
    assert response.json()["details"]["field"] == "semester"
    assert storage.uploaded == []


async def test_accreditation_lifecycle(
    client: AsyncClient, admin_headers: dict[str, str], cache, storage, pdf_file
) -> None:
    key = keys.accreditation_list_key()
    form = {"study_program": "Informatics", "faculty": "Engineering", "status": "A"}
    created = await client.post(
        "/api/v1/accreditations",
        headers=admin_headers,
        data=form,
        files={"certificate": ("sk-informatics.pdf", pdf_file[1], "application/pdf")},
    )
    assert created.status_code == 201
    accreditation = created.json()
    old_url = accreditation["certificate_url"]

    listed = await _assert_cached(client, cache, "/api/v1/accreditations", key)
    assert [a["study_program"] for a in listed] == ["Informatics"]

    updated = await client.put(
        f"/api/v1/accreditations/{accreditation['id']}",
        headers=admin_headers,
        data={**form, "status": "Unggul"},
        files={"certificate": ("sk-informatics-2.pdf", pdf_file[1], "application/pdf")},
    )
    assert updated.status_code == 200
    assert updated.json()["status"] == "Unggul"
    assert updated.json()["certificate_url"] != old_url
    assert old_url in storage.delete_requests
    assert await cache.get(key) is None

    await _assert_cached(client, cache, "/api/v1/accreditations", key)
    deleted = await client.delete(
        f"/api/v1/accreditations/{accreditation['id']}", headers=admin_headers
    )
    assert deleted.status_code == 200
    assert await cache.get(key) is None
    assert updated.json()["certificate_url"] in storage.delete_requests


async def test_accreditations_are_ordered_by_faculty_then_program(
    client: AsyncClient, admin_headers: dict[str, str], pdf_file
) -> None:
    for program, faculty in (
        ("Mathematics", "Science"),
        ("Informatics", "Engineering"),
        ("Civil Engineering", "Engineering"),
    ):
        response = await client.post(
            "/api/v1/accreditations",
            headers=admin_headers,
            data={"study_program": program, "faculty": faculty, "status": "B"},
            files={"certificate": pdf_file},
        )
        assert response.status_code == 201

    listed = (await client.get("/api/v1/accreditations")).json()

    assert [a["study_program"] for a in listed] == [
        "Civil Engineering",
        "Informatics",
        "Mathematics",
    ]


async def test_organization_chart_lifecycle(
    client: AsyncClient, admin_headers: dict[str, str], cache
) -> None:
    key = keys.organization_chart_key()
    rector = await client.post(
        "/api/v1/organization",
        headers=admin_headers,
        json={"name": "Prof. Sari", "position": "Rector", "display_order": 1},
    )
    unordered = await client.post(
        "/api/v1/organization",
        headers=admin_headers,
        json={"name": "Budi", "position": "Secretary"},
    )
    assert rector.status_code == unordered.status_code == 201

    chart = await _assert_cached(client, cache, "/api/v1/organization", key)
    assert [m["name"] for m in chart] == ["Prof. Sari", "Budi"]

    updated = await client.put(
        f"/api/v1/organization/{unordered.json()['id']}",
        headers=admin_headers,
        json={"name": "Budi", "position": "Vice Rector I", "display_order": 2},
    )
    assert updated.status_code == 200
    assert await cache.get(key) is None

    chart = await _assert_cached(client, cache, "/api/v1/organization", key)
    assert [m["position"] for m in chart] == ["Rector", "Vice Rector I"]

    deleted = await client.delete(
        f"/api/v1/organization/{rector.json()['id']}", headers=admin_headers
    )
    assert deleted.status_code == 200
    assert await cache.get(key) is None
    assert [m["name"] for m in (await client.get("/api/v1/organization")).json()] == ["Budi"]


async def test_admission_wave_lifecycle(
    client: AsyncClient, admin_headers: dict[str, str], cache
) -> None:
    key = keys.admission_waves_key()
    body = {
        "name": "Wave 1",
        "starts_on": "2025-01-06",
        "ends_on": "2025-03-31",
        "registration_fee": 250000,
    }
    created = await client.post("/api/v1/admission-waves", headers=admin_headers, json=body)
    assert created.status_code == 201
    wave_id = created.json()["id"]

    waves = await _assert_cached(client, cache, "/api/v1/admission-waves", key)
    assert [w["name"] for w in waves] == ["Wave 1"]

    updated = await client.put(
        f"/api/v1/admission-waves/{wave_id}",
        headers=admin_headers,
        json={**body, "registration_fee": 300000},
    )
    assert updated.status_code == 200
    assert updated.json()["registration_fee"] == 300000
    assert await cache.get(key) is None

    await _assert_cached(client, cache, "/api/v1/admission-waves", key)
    deleted = await client.delete(f"/api/v1/admission-waves/{wave_id}", headers=admin_headers)
    assert deleted.status_code == 200
    assert await cache.get(key) is None


async def test_admission_wave_rejects_end_before_start(
    client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    response = await client.post(
        "/api/v1/admission-waves",
        headers=admin_headers,
        json={
            "name": "Wave 2",
            "starts_on": "2025-05-01",
            "ends_on": "2025-04-01",
            "registration_fee": 250000,
        },
    )

    assert response.status_code == 400
    assert response.json()["details"]["field"] == "ends_on"


async def test_scholarship_lifecycle(
    client: AsyncClient, admin_headers: dict[str, str], cache, storage, pdf_file
) -> None:
    key = keys.scholarships_key()
    created = await client.post(
        "/api/v1/scholarships",
        headers=admin_headers,
        data={"title": "Merit Scholarship", "description": "Full tuition for top students"},
        files={"document": ("merit.pdf", pdf_file[1], "application/pdf")},
    )
    assert created.status_code == 201
    scholarship = created.json()

    listed = await _assert_cached(client, cache, "/api/v1/scholarships", key)
    assert [s["title"] for s in listed] == ["Merit Scholarship"]

    updated = await client.put(
        f"/api/v1/scholarships/{scholarship['id']}",
        headers=admin_headers,
        data={"title": "Merit Scholarship 2025", "description": "Full tuition"},
    )
    assert updated.status_code == 200
    assert updated.json()["document_url"] == scholarship["document_url"]
    assert await cache.get(key) is None

    await _assert_cached(client, cache, "/api/v1/scholarships", key)
    deleted = await client.delete(
        f"/api/v1/scholarships/{scholarship['id']}", headers=admin_headers
    )
    assert deleted.status_code == 200
    assert await cache.get(key) is None
    assert storage.delete_requests == [scholarship["document_url"]]


async def test_updating_a_missing_scholarship_is_404(
    client: AsyncClient, admin_headers: dict[str, str], cache
) -> None:
    await client.get("/api/v1/scholarships")

    response = await client.put(
        "/api/v1/scholarships/999",
        headers=admin_headers,
        data={"title": "Ghost", "description": "Nothing here"},
    )

    assert response.status_code == 404
    assert await cache.get(keys.scholarships_key()) is not None
