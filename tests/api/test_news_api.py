"""News API: slugs, cached detail, search lists and range delete."""

from datetime import timedelta

from httpx import AsyncClient

from campus_cms.infrastructure.cache import keys
from campus_cms.shared.utils.datetime import local_today


async def _create(
    client: AsyncClient, headers: dict[str, str], title: str, category: str = "news", **files
):
    return await client.post(
        "/api/v1/news",
        headers=headers,
        data={"title": title, "content": "<p>Body</p>", "category": category},
        files=files or None,
    )


async def test_create_derives_unique_slugs(client: AsyncClient, admin_headers) -> None:
    first = await _create(client, admin_headers, "Campus Open Day")
    second = await _create(client, admin_headers, "Campus Open Day!")

    assert first.status_code == second.status_code == 201
    assert first.json()["slug"] == "campus-open-day"
    assert second.json()["slug"] == "campus-open-day-2"
    assert first.json()["author"] == "Dewi Admin"


async def test_content_is_sanitized(client: AsyncClient, admin_headers) -> None:
    response = await client.post(
        "/api/v1/news",
        headers=admin_headers,
        data={
            "title": "<b>Library</b> hours",
            "content": "<p>Open</p><script>alert(1)</script>",
            "category": "news",
        },
    )
    assert response.json()["title"] == "Library hours"
    assert response.json()["content"] == "<p>Open</p>"


async def test_detail_is_cached_and_dropped_on_update(
    client: AsyncClient, admin_headers, cache
) -> None:
    created = (await _create(client, admin_headers, "Graduation 2024")).json()

    detail = await client.get("/api/v1/news/graduation-2024")
    assert detail.status_code == 200
    assert await cache.get(keys.news_slug_key("graduation-2024")) is not None

    updated = await client.put(
        f"/api/v1/news/{created['id']}",
        headers=admin_headers,
        data={"title": "Graduation Ceremony 2024", "content": "<p>New</p>", "category": "news"},
    )
    assert updated.json()["slug"] == "graduation-ceremony-2024"
    assert await cache.get(keys.news_slug_key("graduation-2024")) is None

    assert (await client.get("/api/v1/news/graduation-2024")).status_code == 404
    assert (await client.get("/api/v1/news/graduation-ceremony-2024")).status_code == 200


async def test_missing_slug_is_not_cached(client: AsyncClient, cache) -> None:
    response = await client.get("/api/v1/news/nothing-here")

    assert response.status_code == 404
    assert await cache.get(keys.news_slug_key("nothing-here")) is None


async def test_new_entry_shows_in_previously_cached_search(
    client: AsyncClient, admin_headers
) -> None:
    await _create(client, admin_headers, "Research grant awarded")
    before = await client.get("/api/v1/news", params={"search": "grant"})
    assert before.json()["total"] == 1

    await _create(client, admin_headers, "Second grant round")
    after = await client.get("/api/v1/news", params={"search": "grant"})

    assert after.json()["total"] == 2
    assert after.json()["data"][0]["title"] == "Second grant round"


async def test_latest_excludes_announcements(client: AsyncClient, admin_headers) -> None:
    await _create(client, admin_headers, "Article one")
    await _create(client, admin_headers, "Exam schedule", category="announcement")

    latest = await client.get("/api/v1/news/latest")
    announcements = await client.get("/api/v1/news/announcements")

    assert [n["title"] for n in latest.json()] == ["Article one"]
    assert [n["title"] for n in announcements.json()] == ["Exam schedule"]


async def test_image_upload_and_delete_discards_files(
    client: AsyncClient, admin_headers, storage, png_file, pdf_file
) -> None:
    created = await client.post(
        "/api/v1/news",
        headers=admin_headers,
        data={"title": "Lab opening", "content": "<p>x</p>", "category": "news"},
        files=[("image", png_file), ("documents", pdf_file)],
    )
    body = created.json()
    assert body["image_url"].startswith("https://files.test/")
    assert body["documents"][0]["name"] == "calendar.pdf"

    deleted = await client.delete(f"/api/v1/news/{body['id']}", headers=admin_headers)

    assert deleted.status_code == 200
    assert body["image_url"] in storage.delete_requests
    assert body["documents"][0]["url"] in storage.delete_requests


async def test_rejected_image_type(client: AsyncClient, admin_headers, pdf_file) -> None:
    response = await client.post(
        "/api/v1/news",
        headers=admin_headers,
        data={"title": "Bad image", "content": "<p>x</p>", "category": "news"},
        files={"image": pdf_file},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "STORAGE_REJECTED_FILE"


async def test_delete_range(client: AsyncClient, admin_headers, settings) -> None:
    await _create(client, admin_headers, "Old news")
    today = local_today(settings.display_timezone).isoformat()

    response = await client.request(
        "DELETE",
        "/api/v1/news/delete-range",
        headers=admin_headers,
        json={"startDate": today, "endDate": today},
    )

    assert response.status_code == 200
    assert response.json()["deleted"] == 1
    assert (await client.get("/api/v1/news")).json()["total"] == 0


async def test_delete_range_rejects_reversed_dates(
    client: AsyncClient, admin_headers, settings
) -> None:
    today = local_today(settings.display_timezone)
    response = await client.request(
        "DELETE",
        "/api/v1/news/delete-range",
        headers=admin_headers,
        json={
            "startDate": today.isoformat(),
            "endDate": (today - timedelta(days=1)).isoformat(),
        },
    )
    assert response.status_code == 400
