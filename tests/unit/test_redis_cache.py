"""RedisCache against an in-process stand-in for redis.asyncio.Redis."""

from collections.abc import AsyncIterator

import pytest
import redis.asyncio as redis

from campus_cms.core.config import Settings
from campus_cms.infrastructure.cache.redis_cache import RedisCache


class FakeRedis:
    """Dict-backed subset of the redis.asyncio client used by RedisCache.

    Setting `down` makes every command raise ConnectionError.
    """

    def __init__(self) -> None:
        self.data: dict[str, str] = {}
        self.ttls: dict[str, int] = {}
        self.unlink_calls: list[tuple[str, ...]] = []
        self.down = False
        self.closed = False

    def _check(self) -> None:
        if self.down:
            raise redis.ConnectionError("Connection refused")

    async def ping(self) -> bool:
        self._check()
        return True

    async def get(self, key: str) -> str | None:
        self._check()
        return self.data.get(key)

    async def setex(self, key: str, seconds: int, value: str) -> bool:
        self._check()
        self.data[key] = value
        self.ttls[key] = seconds
        return True

    async def unlink(self, *keys: str) -> int:
        self._check()
        self.unlink_calls.append(keys)
        return sum(1 for k in keys if self.data.pop(k, None) is not None)

    async def scan_iter(self, match: str) -> AsyncIterator[str]:
        self._check()
        assert match.endswith("*")
        prefix = match[:-1].replace("\\", "")
        for key in list(self.data):
            if key.startswith(prefix):
                yield key

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def redis_settings(settings: Settings) -> Settings:
    return settings.model_copy(update={"cache_namespace": "cms:", "cache_default_ttl": 600})


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def redis_cache(fake_redis: FakeRedis, redis_settings: Settings) -> RedisCache:
    return RedisCache(fake_redis, redis_settings)  # type: ignore[arg-type]


async def test_values_round_trip_under_the_namespace(
    redis_cache: RedisCache, fake_redis: FakeRedis
) -> None:
    assert await redis_cache.set("news:slug:open-day", {"title": "Open day"}, ttl=60)

    assert fake_redis.data == {"cms:news:slug:open-day": '{"title": "Open day"}'}
    assert fake_redis.ttls == {"cms:news:slug:open-day": 60}
    assert await redis_cache.get("news:slug:open-day") == {"title": "Open day"}


async def test_default_ttl_applies_when_none_given(
    redis_cache: RedisCache, fake_redis: FakeRedis
) -> None:
    await redis_cache.set("scholarships:all", [])

    assert fake_redis.ttls == {"cms:scholarships:all": 600}


async def test_keys_strip_the_namespace_and_ignore_other_services(
    redis_cache: RedisCache, fake_redis: FakeRedis
) -> None:
    fake_redis.data["other-app:news:list"] = "[]"
    await redis_cache.set("news:list:1", [])
    await redis_cache.set("organization:chart", [])

    assert sorted(await redis_cache.keys()) == ["news:list:1", "organization:chart"]


async def test_delete_prefix_unlinks_only_matching_keys(
    redis_cache: RedisCache, fake_redis: FakeRedis
) -> None:
    await redis_cache.set("news:list:1", [])
    await redis_cache.set("news:slug:a", {})
    await redis_cache.set("newsletter:x", {})
    await redis_cache.set("slider:active", [])

    removed = await redis_cache.delete_prefix("news:")

    assert removed == 2
    assert sorted(await redis_cache.keys()) == ["newsletter:x", "slider:active"]


async def test_delete_prefix_unlinks_in_batches(
    redis_cache: RedisCache, fake_redis: FakeRedis
) -> None:
    for i in range(1201):
        fake_redis.data[f"cms:visitors:list:{i}"] = "[]"

    removed = await redis_cache.delete_prefix("visitors:")

    assert removed == 1201
    assert [len(batch) for batch in fake_redis.unlink_calls] == [500, 500, 201]
    assert fake_redis.data == {}


async def test_connection_error_degrades_to_a_miss(
    redis_cache: RedisCache, fake_redis: FakeRedis, monkeypatch: pytest.MonkeyPatch
) -> None:
    await redis_cache.set("news:slug:a", {"title": "A"})
    fake_redis.down = True
    replacement = FakeRedis()
    replacement.down = True
    monkeypatch.setattr(redis_cache, "_client", lambda: replacement)

    assert await redis_cache.get("news:slug:a") is None
    assert await redis_cache.set("news:slug:b", {}) is False
    assert await redis_cache.delete_prefix("news:") == 0
    assert await redis_cache.keys() == []
    assert fake_redis.closed
    assert not redis_cache.is_available()


async def test_dropped_connection_is_retried_once_on_a_fresh_client(
    redis_cache: RedisCache, fake_redis: FakeRedis, monkeypatch: pytest.MonkeyPatch
) -> None:
    fake_redis.down = True
    replacement = FakeRedis()
    replacement.data["cms:organization:chart"] = '[{"name": "Prof. Sari"}]'
    monkeypatch.setattr(redis_cache, "_client", lambda: replacement)

    value = await redis_cache.get("organization:chart")

    assert value == [{"name": "Prof. Sari"}]
    assert redis_cache.redis is replacement
    assert redis_cache.is_available()


async def test_unavailable_cache_answers_without_touching_redis(
    redis_settings: Settings,
) -> None:
    cache = RedisCache(settings=redis_settings)

    assert await cache.get("news:slug:a") is None
    assert await cache.set("news:slug:a", {}) is False
    assert await cache.delete("news:slug:a") is False
    assert await cache.delete_prefix("news:") == 0
