"""MemoryCache: TTL expiry, delete, prefix invalidation and key enumeration."""

from campus_cms.infrastructure.cache.memory_cache import MemoryCache


async def test_get_returns_value_until_ttl_elapses(cache: MemoryCache, clock) -> None:
    """After set(k, v, ttl), get(k) returns v until ttl elapses, then misses."""
    await cache.set("news:list:abc", {"data": [1, 2]}, ttl=60)
    assert await cache.get("news:list:abc") == {"data": [1, 2]}
    clock.advance(59)
    assert await cache.get("news:list:abc") == {"data": [1, 2]}
    clock.advance(1)
    assert await cache.get("news:list:abc") is None


async def test_default_ttl_used_when_none_given(cache: MemoryCache, clock) -> None:
    await cache.set("k", "v")
    clock.advance(599)
    assert await cache.get("k") == "v"
    clock.advance(1)
    assert await cache.get("k") is None


async def test_delete_makes_key_miss(cache: MemoryCache) -> None:
    await cache.set("k", 1, ttl=60)
    assert await cache.delete("k") is True
    assert await cache.get("k") is None
    assert await cache.delete("k") is False


async def test_delete_prefix_removes_only_matching_family(cache: MemoryCache) -> None:
    """Prefix delete drops every key of the family and nothing else."""
    await cache.set("news:list:a", 1, ttl=60)
    await cache.set("news:list:b", 2, ttl=60)
    await cache.set("news:slug:x", 3, ttl=60)
    await cache.set("visitors:list:a", 4, ttl=60)

    removed = await cache.delete_prefix("news:list:")

    assert removed == 2
    assert await cache.get("news:list:a") is None
    assert await cache.get("news:list:b") is None
    assert await cache.get("news:slug:x") == 3
    assert await cache.get("visitors:list:a") == 4


async def test_keys_skips_expired_entries(cache: MemoryCache, clock) -> None:
    await cache.set("short", 1, ttl=10)
    await cache.set("long", 2, ttl=100)
    clock.advance(10)
    assert await cache.keys() == ["long"]


async def test_cached_values_are_copies(cache: MemoryCache) -> None:
    """Mutating a returned value does not change the stored entry."""
    await cache.set("k", {"items": [1]}, ttl=60)
    value = await cache.get("k")
    value["items"].append(2)
    assert await cache.get("k") == {"items": [1]}


async def test_unserializable_value_is_not_stored(cache: MemoryCache) -> None:
    assert await cache.set("k", object(), ttl=60) is False
    assert await cache.get("k") is None


async def test_zero_and_empty_values_are_hits(cache: MemoryCache) -> None:
    await cache.set("count", 0, ttl=60)
    await cache.set("rows", [], ttl=60)
    assert await cache.get("count") == 0
    assert await cache.get("rows") == []


async def test_expired_entries_are_reclaimed_when_full(clock) -> None:
    """A full store sweeps expired entries instead of growing past max_entries."""
    cache = MemoryCache(default_ttl=60, clock=clock, max_entries=100)
    for page in range(100):
        await cache.set(f"news:list:page={page}", page)
    clock.advance(10_000)
    for page in range(100, 200):
        assert await cache.get(f"news:list:page={page}") is None
        await cache.set(f"news:list:page={page}", page)

    assert len(cache) == 100
    assert await cache.get("news:list:page=0") is None
    assert await cache.get("news:list:page=199") == 199


async def test_oldest_write_evicted_when_full_of_live_entries(clock) -> None:
    cache = MemoryCache(default_ttl=600, clock=clock, max_entries=3)
    await cache.set("a", 1)
    await cache.set("b", 2)
    await cache.set("c", 3)
    await cache.set("a", 10)  # rewrite makes "a" the newest
    await cache.set("d", 4)

    assert len(cache) == 3
    assert await cache.get("b") is None
    assert await cache.get("a") == 10
    assert await cache.get("c") == 3
    assert await cache.get("d") == 4
