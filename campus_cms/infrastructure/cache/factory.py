"""Cache backend factory: creates the in-process or Redis cache from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from campus_cms.infrastructure.cache.cache_protocol import CacheProtocol
from campus_cms.infrastructure.cache.memory_cache import MemoryCache

if TYPE_CHECKING:
    from campus_cms.core.config import Settings


async def build_cache(settings: "Settings") -> CacheProtocol:
    """Create and connect the configured cache backend.

    Args:
        settings: Application settings (cache_backend, redis_*, cache_default_ttl,
            cache_max_entries).

    Returns:
        MemoryCache or a connected RedisCache (which degrades to always-miss
        when Redis is unreachable).
    """
    if settings.cache_backend == "redis":
        from campus_cms.infrastructure.cache.redis_cache import RedisCache

        cache = RedisCache(settings=settings)
        await cache.connect()
        return cache
    return MemoryCache(
        default_ttl=settings.cache_default_ttl,
        max_entries=settings.cache_max_entries,
    )
