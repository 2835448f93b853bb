"""Cache-aside helper for read paths.

check cache -> on miss run loader -> store with TTL -> return. A failing
cache backend degrades to calling the loader directly; it never aborts
the surrounding request.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from campus_cms.infrastructure.cache.cache_protocol import CacheProtocol

logger = logging.getLogger(__name__)


async def cache_aside(
    cache: CacheProtocol | None,
    key: str,
    loader: Callable[[], Awaitable[Any]],
    ttl: int | None = None,
) -> Any:
    """Return the cached value for key, or load, store and return it.

    Args:
        cache: Cache backend; None disables caching.
        key: Fully built cache key (see campus_cms.infrastructure.cache.keys).
        loader: Coroutine factory that queries the store; must return
            JSON-serializable data. None results are not cached.
        ttl: Entry TTL in seconds; backend default when None.

    Returns:
        Cached or freshly loaded value.
    """
    if cache is not None:
        try:
            cached = await cache.get(key)
        except Exception:
            logger.exception("Cache read failed for %s; querying store directly", key)
            cached = None
        if cached is not None:
            return cached

    value = await loader()

    if cache is not None and value is not None:
        try:
            await cache.set(key, value, ttl=ttl)
        except Exception:
            logger.exception("Cache write failed for %s; serving uncached result", key)
    return value
