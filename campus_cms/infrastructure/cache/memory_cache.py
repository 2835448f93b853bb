"""In-process TTL cache.

Default backend for a single-process deployment. Values are stored as JSON
text so cached payloads cannot be mutated through shared references and
behave the same as with the Redis backend.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class MemoryCache:
    """Dict-backed cache with per-entry absolute expiry and a size bound.

    Expired entries are dropped lazily on get() and keys(), and swept when
    the store is full. If it is still full after the sweep, the oldest
    written entry is evicted. Not durable: entries vanish on restart.
    """

    def __init__(
        self,
        default_ttl: int = 600,
        clock: Callable[[], float] = time.monotonic,
        max_entries: int = 10_000,
    ) -> None:
        """Initialize cache.

        Args:
            default_ttl: TTL in seconds used when set() gets no ttl.
            clock: Monotonic time source; injectable for tests.
            max_entries: Upper bound on stored entries.
        """
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.default_ttl = default_ttl
        self.max_entries = max_entries
        self._clock = clock
        self._entries: dict[str, tuple[str, float]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def is_available(self) -> bool:
        return True

    def _is_live(self, key: str, now: float) -> bool:
        entry = self._entries.get(key)
        if entry is None:
            return False
        if entry[1] <= now:
            del self._entries[key]
            return False
        return True

    def _make_room(self, now: float) -> None:
        """Sweep expired entries; evict oldest writes while still at capacity."""
        expired = [k for k, (_, expires_at) in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]
        evicted = 0
        while len(self._entries) >= self.max_entries:
            del self._entries[next(iter(self._entries))]
            evicted += 1
        if expired or evicted:
            logger.debug("Cache SWEEP: %s expired, %s evicted", len(expired), evicted)

    async def get(self, key: str) -> Any | None:
        """Return cached value (JSON-deserialized) or None if missing/expired."""
        if not self._is_live(key, self._clock()):
            logger.debug("Cache MISS: %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return json.loads(self._entries[key][0])

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store value with TTL. Returns False if value is not JSON-serializable."""
        effective_ttl = self.default_ttl if ttl is None else ttl
        try:
            serialized = json.dumps(value)
        except (TypeError, ValueError):
            logger.exception("Cache set error for key %s (value not serializable)", key)
            return False
        now = self._clock()
        # Re-insert so dict order stays oldest-write first.
        self._entries.pop(key, None)
        if len(self._entries) >= self.max_entries:
            self._make_room(now)
        self._entries[key] = (serialized, now + effective_ttl)
        logger.debug("Cache SET: %s (TTL: %ss)", key, effective_ttl)
        return True

    async def delete(self, key: str) -> bool:
        """Remove key. Returns True if an entry was removed."""
        removed = self._entries.pop(key, None) is not None
        if removed:
            logger.debug("Cache DELETE: %s", key)
        return removed

    async def keys(self) -> list[str]:
        """Return all keys that have not expired."""
        now = self._clock()
        return [k for k in list(self._entries) if self._is_live(k, now)]

    async def delete_prefix(self, prefix: str) -> int:
        """Delete every live key starting with prefix."""
        deleted = 0
        for key in await self.keys():
            if key.startswith(prefix):
                await self.delete(key)
                deleted += 1
        if deleted > 0:
            logger.info("Cache INVALIDATE: %s* (%s keys)", prefix, deleted)
        return deleted
