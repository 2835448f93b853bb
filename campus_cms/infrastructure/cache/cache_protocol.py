"""Cache protocol for read paths and write-path invalidation (DIP)."""

from typing import Any, Protocol


class CacheProtocol(Protocol):
    """Protocol for cache backends (in-process map or Redis).

    Implementations never raise from these methods: an unavailable backend
    behaves as an always-miss cache and invalidation becomes a no-op.
    """

    def is_available(self) -> bool:
        """Return True if cache is connected and usable."""
        ...

    async def get(self, key: str) -> Any:
        """Return cached value or None (missing or expired)."""
        ...

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store value, overwriting any entry and resetting its expiry."""
        ...

    async def delete(self, key: str) -> bool:
        """Remove key from cache. Idempotent."""
        ...

    async def keys(self) -> list[str]:
        """Return all live keys."""
        ...

    async def delete_prefix(self, prefix: str) -> int:
        """Remove every live key starting with prefix; return count removed."""
        ...
