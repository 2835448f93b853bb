"""Redis cache backend for multi-process deployments.

Values are JSON documents stored under settings.cache_namespace, so keys()
and delete_prefix() only ever see this service's entries. Every command
gets one reconnect-and-retry on a dropped connection; after that the
backend answers like an empty cache.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import redis.asyncio as redis

from campus_cms.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

_GLOB_SPECIAL = "\\*?[]"
_UNLINK_BATCH = 500


def _escape_glob(value: str) -> str:
    """Escape SCAN MATCH metacharacters so value matches literally."""
    return "".join(f"\\{c}" if c in _GLOB_SPECIAL else c for c in value)


class RedisCache:
    """Namespaced JSON cache on redis.asyncio.

    connect() at startup, disconnect() at shutdown. Operations never raise.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.redis = redis_client
        self.namespace = self.settings.cache_namespace
        self.default_ttl = self.settings.cache_default_ttl
        self._connected = redis_client is not None

    def _client(self) -> redis.Redis:
        password = self.settings.redis_password
        return redis.Redis(
            host=self.settings.redis_host,
            port=self.settings.redis_port,
            db=self.settings.redis_db,
            password=password.get_secret_value() if password else None,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_keepalive=True,
        )

    async def connect(self) -> None:
        if self.redis is not None:
            return
        client = self._client()
        try:
            await client.ping()
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning("Redis unreachable (%s); serving without cache", e)
            await client.aclose()
            self._connected = False
            return
        self.redis = client
        self._connected = True
        logger.info(
            "Redis cache connected: %s:%s db=%s",
            self.settings.redis_host,
            self.settings.redis_port,
            self.settings.redis_db,
        )

    async def disconnect(self) -> None:
        if self.redis is None:
            return
        await self.redis.aclose()
        self.redis = None
        self._connected = False
        logger.info("Redis cache disconnected")

    def is_available(self) -> bool:
        return self._connected and self.redis is not None

    def _ns(self, key: str) -> str:
        return f"{self.namespace}{key}"

    async def _run(
        self,
        what: str,
        command: Callable[[redis.Redis], Awaitable[T]],
        fallback: T,
    ) -> T:
        """Run command; on a dropped connection reconnect once and retry."""
        if not self.is_available() or self.redis is None:
            return fallback
        try:
            return await command(self.redis)
        except (redis.ConnectionError, redis.TimeoutError):
            logger.warning("Redis connection lost during %s; reconnecting", what)
        except redis.RedisError:
            logger.exception("Redis error during %s", what)
            return fallback

        stale, self.redis, self._connected = self.redis, None, False
        try:
            await stale.aclose()
        except redis.RedisError:
            logger.debug("Ignoring error while closing stale Redis connection")
        await self.connect()
        if self.redis is None:
            return fallback
        try:
            return await command(self.redis)
        except redis.RedisError:
            logger.exception("Redis error during %s after reconnect", what)
            return fallback

    async def get(self, key: str) -> Any | None:
        """JSON-decoded value, or None when missing or Redis is unavailable."""
        raw = await self._run(f"get {key}", lambda r: r.get(self._ns(key)), None)
        if raw is None:
            logger.debug("Cache MISS: %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return json.loads(raw)

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """SETEX with ttl (namespace default when None). False if not stored."""
        try:
            payload = json.dumps(value)
        except (TypeError, ValueError):
            logger.exception("Cache value for %s is not JSON serializable", key)
            return False
        seconds = self.default_ttl if ttl is None else ttl

        async def setex(r: redis.Redis) -> bool:
            await r.setex(self._ns(key), seconds, payload)
            return True

        stored = await self._run(f"set {key}", setex, False)
        if stored:
            logger.debug("Cache SET: %s (TTL: %ss)", key, seconds)
        return stored

    async def delete(self, key: str) -> bool:
        async def unlink(r: redis.Redis) -> bool:
            await r.unlink(self._ns(key))
            return True

        deleted = await self._run(f"delete {key}", unlink, False)
        if deleted:
            logger.debug("Cache DELETE: %s", key)
        return deleted

    async def keys(self) -> list[str]:
        """Live keys in this namespace, namespace stripped (SCAN, non-blocking)."""
        pattern = f"{_escape_glob(self.namespace)}*"
        size = len(self.namespace)

        async def scan(r: redis.Redis) -> list[str]:
            return [k[size:] async for k in r.scan_iter(match=pattern)]

        return await self._run("keys", scan, [])

    async def delete_prefix(self, prefix: str) -> int:
        """SCAN for namespace+prefix* and UNLINK the matches in batches."""
        pattern = f"{_escape_glob(self._ns(prefix))}*"

        async def sweep(r: redis.Redis) -> int:
            removed = 0
            batch: list[str] = []
            async for k in r.scan_iter(match=pattern):
                batch.append(k)
                if len(batch) >= _UNLINK_BATCH:
                    removed += await r.unlink(*batch)
                    batch = []
            if batch:
                removed += await r.unlink(*batch)
            return removed

        removed = await self._run(f"delete_prefix {prefix}", sweep, 0)
        if removed:
            logger.info("Cache INVALIDATE: %s* (%s keys)", prefix, removed)
        return removed
