"""Write pipeline: the fixed sequence every mutating operation follows.

    1. (caller) validate and sanitize input
    2. discard replaced files from object storage (best-effort, inside the mutation)
    3. run the persistence mutation and commit
    4. None result -> not found: remove fresh uploads, skip 5-6
    5. record one audit entry (best-effort)
    6. invalidate cache keys and prefixes (best-effort)
    7. return the result

Steps 5 and 6 always run after a successful commit; their failures are
logged and never reach the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from campus_cms.application.dtos.audit_log import AuditLogEntryCreate
from campus_cms.domain.exceptions import ResourceNotFoundException

if TYPE_CHECKING:
    from campus_cms.application.interfaces.services import IAuditLogWriter
    from campus_cms.infrastructure.cache.cache_protocol import CacheProtocol
    from campus_cms.infrastructure.external.storage.protocol import (
        ObjectStorageProtocol,
    )

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Actor:
    """Who performed a write and from where. id/name are None for anonymous flows."""

    id: str | None
    name: str | None
    ip: str | None
    user_agent: str | None

    @classmethod
    def anonymous(cls, ip: str | None, user_agent: str | None) -> Actor:
        return cls(id=None, name=None, ip=ip, user_agent=user_agent)


@dataclass(frozen=True)
class AuditDraft:
    """Audit entry content built from the mutation result."""

    action: str | Enum
    target_table: str
    target_id: str | int | None
    message: str


@dataclass(frozen=True)
class Invalidation:
    """Cache entries made stale by a write: exact keys and key-family prefixes."""

    keys: tuple[str, ...] = ()
    prefixes: tuple[str, ...] = ()


class FileJanitor:
    """Best-effort removal of stored files. Failures are logged, never raised."""

    def __init__(self, storage: ObjectStorageProtocol) -> None:
        self._storage = storage

    async def discard(self, url: str | None) -> bool:
        """Delete the file behind url. Returns True only if storage confirmed deletion."""
        if not url:
            return False
        try:
            return await self._storage.delete(url)
        except Exception:
            logger.warning("Could not delete stored file %s", url, exc_info=True)
            return False

    async def discard_all(self, urls: Iterable[str | None]) -> None:
        for url in urls:
            await self.discard(url)


class WritePipeline:
    """Runs mutations with trailing audit and cache invalidation.

    The mutation gets its own session and transaction; the audit writer
    uses a separate one, so an audit failure cannot undo a committed write.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        cache: CacheProtocol,
        audit_writer: IAuditLogWriter,
        storage: ObjectStorageProtocol,
    ) -> None:
        self._session_factory = session_factory
        self._cache = cache
        self._audit_writer = audit_writer
        self._storage = storage

    @property
    def files(self) -> FileJanitor:
        return FileJanitor(self._storage)

    async def execute(
        self,
        mutation: Callable[[AsyncSession, FileJanitor], Awaitable[T | None]],
        *,
        actor: Actor,
        audit: Callable[[T], AuditDraft] | None,
        invalidate: Callable[[T], Invalidation],
        uploaded: Iterable[str] = (),
        resource: str = "resource",
        resource_id: str | int | None = None,
    ) -> T:
        """Run mutation, then audit and invalidate.

        Args:
            mutation: Coroutine taking (session, files); returns the result or
                None when the target row does not exist.
            actor: Write provenance for the audit entry.
            audit: Builds the audit entry from the result; None for writes
                that are not audited (anonymous visit tracking).
            invalidate: Builds the cache entries to drop from the result.
            uploaded: URLs stored for this request; removed if the write
                does not happen.
            resource: Resource name for the not-found error.
            resource_id: Target id for the not-found error.

        Raises:
            ResourceNotFoundException: mutation returned None.
        """
        uploaded = tuple(uploaded)
        janitor = FileJanitor(self._storage)
        try:
            async with self._session_factory() as session:
                result = await mutation(session, janitor)
                if result is None:
                    await session.rollback()
                else:
                    await session.commit()
        except Exception:
            await janitor.discard_all(uploaded)
            raise

        if result is None:
            await janitor.discard_all(uploaded)
            raise ResourceNotFoundException(resource, resource_id)

        if audit is not None:
            await self._record(actor, audit(result))
        await self.apply(invalidate(result))
        return result

    async def _record(self, actor: Actor, draft: AuditDraft) -> None:
        action = draft.action.value if isinstance(draft.action, Enum) else draft.action
        entry = AuditLogEntryCreate(
            actor_id=actor.id,
            actor_name=actor.name,
            action=action,
            target_table=draft.target_table,
            target_id=str(draft.target_id) if draft.target_id is not None else None,
            ip_address=actor.ip,
            user_agent=actor.user_agent,
            message=draft.message,
        )
        # record() logs and returns None on failure; the write has already
        # succeeded, so the outcome is deliberately not inspected.
        _ = await self._audit_writer.record(entry)

    async def apply(self, invalidation: Invalidation) -> None:
        """Drop every listed key and prefix; failures are logged and skipped."""
        for key in invalidation.keys:
            try:
                await self._cache.delete(key)
            except Exception:
                logger.exception("Cache invalidation failed for key %s", key)
        for prefix in invalidation.prefixes:
            try:
                await self._cache.delete_prefix(prefix)
            except Exception:
                logger.exception("Cache invalidation failed for prefix %s", prefix)
