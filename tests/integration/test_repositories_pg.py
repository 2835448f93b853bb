"""Repository integration tests against PostgreSQL.

Run with DATABASE_URL=postgresql+asyncpg://... ; skipped otherwise. Each
test works inside a transaction that is rolled back afterwards.
"""

import os
from collections.abc import AsyncIterator
from datetime import UTC, date, datetime

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

from campus_cms.application.dtos.audit_log import AuditLogFilters
from campus_cms.infrastructure.persistence.database import Base
from campus_cms.infrastructure.persistence.models import AuditLog, News
from campus_cms.infrastructure.persistence.repositories.audit_log_repo import (
    AuditLogRepository,
)
from campus_cms.infrastructure.persistence.repositories.news_repo import (
    NewsQuery,
    NewsRepository,
)

DATABASE_URL = os.environ.get("DATABASE_URL", "")


@pytest.fixture
async def db_session() -> AsyncIterator[AsyncSession]:
    if not DATABASE_URL.startswith("postgresql"):
        pytest.skip("PostgreSQL not configured (DATABASE_URL)")
    engine = create_async_engine(DATABASE_URL)
    async with engine.connect() as conn:
        await conn.run_sync(Base.metadata.create_all)
        await conn.commit()
        trans = await conn.begin()
        session = AsyncSession(bind=conn, expire_on_commit=False)
        try:
            yield session
        finally:
            await session.close()
            await trans.rollback()
    await engine.dispose()


@pytest.mark.requires_db
async def test_news_search_is_case_insensitive(db_session: AsyncSession) -> None:
    repo = NewsRepository(db_session)
    await repo.add(
        News(
            title="Beasiswa Unggulan",
            slug="beasiswa-unggulan-pg",
            content="x",
            category="news",
        )
    )

    rows = await repo.list_page(NewsQuery(search="BEASISWA"), skip=0, limit=10)

    assert "beasiswa-unggulan-pg" in [r.slug for r in rows]
    assert await repo.slug_exists("beasiswa-unggulan-pg")


@pytest.mark.requires_db
async def test_audit_range_delete_uses_whole_utc_days(db_session: AsyncSession) -> None:
    for created in (
        datetime(1999, 5, 1, 0, 0, tzinfo=UTC),
        datetime(1999, 5, 1, 23, 59, 59, tzinfo=UTC),
        datetime(1999, 5, 2, 0, 0, tzinfo=UTC),
    ):
        db_session.add(
            AuditLog(action="create", target_table="news", message="seed", created_at=created)
        )
    await db_session.flush()
    repo = AuditLogRepository(db_session)

    deleted = await repo.delete_in_range(date(1999, 5, 1), date(1999, 5, 1))

    assert deleted == 2
    remaining = await repo.count(
        AuditLogFilters(start_date=date(1999, 5, 1), end_date=date(1999, 5, 2))
    )
    assert remaining == 1
