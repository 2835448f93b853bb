"""Pytest configuration and fixtures for campus-cms.

HTTP tests run campus_cms.main:app through httpx's ASGITransport. The
lifespan does not run there, so the app_state fixture puts test
collaborators on app.state instead: a per-test SQLite file database, a
MemoryCache driven by a fake clock, a recording object storage and an
accept-all CAPTCHA verifier.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ["RECAPTCHA_ENABLED"] = "false"
os.environ["CACHE_BACKEND"] = "memory"
os.environ["STORAGE_BACKEND"] = "local"

from collections.abc import AsyncIterator  # noqa: E402
from pathlib import Path  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from campus_cms.application.services.write_pipeline import WritePipeline  # noqa: E402
from campus_cms.application.use_cases.common import ServiceContext  # noqa: E402
from campus_cms.core.config import Settings, get_settings  # noqa: E402
from campus_cms.core.limiter import limiter  # noqa: E402
from campus_cms.domain.exceptions import ValidationException  # noqa: E402
from campus_cms.infrastructure.cache.memory_cache import MemoryCache  # noqa: E402
from campus_cms.infrastructure.exceptions import (  # noqa: E402
    StorageDeleteError,
    StorageUploadError,
)
from campus_cms.infrastructure.external.storage.protocol import StoredFile  # noqa: E402
from campus_cms.infrastructure.persistence import models  # noqa: E402, F401
from campus_cms.infrastructure.persistence.database import Base  # noqa: E402
from campus_cms.infrastructure.security.jwt import create_access_token  # noqa: E402
from campus_cms.infrastructure.services.audit_log_writer import AuditLogWriter  # noqa: E402
from campus_cms.main import app  # noqa: E402

PDF_BYTES = b"%PDF-1.4\n1 0 obj\n<<>>\nendobj\ntrailer\n<<>>\n%%EOF\n"
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


class FakeClock:
    """Monotonic clock the tests advance by hand."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingStorage:
    """Object storage double: remembers uploads and delete requests.

    fail_deletes makes delete() raise like an upstream 500;
    fail_uploads makes upload() raise after recording nothing.
    """

    public_url = "https://files.test"

    def __init__(self) -> None:
        self.uploaded: list[str] = []
        self.delete_requests: list[str] = []
        self.fail_deletes = False
        self.fail_uploads = False

    async def upload(
        self, data: bytes, folder: str, filename: str, content_type: str
    ) -> StoredFile:
        if self.fail_uploads:
            raise StorageUploadError(f"{folder}/{filename}", "simulated upload outage")
        url = f"{self.public_url}/{folder}/{filename}"
        self.uploaded.append(url)
        return StoredFile(url=url, name=filename)

    async def delete(self, url: str) -> bool:
        self.delete_requests.append(url)
        if self.fail_deletes:
            raise StorageDeleteError(url, "simulated 500 from storage")
        return True


class FakeCaptcha:
    """CAPTCHA double: records tokens; rejects when reject is set."""

    def __init__(self) -> None:
        self.tokens: list[str | None] = []
        self.reject = False

    async def verify(self, token: str | None, remote_ip: str | None = None) -> None:
        self.tokens.append(token)
        if self.reject:
            raise ValidationException("reCAPTCHA verification failed", "recaptcha_token")


class CountingSessionFactory:
    """Wraps a session factory and counts sessions opened (store round-trips)."""

    def __init__(self, factory: async_sessionmaker[AsyncSession]) -> None:
        self._factory = factory
        self.calls = 0

    def __call__(self) -> AsyncSession:
        self.calls += 1
        return self._factory()


@pytest.fixture(autouse=True)
def _reset_rate_limits() -> None:
    limiter.reset()


@pytest.fixture
def settings() -> Settings:
    return get_settings()


@pytest.fixture
async def engine(tmp_path: Path) -> AsyncIterator[AsyncEngine]:
    """Fresh SQLite file per test; schema from model metadata."""
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'cms.db'}")
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> CountingSessionFactory:
    return CountingSessionFactory(async_sessionmaker(engine, expire_on_commit=False))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> MemoryCache:
    return MemoryCache(default_ttl=600, clock=clock)


@pytest.fixture
def storage() -> RecordingStorage:
    return RecordingStorage()


@pytest.fixture
def captcha() -> FakeCaptcha:
    return FakeCaptcha()


@pytest.fixture
def audit_writer(session_factory: CountingSessionFactory) -> AuditLogWriter:
    return AuditLogWriter(session_factory, timeout_seconds=5.0)  # type: ignore[arg-type]


@pytest.fixture
def pipeline(
    session_factory: CountingSessionFactory,
    cache: MemoryCache,
    audit_writer: AuditLogWriter,
    storage: RecordingStorage,
) -> WritePipeline:
    return WritePipeline(session_factory, cache, audit_writer, storage)  # type: ignore[arg-type]


@pytest.fixture
def ctx(
    session_factory: CountingSessionFactory,
    cache: MemoryCache,
    storage: RecordingStorage,
    pipeline: WritePipeline,
    settings: Settings,
) -> ServiceContext:
    return ServiceContext(
        session_factory=session_factory,  # type: ignore[arg-type]
        cache=cache,
        storage=storage,
        pipeline=pipeline,
        settings=settings,
    )


@pytest.fixture
def app_state(
    session_factory: CountingSessionFactory,
    cache: MemoryCache,
    storage: RecordingStorage,
    audit_writer: AuditLogWriter,
    pipeline: WritePipeline,
    captcha: FakeCaptcha,
) -> Any:
    """Install test collaborators on app.state (what the lifespan does in production)."""
    state = app.state
    state.session_factory = session_factory
    state.cache = cache
    state.storage = storage
    state.audit_writer = audit_writer
    state.pipeline = pipeline
    state.captcha = captcha
    return state


@pytest.fixture
async def client(app_state: Any) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def admin_headers() -> dict[str, str]:
    """Bearer token for an administrator (as issued by the auth service)."""
    token = create_access_token({"sub": "7", "name": "Dewi Admin"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def pdf_file() -> tuple[str, bytes, str]:
    return ("calendar.pdf", PDF_BYTES, "application/pdf")


@pytest.fixture
def png_file() -> tuple[str, bytes, str]:
    return ("photo.png", PNG_BYTES, "image/png")
