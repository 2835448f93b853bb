"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
no business logic here, only wiring of infrastructure (shared HTTP
client, cache, object storage, session factory, audit writer, write
pipeline, CAPTCHA verifier) onto app.state.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from campus_cms.application.services.write_pipeline import WritePipeline
from campus_cms.core.config import Settings, get_settings
from campus_cms.infrastructure.cache.factory import build_cache
from campus_cms.infrastructure.external.captcha import (
    DisabledCaptchaVerifier,
    RecaptchaVerifier,
)
from campus_cms.infrastructure.external.storage.factory import StorageFactory
from campus_cms.infrastructure.persistence.database import (
    dispose_engine,
    get_session_factory,
)
from campus_cms.infrastructure.services.audit_log_writer import AuditLogWriter
from campus_cms.shared.telemetry import setup_logging

logger = logging.getLogger(__name__)


def build_captcha_verifier(
    settings: Settings, http_client: httpx.AsyncClient
) -> RecaptchaVerifier | DisabledCaptchaVerifier:
    """reCAPTCHA verifier when enabled, else an accept-all verifier."""
    if not settings.recaptcha_enabled:
        logger.warning("reCAPTCHA disabled; public forms are not bot-checked")
        return DisabledCaptchaVerifier()
    assert settings.recaptcha_secret is not None
    return RecaptchaVerifier(
        client=http_client,
        secret=settings.recaptcha_secret.get_secret_value(),
        min_score=settings.recaptcha_min_score,
        verify_url=settings.recaptcha_verify_url,
    )


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, shared HTTP client, cache, object storage,
    session factory, audit writer and write pipeline. Shutdown order:
    cache disconnect, HTTP client close, SQL engine dispose.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    # Shared HTTP client for object storage and reCAPTCHA (connection reuse).
    app.state.http_client = httpx.AsyncClient(timeout=settings.storage_timeout_seconds)
    app.state.cache = await build_cache(settings)
    app.state.storage = StorageFactory.create_storage_service(
        settings, http_client=app.state.http_client
    )
    app.state.session_factory = get_session_factory()
    app.state.audit_writer = AuditLogWriter(
        app.state.session_factory, settings.audit_write_timeout_seconds
    )
    app.state.pipeline = WritePipeline(
        app.state.session_factory,
        app.state.cache,
        app.state.audit_writer,
        app.state.storage,
    )
    app.state.captcha = build_captcha_verifier(settings, app.state.http_client)
    logger.info(
        "Started %s (cache=%s, storage=%s)",
        settings.app_name,
        settings.cache_backend,
        settings.storage_backend,
    )

    yield

    # ---- Shutdown ----
    disconnect = getattr(app.state.cache, "disconnect", None)
    if disconnect is not None:
        await disconnect()
        logger.info("Cache disconnected")

    if getattr(app.state, "http_client", None) is not None:
        await app.state.http_client.aclose()
        app.state.http_client = None
        logger.info("HTTP client closed")

    await dispose_engine()
