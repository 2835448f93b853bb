"""reCAPTCHA v3 verification for the public complaint form."""

from __future__ import annotations

from typing import Any

import httpx

from campus_cms.domain.exceptions import UpstreamServiceException, ValidationException
from campus_cms.shared.telemetry import get_logger

logger = get_logger(__name__)


class RecaptchaVerifier:
    """Verifies client tokens against the siteverify endpoint.

    A rejected token or a low score is a client error (400); an unreachable
    or malformed verification service is an upstream error (502).
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        secret: str,
        min_score: float = 0.5,
        verify_url: str = "https://www.google.com/recaptcha/api/siteverify",
        timeout: float = 10.0,
    ) -> None:
        self._client = client
        self._secret = secret
        self._min_score = min_score
        self._verify_url = verify_url
        self._timeout = timeout

    async def verify(self, token: str | None, remote_ip: str | None = None) -> None:
        """Raise unless token is valid with score >= min_score."""
        if not token:
            raise ValidationException("reCAPTCHA token is required", "recaptcha_token")
        form: dict[str, Any] = {"secret": self._secret, "response": token}
        if remote_ip:
            form["remoteip"] = remote_ip
        try:
            response = await self._client.post(
                self._verify_url, data=form, timeout=self._timeout
            )
            response.raise_for_status()
            result = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise UpstreamServiceException("recaptcha", str(e)) from e

        if not result.get("success"):
            logger.info("reCAPTCHA rejected: %s", result.get("error-codes"))
            raise ValidationException("reCAPTCHA verification failed", "recaptcha_token")
        score = result.get("score")
        if score is not None and float(score) < self._min_score:
            logger.info("reCAPTCHA score too low: %s", score)
            raise ValidationException("reCAPTCHA verification failed", "recaptcha_token")


class DisabledCaptchaVerifier:
    """Accepts every submission (recaptcha_enabled=False, local development)."""

    async def verify(self, token: str | None, remote_ip: str | None = None) -> None:
        return None
