"""Bearer token handling for admin endpoints (python-jose, HS256 by default).

Tokens are minted by the external auth service that shares SECRET_KEY.
create_access_token mirrors that service's claim layout so local tooling
and tests can produce valid tokens.
"""

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from campus_cms.core.config import get_settings

_REQUIRED_CLAIMS = ("exp", "sub")


def create_access_token(
    claims: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Sign claims (sub = admin id, name = display name) with an exp claim added."""
    settings = get_settings()
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    return str(
        jwt.encode(
            {**claims, "exp": datetime.now(UTC) + lifetime},
            settings.secret_key.get_secret_value(),
            algorithm=settings.algorithm,
        )
    )


def verify_token(token: str) -> dict[str, Any]:
    """Decode and check a token; return its claims.

    Raises:
        ValueError: Bad signature, expired, malformed, or missing exp/sub.
    """
    settings = get_settings()
    try:
        claims = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={f"require_{name}": True for name in _REQUIRED_CLAIMS},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    missing = [name for name in _REQUIRED_CLAIMS if not claims.get(name)]
    if missing:
        raise ValueError(f"Token missing required claim: {', '.join(missing)}")
    return claims
