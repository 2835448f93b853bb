"""Security: JWT verification for admin endpoints."""

from campus_cms.infrastructure.security.jwt import create_access_token, verify_token

__all__ = [
    "create_access_token",
    "verify_token",
]
