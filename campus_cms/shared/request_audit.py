"""Request provenance recorded on audit entries and visitor rows."""

from __future__ import annotations

from starlette.requests import Request

_IP_MAX_LENGTH = 64
_USER_AGENT_MAX_LENGTH = 255


def get_client_provenance(request: Request) -> tuple[str | None, str | None]:
    """Return (ip_address, user_agent) for the calling client.

    The IP is the first X-Forwarded-For hop when the app sits behind a
    proxy, else the socket peer. Both values are clipped to their column
    widths.
    """
    forwarded = request.headers.get("X-Forwarded-For", "")
    first_hop = forwarded.split(",")[0].strip()
    peer = request.client.host if request.client else None
    ip_address = first_hop or peer or None
    user_agent = request.headers.get("User-Agent")
    return (
        ip_address[:_IP_MAX_LENGTH] if ip_address else None,
        user_agent[:_USER_AGENT_MAX_LENGTH] if user_agent else None,
    )
