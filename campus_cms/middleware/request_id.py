"""Request ID middleware.

Forwards a well-formed client X-Request-ID or mints a new one, stores it
in scope state (request.state.request_id) and echoes it on the response.
Malformed client values are replaced so they never reach the logs.
"""

import re
import uuid
from typing import Any, Callable

from campus_cms.middleware._headers import add_missing_headers, get_header

_REQUEST_ID = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def _resolve_request_id(raw: str | None) -> str:
    if raw and _REQUEST_ID.match(raw.strip()):
        return raw.strip()
    return uuid.uuid4().hex


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Attach a request id to scope state and the response headers. Raw ASGI."""
    header_bytes = header_name.lower().encode()

    async def asgi_app(scope: dict[str, Any], receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = _resolve_request_id(get_header(scope, header_name))
        scope.setdefault("state", {})["request_id"] = request_id

        async def send_with_id(message: dict[str, Any]) -> None:
            if message["type"] == "http.response.start":
                add_missing_headers(message, [(header_bytes, request_id.encode())])
            await send(message)

        await app(scope, receive, send_with_id)

    return asgi_app
