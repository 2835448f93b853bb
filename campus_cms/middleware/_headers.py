"""ASGI header helpers shared by the middleware."""

from typing import Any


def get_header(scope: dict[str, Any], name: str) -> str | None:
    """First value of header name (case-insensitive); headers are (bytes, bytes) pairs."""
    want = name.lower().encode()
    for key, value in scope.get("headers", []):
        if key.lower() == want:
            return value.decode("latin-1")
    return None


def add_missing_headers(
    message: dict[str, Any], extra: list[tuple[bytes, bytes]]
) -> None:
    """Append extra headers to an http.response.start message unless already set."""
    headers = list(message.get("headers", []))
    present = {name.lower() for name, _ in headers}
    headers.extend((name, value) for name, value in extra if name.lower() not in present)
    message["headers"] = headers
