"""Convert frozen DTOs into JSON-ready dicts (cache values and API payloads)."""

from __future__ import annotations

from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from typing import Any

from campus_cms.shared.utils.datetime import ensure_utc


def _jsonable(value: Any) -> Any:
    if isinstance(value, datetime):
        return ensure_utc(value).isoformat()  # type: ignore[union-attr]
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [_jsonable(v) for v in value]
    return value


def to_payload(dto: Any) -> dict[str, Any]:
    """Return dto as a dict of JSON primitives (dates as ISO strings)."""
    if not is_dataclass(dto) or isinstance(dto, type):
        raise TypeError(f"Expected a dataclass instance, got {type(dto).__name__}")
    return _jsonable(asdict(dto))


def to_payloads(dtos: list[Any]) -> list[dict[str, Any]]:
    """to_payload over a list."""
    return [to_payload(d) for d in dtos]
