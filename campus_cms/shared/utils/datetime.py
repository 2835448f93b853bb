"""
UTC datetime utilities for consistent timezone handling.

All datetime values in the system should be timezone-aware UTC.
Use these helpers instead of datetime.now() or datetime.utcnow().
"""

from datetime import UTC, date, datetime, time, timedelta
from zoneinfo import ZoneInfo


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Use this instead of:
        - datetime.now() - naive, uses local timezone
        - datetime.utcnow() - naive, deprecated in Python 3.12
        - datetime.now(UTC) - correct but verbose

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Use at repository/persistence boundaries to normalize datetimes.
    SQLite returns naive values even for timezone-aware columns.

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        # Naive datetime - assume it's UTC and attach timezone
        return dt.replace(tzinfo=UTC)

    # Aware datetime - convert to UTC
    return dt.astimezone(UTC)


def local_today(tz_name: str) -> date:
    """Return the current calendar date in the given IANA zone."""
    return datetime.now(ZoneInfo(tz_name)).date()


def day_start(day: date, tz_name: str = "UTC") -> datetime:
    """Return midnight of the given day in tz_name, as a UTC datetime."""
    return datetime.combine(day, time.min, tzinfo=ZoneInfo(tz_name)).astimezone(UTC)


def day_range(start: date, end: date, tz_name: str = "UTC") -> tuple[datetime, datetime]:
    """
    Half-open UTC range covering whole days start..end inclusive.

    Days are cut at midnight in tz_name, so a date read off a local-time
    listing selects the same rows it was read from.

    Returns:
        (start 00:00 local, day after end 00:00 local), both in UTC; filter
        with created_at >= lower AND created_at < upper.
    """
    return day_start(start, tz_name), day_start(end + timedelta(days=1), tz_name)


def format_local(dt: datetime, tz_name: str, fmt: str = "%Y-%m-%d %H:%M:%S") -> str:
    """
    Format a stored (UTC) datetime in a display timezone.

    Args:
        dt: Aware or naive-UTC datetime
        tz_name: IANA zone name, e.g. "Asia/Jakarta"
        fmt: strftime format

    Returns:
        Formatted local time string
    """
    aware = ensure_utc(dt)
    assert aware is not None
    return aware.astimezone(ZoneInfo(tz_name)).strftime(fmt)
