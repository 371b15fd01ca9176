"""
Time-related utilities for the application.

All timestamps are generated in UTC and serialized using
ISO-8601 format with timezone information.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    """Return current UTC time in ISO-8601 format.

    Example:
        2024-01-15T10:42:31.123456+00:00
    """
    return utc_now().isoformat()


def to_utc_iso(value: datetime | str | float | None) -> str | None:
    """Normalize a database or filesystem timestamp to ISO-8601 UTC.

    Accepts aware or naive datetimes (naive values are assumed to be UTC,
    which is how SQLite hands back ``TIMESTAMP`` columns), ISO strings and
    POSIX timestamps from ``os.stat``.
    """
    if value is None:
        return None

    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc).isoformat()

    if isinstance(value, str):
        value = datetime.fromisoformat(value)

    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)

    return value.astimezone(timezone.utc).isoformat()
