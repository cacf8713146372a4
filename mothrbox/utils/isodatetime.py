"""ISO 8601 / UNIX timestamp conversion utilities.

This module centralizes all transformations between Python datetime objects,
ISO 8601 strings, and the integer UNIX timestamps carried in token claims.
"""

from datetime import datetime, UTC


def utcnow() -> datetime:
    """Get the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime) -> datetime:
    """Attach UTC to naive datetimes (as returned by MongoDB)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def to_timestamp(dt: datetime) -> str:
    """Convert datetime to ISO 8601 UTC timestamp string."""
    return ensure_utc(dt).isoformat().replace("+00:00", "Z")


def to_unix(dt: datetime) -> int:
    """Convert datetime to integer seconds since the epoch."""
    return int(ensure_utc(dt).timestamp())


def now_unix() -> int:
    """Get current time as integer seconds since the epoch."""
    return to_unix(utcnow())
