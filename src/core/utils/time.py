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


def to_unix_seconds(moment: datetime) -> int:
    """Whole unix seconds for an aware datetime, rounded down."""
    return int(moment.timestamp())


def to_unix_millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)
