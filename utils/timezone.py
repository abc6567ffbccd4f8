"""UTC-everywhere time handling. Eliminates timezone bugs at the source."""

from datetime import datetime, timezone


def now_utc() -> datetime:
    """
    Current time in UTC.

    Use this instead of datetime.now() everywhere.
    """
    return datetime.now(timezone.utc)


def now_iso() -> str:
    """
    Current UTC time as an ISO 8601 string with fixed microsecond precision.

    Fixed width keeps stored timestamps correctly ordered when compared as
    text.
    """
    return now_utc().isoformat(timespec="microseconds")
