"""Local calendar helpers."""

from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo


def local_today(timezone_name: str, now: datetime | None = None) -> date:
    """Return the calendar date in the given timezone."""
    tz = ZoneInfo(timezone_name)
    current = now.astimezone(tz) if now else datetime.now(tz=tz)
    return current.date()


def seconds_until_next_local_midnight(
    timezone_name: str, now: datetime | None = None
) -> float:
    """Return the number of seconds until the next local midnight."""
    tz = ZoneInfo(timezone_name)
    current = now.astimezone(tz) if now else datetime.now(tz=tz)
    start = current.replace(hour=0, minute=0, second=0, microsecond=0)
    next_midnight = start + timedelta(days=1)
    return (next_midnight.astimezone(UTC) - current.astimezone(UTC)).total_seconds()
