"""Business-day helpers for a named time zone."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


class InvalidTimeZoneError(ValueError):
    """Raised when a time zone identifier is not known to the zone database."""


def load_zone(time_zone: str) -> ZoneInfo:
    """Look up a zone by identifier, raising InvalidTimeZoneError for unknown names."""
    try:
        return ZoneInfo(time_zone)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise InvalidTimeZoneError(f"Unknown time zone: {time_zone!r}") from exc


def get_current_date(time_zone: str, now: datetime | None = None) -> datetime:
    """Return local midnight of the current day in ``time_zone``.

    ``now`` pins the clock and must be timezone aware when given. The result
    is an aware datetime in the requested zone with 00:00:00 wall-clock time.
    """
    zone = load_zone(time_zone)
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        raise ValueError("now must be timezone aware")

    local = now.astimezone(zone)
    return datetime(local.year, local.month, local.day, tzinfo=zone)


def date_string_to_utc_range(date_string: str, time_zone: str) -> tuple[datetime, datetime]:
    """Convert a local ``YYYY-MM-DD`` day into the UTC instants that bound it.

    The end is one millisecond before the next local midnight.
    """
    zone = load_zone(time_zone)
    day = date.fromisoformat(date_string)
    start_local = datetime(day.year, day.month, day.day, tzinfo=zone)
    next_day = day + timedelta(days=1)
    next_local = datetime(next_day.year, next_day.month, next_day.day, tzinfo=zone)

    start = start_local.astimezone(timezone.utc)
    end = next_local.astimezone(timezone.utc) - timedelta(milliseconds=1)
    return (start, end)


def utc_date_to_local_date_string(utc_date: datetime, time_zone: str) -> str:
    """Local calendar date (``YYYY-MM-DD``) of a UTC instant; naive input is read as UTC."""
    zone = load_zone(time_zone)
    if utc_date.tzinfo is None:
        utc_date = utc_date.replace(tzinfo=timezone.utc)
    return utc_date.astimezone(zone).date().isoformat()
