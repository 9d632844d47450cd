"""Tenant-local date bucketing.

Attendance, leave and holiday rows are keyed by ``YYYY-MM-DD`` strings in the
company's configured timezone. Every helper here takes the timezone
explicitly; nothing reads the host's local time.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterator
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.exceptions import ValidationError

DATE_FORMAT = "%Y-%m-%d"


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(str(value).strip(), DATE_FORMAT).date()
    except ValueError:
        raise ValidationError(f"Invalid date (expected YYYY-MM-DD): {value!r}")


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def parse_hhmm(value: str | None) -> time | None:
    """Parse ``H:MM``/``HH:MM``; returns None for blank or malformed input."""
    v = (value or "").strip()
    if not v:
        return None
    try:
        return datetime.strptime(v, "%H:%M").time()
    except ValueError:
        return None


def get_zone(time_zone: str) -> ZoneInfo:
    try:
        return ZoneInfo(time_zone)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValidationError(f"Unknown time zone: {time_zone!r}")


def utc_now() -> datetime:
    """Current instant (timezone-aware).

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def local_date(instant: datetime, time_zone: str) -> date:
    """Calendar date of ``instant`` as seen in ``time_zone``."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(get_zone(time_zone)).date()


def date_string_in_tz(instant: datetime, time_zone: str) -> str:
    return format_date(local_date(instant, time_zone))


def local_time_to_utc(day: date, at: time, time_zone: str) -> datetime:
    """Interpret wall-clock ``day at`` in ``time_zone`` and return the UTC instant."""
    local = datetime.combine(day, at).replace(tzinfo=get_zone(time_zone))
    return local.astimezone(timezone.utc)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Inclusive calendar-day iteration; empty when end < start."""
    cursor = start
    while cursor <= end:
        yield cursor
        cursor += timedelta(days=1)


def days_inclusive(start: date, end: date) -> int:
    return (end - start).days + 1


def days_in_month(day: date) -> int:
    return calendar.monthrange(day.year, day.month)[1]


def month_range(day: date) -> tuple[date, date]:
    return day.replace(day=1), day.replace(day=days_in_month(day))
