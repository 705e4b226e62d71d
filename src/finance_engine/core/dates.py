#!/usr/bin/env python3
"""
Instant Helpers

Normalizes the instants found in CD records (datetimes, dates, or ISO strings
as stored by the CRUD layer) into timezone-aware UTC datetimes and provides
the whole-day arithmetic the calculators rely on.
"""

import calendar
from datetime import date, datetime, time, timedelta, timezone

ONE_DAY = timedelta(days=1)


def utc_now() -> datetime:
    """Current instant in UTC. Only outer layers and injected clocks call this."""
    return datetime.now(timezone.utc)


def to_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_instant(value: datetime | date | str | None) -> datetime | None:
    """
    Parse an instant from a record field.

    Args:
        value: datetime, date (midnight UTC), ISO 8601 string, or None

    Returns:
        Aware UTC datetime, or None if the value is missing or unparsable
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return to_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return to_utc(datetime.fromisoformat(text))
    except ValueError:
        return None


def whole_days_between(start: datetime, end: datetime) -> int:
    """
    Whole days from start to end, floored.

    Negative when end precedes start: one hour before start is -1.
    """
    return (to_utc(end) - to_utc(start)) // ONE_DAY


def add_months(value: datetime, months: int) -> datetime:
    """
    Add calendar months, clamping the day to the target month's length.

    Example:
        add_months(2024-01-31, 1) -> 2024-02-29
    """
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)
