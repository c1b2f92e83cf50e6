"""Date manipulation utilities"""

import math
from datetime import date, datetime, timedelta, timezone
from typing import Union

DateLike = Union[date, datetime]

SECONDS_PER_DAY = 24 * 60 * 60


def utc_now() -> datetime:
    """Current time as a naive UTC datetime, the clock every recency calculation uses"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_datetime(value: DateLike) -> datetime:
    """
    Promote a date to a datetime at midnight.

    Aware datetimes are converted to naive UTC so they compare against
    naive values.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return datetime(value.year, value.month, value.day)


def days_between(first: DateLike, second: DateLike) -> int:
    """Absolute whole-day difference, rounded up (partial days count as a full day)"""
    delta = abs(as_datetime(second) - as_datetime(first))
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def month_key(value: DateLike) -> str:
    """Calendar month bucket (UTC for aware datetimes), e.g. 2024-01"""
    value = as_datetime(value)
    return f"{value.year}-{value.month:02d}"


def add_days(from_date: DateLike, days: int) -> DateLike:
    return from_date + timedelta(days=days)
