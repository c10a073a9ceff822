"""Date manipulation utilities"""

import calendar
from datetime import datetime, timezone


def to_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime; naive values are taken to already be UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def subtract_months(value: datetime, months: int) -> datetime:
    """
    Step back a number of calendar months, keeping the time of day.

    The day is clamped to the end of the target month, so 31 Aug minus
    6 months is 28/29 Feb.
    """
    month_index = value.year * 12 + (value.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return value.replace(year=year, month=month, day=min(value.day, last_day))


def month_key(value: datetime) -> str:
    """Calendar month bucket "YYYY-MM" of the UTC instant"""
    utc = to_utc(value)
    return f"{utc.year:04d}-{utc.month:02d}"
