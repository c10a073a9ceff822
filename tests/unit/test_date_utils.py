"""Unit tests for date helpers"""

from datetime import datetime, timedelta, timezone
from altscore_gateway.utils.date_utils import month_key, subtract_months, to_utc


def test_subtract_months_keeps_day_and_time():
    value = datetime(2024, 7, 15, 9, 30, tzinfo=timezone.utc)
    assert subtract_months(value, 6) == datetime(2024, 1, 15, 9, 30, tzinfo=timezone.utc)


def test_subtract_months_crosses_year():
    assert subtract_months(datetime(2024, 3, 15), 6) == datetime(2023, 9, 15)


def test_subtract_months_clamps_to_month_end():
    """Short target months take their last day"""
    assert subtract_months(datetime(2024, 8, 31), 6) == datetime(2024, 2, 29)
    assert subtract_months(datetime(2023, 8, 31), 6) == datetime(2023, 2, 28)
    assert subtract_months(datetime(2024, 12, 31), 6) == datetime(2024, 6, 30)


def test_to_utc():
    naive = datetime(2024, 1, 1, 12, 0)
    assert to_utc(naive) == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    eastern = timezone(timedelta(hours=-5))
    converted = to_utc(datetime(2024, 1, 1, 22, 0, tzinfo=eastern))
    assert converted.tzinfo == timezone.utc
    assert (converted.day, converted.hour) == (2, 3)


def test_month_key():
    assert month_key(datetime(2024, 3, 9)) == "2024-03"
    assert month_key(datetime(2024, 12, 31, 23, 0, tzinfo=timezone(timedelta(hours=-2)))) == "2025-01"
