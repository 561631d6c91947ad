"""
Lookback window arithmetic.

The cutoff is computed on the calendar, not with a fixed millisecond
constant, so "3 months before May 31" is Feb 28 (or 29), not some number
of days.

File: staleness/window.py
Author: Aidan Allchin
Created: 2026-01-06
Last Modified: 2026-01-06
"""

import calendar
from datetime import datetime, timezone, tzinfo

DEFAULT_LOOKBACK_MONTHS = 3


def subtract_months(dt: datetime, months: int) -> datetime:
    """Move a datetime back by whole calendar months, clamping the day of month."""
    month_index = dt.year * 12 + (dt.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return dt.replace(year=year, month=month, day=day)


def millis_to_datetime(millis: int, tz: tzinfo = timezone.utc) -> datetime:
    return datetime.fromtimestamp(millis / 1000, tz=tz)


def datetime_to_millis(dt: datetime) -> int:
    if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)


def compute_cutoff(now: int, months: int = DEFAULT_LOOKBACK_MONTHS, tz: tzinfo = timezone.utc) -> int:
    """
    Cutoff timestamp for a lookback window of the given number of months.

    Args:
        now: Current time (epoch millis)
        months: Size of the lookback window in calendar months
        tz: Calendar the month arithmetic happens in

    Returns:
        Epoch millis of `now` moved back `months` calendar months
    """
    return datetime_to_millis(subtract_months(millis_to_datetime(now, tz), months))
