import calendar
from datetime import date, datetime, timedelta
from typing import Optional, Tuple

import pytz


def now(tz_name: Optional[str] = None) -> datetime:
    if tz_name:
        return datetime.now(pytz.timezone(tz_name))
    return datetime.now()


def today(tz_name: Optional[str] = None) -> date:
    return now(tz_name).date()


def days_in_month(year: int, month: int) -> int:
    """Number of days in a zero-based month of the given year."""
    if not 0 <= month < 12:
        raise ValueError(f"month index {month} is not in 0..11")
    return calendar.monthrange(year, month + 1)[1]


def normalize_month(year: int, month: int) -> Tuple[int, int]:
    """Roll a zero-based month index outside 0..11 into the adjacent years."""
    return year + month // 12, month % 12


def add_days(dt: date, days: int) -> date:
    return dt + timedelta(days=days)


def month_key(year: int, month: int) -> str:
    return f"{year:04d}-{month + 1:02d}"
