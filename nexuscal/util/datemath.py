# nexuscal/util/datemath.py
"""Calendar date arithmetic.

Weekday numbering follows the calendar grid: 0 = Sunday .. 6 = Saturday.
All functions are total over valid dates.
"""
from __future__ import annotations

import calendar
import datetime as dt
from typing import Iterator

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

WEEKDAY_SHORT = ("SUN", "MON", "TUE", "WED", "THU", "FRI", "SAT")
WEEKDAY_INITIALS = ("S", "M", "T", "W", "T", "F", "S")


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def weekday_sun0(d: dt.date) -> int:
    # date.weekday() is Monday=0; shift so Sunday=0.
    return (d.weekday() + 1) % 7


def first_weekday_of_month(year: int, month: int) -> int:
    return weekday_sun0(dt.date(year, month, 1))


def start_of_week(d: dt.date) -> dt.date:
    """The Sunday on or before `d`."""
    return d - dt.timedelta(days=weekday_sun0(d))


def add_days(d: dt.date, n: int) -> dt.date:
    return d + dt.timedelta(days=int(n))


def add_months(d: dt.date, n: int) -> dt.date:
    """Step by whole calendar months, clamping the day to the target month length."""
    idx = d.year * 12 + (d.month - 1) + int(n)
    year, month0 = divmod(idx, 12)
    month = month0 + 1
    day = min(d.day, days_in_month(year, month))
    return dt.date(year, month, day)


def date_key(d: dt.date) -> str:
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def parse_date_key(s: str) -> dt.date:
    return dt.datetime.strptime(str(s).strip(), "%Y-%m-%d").date()


def is_date_key(s: object) -> bool:
    if not isinstance(s, str) or len(s.strip()) != 10:
        return False
    try:
        parse_date_key(s)
    except ValueError:
        return False
    return True


def iter_days(start: dt.date, end: dt.date) -> Iterator[dt.date]:
    """Inclusive range of days; empty when end < start."""
    cur = start
    while cur <= end:
        yield cur
        cur = cur + dt.timedelta(days=1)
