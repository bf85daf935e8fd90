# nexuscal/util/timeparse.py
from __future__ import annotations

import datetime as dt
import re
from typing import Optional, Tuple

_HHMM_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")

MINUTES_PER_DAY = 24 * 60
LAST_MINUTE = MINUTES_PER_DAY - 1


def parse_hhmm(s: str) -> Tuple[int, int]:
    m = _HHMM_RE.match(s.strip())
    if not m:
        raise ValueError(f"Invalid HH:MM: {s!r}")
    hh = int(m.group(1))
    mm = int(m.group(2))
    if not (0 <= hh <= 23 and 0 <= mm <= 59):
        raise ValueError(f"Invalid HH:MM: {s!r}")
    return hh, mm


def minutes_of_day(s: object) -> Optional[int]:
    """Lenient HH:MM -> minutes since midnight; None for anything unparseable."""
    if not isinstance(s, str):
        return None
    try:
        hh, mm = parse_hhmm(s)
    except ValueError:
        return None
    return hh * 60 + mm


def format_hhmm(minutes: int) -> str:
    minutes = max(0, min(LAST_MINUTE, int(minutes)))
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def add_minutes_hhmm(s: str, delta: int) -> Optional[str]:
    """Shift an HH:MM string, clamped to the same day. None when `s` is malformed."""
    start = minutes_of_day(s)
    if start is None:
        return None
    return format_hhmm(start + int(delta))


def default_end_time(start: str, duration_min: int = 60) -> str:
    end = add_minutes_hhmm(start, duration_min)
    return end if end is not None else "10:00"


def parse_date_yyyy_mm_dd(s: str) -> dt.date:
    return dt.datetime.strptime(s, "%Y-%m-%d").date()
