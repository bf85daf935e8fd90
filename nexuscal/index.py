# nexuscal/index.py
"""Read-only, filter-aware views over the appointment collection.

Ordering contract:
  - Within a day, appointments sort ascending by start minute; an
    unparseable time sorts as midnight, matching where the grid draws it.
  - Ties keep collection order (Python's sort is stable), so two records with
    the same date+time never swap between renders of the same collection.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .filters import FilterState
from .model import Appointment
from .util.datemath import date_key, iter_days
from .util.timeparse import minutes_of_day

DateLike = Union[dt.date, str]


def _key(d: DateLike) -> str:
    return date_key(d) if isinstance(d, dt.date) else str(d)


def _by_time(a: Appointment) -> int:
    m = minutes_of_day(a.time)
    return 0 if m is None else m


def _by_date_time(a: Appointment) -> Tuple[str, int]:
    return (a.date, _by_time(a))


@dataclass(frozen=True)
class AgendaGroup:
    date_key: str
    appointments: Tuple[Appointment, ...]


class AppointmentIndex:
    def __init__(self, appointments: Iterable[Appointment], filters: Optional[FilterState] = None) -> None:
        self._all: List[Appointment] = list(appointments)
        self._filters = filters if filters is not None else FilterState()
        self._visible: List[Appointment] = [a for a in self._all if self._filters.is_visible(a.type)]

        by_day: Dict[str, List[Appointment]] = {}
        for a in self._visible:
            by_day.setdefault(a.date, []).append(a)
        for bucket in by_day.values():
            bucket.sort(key=_by_time)
        self._by_day = by_day

    @property
    def filters(self) -> FilterState:
        return self._filters

    def visible(self) -> List[Appointment]:
        """Visible appointments in collection order."""
        return list(self._visible)

    def by_id(self, appointment_id: str) -> Optional[Appointment]:
        """Unfiltered lookup by id."""
        for a in self._all:
            if a.id == appointment_id:
                return a
        return None

    def for_date(self, day: DateLike) -> List[Appointment]:
        return list(self._by_day.get(_key(day), ()))

    def for_range(self, start: DateLike, end: DateLike) -> Dict[str, List[Appointment]]:
        """Per-day buckets for the inclusive range, one entry per day (empty days included)."""
        s = start if isinstance(start, dt.date) else dt.date.fromisoformat(str(start))
        e = end if isinstance(end, dt.date) else dt.date.fromisoformat(str(end))
        return {date_key(d): self.for_date(d) for d in iter_days(s, e)}

    def agenda_ordered(self) -> List[AgendaGroup]:
        ordered = sorted(self._visible, key=_by_date_time)
        groups: Dict[str, List[Appointment]] = {}
        for a in ordered:
            groups.setdefault(a.date, []).append(a)
        return [AgendaGroup(date_key=k, appointments=tuple(groups[k])) for k in sorted(groups)]

    def upcoming(self, today: DateLike, limit: int = 3) -> List[Appointment]:
        """Next visible appointments on or after `today`, chronologically."""
        cutoff = _key(today)
        ordered = sorted((a for a in self._visible if a.date >= cutoff), key=_by_date_time)
        return ordered[: max(0, int(limit))]


def build_indices(appointments: Sequence[Appointment]) -> Dict[str, Any]:
    """JSON-ready positional indices over the full (unfiltered) collection."""
    by_id: Dict[str, int] = {}
    by_day: Dict[str, List[int]] = {}
    by_type: Dict[str, List[int]] = {}

    for i, a in enumerate(appointments):
        by_id[a.id] = i
        by_day.setdefault(a.date, []).append(i)
        by_type.setdefault(a.type, []).append(i)

    return {"by_id": by_id, "by_day": by_day, "by_type": by_type}


__all__ = [
    "AgendaGroup",
    "AppointmentIndex",
    "build_indices",
]
