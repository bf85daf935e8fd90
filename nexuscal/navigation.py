# nexuscal/navigation.py
from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Callable, Optional

from .util.datemath import MONTH_NAMES, add_days, add_months


class ViewMode(str, Enum):
    MONTH = "month"
    WEEK = "week"
    DAY = "day"
    AGENDA = "agenda"


def parse_view_mode(v: object) -> ViewMode:
    if isinstance(v, ViewMode):
        return v
    s = str(v or "").strip().lower()
    try:
        return ViewMode(s)
    except ValueError:
        raise ValueError(f"Unknown view mode: {v!r} (expected month, week, day or agenda)") from None


def step_anchor(anchor: dt.date, mode: ViewMode, direction: int) -> dt.date:
    """Move the anchor one navigation step (direction +1 / -1) for the given view."""
    if mode in (ViewMode.MONTH, ViewMode.AGENDA):
        return add_months(anchor, direction)
    if mode is ViewMode.WEEK:
        return add_days(anchor, 7 * direction)
    return add_days(anchor, direction)


class NavigationController:
    """Anchor date + active view mode. All transitions are total."""

    def __init__(
        self,
        anchor_date: Optional[dt.date] = None,
        view_mode: ViewMode | str = ViewMode.MONTH,
        *,
        today_fn: Callable[[], dt.date] = dt.date.today,
    ) -> None:
        self._today_fn = today_fn
        self.anchor_date: dt.date = anchor_date if anchor_date is not None else today_fn()
        self.view_mode: ViewMode = parse_view_mode(view_mode)

    def today(self) -> dt.date:
        return self._today_fn()

    def go_to_today(self) -> dt.date:
        self.anchor_date = self.today()
        return self.anchor_date

    def go_prev(self) -> dt.date:
        self.anchor_date = step_anchor(self.anchor_date, self.view_mode, -1)
        return self.anchor_date

    def go_next(self) -> dt.date:
        self.anchor_date = step_anchor(self.anchor_date, self.view_mode, +1)
        return self.anchor_date

    def set_view_mode(self, mode: ViewMode | str) -> ViewMode:
        self.view_mode = parse_view_mode(mode)
        return self.view_mode

    def select_date(self, d: dt.date) -> dt.date:
        self.anchor_date = d
        return d

    def title(self) -> str:
        if self.view_mode is ViewMode.AGENDA:
            return "Agenda"
        return f"{MONTH_NAMES[self.anchor_date.month - 1]} {self.anchor_date.year}"
