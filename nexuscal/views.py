# nexuscal/views.py
"""View renderers: one contract, four projections.

`render_view(state)` picks the renderer for `state.mode` and returns a plain
render model (frozen dataclasses, convertible with `model_to_dict`). Every
model exposes the two editor entry points:
  - CreateIntent on empty cells/slots (date, plus the hour in grid views)
  - EditIntent on each rendered appointment
"""
from __future__ import annotations

import dataclasses
import datetime as dt
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from .index import AppointmentIndex
from .layout import BlockGeometry, LayoutEngine, assign_lanes, slot_time
from .model import TYPE_COLORS, Appointment
from .navigation import ViewMode, parse_view_mode, step_anchor
from .util.datemath import (
    MONTH_NAMES,
    WEEKDAY_INITIALS,
    WEEKDAY_SHORT,
    add_days,
    date_key,
    days_in_month,
    first_weekday_of_month,
    parse_date_key,
    start_of_week,
    weekday_sun0,
)

MONTH_GRID_CELLS = 42
AGENDA_EMPTY_MESSAGE = "No events scheduled."


@dataclass(frozen=True)
class CreateIntent:
    date_key: str
    time: Optional[str] = None


@dataclass(frozen=True)
class EditIntent:
    appointment_id: str


@dataclass(frozen=True)
class MonthItem:
    id: str
    time: str
    title: str
    type: str
    color: str
    edit: EditIntent


@dataclass(frozen=True)
class MonthCell:
    date_key: Optional[str]
    day: Optional[int]
    is_today: bool
    items: Tuple[MonthItem, ...]
    create: Optional[CreateIntent]

    @property
    def is_padding(self) -> bool:
        return self.date_key is None


@dataclass(frozen=True)
class MonthModel:
    mode: str
    title: str
    year: int
    month: int
    leading: int
    weekday_labels: Tuple[str, ...]
    cells: Tuple[MonthCell, ...]


@dataclass(frozen=True)
class Slot:
    hour: int
    create: CreateIntent


@dataclass(frozen=True)
class Block:
    id: str
    title: str
    type: str
    color: str
    time: str
    end_time: Optional[str]
    top: float
    height: float
    lane: int
    lanes: int
    description: str
    location: Optional[str]
    has_video: bool
    edit: EditIntent


@dataclass(frozen=True)
class DayColumn:
    date_key: str
    weekday_label: str
    day_number: int
    is_today: bool
    slots: Tuple[Slot, ...]
    blocks: Tuple[Block, ...]


@dataclass(frozen=True)
class WeekModel:
    mode: str
    title: str
    start: str
    end: str
    hour_labels: Tuple[str, ...]
    cell_height: int
    grid_height: int
    columns: Tuple[DayColumn, ...]


@dataclass(frozen=True)
class DayModel:
    mode: str
    title: str
    heading: str
    hour_labels: Tuple[str, ...]
    cell_height: int
    grid_height: int
    column: DayColumn


@dataclass(frozen=True)
class AgendaEntry:
    id: str
    title: str
    type: str
    color: str
    time: str
    time_range: str
    location: Optional[str]
    has_video: bool
    edit: EditIntent


@dataclass(frozen=True)
class AgendaSection:
    date_key: str
    day_number: int
    weekday_label: str
    month_name: str
    entries: Tuple[AgendaEntry, ...]


@dataclass(frozen=True)
class AgendaModel:
    mode: str
    title: str
    empty: bool
    empty_message: str
    groups: Tuple[AgendaSection, ...]


@dataclass(frozen=True)
class MiniDay:
    date_key: str
    day: int
    is_today: bool


@dataclass(frozen=True)
class MiniCalendarModel:
    title: str
    weekday_initials: Tuple[str, ...]
    leading: int
    days: Tuple[MiniDay, ...]


RenderModel = Union[MonthModel, WeekModel, DayModel, AgendaModel]


@dataclass(frozen=True)
class ViewState:
    mode: ViewMode
    anchor: dt.date
    today: dt.date
    index: AppointmentIndex
    layout: LayoutEngine = dataclasses.field(default_factory=LayoutEngine)
    collision: str = "overlap"


def _color(a: Appointment) -> str:
    return TYPE_COLORS.get(a.type, "gray")


def _month_title(d: dt.date) -> str:
    return f"{MONTH_NAMES[d.month - 1]} {d.year}"


class ViewRenderer:
    mode: ViewMode

    def render(self, state: ViewState) -> RenderModel:
        raise NotImplementedError

    def step(self, anchor: dt.date, direction: int) -> dt.date:
        return step_anchor(anchor, self.mode, direction)


class MonthView(ViewRenderer):
    mode = ViewMode.MONTH

    def render(self, state: ViewState) -> MonthModel:
        year, month = state.anchor.year, state.anchor.month
        leading = first_weekday_of_month(year, month)
        total = days_in_month(year, month)

        cells: List[MonthCell] = []
        for _ in range(leading):
            cells.append(MonthCell(date_key=None, day=None, is_today=False, items=(), create=None))

        for day in range(1, total + 1):
            d = dt.date(year, month, day)
            key = date_key(d)
            items = tuple(
                MonthItem(id=a.id, time=a.time, title=a.title, type=a.type, color=_color(a), edit=EditIntent(a.id))
                for a in state.index.for_date(key)
            )
            cells.append(
                MonthCell(
                    date_key=key,
                    day=day,
                    is_today=(d == state.today),
                    items=items,
                    create=CreateIntent(date_key=key),
                )
            )

        while len(cells) < MONTH_GRID_CELLS:
            cells.append(MonthCell(date_key=None, day=None, is_today=False, items=(), create=None))

        return MonthModel(
            mode=self.mode.value,
            title=_month_title(state.anchor),
            year=year,
            month=month,
            leading=leading,
            weekday_labels=WEEKDAY_SHORT,
            cells=tuple(cells),
        )


def _blocks_for(state: ViewState, appointments: List[Appointment], view: str) -> Tuple[Block, ...]:
    geoms: List[BlockGeometry] = [state.layout.place(a, view) for a in appointments]
    if state.collision == "lanes":
        geoms = assign_lanes(geoms)
    return tuple(
        Block(
            id=a.id,
            title=a.title,
            type=a.type,
            color=_color(a),
            time=a.time,
            end_time=a.end_time,
            top=g.top,
            height=g.height,
            lane=g.lane,
            lanes=g.lanes,
            description=a.description,
            location=a.location,
            has_video=bool(a.meet_link),
            edit=EditIntent(a.id),
        )
        for a, g in zip(appointments, geoms)
    )


def _column(state: ViewState, d: dt.date, appointments: List[Appointment], view: str) -> DayColumn:
    key = date_key(d)
    return DayColumn(
        date_key=key,
        weekday_label=WEEKDAY_SHORT[weekday_sun0(d)],
        day_number=d.day,
        is_today=(d == state.today),
        slots=tuple(Slot(hour=h, create=CreateIntent(date_key=key, time=slot_time(h))) for h in range(24)),
        blocks=_blocks_for(state, appointments, view),
    )


class WeekView(ViewRenderer):
    mode = ViewMode.WEEK

    def render(self, state: ViewState) -> WeekModel:
        start = start_of_week(state.anchor)
        end = add_days(start, 6)
        buckets = state.index.for_range(start, end)
        columns = tuple(
            _column(state, parse_date_key(key), appts, "week") for key, appts in buckets.items()
        )
        return WeekModel(
            mode=self.mode.value,
            title=_month_title(state.anchor),
            start=date_key(start),
            end=date_key(end),
            hour_labels=tuple(state.layout.hour_labels()),
            cell_height=state.layout.cell_height,
            grid_height=state.layout.grid_height(),
            columns=columns,
        )


class DayView(ViewRenderer):
    mode = ViewMode.DAY

    def render(self, state: ViewState) -> DayModel:
        d = state.anchor
        col = _column(state, d, state.index.for_date(d), "day")
        return DayModel(
            mode=self.mode.value,
            title=_month_title(d),
            heading=f"{d.day} {MONTH_NAMES[d.month - 1]}",
            hour_labels=tuple(state.layout.hour_labels()),
            cell_height=state.layout.cell_height,
            grid_height=state.layout.grid_height(),
            column=col,
        )


class AgendaView(ViewRenderer):
    mode = ViewMode.AGENDA

    def render(self, state: ViewState) -> AgendaModel:
        sections: List[AgendaSection] = []
        for g in state.index.agenda_ordered():
            d = parse_date_key(g.date_key)
            entries = tuple(
                AgendaEntry(
                    id=a.id,
                    title=a.title,
                    type=a.type,
                    color=_color(a),
                    time=a.time,
                    time_range=f"{a.time} - {a.end_time}" if a.end_time else a.time,
                    location=a.location,
                    has_video=bool(a.meet_link),
                    edit=EditIntent(a.id),
                )
                for a in g.appointments
            )
            sections.append(
                AgendaSection(
                    date_key=g.date_key,
                    day_number=d.day,
                    weekday_label=WEEKDAY_SHORT[weekday_sun0(d)],
                    month_name=MONTH_NAMES[d.month - 1],
                    entries=entries,
                )
            )
        return AgendaModel(
            mode=self.mode.value,
            title="Agenda",
            empty=not sections,
            empty_message=AGENDA_EMPTY_MESSAGE,
            groups=tuple(sections),
        )


RENDERERS: Dict[ViewMode, ViewRenderer] = {
    ViewMode.MONTH: MonthView(),
    ViewMode.WEEK: WeekView(),
    ViewMode.DAY: DayView(),
    ViewMode.AGENDA: AgendaView(),
}


def renderer_for(mode: Union[ViewMode, str]) -> ViewRenderer:
    return RENDERERS[parse_view_mode(mode)]


def render_view(state: ViewState) -> RenderModel:
    return renderer_for(state.mode).render(state)


def render_mini_calendar(anchor: dt.date, today: dt.date) -> MiniCalendarModel:
    year, month = anchor.year, anchor.month
    days = tuple(
        MiniDay(date_key=date_key(dt.date(year, month, i)), day=i, is_today=(dt.date(year, month, i) == today))
        for i in range(1, days_in_month(year, month) + 1)
    )
    return MiniCalendarModel(
        title=_month_title(anchor),
        weekday_initials=WEEKDAY_INITIALS,
        leading=first_weekday_of_month(year, month),
        days=days,
    )


def model_to_dict(model: Any) -> Dict[str, Any]:
    return dataclasses.asdict(model)


__all__ = [
    "AGENDA_EMPTY_MESSAGE",
    "MONTH_GRID_CELLS",
    "CreateIntent",
    "EditIntent",
    "MonthItem",
    "MonthCell",
    "MonthModel",
    "Slot",
    "Block",
    "DayColumn",
    "WeekModel",
    "DayModel",
    "AgendaEntry",
    "AgendaSection",
    "AgendaModel",
    "MiniDay",
    "MiniCalendarModel",
    "RenderModel",
    "ViewState",
    "ViewRenderer",
    "MonthView",
    "WeekView",
    "DayView",
    "AgendaView",
    "RENDERERS",
    "renderer_for",
    "render_view",
    "render_mini_calendar",
    "model_to_dict",
]
