# nexuscal/render/markup/sidebar.py
from __future__ import annotations

from html import escape
from typing import Iterable, Sequence

from ...model import APPOINTMENT_TYPES, TYPE_COLORS, TYPE_LABELS, Appointment
from ...views import MiniCalendarModel


def render_mini_calendar(mini: MiniCalendarModel) -> str:
    head = "".join(f'<div class="mini-head">{w}</div>' for w in mini.weekday_initials)
    pad = '<div class="mini-day pad"></div>' * mini.leading
    days = "".join(
        f'<div class="mini-day{" today" if d.is_today else ""}" data-date="{d.date_key}">{d.day}</div>'
        for d in mini.days
    )
    return (
        f'<div class="mini" id="miniCalendar"><div class="mini-title">{escape(mini.title)}</div>'
        f'<div class="mini-grid">{head}{pad}{days}</div></div>'
    )


def render_filters(hidden_types: Iterable[str]) -> str:
    hidden = set(hidden_types)
    rows = []
    for typ in APPOINTMENT_TYPES:
        # hidden types are omitted from the markup; their box stays off
        state = " disabled" if typ in hidden else " checked"
        rows.append(
            f'<label><input type="checkbox" data-filter-type="{typ}"{state} />'
            f'<span class="dot c-{TYPE_COLORS[typ]}"></span>{TYPE_LABELS[typ]}</label>'
        )
    return f'<div class="filters" id="typeFilters"><h4>My calendars</h4>{"".join(rows)}</div>'


def render_upcoming(upcoming: Sequence[Appointment]) -> str:
    if not upcoming:
        return ""
    items = "".join(
        f'<li data-edit="{escape(a.id)}" data-type="{a.type}"><div>{escape(a.title)}</div>'
        f'<div class="when">{a.date} {escape(a.time)}</div></li>'
        for a in upcoming
    )
    return f'<div class="upcoming"><h4>Upcoming</h4><ul>{items}</ul></div>'


def render_sidebar(
    mini: MiniCalendarModel,
    today_key: str,
    hidden_types: Iterable[str],
    upcoming: Sequence[Appointment] = (),
) -> str:
    return (
        '<aside id="sidebar">'
        f'<button type="button" class="create" id="btnCreate" data-create-date="{today_key}">+ Create</button>'
        f"{render_mini_calendar(mini)}{render_filters(hidden_types)}{render_upcoming(upcoming)}"
        "</aside>"
    )
