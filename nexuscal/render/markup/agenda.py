# nexuscal/render/markup/agenda.py
from __future__ import annotations

from html import escape

from ...views import AgendaEntry, AgendaModel, AgendaSection


def _entry(e: AgendaEntry) -> str:
    meta = escape(e.time_range)
    if e.location:
        meta += f" &middot; {escape(e.location)}"
    if e.has_video:
        meta += " &middot; Video call"
    return (
        f'<div class="entry" data-type="{e.type}" data-edit="{escape(e.id)}">'
        f'<span class="dot c-{e.color}"></span><div><div class="t">{escape(e.title)}</div>'
        f'<div class="when">{meta}</div></div></div>'
    )


def _section(s: AgendaSection) -> str:
    entries = "".join(_entry(e) for e in s.entries)
    return (
        f'<div class="day" data-date="{s.date_key}"><div class="date"><div class="num">{s.day_number}</div>'
        f'<div class="wd">{s.weekday_label} {s.month_name[:3].upper()}</div></div>'
        f'<div class="entries">{entries}</div></div>'
    )


def render_agenda(model: AgendaModel) -> str:
    if model.empty:
        return f'<div class="agenda" id="agenda"><div class="empty">{escape(model.empty_message)}</div></div>'
    return f'<div class="agenda" id="agenda">{"".join(_section(s) for s in model.groups)}</div>'
