# nexuscal/render/markup/header.py
from __future__ import annotations

from html import escape

_MODES = (("day", "Day"), ("week", "Week"), ("month", "Month"), ("agenda", "Agenda"))


def _active(on: bool) -> str:
    return ' class="active"' if on else ""


def render_header(title: str, view_mode: str) -> str:
    modes = "".join(
        f'<button type="button" data-view="{m}"{_active(m == view_mode)}>{label}</button>'
        for m, label in _MODES
    )
    return f"""<header>
  <div class="nav">
    <button type="button" class="outline" id="btnToday" data-nav="today">Today</button>
    <button type="button" id="btnPrev" data-nav="prev" title="Previous">&lsaquo;</button>
    <button type="button" id="btnNext" data-nav="next" title="Next">&rsaquo;</button>
    <div class="title" id="viewTitle">{escape(title)}</div>
  </div>
  <div class="modes" id="viewModes">{modes}</div>
</header>"""
