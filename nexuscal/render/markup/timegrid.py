# nexuscal/render/markup/timegrid.py
"""Week/day time grid: hour gutter + day columns with absolutely placed blocks."""
from __future__ import annotations

from html import escape
from typing import List, Sequence, Tuple

from ...views import Block, DayColumn, DayModel, WeekModel


def _px(v: float) -> str:
    return f"{v:g}px"


def _block(b: Block) -> str:
    # Lanes split the column width; in overlap mode lanes == 1 and blocks stack.
    width = 100.0 / max(1, b.lanes)
    left = width * b.lane
    style = f"top:{_px(b.top)};height:{_px(b.height)};left:{left:g}%;width:calc({width:g}% - 4px)"
    when = f"{b.time} - {b.end_time}" if b.end_time else b.time
    extra = ""
    if b.location:
        extra += f'<div class="loc">{escape(b.location)}</div>'
    if b.has_video:
        extra += '<div class="video">Video call</div>'
    return (
        f'<div class="block c-{b.color}" data-type="{b.type}" data-edit="{escape(b.id)}" style="{style}">'
        f'<div class="t">{escape(b.title)}</div><div class="when">{escape(when)}</div>{extra}</div>'
    )


def _column(col: DayColumn, cell_height: int, grid_height: int) -> str:
    slots = "".join(
        f'<div class="slot" data-create-date="{s.create.date_key}" data-create-time="{s.create.time}" '
        f'style="top:{_px(s.hour * cell_height)};height:{_px(cell_height)}"></div>'
        for s in col.slots
    )
    blocks = "".join(_block(b) for b in col.blocks)
    return f'<div class="col" data-date="{col.date_key}" style="height:{_px(grid_height)}">{slots}{blocks}</div>'


def _head(col: DayColumn) -> str:
    cls = "col-head today" if col.is_today else "col-head"
    return f'<div class="{cls}"><div class="wd">{col.weekday_label}</div><div class="num">{col.day_number}</div></div>'


def _grid(columns: Sequence[DayColumn], hour_labels: Tuple[str, ...], cell_height: int, grid_height: int) -> str:
    hours = "".join(
        f'<div class="hour" style="top:{_px(h * cell_height)}">{label}</div>' for h, label in enumerate(hour_labels)
    )
    parts: List[str] = [
        f'<div class="tg" id="timeGrid" style="--cols:{len(columns)}">',
        f'<div class="hours-wrap"><div class="col-head"></div><div class="hours" style="height:{_px(grid_height)}">{hours}</div></div>',
        '<div class="cols-wrap"><div class="cols">',
    ]
    parts.extend(_head(c) for c in columns)
    parts.append('</div><div class="cols">')
    parts.extend(_column(c, cell_height, grid_height) for c in columns)
    parts.append("</div></div></div>")
    return "".join(parts)


def render_week(model: WeekModel) -> str:
    return _grid(model.columns, model.hour_labels, model.cell_height, model.grid_height)


def render_day(model: DayModel) -> str:
    return _grid((model.column,), model.hour_labels, model.cell_height, model.grid_height)
