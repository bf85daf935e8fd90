# nexuscal/render/markup/month.py
from __future__ import annotations

from html import escape
from typing import List

from ...views import MonthCell, MonthModel


def _cell(c: MonthCell) -> str:
    if c.is_padding or c.create is None:
        return '<div class="cell pad"></div>'
    items = "".join(
        f'<div class="item c-{it.color}" data-type="{it.type}" data-edit="{escape(it.id)}">'
        f"{escape(it.time)} {escape(it.title)}</div>"
        for it in c.items
    )
    cls = "cell today" if c.is_today else "cell"
    return f'<div class="{cls}" data-create-date="{c.create.date_key}"><span class="num">{c.day}</span>{items}</div>'


def render_month(model: MonthModel) -> str:
    parts: List[str] = ['<div class="month" id="monthGrid">']
    parts.extend(f'<div class="wd">{w}</div>' for w in model.weekday_labels)
    parts.extend(_cell(c) for c in model.cells)
    parts.append("</div>")
    return "".join(parts)
