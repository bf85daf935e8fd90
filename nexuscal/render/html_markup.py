# nexuscal/render/html_markup.py
from __future__ import annotations

from typing import Iterable, Sequence

from ..model import Appointment
from ..views import AgendaModel, DayModel, MiniCalendarModel, MonthModel, RenderModel, WeekModel
from .markup.agenda import render_agenda
from .markup.header import render_header
from .markup.month import render_month
from .markup.sidebar import render_sidebar
from .markup.timegrid import render_day, render_week


def render_main(model: RenderModel) -> str:
    if isinstance(model, MonthModel):
        inner = render_month(model)
    elif isinstance(model, WeekModel):
        inner = render_week(model)
    elif isinstance(model, DayModel):
        inner = render_day(model)
    elif isinstance(model, AgendaModel):
        inner = render_agenda(model)
    else:
        raise TypeError(f"unsupported render model: {type(model).__name__}")
    return f'<main id="calendar" data-mode="{model.mode}">{inner}</main>'


def build_body(
    model: RenderModel,
    *,
    mini: MiniCalendarModel,
    today_key: str,
    hidden_types: Iterable[str] = (),
    upcoming: Sequence[Appointment] = (),
) -> str:
    return (
        render_header(model.title, model.mode)
        + '<div class="layout">'
        + render_sidebar(mini, today_key, hidden_types, upcoming)
        + render_main(model)
        + "</div>"
    )
