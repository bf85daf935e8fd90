# nexuscal/render/inline.py
from __future__ import annotations

from typing import Optional, Sequence

import orjson

from ..model import Appointment
from ..util.datemath import parse_date_key
from ..views import MiniCalendarModel, RenderModel, render_mini_calendar
from .html_markup import build_body
from .template import BODY_MARKER, DATA_MARKER, HTML_TEMPLATE

_DATA_MARKER_COUNT = HTML_TEMPLATE.count(DATA_MARKER)
_BODY_MARKER_COUNT = HTML_TEMPLATE.count(BODY_MARKER)


def build_html(
    payload: dict,
    model: RenderModel,
    *,
    mini: Optional[MiniCalendarModel] = None,
    upcoming: Sequence[Appointment] = (),
) -> str:
    # Inject body markup and DATA JSON into the HTML template.
    # Hardening:
    #   - Template must contain each placeholder exactly once.
    #   - Injection splits on the template's own markers, so user text that
    #     happens to contain a marker string is never substituted.
    if not isinstance(payload, dict):
        raise TypeError(f"payload must be dict, got {type(payload).__name__}")

    if _DATA_MARKER_COUNT != 1:
        raise RuntimeError(f"HTML_TEMPLATE must contain {DATA_MARKER} exactly once (found {_DATA_MARKER_COUNT})")
    if _BODY_MARKER_COUNT != 1:
        raise RuntimeError(f"HTML_TEMPLATE must contain {BODY_MARKER} exactly once (found {_BODY_MARKER_COUNT})")

    cfg = payload.get("cfg") or {}
    today_key = str(cfg.get("today") or "")
    if mini is None:
        mini = render_mini_calendar(parse_date_key(str(cfg["anchor"])), parse_date_key(today_key))

    body = build_body(
        model,
        mini=mini,
        today_key=today_key,
        hidden_types=cfg.get("hidden_types") or (),
        upcoming=upcoming,
    )

    data_json = orjson.dumps(payload).decode("utf-8")
    data_json = data_json.replace("</", r"<\/")  # script-safe injection

    head, tail = HTML_TEMPLATE.split(DATA_MARKER)
    before_body, after_body = head.split(BODY_MARKER)
    html = before_body + body + after_body + data_json + tail

    if html.count('<script id="nx-data"') != 1:
        raise RuntimeError("HTML generation failed: data block missing or duplicated")

    return html
