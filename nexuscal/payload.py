# nexuscal/payload.py
from __future__ import annotations

import datetime as dt
from typing import TYPE_CHECKING, Any, Dict, Optional

from .index import build_indices
from .util.datemath import date_key
from .util.viewkey import make_view_key
from .views import RenderModel, model_to_dict

if TYPE_CHECKING:
    from .calendar import CalendarSession

SCHEMA_VERSION = 1


def _utc_iso_z_now() -> str:
    return dt.datetime.now(dt.timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def build_payload(session: "CalendarSession", *, model: Optional[RenderModel] = None) -> Dict[str, Any]:
    """Snapshot a calendar session as a JSON-ready payload.

    Layout:
      - cfg: view mode/anchor/today, geometry, filters and a `view_key`
      - appointments / contacts: wire records (camelCase keys)
      - indices: positional lookups over the full, unfiltered collection
      - view: the render model of the active view
      - upcoming: ids of the next visible appointments from today
    """
    cfg_obj = session.config
    nav = session.nav
    hidden = session.filters.hidden_types()
    layout = session.layout

    view_model = model if model is not None else session.render()

    cfg = {
        "view_mode": nav.view_mode.value,
        "anchor": date_key(nav.anchor_date),
        "today": date_key(nav.today()),
        "title": nav.title(),
        "tz": cfg_obj.tz,
        "hidden_types": hidden,
        "cell_height": int(layout.cell_height),
        "min_heights": dict(layout.min_heights),
        "default_start": cfg_obj.default_start,
        "collision": cfg_obj.collision,
        "view_key": make_view_key(
            nav.view_mode.value,
            nav.anchor_date,
            hidden,
            layout.cell_height,
            cfg_obj.collision,
        ),
    }

    return {
        "schema_version": SCHEMA_VERSION,
        "meta": {"generated_at": _utc_iso_z_now(), "generator": "nexuscal"},
        "cfg": cfg,
        "appointments": [a.to_record() for a in session.appointments],
        "contacts": [c.to_record() for c in session.contacts()],
        "indices": build_indices(session.appointments),
        "view": model_to_dict(view_model),
        "upcoming": [a.id for a in session.upcoming()],
    }
