"""nexuscal.api

Stable *library* entrypoint for nexuscal.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from nexuscal.calendar import CalendarSession
from nexuscal.config import CalendarConfig, load_calendar_config
from nexuscal.editor import EditorClosedError, EditorDraft, EventEditor, generate_meet_link
from nexuscal.filters import FilterState
from nexuscal.html_extract import HtmlPayloadExtractError, extract_payload_json_from_html_file
from nexuscal.index import AppointmentIndex
from nexuscal.layout import LayoutEngine
from nexuscal.model import APPOINTMENT_TYPES, Appointment, Contact
from nexuscal.navigation import NavigationController, ViewMode
from nexuscal.normalize import normalize_appointment, normalize_appointments
from nexuscal.payload import build_payload
from nexuscal.render.inline import build_html
from nexuscal.store import JsonFileStore, MemoryStore, StoreError
from nexuscal.validate import PayloadValidationError, assert_valid_payload, validate_payload
from nexuscal.views import CreateIntent, EditIntent, ViewState, render_view

JsonPath = Union[str, Path]
Payload = Dict[str, Any]


def render_session_html(session: CalendarSession) -> str:
    """Render the session's active view as a self-contained HTML page."""
    model = session.render()
    payload = build_payload(session, model=model)
    return build_html(payload, model, mini=session.mini_calendar(), upcoming=session.upcoming())


def load_payload_from_json(path: JsonPath, *, validate: bool = True) -> Payload:
    p = Path(path)
    obj = json.loads(p.read_text(encoding="utf-8"))
    if not isinstance(obj, dict):
        raise PayloadValidationError(f"payload must be a JSON object; got {type(obj).__name__}")
    if validate:
        assert_valid_payload(obj)
    return obj


def load_payload_from_html(path: JsonPath, *, validate: bool = True) -> Payload:
    obj = extract_payload_json_from_html_file(path)
    if validate:
        assert_valid_payload(obj)
    return obj


def _records(payload: dict) -> list:
    a = payload.get("appointments") or []
    return a if isinstance(a, list) else []


def _pluck(payload: dict, idxs: object) -> List[dict]:
    recs = _records(payload)
    if not isinstance(idxs, list):
        return []
    return [recs[i] for i in idxs if isinstance(i, int) and 0 <= i < len(recs) and isinstance(recs[i], dict)]


def appointment_by_id(payload: dict, appointment_id: str) -> Optional[dict]:
    idx = (payload.get("indices") or {}).get("by_id") or {}
    i = idx.get(appointment_id)
    got = _pluck(payload, [i])
    if got and got[0].get("id") == appointment_id:
        return got[0]
    for rec in _records(payload):
        if isinstance(rec, dict) and rec.get("id") == appointment_id:
            return rec
    return None


def appointments_by_day(payload: dict, ymd: str) -> List[dict]:
    return _pluck(payload, ((payload.get("indices") or {}).get("by_day") or {}).get(ymd))


def appointments_by_type(payload: dict, typ: str) -> List[dict]:
    return _pluck(payload, ((payload.get("indices") or {}).get("by_type") or {}).get(typ))


_PUBLIC_EXPORTS = [
    "APPOINTMENT_TYPES",
    "Appointment",
    "AppointmentIndex",
    "CalendarConfig",
    "CalendarSession",
    "Contact",
    "CreateIntent",
    "EditIntent",
    "EditorClosedError",
    "EditorDraft",
    "EventEditor",
    "FilterState",
    "HtmlPayloadExtractError",
    "JsonFileStore",
    "LayoutEngine",
    "MemoryStore",
    "NavigationController",
    "PayloadValidationError",
    "StoreError",
    "ViewMode",
    "ViewState",
    "appointment_by_id",
    "appointments_by_day",
    "appointments_by_type",
    "assert_valid_payload",
    "build_html",
    "build_payload",
    "generate_meet_link",
    "load_calendar_config",
    "load_payload_from_html",
    "load_payload_from_json",
    "normalize_appointment",
    "normalize_appointments",
    "render_session_html",
    "render_view",
    "validate_payload",
]

__all__ = [n for n in _PUBLIC_EXPORTS if n in globals()]
