"""Payload validation helpers (library-facing)."""

from __future__ import annotations

from typing import Any, Dict, List

from .model import APPOINTMENT_TYPES
from .payload import SCHEMA_VERSION
from .util.datemath import is_date_key


class PayloadValidationError(ValueError):
    """Raised when a payload fails validation."""


def _require(cond: bool, msg: str, errs: List[str]) -> None:
    if not cond:
        errs.append(msg)


def validate_appointment_record(rec: Any, *, label: str = "appointment") -> List[str]:
    """Check one wire record. Times stay free-form; the layout absorbs malformed values."""
    if not isinstance(rec, dict):
        return [f"{label} must be dict"]
    errs: List[str] = []
    aid = rec.get("id")
    _require(isinstance(aid, str) and bool(aid.strip()), f"{label}.id must be non-empty string", errs)
    _require(isinstance(rec.get("title"), str), f"{label}.title must be string", errs)
    d = rec.get("date")
    _require(isinstance(d, str) and is_date_key(d), f"{label}.date must be YYYY-MM-DD", errs)
    _require(isinstance(rec.get("time"), str), f"{label}.time must be string", errs)
    et = rec.get("endTime")
    if et is not None:
        _require(isinstance(et, str), f"{label}.endTime must be string", errs)
    _require(rec.get("type") in APPOINTMENT_TYPES, f"{label}.type must be one of {', '.join(APPOINTMENT_TYPES)}", errs)
    guests = rec.get("guests", [])
    _require(
        isinstance(guests, list) and all(isinstance(g, str) for g in guests),
        f"{label}.guests must be list of strings",
        errs,
    )
    return errs


def validate_payload(payload: Dict[str, Any], *, label: str = "payload") -> List[str]:
    if not isinstance(payload, dict):
        return [f"{label}: payload must be a dict/object"]

    errs: List[str] = []
    sv = payload.get("schema_version")
    if not isinstance(sv, int):
        return [f"{label}: schema_version must be an int"]
    if sv != SCHEMA_VERSION:
        return [f"Unsupported schema_version: {sv} (latest={SCHEMA_VERSION})"]

    meta = payload.get("meta")
    ga = meta.get("generated_at") if isinstance(meta, dict) else None
    _require(isinstance(ga, str) and bool(ga.strip()), f"{label}: meta.generated_at must be non-empty string", errs)

    cfg = payload.get("cfg")
    appts = payload.get("appointments")
    indices = payload.get("indices")
    _require(isinstance(cfg, dict), f"{label}: cfg must be dict", errs)
    _require(isinstance(appts, list), f"{label}: appointments must be list", errs)
    _require(isinstance(payload.get("contacts"), list), f"{label}: contacts must be list", errs)
    _require(isinstance(indices, dict), f"{label}: indices must be dict", errs)
    _require(isinstance(payload.get("view"), dict), f"{label}: view must be dict", errs)

    if isinstance(cfg, dict):
        for k in ("view_mode", "anchor", "today", "cell_height", "view_key"):
            _require(k in cfg, f"{label}: cfg missing key: {k}", errs)

    if isinstance(appts, list):
        seen = set()
        for i, rec in enumerate(appts):
            errs.extend(validate_appointment_record(rec, label=f"{label}: appointments[{i}]"))
            if isinstance(rec, dict):
                aid = rec.get("id")
                if aid in seen:
                    errs.append(f"{label}: duplicate appointment id {aid!r}")
                seen.add(aid)

    if isinstance(indices, dict):
        for k in ("by_id", "by_day", "by_type"):
            _require(k in indices, f"{label}: indices missing key: {k}", errs)

    # Cross-check indices.by_id -> appointment position
    if isinstance(appts, list) and isinstance(indices, dict) and isinstance(indices.get("by_id"), dict):
        for aid, idx in indices["by_id"].items():
            if not isinstance(idx, int) or idx < 0 or idx >= len(appts):
                errs.append(f"{label}: indices.by_id[{aid!r}] out of range: {idx!r} (appointments={len(appts)})")
                continue
            rec = appts[idx]
            if isinstance(rec, dict) and rec.get("id") != aid:
                errs.append(f"{label}: indices.by_id[{aid!r}] points to appointments[{idx}] with id={rec.get('id')!r}")

    return errs


def assert_valid_payload(payload: Dict[str, Any]) -> None:
    if not isinstance(payload, dict):
        raise PayloadValidationError("payload must be a JSON object")
    errs = validate_payload(payload, label="payload")
    if errs:
        raise PayloadValidationError(errs[0])


__all__ = [
    "PayloadValidationError",
    "assert_valid_payload",
    "validate_appointment_record",
    "validate_payload",
]
