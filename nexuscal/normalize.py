# nexuscal/normalize.py
from __future__ import annotations

from typing import Any, List, Optional

from .model import APPOINTMENT_TYPES, Appointment, Contact
from .util.console import obs
from .util.datemath import is_date_key
from .util.timeparse import minutes_of_day


def _opt_str(v: Any) -> Optional[str]:
    if v is None:
        return None
    s = str(v).strip()
    return s or None


def _dedupe_guests(v: Any) -> List[str]:
    if not isinstance(v, (list, tuple)):
        return []
    out: List[str] = []
    seen = set()
    for g in v:
        if g is None:
            continue
        s = str(g).strip()
        if s and s not in seen:
            seen.add(s)
            out.append(s)
    return out


def normalize_appointment(t: Any) -> Optional[Appointment]:
    """Coerce a stored record into an Appointment.

    Records without an id or without a parseable date are dropped, so every
    Appointment handed to the views satisfies the date-key invariant. Times
    are kept verbatim; the layout engine absorbs malformed values.
    """
    if not isinstance(t, dict):
        return None
    ident = str(t.get("id") or "").strip()
    if not ident:
        obs("normalize", "WARN: dropping appointment without id")
        return None

    date = str(t.get("date") or "").strip()
    if not is_date_key(date):
        obs("normalize", f"WARN: dropping appointment id={ident!r} invalid date={date!r}")
        return None

    time = str(t.get("time") or "").strip()
    if minutes_of_day(time) is None:
        obs("normalize", f"WARN: appointment id={ident!r} malformed time={time!r}")

    typ = str(t.get("type") or "").strip().lower()
    if typ not in APPOINTMENT_TYPES:
        obs("normalize", f"WARN: appointment id={ident!r} unknown type={typ!r}; using 'meeting'")
        typ = "meeting"

    guests = _dedupe_guests(t.get("guests"))
    contact_id = _opt_str(t.get("contactId") or t.get("contact_id"))
    if contact_id is None and guests:
        contact_id = guests[0]

    return Appointment(
        id=ident,
        title=str(t.get("title") or ""),
        date=date,
        time=time,
        end_time=_opt_str(t.get("endTime") or t.get("end_time")),
        description=str(t.get("description") or ""),
        location=_opt_str(t.get("location")),
        meet_link=_opt_str(t.get("meetLink") or t.get("meet_link")),
        guests=tuple(guests),
        type=typ,
        contact_id=contact_id,
    )


def normalize_contact(c: Any) -> Optional[Contact]:
    if not isinstance(c, dict):
        return None
    ident = str(c.get("id") or "").strip()
    if not ident:
        return None
    return Contact(
        id=ident,
        name=str(c.get("name") or ""),
        email=str(c.get("email") or ""),
        company=str(c.get("company") or ""),
        role=str(c.get("role") or ""),
        raw=dict(c),
    )


def normalize_appointments(raw: Any) -> List[Appointment]:
    if not isinstance(raw, list):
        return []
    out: List[Appointment] = []
    for t in raw:
        a = normalize_appointment(t)
        if a is not None:
            out.append(a)
    return out


def normalize_contacts(raw: Any) -> List[Contact]:
    if not isinstance(raw, list):
        return []
    out: List[Contact] = []
    for c in raw:
        n = normalize_contact(c)
        if n is not None:
            out.append(n)
    return out
