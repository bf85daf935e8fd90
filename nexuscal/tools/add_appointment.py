#!/usr/bin/env python3
"""Create an appointment headlessly through the calendar's editor workflow."""
from __future__ import annotations

import argparse
import sys
from typing import List, Sequence

import orjson

from nexuscal.calendar import CalendarSession
from nexuscal.config import default_store_path, load_calendar_config
from nexuscal.editor import meet_join_url
from nexuscal.model import APPOINTMENT_TYPES, Contact
from nexuscal.store import JsonFileStore, StoreError
from nexuscal.util.datemath import is_date_key
from nexuscal.util.timeparse import minutes_of_day


def _die(msg: str, rc: int = 2) -> int:
    print(f"[nexuscal-add] ERROR: {msg}", file=sys.stderr)
    return rc


def _already_guest(contacts: Sequence[Contact], guests: Sequence[str], name: str) -> bool:
    q = name.strip().lower()
    return bool(q) and any(c.id in guests and q in c.name.lower() for c in contacts)


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="nexuscal-add",
        description="Add an appointment to the calendar store (same defaults as clicking a day/slot).",
    )
    ap.add_argument("--store", default=default_store_path(), help="Storage JSON path (default: env NEXUSCAL_STORE)")
    ap.add_argument("--config", default=None, help="Calendar config JSON (default_start)")
    ap.add_argument("--date", required=True, help="Appointment date YYYY-MM-DD")
    ap.add_argument("--time", default=None, help="Start time HH:MM (default: config default_start, 09:00)")
    ap.add_argument("--end", default=None, help="End time HH:MM (default: start + 1h)")
    ap.add_argument("--title", default="", help="Title (blank -> placeholder)")
    ap.add_argument("--type", dest="typ", default="meeting", choices=list(APPOINTMENT_TYPES))
    ap.add_argument("--location", default="")
    ap.add_argument("--description", default="")
    ap.add_argument("--guest", action="append", default=[], help="Guest by (partial) contact name; repeatable")
    ap.add_argument("--meet", action="store_true", help="Attach a generated video meeting link")
    ap.add_argument("--json", action="store_true", help="Print the stored record as JSON instead of the id")
    ns = ap.parse_args(argv)

    if not is_date_key(ns.date):
        return _die(f"Invalid --date: {ns.date!r} (expected YYYY-MM-DD)")
    for flag, value in (("--time", ns.time), ("--end", ns.end)):
        if value is not None and minutes_of_day(value) is None:
            return _die(f"Invalid {flag}: {value!r} (expected HH:MM)")

    try:
        session = CalendarSession(JsonFileStore(ns.store), config=load_calendar_config(ns.config))
    except StoreError as e:
        return _die(str(e))

    editor = session.editor
    session.click_slot(ns.date, ns.time)
    fields = {"title": ns.title, "type": ns.typ, "location": ns.location, "description": ns.description}
    if ns.end is not None:
        fields["end_time"] = ns.end
    editor.update(**fields)

    for name in ns.guest:
        matches = editor.search_guests(name)
        if not matches:
            if _already_guest(session.contacts(), editor.draft.guests, name):
                continue
            editor.cancel()
            return _die(f"No contact matches --guest {name!r}")
        if len(matches) > 1:
            exact = [c for c in matches if c.name.lower() == name.strip().lower()]
            if len(exact) != 1:
                editor.cancel()
                names = ", ".join(c.name for c in matches)
                return _die(f"Ambiguous --guest {name!r}: {names}")
            matches = exact
        editor.add_guest(matches[0].id)

    if ns.meet:
        editor.add_meet_link()

    try:
        appt = editor.submit()
    except (OSError, StoreError) as e:
        return _die(f"Failed to save appointment: {e}", rc=3)

    if ns.json:
        print(orjson.dumps(appt.to_record(), option=orjson.OPT_INDENT_2).decode("utf-8"))
    else:
        print(appt.id)
        if appt.meet_link:
            print(meet_join_url(appt.meet_link))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
