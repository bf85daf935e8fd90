from __future__ import annotations

import argparse
import dataclasses
import os
import sys
import webbrowser
from pathlib import Path

import orjson

from .calendar import CalendarSession
from .config import default_store_path, load_calendar_config
from .model import APPOINTMENT_TYPES
from .navigation import parse_view_mode
from .payload import build_payload
from .render.inline import build_html
from .store import JsonFileStore, StoreError
from .util.timeparse import parse_date_yyyy_mm_dd
from .util.tz import normalize_tz_name, resolve_tz, today_date


def _parse_hidden(values: list[str] | None) -> tuple[str, ...]:
    out: list[str] = []
    for v in values or []:
        for part in v.split(","):
            t = part.strip().lower()
            if not t:
                continue
            if t not in APPOINTMENT_TYPES:
                raise SystemExit(f"Invalid --hide value: {part!r} (expected one of {', '.join(APPOINTMENT_TYPES)})")
            if t not in out:
                out.append(t)
    return tuple(out)


def main(argv: list[str] | None = None) -> None:
    default_out = os.path.join("build", "nexuscal_calendar.html")
    ap = argparse.ArgumentParser(
        prog="nexuscal",
        description="Render the CRM appointment calendar (month/week/day/agenda) to a static HTML page.",
    )
    ap.add_argument(
        "--store",
        default=default_store_path(),
        help="Storage JSON holding crm_appointments/crm_contacts (default: env NEXUSCAL_STORE or ~/.nexuscal/storage.json)",
    )
    ap.add_argument("--view", default="month", help="View mode: month, week, day or agenda (default: month)")
    ap.add_argument("--date", default=None, help="Anchor date YYYY-MM-DD (default: today in --tz)")
    ap.add_argument(
        "--hide",
        action="append",
        default=None,
        help="Hide an appointment type (meeting, call, demo). Repeatable or comma-separated.",
    )
    ap.add_argument("--prev", type=int, default=0, help="Step the anchor back N periods of the active view")
    ap.add_argument("--next", type=int, default=0, help="Step the anchor forward N periods of the active view")
    ap.add_argument(
        "--tz",
        default=os.getenv("NEXUSCAL_TZ", "local"),
        help="Timezone deciding what 'today' is (default: env NEXUSCAL_TZ or 'local')",
    )
    ap.add_argument("--config", default=None, help="Calendar config JSON (geometry, collision mode, hidden types)")
    ap.add_argument("--out", default=default_out, help="Output HTML path (default: ./build/nexuscal_calendar.html)")
    ap.add_argument("--out-json", default=None, help="Also write the payload JSON to this path")
    ap.add_argument("--no-seed", action="store_true", help="Do not seed an empty store with demo data")
    ap.add_argument("--no-open", action="store_true", help="Do not open the generated HTML in a browser")

    args = ap.parse_args(argv)

    tz_name = normalize_tz_name(args.tz)
    try:
        tzinfo = resolve_tz(tz_name)
    except ValueError as e:
        raise SystemExit(f"Invalid --tz value: {e}")

    try:
        view_mode = parse_view_mode(args.view)
    except ValueError as e:
        raise SystemExit(f"Invalid --view value: {e}")

    if args.date:
        try:
            anchor = parse_date_yyyy_mm_dd(args.date)
        except ValueError as e:
            raise SystemExit(f"Invalid --date value: {e}")
    else:
        anchor = today_date(tzinfo)

    cfg = load_calendar_config(args.config)
    hidden = _parse_hidden(args.hide)
    cfg = dataclasses.replace(cfg, tz=tz_name, hidden_types=tuple(dict.fromkeys(cfg.hidden_types + hidden)))

    store = JsonFileStore(args.store, seed=not args.no_seed, today=today_date(tzinfo))
    try:
        session = CalendarSession(
            store,
            config=cfg,
            today_fn=lambda: today_date(tzinfo),
            view_mode=view_mode,
            anchor_date=anchor,
        )
    except StoreError as e:
        raise SystemExit(f"Failed to load store: {e}")

    for _ in range(max(0, int(args.prev))):
        session.nav.go_prev()
    for _ in range(max(0, int(args.next))):
        session.nav.go_next()

    model = session.render()
    data = build_payload(session, model=model)
    html = build_html(data, model, mini=session.mini_calendar(), upcoming=session.upcoming())

    if args.out_json:
        outp = Path(args.out_json)
        outp.parent.mkdir(parents=True, exist_ok=True)
        outp.write_bytes(orjson.dumps(data, option=orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS) + b"\n")

    out_path = os.path.abspath(args.out)
    try:
        Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        # Unwritable CWD with the default relative path: fall back to the user's home.
        if args.out == default_out:
            fallback = Path.home() / ".nexuscal" / "build" / "nexuscal_calendar.html"
            fallback.parent.mkdir(parents=True, exist_ok=True)
            out_path = str(fallback)
            print(
                f"[nexuscal] WARN: default output directory is not writable; using {out_path}",
                file=sys.stderr,
            )
        else:
            raise SystemExit(f"Cannot create output directory '{Path(out_path).parent}': {e}")
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(html)

    print(out_path)

    if not args.no_open:
        try:
            webbrowser.open("file://" + out_path)
        except webbrowser.Error:
            pass


if __name__ == "__main__":
    main()
