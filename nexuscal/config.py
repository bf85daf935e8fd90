# nexuscal/config.py
from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

from .layout import COLLISION_MODES, DEFAULT_CELL_HEIGHT, DEFAULT_MIN_HEIGHTS, LayoutEngine
from .model import APPOINTMENT_TYPES
from .util.console import eprint
from .util.timeparse import minutes_of_day

DEFAULT_STORE_PATH = os.path.join("~", ".nexuscal", "storage.json")


@dataclass(frozen=True)
class CalendarConfig:
    cell_height: int = DEFAULT_CELL_HEIGHT
    week_min_height: int = DEFAULT_MIN_HEIGHTS["week"]
    day_min_height: int = DEFAULT_MIN_HEIGHTS["day"]
    default_start: str = "09:00"
    collision: str = "overlap"
    hidden_types: Tuple[str, ...] = ()
    tz: str = "local"
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)

    def layout(self) -> LayoutEngine:
        return LayoutEngine(
            cell_height=self.cell_height,
            min_heights={"week": self.week_min_height, "day": self.day_min_height},
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cell_height": self.cell_height,
            "week_min_height": self.week_min_height,
            "day_min_height": self.day_min_height,
            "default_start": self.default_start,
            "collision": self.collision,
            "hidden_types": list(self.hidden_types),
            "tz": self.tz,
        }


def _pos_int(v: Any, default: int) -> int:
    if isinstance(v, bool):
        return default
    try:
        i = int(v)
    except (TypeError, ValueError):
        return default
    return i if i > 0 else default


def config_from_dict(raw: Dict[str, Any], *, base: Optional[CalendarConfig] = None) -> CalendarConfig:
    """Build a config from a loose dict. Invalid entries keep the base value.

    Recognized keys:
      cell_height (px per hour, > 0)
      week_min_height / day_min_height (px floors, > 0)
      default_start ("HH:MM")
      collision ("overlap" (default) or "lanes")
      hidden_types (list of meeting/call/demo)
      tz ("local", "UTC", "+HH:MM")
    """
    cfg = base or CalendarConfig()

    start = str(raw.get("default_start") or cfg.default_start).strip()
    if minutes_of_day(start) is None:
        start = cfg.default_start

    collision = str(raw.get("collision") or cfg.collision).strip().lower()
    if collision not in COLLISION_MODES:
        collision = cfg.collision

    hidden_raw = raw.get("hidden_types")
    hidden = cfg.hidden_types
    if isinstance(hidden_raw, list):
        hidden = tuple(t for t in APPOINTMENT_TYPES if t in {str(x).strip().lower() for x in hidden_raw})

    tz = str(raw.get("tz") or cfg.tz).strip() or cfg.tz

    known = {"cell_height", "week_min_height", "day_min_height", "default_start", "collision", "hidden_types", "tz"}
    return replace(
        cfg,
        cell_height=_pos_int(raw.get("cell_height"), cfg.cell_height),
        week_min_height=_pos_int(raw.get("week_min_height"), cfg.week_min_height),
        day_min_height=_pos_int(raw.get("day_min_height"), cfg.day_min_height),
        default_start=start,
        collision=collision,
        hidden_types=hidden,
        tz=tz,
        extra={k: v for k, v in raw.items() if k not in known},
    )


def load_calendar_config(path: Optional[str]) -> CalendarConfig:
    """Load calendar config JSON. A missing path/file yields defaults.

    Accepted formats:
      - { "calendar": { ... } }
      - { ... }
    """
    if not path:
        return CalendarConfig()
    p = os.path.expanduser(path)
    if not os.path.exists(p):
        return CalendarConfig()
    try:
        with open(p, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, ValueError) as ex:
        eprint(f"[nexuscal.config] WARN: ignoring unreadable config {p}: {ex}")
        return CalendarConfig()

    if isinstance(raw, dict) and isinstance(raw.get("calendar"), dict):
        raw = raw["calendar"]
    if not isinstance(raw, dict):
        eprint(f"[nexuscal.config] WARN: config {p} must be a JSON object; using defaults")
        return CalendarConfig()
    return config_from_dict(raw)


def default_store_path() -> str:
    return os.path.expanduser(os.getenv("NEXUSCAL_STORE") or DEFAULT_STORE_PATH)
