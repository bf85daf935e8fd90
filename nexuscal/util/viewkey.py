# nexuscal/util/viewkey.py
from __future__ import annotations

import datetime as dt
from typing import Iterable


def make_view_key(
    view_mode: str,
    anchor: dt.date,
    hidden_types: Iterable[str],
    cell_height: int,
    collision: str = "overlap",
) -> str:
    """Return a stable key correlating a rendered page with its view state.

    Changing the view mode, anchor, filters or geometry yields a new key so
    cached UI state is never reused across different projections.
    """
    hidden = ",".join(sorted(str(t) for t in hidden_types))
    raw = f"{view_mode}|{anchor.isoformat()}|{hidden}|{int(cell_height)}|{collision}"
    h = 0
    for ch in raw:
        h = (h * 131 + ord(ch)) & 0xFFFFFFFF
    return f"{h:08x}"
