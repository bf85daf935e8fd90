# nexuscal/layout.py
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, TypeVar, Union

from .model import Appointment
from .util.timeparse import minutes_of_day

DEFAULT_CELL_HEIGHT = 60
DEFAULT_DURATION_MIN = 60
DEFAULT_MIN_HEIGHTS: Dict[str, int] = {"week": 20, "day": 40}

COLLISION_MODES = ("overlap", "lanes")


@dataclass(frozen=True)
class BlockGeometry:
    top: float
    height: float
    start_min: int
    end_min: int
    lane: int = 0
    lanes: int = 1


MinHeights = Tuple[Tuple[str, int], ...]


def _freeze_min_heights(raw: Union[Mapping[str, int], MinHeights]) -> MinHeights:
    items = raw.items() if isinstance(raw, Mapping) else raw
    return tuple(sorted((str(k), int(v)) for k, v in items))


@dataclass(frozen=True)
class LayoutEngine:
    """Maps wall-clock time to vertical pixels for the week and day grids.

    One hour is `cell_height` pixels in every grid view, so an appointment
    has the same top/height in week and day views; only the minimum visible
    height differs per view.
    """

    cell_height: int = DEFAULT_CELL_HEIGHT
    min_heights: MinHeights = _freeze_min_heights(DEFAULT_MIN_HEIGHTS)

    def __post_init__(self) -> None:
        object.__setattr__(self, "min_heights", _freeze_min_heights(self.min_heights))

    def min_height(self, view: str) -> int:
        return dict(self.min_heights).get(view, DEFAULT_MIN_HEIGHTS["week"])

    def start_minutes(self, time: Optional[str]) -> int:
        m = minutes_of_day(time)
        return 0 if m is None else m

    def top_offset(self, time: Optional[str]) -> float:
        m = self.start_minutes(time)
        hour, minute = divmod(m, 60)
        return hour * self.cell_height + (minute / 60) * self.cell_height

    def duration_minutes(self, time: Optional[str], end_time: Optional[str]) -> int:
        """end - start in minutes; 60 when either side is missing/unparseable or the span is not positive.

        The fallback is display-only and never written back to the record.
        """
        start = minutes_of_day(time)
        end = minutes_of_day(end_time)
        if start is None or end is None:
            return DEFAULT_DURATION_MIN
        dur = end - start
        return dur if dur > 0 else DEFAULT_DURATION_MIN

    def height(self, time: Optional[str], end_time: Optional[str], view: str = "week") -> float:
        dur = self.duration_minutes(time, end_time)
        return max(dur / 60 * self.cell_height, float(self.min_height(view)))

    def place(self, appointment: Appointment, view: str = "week") -> BlockGeometry:
        start = self.start_minutes(appointment.time)
        dur = self.duration_minutes(appointment.time, appointment.end_time)
        return BlockGeometry(
            top=self.top_offset(appointment.time),
            height=self.height(appointment.time, appointment.end_time, view),
            start_min=start,
            end_min=start + dur,
        )

    def grid_height(self) -> int:
        return 24 * self.cell_height

    def hour_labels(self) -> List[str]:
        return ["" if h == 0 else f"{h}:00" for h in range(24)]


def slot_time(hour: int) -> str:
    return f"{int(hour):02d}:00"


G = TypeVar("G", bound=BlockGeometry)


def assign_lanes(blocks: Sequence[G]) -> List[G]:
    """Side-by-side placement for overlapping blocks (input order preserved).

    Blocks are clustered into runs of transitively overlapping intervals;
    inside a cluster each block takes the first lane whose previous block has
    ended, and every block in the cluster reports the cluster's lane count.
    """
    order = sorted(range(len(blocks)), key=lambda i: (blocks[i].start_min, blocks[i].end_min))
    lane_of: Dict[int, int] = {}
    lanes_of: Dict[int, int] = {}

    cluster: List[int] = []
    lane_ends: List[int] = []
    max_end = -1

    def _close() -> None:
        total = max(1, len(lane_ends))
        for i in cluster:
            lanes_of[i] = total

    for i in order:
        b = blocks[i]
        if cluster and b.start_min >= max_end:
            _close()
            cluster = []
            lane_ends = []
        lane = -1
        for li, end in enumerate(lane_ends):
            if end <= b.start_min:
                lane = li
                break
        if lane < 0:
            lane = len(lane_ends)
            lane_ends.append(b.end_min)
        else:
            lane_ends[lane] = b.end_min
        lane_of[i] = lane
        cluster.append(i)
        max_end = max(max_end, b.end_min) if len(cluster) > 1 else b.end_min
    if cluster:
        _close()

    return [replace(b, lane=lane_of[i], lanes=lanes_of[i]) for i, b in enumerate(blocks)]
