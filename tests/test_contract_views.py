from __future__ import annotations

import datetime as dt
import unittest

from nexuscal.filters import FilterState
from nexuscal.index import AppointmentIndex
from nexuscal.layout import LayoutEngine
from nexuscal.model import Appointment
from nexuscal.navigation import ViewMode
from nexuscal.util.datemath import first_weekday_of_month
from nexuscal.views import (
    AGENDA_EMPTY_MESSAGE,
    MONTH_GRID_CELLS,
    AgendaModel,
    CreateIntent,
    DayModel,
    EditIntent,
    MonthModel,
    ViewState,
    WeekModel,
    model_to_dict,
    render_mini_calendar,
    render_view,
    renderer_for,
)

TODAY = dt.date(2024, 3, 15)

CALL = Appointment(id="call-1", title="Call", date="2024-03-05", time="14:00", end_time="15:00", type="call")
LATER = Appointment(id="late-1", title="Later", date="2024-03-05", time="16:30", end_time="17:00")
EARLY = Appointment(id="early-1", title="Early", date="2024-03-05", time="08:15", end_time="08:20", type="demo")


def _state(mode: ViewMode, anchor: dt.date, appts, *, filters=None, collision: str = "overlap") -> ViewState:
    return ViewState(
        mode=mode,
        anchor=anchor,
        today=TODAY,
        index=AppointmentIndex(appts, filters),
        layout=LayoutEngine(),
        collision=collision,
    )


class TestMonthViewContract(unittest.TestCase):
    def test_every_month_has_42_cells_and_correct_padding(self) -> None:
        for year in (2023, 2024, 2025):
            for month in range(1, 13):
                m = render_view(_state(ViewMode.MONTH, dt.date(year, month, 1), []))
                self.assertIsInstance(m, MonthModel)
                self.assertEqual(len(m.cells), MONTH_GRID_CELLS)
                leading = first_weekday_of_month(year, month)
                self.assertEqual(m.leading, leading)
                self.assertTrue(all(c.is_padding for c in m.cells[:leading]))
                self.assertFalse(m.cells[leading].is_padding)
                self.assertEqual(m.cells[leading].day, 1)

    def test_march_2024_scenario(self) -> None:
        m = render_view(_state(ViewMode.MONTH, dt.date(2024, 3, 20), [LATER, CALL]))
        self.assertEqual(m.title, "March 2024")
        cell = next(c for c in m.cells if c.day == 5)
        self.assertEqual(cell.date_key, "2024-03-05")
        self.assertEqual([i.id for i in cell.items], ["call-1", "late-1"])
        self.assertEqual(cell.items[0].edit, EditIntent("call-1"))
        self.assertEqual(cell.create, CreateIntent("2024-03-05"))
        self.assertEqual(cell.items[0].color, "green")

    def test_today_marked(self) -> None:
        m = render_view(_state(ViewMode.MONTH, TODAY, []))
        today_cells = [c for c in m.cells if c.is_today]
        self.assertEqual(len(today_cells), 1)
        self.assertEqual(today_cells[0].day, 15)

    def test_filtered_type_absent(self) -> None:
        m = render_view(_state(ViewMode.MONTH, TODAY, [CALL, LATER], filters=FilterState.from_hidden(["call"])))
        ids = [i.id for c in m.cells for i in c.items]
        self.assertEqual(ids, ["late-1"])


class TestTimeGridViewsContract(unittest.TestCase):
    def test_week_scenario(self) -> None:
        w = render_view(_state(ViewMode.WEEK, dt.date(2024, 3, 5), [CALL]))
        self.assertIsInstance(w, WeekModel)
        self.assertEqual((w.start, w.end), ("2024-03-03", "2024-03-09"))
        self.assertEqual(len(w.columns), 7)
        self.assertEqual(w.columns[0].weekday_label, "SUN")
        col = w.columns[2]
        self.assertEqual(col.date_key, "2024-03-05")
        self.assertEqual(len(col.blocks), 1)
        b = col.blocks[0]
        self.assertEqual(b.top, 14 * 60)
        self.assertEqual(b.height, 60)
        self.assertEqual(w.grid_height, 24 * 60)

    def test_week_slots_carry_create_intent(self) -> None:
        w = render_view(_state(ViewMode.WEEK, dt.date(2024, 3, 5), []))
        slots = w.columns[1].slots
        self.assertEqual(len(slots), 24)
        self.assertEqual(slots[9].create, CreateIntent("2024-03-04", "09:00"))

    def test_day_view_uses_day_floor(self) -> None:
        d = render_view(_state(ViewMode.DAY, dt.date(2024, 3, 5), [EARLY, CALL]))
        self.assertIsInstance(d, DayModel)
        self.assertEqual(d.heading, "5 March")
        blocks = {b.id: b for b in d.column.blocks}
        self.assertEqual(blocks["early-1"].height, 40)
        self.assertEqual(blocks["early-1"].top, 8 * 60 + 15)
        self.assertEqual(blocks["call-1"].height, 60)

        w = render_view(_state(ViewMode.WEEK, dt.date(2024, 3, 5), [EARLY]))
        self.assertEqual(w.columns[2].blocks[0].height, 20)

    def test_same_geometry_in_week_and_day(self) -> None:
        w = render_view(_state(ViewMode.WEEK, dt.date(2024, 3, 5), [CALL]))
        d = render_view(_state(ViewMode.DAY, dt.date(2024, 3, 5), [CALL]))
        self.assertEqual(w.columns[2].blocks[0].top, d.column.blocks[0].top)
        self.assertEqual(w.columns[2].blocks[0].height, d.column.blocks[0].height)

    def test_overlap_mode_stacks_and_lanes_mode_splits(self) -> None:
        other = Appointment(id="o", title="O", date="2024-03-05", time="14:30", end_time="15:30")
        stacked = render_view(_state(ViewMode.DAY, dt.date(2024, 3, 5), [CALL, other]))
        self.assertEqual([(b.lane, b.lanes) for b in stacked.column.blocks], [(0, 1), (0, 1)])
        split = render_view(_state(ViewMode.DAY, dt.date(2024, 3, 5), [CALL, other], collision="lanes"))
        self.assertEqual([(b.lane, b.lanes) for b in split.column.blocks], [(0, 2), (1, 2)])

    def test_malformed_time_renders(self) -> None:
        bad = Appointment(id="bad", title="Bad", date="2024-03-05", time="??", end_time=None)
        d = render_view(_state(ViewMode.DAY, dt.date(2024, 3, 5), [bad]))
        self.assertEqual(d.column.blocks[0].top, 0)
        self.assertEqual(d.column.blocks[0].height, 60)


class TestAgendaViewContract(unittest.TestCase):
    def test_empty_state(self) -> None:
        a = render_view(_state(ViewMode.AGENDA, TODAY, []))
        self.assertIsInstance(a, AgendaModel)
        self.assertTrue(a.empty)
        self.assertEqual(a.empty_message, AGENDA_EMPTY_MESSAGE)
        self.assertEqual(a.groups, ())

    def test_groups_and_ranges(self) -> None:
        a = render_view(_state(ViewMode.AGENDA, TODAY, [LATER, CALL]))
        self.assertFalse(a.empty)
        self.assertEqual(a.title, "Agenda")
        self.assertEqual(len(a.groups), 1)
        g = a.groups[0]
        self.assertEqual((g.day_number, g.weekday_label, g.month_name), (5, "TUE", "March"))
        self.assertEqual([e.id for e in g.entries], ["call-1", "late-1"])
        self.assertEqual(g.entries[0].time_range, "14:00 - 15:00")


class TestViewHelpersContract(unittest.TestCase):
    def test_renderer_for_steps(self) -> None:
        self.assertEqual(renderer_for("week").step(dt.date(2024, 3, 5), 1), dt.date(2024, 3, 12))
        self.assertEqual(renderer_for(ViewMode.MONTH).step(dt.date(2024, 3, 5), -1), dt.date(2024, 2, 5))

    def test_mini_calendar(self) -> None:
        mini = render_mini_calendar(dt.date(2024, 3, 20), TODAY)
        self.assertEqual(mini.title, "March 2024")
        self.assertEqual(mini.leading, 5)
        self.assertEqual(len(mini.days), 31)
        self.assertEqual([d.day for d in mini.days if d.is_today], [15])

    def test_model_to_dict(self) -> None:
        d = model_to_dict(render_view(_state(ViewMode.WEEK, dt.date(2024, 3, 5), [CALL])))
        self.assertEqual(d["mode"], "week")
        self.assertEqual(d["columns"][2]["blocks"][0]["edit"], {"appointment_id": "call-1"})


if __name__ == "__main__":
    unittest.main(verbosity=2)
