from __future__ import annotations

import datetime as dt
import random
import unittest

from nexuscal.calendar import CalendarSession
from nexuscal.config import CalendarConfig
from nexuscal.model import Appointment, Contact
from nexuscal.navigation import ViewMode
from nexuscal.store import MemoryStore
from nexuscal.views import CreateIntent, EditIntent, MonthModel, WeekModel

TODAY = dt.date(2024, 3, 15)
CONTACTS = [Contact(id="1", name="Carlos Ruiz"), Contact(id="2", name="Maria Gomez")]


def _session(appts=(), **kw) -> tuple:
    store = MemoryStore(appts, CONTACTS)
    ids = iter(f"id-{i}" for i in range(1, 100))
    session = CalendarSession(
        store,
        today_fn=lambda: TODAY,
        id_factory=lambda: next(ids),
        rng=random.Random(1),
        **kw,
    )
    return session, store


class TestCalendarSessionContract(unittest.TestCase):
    def test_initial_state(self) -> None:
        session, _ = _session()
        self.assertEqual(session.nav.anchor_date, TODAY)
        self.assertIsInstance(session.render(), MonthModel)
        self.assertEqual(session.mini_calendar().title, "March 2024")
        self.assertEqual([c.id for c in session.contacts()], ["1", "2"])

    def test_click_slot_then_submit_adds_and_saves(self) -> None:
        added = []
        session, store = _session(on_add_appointment=added.append)
        session.click_slot(CreateIntent("2024-03-05", "14:00"))
        session.editor.update(title="Call", type="call")
        session.editor.add_guest("2")
        appt = session.editor.submit()

        self.assertEqual(appt.id, "id-1")
        self.assertEqual(added, [appt])
        self.assertEqual(store.save_count, 1)
        self.assertEqual(store.get_appointments(), [appt])
        self.assertEqual(session.appointments, [appt])

        session.nav.select_date(dt.date(2024, 3, 5))
        session.nav.set_view_mode(ViewMode.WEEK)
        week = session.render()
        self.assertIsInstance(week, WeekModel)
        block = week.columns[2].blocks[0]
        self.assertEqual((block.top, block.height), (840, 60))

    def test_click_slot_defaults(self) -> None:
        session, _ = _session(config=CalendarConfig(default_start="08:30"))
        d = session.click_slot("2024-03-05")
        self.assertEqual((d.time, d.end_time), ("08:30", "09:30"))
        d = session.click_slot(dt.date(2024, 3, 6), "11:00")
        self.assertEqual((d.date, d.time, d.end_time), ("2024-03-06", "11:00", "12:00"))
        d = session.open_create_today()
        self.assertEqual(d.date, "2024-03-15")

    def test_click_appointment_edits_in_place(self) -> None:
        existing = Appointment(id="x", title="Old", date="2024-03-05", time="10:00", end_time="11:00")
        other = Appointment(id="y", title="Other", date="2024-03-06", time="10:00")
        edited = []
        session, store = _session([existing, other], on_edit_appointment=edited.append)
        session.click_appointment(EditIntent("x"))
        session.editor.update(title="New")
        out = session.editor.submit()

        self.assertEqual(out.id, "x")
        self.assertEqual(edited, [out])
        self.assertEqual([a.title for a in store.get_appointments()], ["New", "Other"])
        self.assertEqual(store.save_count, 1)

    def test_click_unknown_appointment_raises(self) -> None:
        session, _ = _session()
        with self.assertRaises(KeyError):
            session.click_appointment("missing")

    def test_blank_date_never_reaches_store(self) -> None:
        session, store = _session(view_mode=ViewMode.AGENDA)
        session.click_slot("2024-03-05")
        with self.assertRaises(ValueError):
            session.editor.update(date="")
        session.editor.submit()
        self.assertEqual([a.date for a in store.get_appointments()], ["2024-03-05"])
        session.render()

    def test_cancel_does_not_save(self) -> None:
        session, store = _session()
        session.click_slot("2024-03-05")
        session.editor.cancel()
        self.assertEqual(store.save_count, 0)

    def test_filters_affect_projection_not_storage(self) -> None:
        appts = [
            Appointment(id="c", title="C", date="2024-03-05", time="10:00", type="call"),
            Appointment(id="m", title="M", date="2024-03-05", time="11:00"),
        ]
        session, store = _session(appts, config=CalendarConfig(hidden_types=("call",)))
        self.assertEqual([a.id for a in session.index().visible()], ["m"])
        session.filters.toggle("call")
        self.assertEqual([a.id for a in session.index().visible()], ["c", "m"])
        self.assertEqual(len(store.get_appointments()), 2)

    def test_upcoming(self) -> None:
        appts = [
            Appointment(id="past", title="P", date="2024-03-01", time="10:00"),
            Appointment(id="soon", title="S", date="2024-03-16", time="10:00"),
        ]
        session, _ = _session(appts)
        self.assertEqual([a.id for a in session.upcoming()], ["soon"])


if __name__ == "__main__":
    unittest.main(verbosity=2)
