from __future__ import annotations

import random
import unittest

from nexuscal.editor import (
    EditorClosedError,
    EventEditor,
    create_defaults,
    generate_meet_link,
    meet_join_url,
)
from nexuscal.model import UNTITLED, Appointment, Contact

CONTACTS = [
    Contact(id="1", name="Carlos Ruiz", email="carlos@techcorp.com"),
    Contact(id="2", name="Maria Gomez", email="maria@innovate.es"),
    Contact(id="3", name="Juan Perez", email="juan@soluciones.com"),
]


class _Recorder:
    def __init__(self) -> None:
        self.added: list = []
        self.edited: list = []


def _editor(rec: _Recorder, **kw) -> EventEditor:
    return EventEditor(CONTACTS, on_add=rec.added.append, on_edit=rec.edited.append, **kw)


class TestEditorDefaultsContract(unittest.TestCase):
    def test_create_defaults(self) -> None:
        d = create_defaults("2024-03-05")
        self.assertEqual((d.date, d.time, d.end_time), ("2024-03-05", "09:00", "10:00"))
        self.assertEqual((d.title, d.type, d.guests), ("", "meeting", []))
        d2 = create_defaults("2024-03-05", "14:00")
        self.assertEqual((d2.time, d2.end_time), ("14:00", "15:00"))

    def test_meet_link_shape(self) -> None:
        link = generate_meet_link(random.Random(42))
        self.assertRegex(link, r"^meet\.google\.com/[a-z]{3}-[a-z]{4}-[a-z]{3}$")
        self.assertEqual(link, generate_meet_link(random.Random(42)))
        self.assertEqual(meet_join_url(link), "https://" + link)
        self.assertEqual(meet_join_url("https://x.test/a"), "https://x.test/a")


class TestEditorWorkflowContract(unittest.TestCase):
    def test_closed_editor_rejects_draft_operations(self) -> None:
        ed = _editor(_Recorder())
        self.assertFalse(ed.is_open)
        with self.assertRaises(EditorClosedError):
            ed.update(title="x")
        with self.assertRaises(EditorClosedError):
            ed.submit()

    def test_create_submit_calls_add_once(self) -> None:
        rec = _Recorder()
        ed = _editor(rec, id_factory=lambda: "new-1")
        ed.open_create("2024-03-05", "14:00")
        ed.update(title="Call Maria", type="call", location="Office")
        ed.add_guest("2")
        appt = ed.submit()
        self.assertFalse(ed.is_open)
        self.assertEqual(rec.added, [appt])
        self.assertEqual(rec.edited, [])
        self.assertEqual(appt.id, "new-1")
        self.assertEqual(appt.contact_id, "2")
        self.assertEqual(appt.end_time, "15:00")
        self.assertEqual(appt.location, "Office")
        self.assertIsNone(appt.meet_link)

    def test_blank_title_gets_placeholder(self) -> None:
        rec = _Recorder()
        ed = _editor(rec)
        ed.open_create("2024-03-05")
        ed.update(title="   ")
        self.assertEqual(ed.submit().title, UNTITLED)

    def test_round_trip_reproduces_fields(self) -> None:
        rec = _Recorder()
        ed = _editor(rec, rng=random.Random(3))
        ed.open_create("2024-03-05", "09:00")
        ed.update(title="Quarterly review", type="demo", description="Slides", location="HQ", end_time="10:30")
        ed.add_guest("1")
        ed.add_guest("3")
        ed.add_meet_link()
        created = ed.submit()

        ed.open_edit(created)
        self.assertTrue(ed.is_edit)
        d = ed.draft
        self.assertEqual(d.title, "Quarterly review")
        self.assertEqual(d.type, "demo")
        self.assertEqual(d.description, "Slides")
        self.assertEqual(d.location, "HQ")
        self.assertEqual((d.date, d.time, d.end_time), ("2024-03-05", "09:00", "10:30"))
        self.assertEqual(d.guests, ["1", "3"])
        self.assertEqual(d.meet_link, created.meet_link)

        edited = ed.submit()
        self.assertEqual(edited, created)
        self.assertEqual(rec.edited, [created])
        self.assertEqual(len(rec.added), 1)

    def test_edit_replaces_whole_record(self) -> None:
        rec = _Recorder()
        ed = _editor(rec)
        existing = Appointment(
            id="x", title="Old", date="2024-03-05", time="10:00", end_time="11:00",
            location="Room 1", guests=("1",), contact_id="1",
        )
        ed.open_edit(existing)
        ed.update(location="")
        ed.remove_guest("1")
        out = ed.submit()
        self.assertEqual(out.id, "x")
        self.assertIsNone(out.location)
        self.assertEqual(out.guests, ())
        self.assertIsNone(out.contact_id)

    def test_missing_end_time_falls_back_to_start(self) -> None:
        ed = _editor(_Recorder())
        ed.open_edit(Appointment(id="y", title="T", date="2024-03-05", time="11:00"))
        self.assertEqual(ed.draft.end_time, "")
        self.assertEqual(ed.draft.end_time_hint, "11:00")

    def test_unchanged_edit_keeps_missing_end_time(self) -> None:
        rec = _Recorder()
        ed = _editor(rec)
        a = Appointment(id="y", title="T", date="2024-03-05", time="09:00", end_time=None)
        ed.open_edit(a)
        out = ed.submit()
        self.assertEqual(out, a)
        self.assertIsNone(out.end_time)
        self.assertEqual(rec.edited, [a])

    def test_cancel_calls_nothing(self) -> None:
        rec = _Recorder()
        ed = _editor(rec)
        ed.open_create("2024-03-05")
        ed.update(title="Dropped")
        ed.cancel()
        self.assertFalse(ed.is_open)
        self.assertEqual((rec.added, rec.edited), ([], []))

    def test_update_rejects_unknown_fields_and_types(self) -> None:
        ed = _editor(_Recorder())
        ed.open_create("2024-03-05")
        with self.assertRaises(AttributeError):
            ed.update(colour="red")
        with self.assertRaises(ValueError):
            ed.update(type="party")

    def test_update_rejects_invalid_date(self) -> None:
        rec = _Recorder()
        ed = _editor(rec)
        ed.open_create("2024-03-05")
        for bad in ("", "2024-02-30", "05/03/2024", None):
            with self.assertRaises(ValueError):
                ed.update(date=bad)
        self.assertEqual(ed.draft.date, "2024-03-05")
        ed.update(date="2024-03-06")
        self.assertEqual(ed.submit().date, "2024-03-06")

    def test_submit_refuses_invalid_draft_date(self) -> None:
        rec = _Recorder()
        ed = _editor(rec)
        ed.open_create("not-a-date")
        with self.assertRaises(ValueError):
            ed.submit()
        self.assertTrue(ed.is_open)
        self.assertEqual(rec.added, [])


class TestGuestSearchContract(unittest.TestCase):
    def test_search_is_case_insensitive_and_excludes_guests(self) -> None:
        ed = _editor(_Recorder())
        ed.open_create("2024-03-05")
        self.assertEqual([c.id for c in ed.search_guests("MAR")], ["2"])
        self.assertEqual([c.id for c in ed.search_guests("r")], ["1", "2", "3"])
        ed.add_guest("2")
        self.assertEqual(ed.guest_query, "")
        self.assertEqual([c.id for c in ed.search_guests("r")], ["1", "3"])
        ed.remove_guest("2")
        self.assertEqual([c.id for c in ed.search_guests("r")], ["1", "2", "3"])

    def test_blank_query_yields_nothing(self) -> None:
        ed = _editor(_Recorder())
        ed.open_create("2024-03-05")
        self.assertEqual(ed.search_guests(""), [])
        self.assertEqual(ed.search_guests("   "), [])

    def test_add_guest_is_idempotent(self) -> None:
        ed = _editor(_Recorder())
        ed.open_create("2024-03-05")
        ed.add_guest("1")
        self.assertEqual(ed.add_guest("1"), ["1"])

    def test_guest_chips_use_placeholders(self) -> None:
        ed = _editor(_Recorder())
        ed.open_create("2024-03-05")
        ed.add_guest("1")
        ed.add_guest("ghost")
        chips = ed.guest_chips()
        self.assertEqual([(c.name, c.initial) for c in chips], [("Carlos Ruiz", "C"), ("Unknown", "?")])

    def test_contacts_callable_is_read_lazily(self) -> None:
        book = []
        ed = EventEditor(lambda: book)
        ed.open_create("2024-03-05")
        self.assertEqual(ed.search_guests("car"), [])
        book.append(CONTACTS[0])
        self.assertEqual([c.id for c in ed.search_guests("car")], ["1"])


if __name__ == "__main__":
    unittest.main(verbosity=2)
