# nexuscal/editor.py
"""Create/edit workflow for a single appointment.

One draft, two entry transitions:
  - open_create(date, time?)  -> defaults derived by pure functions
  - open_edit(appointment)    -> every field copied from the record
`submit()` hands a complete record to exactly one callback (add or edit) and
closes the editor; `cancel()` closes it without calling either.
"""
from __future__ import annotations

import dataclasses
import random
import uuid
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Sequence

from .model import APPOINTMENT_TYPES, UNKNOWN_GUEST, UNTITLED, Appointment, Contact
from .util.datemath import is_date_key
from .util.timeparse import default_end_time

DEFAULT_START = "09:00"
MEET_HOST = "meet.google.com"
_LETTERS = "abcdefghijklmnopqrstuvwxyz"


class EditorClosedError(RuntimeError):
    """Raised when a draft operation is attempted while the editor is closed."""


def new_appointment_id() -> str:
    return uuid.uuid4().hex


def generate_meet_link(rng: Optional[random.Random] = None) -> str:
    """Synthesize a placeholder conferencing link: meet.google.com/abc-defg-hij."""
    r = rng or random.Random()
    parts = ["".join(r.choice(_LETTERS) for _ in range(n)) for n in (3, 4, 3)]
    return f"{MEET_HOST}/{'-'.join(parts)}"


def meet_join_url(link: str) -> str:
    s = (link or "").strip()
    if not s or s.startswith(("http://", "https://")):
        return s
    return f"https://{s}"


@dataclass
class EditorDraft:
    date: str
    time: str
    end_time: str
    title: str = ""
    type: str = "meeting"
    description: str = ""
    location: str = ""
    meet_link: str = ""
    guests: List[str] = field(default_factory=list)

    @property
    def end_time_hint(self) -> str:
        """Value shown in an empty end-time input; never submitted."""
        return self.end_time or self.time


_DRAFT_FIELDS = frozenset(f.name for f in dataclasses.fields(EditorDraft))


def create_defaults(date_key: str, time: Optional[str] = None) -> EditorDraft:
    start = time or DEFAULT_START
    return EditorDraft(date=date_key, time=start, end_time=default_end_time(start))


def draft_from_appointment(a: Appointment) -> EditorDraft:
    return EditorDraft(
        date=a.date,
        time=a.time,
        end_time=a.end_time or "",
        title=a.title,
        type=a.type,
        description=a.description,
        location=a.location or "",
        meet_link=a.meet_link or "",
        guests=list(a.guests),
    )


@dataclass(frozen=True)
class GuestChip:
    id: str
    name: str
    initial: str


class EventEditor:
    def __init__(
        self,
        contacts: Callable[[], Sequence[Contact]] | Sequence[Contact] = (),
        *,
        on_add: Optional[Callable[[Appointment], None]] = None,
        on_edit: Optional[Callable[[Appointment], None]] = None,
        id_factory: Callable[[], str] = new_appointment_id,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._contacts = contacts
        self._on_add = on_add
        self._on_edit = on_edit
        self._id_factory = id_factory
        self._rng = rng
        self.draft: Optional[EditorDraft] = None
        self.editing_id: Optional[str] = None
        self.guest_query: str = ""

    # -- state -------------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self.draft is not None

    @property
    def is_edit(self) -> bool:
        return self.draft is not None and self.editing_id is not None

    def _require(self) -> EditorDraft:
        if self.draft is None:
            raise EditorClosedError("editor is not open")
        return self.draft

    def _contact_list(self) -> Sequence[Contact]:
        c = self._contacts
        return c() if callable(c) else c

    # -- transitions -------------------------------------------------------

    def open_create(self, date_key: str, time: Optional[str] = None) -> EditorDraft:
        self.editing_id = None
        self.draft = create_defaults(date_key, time)
        self.guest_query = ""
        return self.draft

    def open_edit(self, appointment: Appointment) -> EditorDraft:
        self.editing_id = appointment.id
        self.draft = draft_from_appointment(appointment)
        self.guest_query = ""
        return self.draft

    def cancel(self) -> None:
        self.draft = None
        self.editing_id = None
        self.guest_query = ""

    def update(self, **fields: object) -> EditorDraft:
        d = self._require()
        for name, value in fields.items():
            if name not in _DRAFT_FIELDS or name == "guests":
                raise AttributeError(f"unknown editor field: {name}")
            if name == "type" and value not in APPOINTMENT_TYPES:
                raise ValueError(f"Unknown appointment type: {value!r}")
            if name == "date" and not is_date_key(value):
                raise ValueError(f"Invalid date (expected YYYY-MM-DD): {value!r}")
            setattr(d, name, "" if value is None else str(value))
        return d

    # -- guests ------------------------------------------------------------

    def search_guests(self, query: Optional[str] = None) -> List[Contact]:
        """Contacts whose name contains the query (case-insensitive), minus current guests."""
        d = self._require()
        if query is not None:
            self.guest_query = query
        q = self.guest_query.strip().lower()
        if not q:
            return []
        taken = set(d.guests)
        return [c for c in self._contact_list() if q in c.name.lower() and c.id not in taken]

    def add_guest(self, contact_id: str) -> List[str]:
        d = self._require()
        if contact_id not in d.guests:
            d.guests.append(contact_id)
        self.guest_query = ""
        return list(d.guests)

    def remove_guest(self, contact_id: str) -> List[str]:
        d = self._require()
        d.guests = [g for g in d.guests if g != contact_id]
        return list(d.guests)

    def guest_chips(self) -> List[GuestChip]:
        d = self._require()
        by_id = {c.id: c for c in self._contact_list()}
        out: List[GuestChip] = []
        for gid in d.guests:
            c = by_id.get(gid)
            if c is None:
                out.append(GuestChip(id=gid, name=UNKNOWN_GUEST, initial="?"))
            else:
                out.append(GuestChip(id=gid, name=c.name or UNKNOWN_GUEST, initial=c.initial))
        return out

    # -- meeting link ------------------------------------------------------

    def add_meet_link(self) -> str:
        d = self._require()
        d.meet_link = generate_meet_link(self._rng)
        return d.meet_link

    def clear_meet_link(self) -> None:
        self._require().meet_link = ""

    # -- submit ------------------------------------------------------------

    def build_appointment(self) -> Appointment:
        d = self._require()
        if not is_date_key(d.date):
            raise ValueError(f"Invalid date (expected YYYY-MM-DD): {d.date!r}")
        guests = tuple(_unique(d.guests))
        return Appointment(
            id=self.editing_id or self._id_factory(),
            title=d.title if d.title.strip() else UNTITLED,
            date=d.date,
            time=d.time,
            end_time=d.end_time or None,
            description=d.description,
            location=d.location or None,
            meet_link=d.meet_link or None,
            guests=guests,
            type=d.type,
            contact_id=guests[0] if guests else None,
        )

    def submit(self) -> Appointment:
        appt = self.build_appointment()
        editing = self.editing_id is not None
        self.cancel()
        if editing:
            if self._on_edit is not None:
                self._on_edit(appt)
        elif self._on_add is not None:
            self._on_add(appt)
        return appt


def _unique(items: Iterable[str]) -> List[str]:
    seen = set()
    out: List[str] = []
    for x in items:
        if x not in seen:
            seen.add(x)
            out.append(x)
    return out
