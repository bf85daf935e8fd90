# nexuscal/model.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

APPOINTMENT_TYPES: Tuple[str, ...] = ("meeting", "call", "demo")

TYPE_LABELS: Dict[str, str] = {
    "meeting": "Events",
    "call": "Calls",
    "demo": "Demos",
}

TYPE_COLORS: Dict[str, str] = {
    "meeting": "blue",
    "call": "green",
    "demo": "purple",
}

UNTITLED = "(No title)"
UNKNOWN_GUEST = "Unknown"

# Plain record shape exchanged with the appointment store.
AppointmentRecord = Dict[str, Any]


@dataclass(frozen=True)
class Appointment:
    id: str
    title: str
    date: str  # YYYY-MM-DD
    time: str  # HH:MM
    end_time: Optional[str] = None
    description: str = ""
    location: Optional[str] = None
    meet_link: Optional[str] = None
    guests: Tuple[str, ...] = ()
    type: str = "meeting"
    contact_id: Optional[str] = None

    def to_record(self) -> AppointmentRecord:
        out: AppointmentRecord = {
            "id": self.id,
            "title": self.title,
            "date": self.date,
            "time": self.time,
            "description": self.description,
            "type": self.type,
            "guests": list(self.guests),
        }
        if self.end_time is not None:
            out["endTime"] = self.end_time
        if self.location is not None:
            out["location"] = self.location
        if self.meet_link is not None:
            out["meetLink"] = self.meet_link
        if self.contact_id is not None:
            out["contactId"] = self.contact_id
        return out

    @classmethod
    def from_record(cls, rec: AppointmentRecord) -> "Appointment":
        """Strict inverse of to_record (KeyError on missing required keys)."""
        return cls(
            id=str(rec["id"]),
            title=str(rec["title"]),
            date=str(rec["date"]),
            time=str(rec["time"]),
            end_time=rec.get("endTime"),
            description=str(rec.get("description") or ""),
            location=rec.get("location"),
            meet_link=rec.get("meetLink"),
            guests=tuple(rec.get("guests") or ()),
            type=str(rec.get("type") or "meeting"),
            contact_id=rec.get("contactId"),
        )


@dataclass(frozen=True)
class Contact:
    id: str
    name: str
    email: str = ""
    company: str = ""
    role: str = ""
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def initial(self) -> str:
        n = self.name.strip()
        return n[0].upper() if n else "?"

    def to_record(self) -> Dict[str, Any]:
        out = dict(self.raw)
        out.update({"id": self.id, "name": self.name, "email": self.email})
        if self.company:
            out["company"] = self.company
        if self.role:
            out["role"] = self.role
        return out


__all__ = [
    "APPOINTMENT_TYPES",
    "TYPE_LABELS",
    "TYPE_COLORS",
    "UNTITLED",
    "UNKNOWN_GUEST",
    "AppointmentRecord",
    "Appointment",
    "Contact",
]
