# nexuscal/store.py
"""Appointment/contact persistence collaborators.

The calendar treats storage as a key-value document with full-collection
replace semantics: `get_appointments()` returns everything, and
`save_appointments(list)` replaces everything.
"""
from __future__ import annotations

import datetime as dt
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Sequence

from .model import Appointment, Contact
from .normalize import normalize_appointments, normalize_contacts
from .util.console import eprint, obs

KEY_APPOINTMENTS = "crm_appointments"
KEY_CONTACTS = "crm_contacts"


class StoreError(ValueError):
    """Raised when the backing document cannot be read or parsed."""


class AppointmentStore(Protocol):
    def get_appointments(self) -> List[Appointment]: ...

    def save_appointments(self, appointments: Sequence[Appointment]) -> None: ...


class ContactDirectory(Protocol):
    def get_contacts(self) -> List[Contact]: ...


def initial_contacts() -> List[Dict[str, Any]]:
    return [
        {"id": "1", "name": "Carlos Ruiz", "email": "carlos@techcorp.com", "company": "TechCorp", "role": "CTO"},
        {"id": "2", "name": "Maria Gomez", "email": "maria@innovate.es", "company": "Innovate SL", "role": "CEO"},
        {"id": "3", "name": "Juan Perez", "email": "juan@soluciones.com", "company": "Soluciones Web", "role": "Manager"},
    ]


def initial_appointments(today: Optional[dt.date] = None) -> List[Dict[str, Any]]:
    d = today or dt.date.today()
    return [
        {
            "id": "1",
            "title": "Product demo",
            "date": d.isoformat(),
            "time": "10:00",
            "endTime": "11:00",
            "description": "Full walkthrough of the product features.",
            "contactId": "1",
            "type": "demo",
            "meetLink": "meet.google.com/abc-defg-hij",
            "guests": ["1"],
        }
    ]


class MemoryStore:
    """In-process store; handy for tests and embedding."""

    def __init__(
        self,
        appointments: Sequence[Appointment] = (),
        contacts: Sequence[Contact] = (),
    ) -> None:
        self._appointments: List[Appointment] = list(appointments)
        self._contacts: List[Contact] = list(contacts)
        self.save_count = 0

    def get_appointments(self) -> List[Appointment]:
        return list(self._appointments)

    def save_appointments(self, appointments: Sequence[Appointment]) -> None:
        self._appointments = list(appointments)
        self.save_count += 1

    def get_contacts(self) -> List[Contact]:
        return list(self._contacts)


class JsonFileStore:
    """Key-value JSON document on disk, the desktop stand-in for browser storage.

    Missing keys are seeded with the initial demo data and written back, so a
    fresh file behaves like a first visit.
    """

    def __init__(self, path: str | Path, *, seed: bool = True, today: Optional[dt.date] = None) -> None:
        self.path = Path(path).expanduser()
        self._seed = seed
        self._today = today

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as ex:
            raise StoreError(f"Failed to read store {self.path}: {ex}") from ex
        if not isinstance(raw, dict):
            raise StoreError(f"Store {self.path} must contain a JSON object; got {type(raw).__name__}")
        return raw

    def _write(self, doc: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(doc, ensure_ascii=False, indent=2)
        fd, tmp_name = tempfile.mkstemp(prefix=".storage-", suffix=".json", dir=str(self.path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.write("\n")
            os.replace(tmp_name, self.path)
        finally:
            if os.path.exists(tmp_name):
                os.remove(tmp_name)

    def _load_key(self, key: str, initial: List[Dict[str, Any]]) -> Any:
        doc = self._read()
        if key in doc:
            return doc[key]
        if not self._seed:
            return []
        doc[key] = initial
        self._write(doc)
        eprint(f"[nexuscal.store] INFO: seeded {key} in {self.path}")
        return initial

    def _save_key(self, key: str, value: Any) -> None:
        doc = self._read()
        doc[key] = value
        self._write(doc)

    def get_appointments(self) -> List[Appointment]:
        raw = self._load_key(KEY_APPOINTMENTS, initial_appointments(self._today))
        if not isinstance(raw, list):
            raise StoreError(f"{KEY_APPOINTMENTS} must be a list in {self.path}")
        out = normalize_appointments(raw)
        dropped = len(raw) - len(out)
        if dropped:
            eprint(f"[nexuscal.store] WARN: skipped {dropped} invalid appointment record(s) in {self.path}")
        obs("store", f"load.ok appointments={len(out)}")
        return out

    def save_appointments(self, appointments: Sequence[Appointment]) -> None:
        self._save_key(KEY_APPOINTMENTS, [a.to_record() for a in appointments])
        obs("store", f"save.ok appointments={len(appointments)}")

    def get_contacts(self) -> List[Contact]:
        raw = self._load_key(KEY_CONTACTS, initial_contacts())
        return normalize_contacts(raw)
