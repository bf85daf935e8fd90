# nexuscal/filters.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from .model import APPOINTMENT_TYPES


def _all_visible() -> Dict[str, bool]:
    return {t: True for t in APPOINTMENT_TYPES}


@dataclass
class FilterState:
    """Per-category visibility. Only affects what is displayed, never what is stored."""

    visible: Dict[str, bool] = field(default_factory=_all_visible)

    @classmethod
    def from_hidden(cls, hidden: Iterable[str]) -> "FilterState":
        fs = cls()
        for t in hidden:
            fs.set_visible(t, False)
        return fs

    def _check(self, typ: str) -> str:
        if typ not in self.visible:
            raise ValueError(f"Unknown appointment type: {typ!r} (expected one of {', '.join(APPOINTMENT_TYPES)})")
        return typ

    def toggle(self, typ: str) -> bool:
        """Flip one category and return its new visibility."""
        key = self._check(typ)
        self.visible[key] = not self.visible[key]
        return self.visible[key]

    def set_visible(self, typ: str, value: bool) -> None:
        self.visible[self._check(typ)] = bool(value)

    def is_visible(self, typ: str) -> bool:
        return bool(self.visible.get(typ, False))

    def visible_types(self) -> List[str]:
        return [t for t in APPOINTMENT_TYPES if self.visible.get(t)]

    def hidden_types(self) -> List[str]:
        return [t for t in APPOINTMENT_TYPES if not self.visible.get(t)]
