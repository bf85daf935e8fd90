# nexuscal/calendar.py
"""Calendar session: navigation + filters + index + layout + editor over a store.

The session owns the in-memory appointment collection. Every mutation flows
through the editor's submit path, saves the full collection back to the store
and then notifies the optional external listeners.
"""
from __future__ import annotations

import datetime as dt
import random
from typing import Callable, List, Optional, Sequence, Union

from .config import CalendarConfig
from .editor import EditorDraft, EventEditor, new_appointment_id
from .filters import FilterState
from .index import AppointmentIndex
from .model import Appointment, Contact
from .navigation import NavigationController, ViewMode
from .store import AppointmentStore, ContactDirectory
from .util.console import obs
from .util.datemath import date_key, parse_date_key
from .views import CreateIntent, EditIntent, MiniCalendarModel, RenderModel, ViewState, render_mini_calendar, render_view

Listener = Callable[[Appointment], None]


class CalendarSession:
    def __init__(
        self,
        store: AppointmentStore,
        contacts: Optional[Union[ContactDirectory, Sequence[Contact]]] = None,
        *,
        config: Optional[CalendarConfig] = None,
        today_fn: Callable[[], dt.date] = dt.date.today,
        id_factory: Callable[[], str] = new_appointment_id,
        rng: Optional[random.Random] = None,
        on_add_appointment: Optional[Listener] = None,
        on_edit_appointment: Optional[Listener] = None,
        view_mode: Union[ViewMode, str] = ViewMode.MONTH,
        anchor_date: Optional[dt.date] = None,
    ) -> None:
        self.store = store
        self.config = config or CalendarConfig()
        self.layout = self.config.layout()
        self.nav = NavigationController(anchor_date, view_mode, today_fn=today_fn)
        self.filters = FilterState.from_hidden(self.config.hidden_types)
        self._contacts_src = contacts if contacts is not None else store
        self._on_add_listener = on_add_appointment
        self._on_edit_listener = on_edit_appointment
        self.appointments: List[Appointment] = list(store.get_appointments())
        self.editor = EventEditor(
            self.contacts,
            on_add=self._handle_add,
            on_edit=self._handle_edit,
            id_factory=id_factory,
            rng=rng,
        )

    def contacts(self) -> List[Contact]:
        src = self._contacts_src
        getter = getattr(src, "get_contacts", None)
        if callable(getter):
            return list(getter())
        return list(src)  # type: ignore[arg-type]

    # -- projections -------------------------------------------------------

    def index(self) -> AppointmentIndex:
        return AppointmentIndex(self.appointments, self.filters)

    def view_state(self) -> ViewState:
        return ViewState(
            mode=self.nav.view_mode,
            anchor=self.nav.anchor_date,
            today=self.nav.today(),
            index=self.index(),
            layout=self.layout,
            collision=self.config.collision,
        )

    def render(self) -> RenderModel:
        return render_view(self.view_state())

    def mini_calendar(self) -> MiniCalendarModel:
        return render_mini_calendar(self.nav.anchor_date, self.nav.today())

    def upcoming(self, limit: int = 3) -> List[Appointment]:
        return self.index().upcoming(self.nav.today(), limit)

    # -- interaction affordances -------------------------------------------

    def click_slot(self, intent_or_date: Union[CreateIntent, str, dt.date], time: Optional[str] = None) -> EditorDraft:
        if isinstance(intent_or_date, CreateIntent):
            key, t = intent_or_date.date_key, intent_or_date.time
        elif isinstance(intent_or_date, dt.date):
            key, t = date_key(intent_or_date), time
        else:
            key, t = date_key(parse_date_key(str(intent_or_date))), time
        return self.editor.open_create(key, t or self.config.default_start)

    def click_appointment(self, target: Union[EditIntent, str]) -> EditorDraft:
        appointment_id = target.appointment_id if isinstance(target, EditIntent) else str(target)
        for a in self.appointments:
            if a.id == appointment_id:
                return self.editor.open_edit(a)
        raise KeyError(appointment_id)

    def open_create_today(self) -> EditorDraft:
        return self.click_slot(self.nav.today())

    # -- mutation path -----------------------------------------------------

    def _handle_add(self, appointment: Appointment) -> None:
        self.appointments = self.appointments + [appointment]
        self.store.save_appointments(self.appointments)
        obs("calendar", f"add id={appointment.id} date={appointment.date}")
        if self._on_add_listener is not None:
            self._on_add_listener(appointment)

    def _handle_edit(self, appointment: Appointment) -> None:
        self.appointments = [appointment if a.id == appointment.id else a for a in self.appointments]
        self.store.save_appointments(self.appointments)
        obs("calendar", f"edit id={appointment.id} date={appointment.date}")
        if self._on_edit_listener is not None:
            self._on_edit_listener(appointment)


__all__ = ["CalendarSession", "Listener"]
