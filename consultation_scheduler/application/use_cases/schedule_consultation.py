from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import date

from consultation_scheduler.application.ports.booking_store import BookingStorePort
from consultation_scheduler.application.use_cases.availability import AvailabilityResolver
from consultation_scheduler.application.use_cases.calendar_grid import (
    build_calendar_grid,
    month_title,
    shift_month,
)
from consultation_scheduler.application.utils.dates import format_long_date
from consultation_scheduler.domain.entities.availability import TimeSlotOption
from consultation_scheduler.domain.entities.booking import (
    TIME_SLOTS,
    ContactDetails,
    PropertyType,
)
from consultation_scheduler.domain.entities.calendar_cell import CalendarCell
from consultation_scheduler.domain.entities.requests import CreateRequest
from consultation_scheduler.domain.entities.scheduling_state import (
    TERMINAL_STEPS,
    ContactForm,
    FlowStep,
    SchedulingState,
)

REQUIRED_FIELDS_MESSAGE = "Please fill out all required fields"
INVALID_DATE_MESSAGE = "Please choose a weekday that is not in the past"


class SchedulingCoordinator:
    """Drives the pick date -> pick slot -> contact form -> submit flow.

    Holds only transient selection state. Bookings are written through the
    store, and the local fallback after a failed remote create is an explicit
    step here rather than inside the store.
    """

    def __init__(
        self,
        store: BookingStorePort,
        resolver: AvailabilityResolver,
        today: Callable[[], date],
        business_name: str = "Servaura",
    ) -> None:
        self._store = store
        self._resolver = resolver
        self._today = today
        self._business_name = business_name
        self._logger = logging.getLogger(__name__)
        self._state = self._initial_state()

    @property
    def state(self) -> SchedulingState:
        return self._state

    @property
    def step(self) -> FlowStep:
        return self._state.step

    @property
    def loading(self) -> bool:
        return self._state.step == FlowStep.submitting or self._store.loading

    @property
    def error(self) -> str | None:
        return self._store.error

    @property
    def validation_error(self) -> str | None:
        return self._state.validation_error

    @property
    def is_confirmed(self) -> bool:
        return self._state.step in TERMINAL_STEPS

    @property
    def confirmation_message(self) -> str | None:
        if not self.is_confirmed:
            return None
        return (
            f"Thank you for scheduling a consultation with {self._business_name}. "
            "One of our home service specialists will call you at the scheduled time."
        )

    @property
    def title(self) -> str:
        return month_title(self._state.year, self._state.month)

    @property
    def selected_date_label(self) -> str:
        return format_long_date(self._state.selected_date)

    # Calendar navigation

    def show_month(self, year: int, month: int) -> None:
        year, month = shift_month(year, month, 0)
        self._state = replace(self._state, year=year, month=month)

    def next_month(self) -> None:
        self.show_month(*shift_month(self._state.year, self._state.month, 1))

    def previous_month(self) -> None:
        self.show_month(*shift_month(self._state.year, self._state.month, -1))

    def calendar(self) -> list[CalendarCell]:
        return build_calendar_grid(
            self._state.year,
            self._state.month,
            self._state.selected_date,
            self._today(),
        )

    # Date and slot selection

    def select_cell(self, cell: CalendarCell) -> bool:
        if not cell.is_selectable or cell.date is None:
            return False
        return self.select_date(cell.date)

    def select_date(self, day: date) -> bool:
        if self._locked() or not self._is_bookable(day):
            return False
        self._state = replace(
            self._state,
            step=FlowStep.selecting_slot,
            year=day.year,
            month=day.month,
            selected_date=day,
            selected_slot=None,
            validation_error=None,
        )
        self._logger.debug("Date selected", extra={"date": day.isoformat(), "step": self.step.value})
        return True

    def clear_date(self) -> None:
        if self._locked():
            return
        self._state = replace(
            self._state,
            step=FlowStep.selecting_date,
            selected_date=None,
            selected_slot=None,
        )

    def slot_options(self) -> list[TimeSlotOption]:
        if self._state.selected_date is None:
            return []
        return self._resolver.available_slots(self._state.selected_date)

    def select_slot(self, index: int) -> bool:
        day = self._state.selected_date
        if self._locked() or day is None:
            return False
        if not self._resolver.is_available(day, index):
            return False
        self._state = replace(
            self._state,
            step=FlowStep.filling_contact_form,
            selected_slot=index,
            validation_error=None,
        )
        return True

    # Contact form

    def update_form(
        self,
        name: str | None = None,
        email: str | None = None,
        phone: str | None = None,
        property_type: str | None = None,
        message: str | None = None,
    ) -> None:
        if self._locked():
            return
        changes = {
            key: value
            for key, value in {
                "name": name,
                "email": email,
                "phone": phone,
                "property_type": property_type,
                "message": message,
            }.items()
            if value is not None
        }
        self._state = replace(self._state, form=replace(self._state.form, **changes))

    def submit(self) -> FlowStep:
        if self._locked():
            return self.step

        request = self._build_request()
        if request is None:
            return self.step

        self._state = replace(self._state, step=FlowStep.submitting, validation_error=None)
        result = self._store.submit(request)
        if result.ok and result.value is not None:
            booking_id = result.value.id
            step = FlowStep.success
        else:
            booking_id = self._store.record_local(request).id
            step = FlowStep.failed_but_locally_recorded

        self._state = replace(self._state, step=step, booking_id=booking_id)
        self._logger.info(
            "Consultation scheduled",
            extra={
                "booking_id": booking_id,
                "step": step.value,
                "date": request.date.isoformat(),
                "slot": request.time_slot,
            },
        )
        self._store.refresh()
        return step

    def reset(self) -> None:
        self._state = self._initial_state()

    def _build_request(self) -> CreateRequest | None:
        form = self._state.form
        day = self._state.selected_date
        slot = self._state.selected_slot
        if form.missing_fields() or day is None or slot is None:
            self._invalid(REQUIRED_FIELDS_MESSAGE)
            return None
        try:
            property_type = PropertyType(form.property_type.strip())
        except ValueError:
            self._invalid(REQUIRED_FIELDS_MESSAGE)
            return None
        if not self._is_bookable(day):
            self._invalid(INVALID_DATE_MESSAGE)
            return None
        return CreateRequest(
            contact=ContactDetails(
                name=form.name.strip(),
                email=form.email.strip(),
                phone=form.phone.strip(),
            ),
            property_type=property_type,
            message=form.message.strip() or None,
            date=day,
            time_slot=TIME_SLOTS[slot],
        )

    def _invalid(self, message: str) -> None:
        self._state = replace(self._state, validation_error=message)
        self._logger.info("Submission rejected", extra={"reason": message, "step": self.step.value})

    def _is_bookable(self, day: date) -> bool:
        return day.weekday() < 5 and day >= self._today()

    def _locked(self) -> bool:
        return self._state.step == FlowStep.submitting or self.is_confirmed

    def _initial_state(self) -> SchedulingState:
        today = self._today()
        return SchedulingState(year=today.year, month=today.month, form=ContactForm())
