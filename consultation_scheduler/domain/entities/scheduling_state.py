from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum


class FlowStep(str, Enum):
    selecting_date = "selecting_date"
    selecting_slot = "selecting_slot"
    filling_contact_form = "filling_contact_form"
    submitting = "submitting"
    success = "success"
    failed_but_locally_recorded = "failed_but_locally_recorded"


TERMINAL_STEPS = frozenset({FlowStep.success, FlowStep.failed_but_locally_recorded})


@dataclass(frozen=True)
class ContactForm:
    name: str = ""
    email: str = ""
    phone: str = ""
    property_type: str = ""
    message: str = ""

    def missing_fields(self) -> list[str]:
        return [
            field
            for field in ("name", "email", "phone", "property_type")
            if not getattr(self, field).strip()
        ]


@dataclass(frozen=True)
class SchedulingState:
    step: FlowStep = FlowStep.selecting_date
    year: int = 1970
    month: int = 1
    selected_date: date | None = None
    selected_slot: int | None = None
    form: ContactForm = ContactForm()
    booking_id: str | None = None
    validation_error: str | None = None
