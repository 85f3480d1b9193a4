from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from consultation_scheduler.domain.entities.booking import (
    BookingStatus,
    ContactDetails,
    PropertyType,
)


@dataclass(frozen=True)
class CreateRequest:
    contact: ContactDetails
    property_type: PropertyType
    message: str | None
    date: date
    time_slot: str

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": self.contact.name,
            "email": self.contact.email,
            "phone": self.contact.phone,
            "propertyType": self.property_type.value,
            "selectedDate": self.date.isoformat(),
            "selectedTimeSlot": self.time_slot,
        }
        if self.message:
            payload["message"] = self.message
        return payload


@dataclass(frozen=True)
class StatusUpdate:
    booking_id: str
    status: BookingStatus


@dataclass(frozen=True)
class CancelRequest:
    booking_id: str
