from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any

TIME_SLOTS: tuple[str, ...] = (
    "9:00 AM",
    "10:00 AM",
    "11:00 AM",
    "12:00 PM",
    "1:00 PM",
    "2:00 PM",
    "3:00 PM",
    "4:00 PM",
)


class PropertyType(str, Enum):
    apartment = "apartment"
    condo = "condo"
    single_family = "single-family"
    townhouse = "townhouse"
    estate = "estate"
    multi_family = "multi-family"
    other = "other"


class BookingStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    completed = "completed"
    cancelled = "cancelled"

    @classmethod
    def parse(cls, value: str | "BookingStatus") -> "BookingStatus":
        """Accept canonical values plus the scheduled/rescheduled lifecycle."""
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        if normalized in LEGACY_STATUS_MAP:
            return LEGACY_STATUS_MAP[normalized]
        return cls(normalized)


LEGACY_STATUS_MAP: dict[str, BookingStatus] = {
    "scheduled": BookingStatus.confirmed,
    "rescheduled": BookingStatus.pending,
}


def slot_index(label: str) -> int:
    """Index 0-7 of a slot label. Raises ValueError for unknown labels."""
    try:
        return TIME_SLOTS.index(label.strip())
    except ValueError:
        raise ValueError(f"Unknown time slot: {label!r}") from None


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _format_ts(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _parse_ts(value: str | None) -> datetime:
    if not value:
        return utcnow()
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class ContactDetails:
    name: str
    email: str
    phone: str


@dataclass(frozen=True)
class Booking:
    id: str
    contact: ContactDetails
    property_type: PropertyType
    message: str | None
    date: date
    time_slot: str
    status: BookingStatus
    created_at: datetime
    updated_at: datetime

    @property
    def slot_index(self) -> int:
        return slot_index(self.time_slot)

    def with_status(self, status: BookingStatus, now: datetime | None = None) -> "Booking":
        return replace(self, status=status, updated_at=now or utcnow())

    def to_payload(self) -> dict[str, Any]:
        """Remote wire shape (camelCase, matches the consultations API)."""
        payload: dict[str, Any] = {
            "id": self.id,
            "name": self.contact.name,
            "email": self.contact.email,
            "phone": self.contact.phone,
            "propertyType": self.property_type.value,
            "selectedDate": self.date.isoformat(),
            "selectedTimeSlot": self.time_slot,
            "status": self.status.value,
            "createdAt": _format_ts(self.created_at),
            "updatedAt": _format_ts(self.updated_at),
        }
        if self.message:
            payload["message"] = self.message
        return payload

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "Booking":
        booking_id = data.get("id") or data.get("_id")
        if booking_id in (None, ""):
            raise ValueError("Consultation payload has no id")
        time_slot = str(data["selectedTimeSlot"])
        slot_index(time_slot)
        return cls(
            id=str(booking_id),
            contact=ContactDetails(
                name=str(data.get("name", "")),
                email=str(data.get("email", "")),
                phone=str(data.get("phone", "")),
            ),
            property_type=PropertyType(data.get("propertyType", PropertyType.other.value)),
            message=data.get("message") or None,
            date=date.fromisoformat(str(data["selectedDate"])[:10]),
            time_slot=time_slot,
            status=BookingStatus.parse(data.get("status", BookingStatus.pending.value)),
            created_at=_parse_ts(data.get("createdAt")),
            updated_at=_parse_ts(data.get("updatedAt")),
        )
