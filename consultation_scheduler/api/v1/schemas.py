import datetime as dt
from typing import Any

from pydantic import BaseModel, Field

from consultation_scheduler.domain.entities.booking import Booking, BookingStatus, PropertyType


class CalendarCellSchema(BaseModel):
    day_number: int
    in_current_month: bool
    is_today: bool
    is_past: bool
    is_weekend: bool
    is_selected: bool
    date: dt.date | None = None


class CalendarResponseSchema(BaseModel):
    year: int
    month: int
    title: str
    weekdays: list[str]
    cells: list[CalendarCellSchema]


class TimeSlotSchema(BaseModel):
    index: int
    label: str
    available: bool


class AvailabilityResponseSchema(BaseModel):
    date: dt.date
    unavailable_slots: list[int]
    slots: list[TimeSlotSchema]


class CreateConsultationSchema(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    property_type: str = ""
    message: str | None = None
    selected_date: dt.date
    selected_time_slot: str


class ConsultationSchema(BaseModel):
    id: str
    name: str
    email: str
    phone: str
    property_type: PropertyType
    message: str | None = None
    selected_date: dt.date
    selected_time_slot: str
    status: BookingStatus
    created_at: dt.datetime
    updated_at: dt.datetime

    @classmethod
    def from_booking(cls, booking: Booking) -> "ConsultationSchema":
        return cls(
            id=booking.id,
            name=booking.contact.name,
            email=booking.contact.email,
            phone=booking.contact.phone,
            property_type=booking.property_type,
            message=booking.message,
            selected_date=booking.date,
            selected_time_slot=booking.time_slot,
            status=booking.status,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )


class ScheduleResponseSchema(BaseModel):
    id: str
    step: str
    recorded_locally: bool
    message: str | None = None
    error: str | None = None


class StatusUpdateSchema(BaseModel):
    status: str


class MutationResponseSchema(BaseModel):
    ok: bool
    error: str | None = None
    consultation: ConsultationSchema | None = None


class ConsultationListSchema(BaseModel):
    consultations: list[ConsultationSchema]
    error: str | None = None
    meta: dict[str, Any] = Field(default_factory=dict)
