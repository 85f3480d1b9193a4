from __future__ import annotations

import logging
from datetime import date

from consultation_scheduler.application.ports.booking_store import BookingStorePort
from consultation_scheduler.application.use_cases.fallback_availability import (
    degraded_unavailable_slots,
)
from consultation_scheduler.domain.entities.availability import TimeSlotOption
from consultation_scheduler.domain.entities.booking import TIME_SLOTS, BookingStatus


class AvailabilityResolver:
    """Advisory slot availability. Nothing here reserves a slot."""

    def __init__(self, store: BookingStorePort) -> None:
        self._store = store
        self._logger = logging.getLogger(__name__)

    def unavailable_slots(self, day: date) -> frozenset[int]:
        record = self._store.availability_for(day)
        if record is not None:
            return record.unavailable_slot_indices

        booked = frozenset(
            booking.slot_index
            for booking in self._store.bookings_on(day)
            if booking.status == BookingStatus.confirmed
        )
        if booked:
            return booked

        self._logger.debug("Using degraded availability", extra={"date": day.isoformat()})
        return degraded_unavailable_slots(day)

    def available_slots(self, day: date) -> list[TimeSlotOption]:
        unavailable = self.unavailable_slots(day)
        return [
            TimeSlotOption(index=index, label=label, available=index not in unavailable)
            for index, label in enumerate(TIME_SLOTS)
        ]

    def is_available(self, day: date, index: int) -> bool:
        if not 0 <= index < len(TIME_SLOTS):
            return False
        return index not in self.unavailable_slots(day)
