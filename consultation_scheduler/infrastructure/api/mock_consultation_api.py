from __future__ import annotations

import logging
import uuid

from consultation_scheduler.application.exceptions import NetworkError
from consultation_scheduler.application.ports.consultation_api import ConsultationApiPort
from consultation_scheduler.domain.entities.availability import AvailabilityRecord
from consultation_scheduler.domain.entities.booking import Booking, BookingStatus, utcnow
from consultation_scheduler.domain.entities.requests import CancelRequest, CreateRequest, StatusUpdate


class MockConsultationApi(ConsultationApiPort):
    """In-process stand-in for the consultations API.

    Set `fail = True` to make every call raise NetworkError, which drives the
    store's fallback branches.
    """

    def __init__(
        self,
        consultations: list[Booking] | None = None,
        availability: list[AvailabilityRecord] | None = None,
        fail: bool = False,
    ) -> None:
        self._consultations: dict[str, Booking] = {b.id: b for b in consultations or []}
        self._availability = list(availability or [])
        self.fail = fail
        self.calls: list[str] = []
        self._logger = logging.getLogger(__name__)

    def create_consultation(self, request: CreateRequest) -> Booking:
        self._check("create")
        now = utcnow()
        booking = Booking(
            id=uuid.uuid4().hex,
            contact=request.contact,
            property_type=request.property_type,
            message=request.message,
            date=request.date,
            time_slot=request.time_slot,
            status=BookingStatus.pending,
            created_at=now,
            updated_at=now,
        )
        self._consultations[booking.id] = booking
        self._logger.info("Mock consultation created", extra={"booking_id": booking.id})
        return booking

    def list_consultations(self) -> list[Booking]:
        self._check("list")
        return list(self._consultations.values())

    def update_consultation_status(self, update: StatusUpdate) -> Booking:
        self._check("update_status")
        booking = self._consultations.get(update.booking_id)
        if booking is None:
            raise NetworkError("update_status", "Consultation not found", status_code=404)
        updated = booking.with_status(update.status)
        self._consultations[update.booking_id] = updated
        return updated

    def delete_consultation(self, request: CancelRequest) -> None:
        self._check("cancel")
        if self._consultations.pop(request.booking_id, None) is None:
            raise NetworkError("cancel", "Consultation not found", status_code=404)

    def list_availability(self) -> list[AvailabilityRecord]:
        self._check("availability")
        return list(self._availability)

    def _check(self, operation: str) -> None:
        self.calls.append(operation)
        if self.fail:
            raise NetworkError(operation, f"Mock API unavailable ({operation})", status_code=503)
