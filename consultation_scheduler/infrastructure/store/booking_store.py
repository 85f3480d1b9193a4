from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import date, datetime

from consultation_scheduler.application.exceptions import NetworkError
from consultation_scheduler.application.ports.booking_store import BookingStorePort
from consultation_scheduler.application.ports.consultation_api import ConsultationApiPort
from consultation_scheduler.application.result import RemoteResult
from consultation_scheduler.domain.entities.availability import AvailabilityRecord
from consultation_scheduler.domain.entities.booking import Booking, BookingStatus, utcnow
from consultation_scheduler.domain.entities.requests import CancelRequest, CreateRequest, StatusUpdate
from consultation_scheduler.infrastructure.store.seed_data import seed_availability, seed_bookings


class BookingStore(BookingStorePort):
    """Single writer for the session's consultations and availability records.

    Every remote call is attempted once. Failures are logged, recorded as a
    human-readable message, and followed by a local fallback so callers
    always get a usable result.

    Remote calls run outside the lock; collection changes, id generation and
    the loading counters happen under it.
    """

    def __init__(
        self,
        api: ConsultationApiPort,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._api = api
        self._clock = clock
        self._bookings: list[Booking] = []
        self._availability: dict[date, AvailabilityRecord] = {}
        self._last_local_id = 0
        self._session_ids: set[str] = set()  # created here, remote or synthetic
        self._consultation_calls = 0
        self._availability_calls = 0
        self._lock = threading.Lock()
        self.consultations_error: str | None = None
        self.availability_error: str | None = None
        self._logger = logging.getLogger(__name__)

    @property
    def bookings(self) -> list[Booking]:
        with self._lock:
            return list(self._bookings)

    @property
    def availability(self) -> list[AvailabilityRecord]:
        with self._lock:
            return sorted(self._availability.values(), key=lambda r: r.date)

    @property
    def consultations_loading(self) -> bool:
        return self._consultation_calls > 0

    @property
    def availability_loading(self) -> bool:
        return self._availability_calls > 0

    @property
    def loading(self) -> bool:
        return self.consultations_loading or self.availability_loading

    @property
    def error(self) -> str | None:
        return self.consultations_error or self.availability_error

    def get(self, booking_id: str) -> Booking | None:
        with self._lock:
            for booking in self._bookings:
                if booking.id == booking_id:
                    return booking
        return None

    def bookings_on(self, day: date) -> list[Booking]:
        with self._lock:
            return [b for b in self._bookings if b.date == day]

    def availability_for(self, day: date) -> AvailabilityRecord | None:
        with self._lock:
            return self._availability.get(day)

    def submit(self, request: CreateRequest) -> RemoteResult[Booking]:
        with self._consultations_call():
            try:
                booking = self._api.create_consultation(request)
            except NetworkError as e:
                self._fail("Failed to schedule consultation", e)
                return RemoteResult.failure(e)
            with self._lock:
                self._bookings.append(booking)
                self._session_ids.add(booking.id)
            return RemoteResult.success(booking)

    def record_local(self, request: CreateRequest) -> Booking:
        with self._lock:
            now = self._clock()
            booking = Booking(
                id=self._next_local_id(now),
                contact=request.contact,
                property_type=request.property_type,
                message=request.message,
                date=request.date,
                time_slot=request.time_slot,
                status=BookingStatus.pending,
                created_at=now,
                updated_at=now,
            )
            self._bookings.append(booking)
            self._session_ids.add(booking.id)
        self._logger.warning(
            "Consultation recorded locally",
            extra={"booking_id": booking.id, "date": booking.date.isoformat(), "slot": booking.time_slot},
        )
        return booking

    def create(self, request: CreateRequest) -> str:
        result = self.submit(request)
        if result.ok and result.value is not None:
            return result.value.id
        return self.record_local(request).id

    def update_status(self, update: StatusUpdate) -> RemoteResult[Booking]:
        with self._consultations_call():
            try:
                updated = self._api.update_consultation_status(update)
            except NetworkError as e:
                self._fail("Failed to update consultation status", e)
                self._patch_status(update.booking_id, update.status)
                return RemoteResult.failure(e)
            with self._lock:
                self._bookings = [updated if b.id == update.booking_id else b for b in self._bookings]
            return RemoteResult.success(updated)

    def cancel(self, request: CancelRequest) -> RemoteResult[None]:
        # Remote success removes the record; remote failure keeps it as cancelled.
        with self._consultations_call():
            try:
                self._api.delete_consultation(request)
            except NetworkError as e:
                self._fail("Failed to cancel consultation", e)
                if self._patch_status(request.booking_id, BookingStatus.cancelled):
                    self._logger.warning(
                        "Cancelled booking kept locally",
                        extra={"booking_id": request.booking_id, "operation": "cancel"},
                    )
                return RemoteResult.failure(e)
            with self._lock:
                self._bookings = [b for b in self._bookings if b.id != request.booking_id]
                self._session_ids.discard(request.booking_id)
            return RemoteResult.success()

    def fetch_all(self) -> RemoteResult[list[Booking]]:
        with self._consultations_call():
            try:
                bookings = self._api.list_consultations()
            except NetworkError as e:
                self._fail("Failed to fetch consultations from server", e)
                with self._lock:
                    # Seed examples plus everything created this session.
                    created = [b for b in self._bookings if b.id in self._session_ids]
                    self._bookings = seed_bookings() + created
                return RemoteResult.failure(e)
            with self._lock:
                self._bookings = list(bookings)
                self._session_ids.clear()
            return RemoteResult.success(self.bookings)

    def fetch_availability(self) -> RemoteResult[list[AvailabilityRecord]]:
        with self._lock:
            self._availability_calls += 1
            self.availability_error = None
        try:
            try:
                records = self._api.list_availability()
            except NetworkError as e:
                self.availability_error = "Failed to fetch availability from server"
                self._logger.error(
                    self.availability_error,
                    extra={"operation": e.operation, "status_code": e.status_code, "error": str(e)},
                )
                with self._lock:
                    self._availability = {r.date: r for r in seed_availability()}
                return RemoteResult.failure(e)
            with self._lock:
                self._availability = {r.date: r for r in records}
            return RemoteResult.success(self.availability)
        finally:
            with self._lock:
                self._availability_calls -= 1

    def refresh(self) -> None:
        self.fetch_all()
        self.fetch_availability()

    @contextmanager
    def _consultations_call(self) -> Iterator[None]:
        with self._lock:
            self._consultation_calls += 1
            self.consultations_error = None
        try:
            yield
        finally:
            with self._lock:
                self._consultation_calls -= 1

    def _fail(self, message: str, error: NetworkError) -> None:
        self.consultations_error = message
        self._logger.error(
            message,
            extra={"operation": error.operation, "status_code": error.status_code, "error": str(error)},
        )

    def _patch_status(self, booking_id: str, status: BookingStatus) -> bool:
        with self._lock:
            now = self._clock()
            patched = False
            for index, booking in enumerate(self._bookings):
                if booking.id == booking_id:
                    self._bookings[index] = booking.with_status(status, now)
                    patched = True
            return patched

    def _next_local_id(self, now: datetime) -> str:
        # caller holds self._lock
        millis = int(now.timestamp() * 1000)
        self._last_local_id = max(millis, self._last_local_id + 1)
        return str(self._last_local_id)
