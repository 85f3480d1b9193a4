from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from consultation_scheduler.application.result import RemoteResult
from consultation_scheduler.domain.entities.availability import AvailabilityRecord
from consultation_scheduler.domain.entities.booking import Booking
from consultation_scheduler.domain.entities.requests import CancelRequest, CreateRequest, StatusUpdate


class BookingStorePort(ABC):
    @abstractmethod
    def submit(self, request: CreateRequest) -> RemoteResult[Booking]:
        """Remote create only. Appends the server record on success."""
        raise NotImplementedError

    @abstractmethod
    def record_local(self, request: CreateRequest) -> Booking:
        """Append a synthetic pending booking built from the request."""
        raise NotImplementedError

    @abstractmethod
    def create(self, request: CreateRequest) -> str:
        raise NotImplementedError

    @abstractmethod
    def update_status(self, update: StatusUpdate) -> RemoteResult[Booking]:
        raise NotImplementedError

    @abstractmethod
    def cancel(self, request: CancelRequest) -> RemoteResult[None]:
        raise NotImplementedError

    @abstractmethod
    def refresh(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def bookings_on(self, day: date) -> list[Booking]:
        raise NotImplementedError

    @abstractmethod
    def availability_for(self, day: date) -> AvailabilityRecord | None:
        raise NotImplementedError

    @property
    @abstractmethod
    def loading(self) -> bool:
        raise NotImplementedError

    @property
    @abstractmethod
    def error(self) -> str | None:
        raise NotImplementedError
