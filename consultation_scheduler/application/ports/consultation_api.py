from __future__ import annotations

from abc import ABC, abstractmethod

from consultation_scheduler.domain.entities.availability import AvailabilityRecord
from consultation_scheduler.domain.entities.booking import Booking
from consultation_scheduler.domain.entities.requests import CancelRequest, CreateRequest, StatusUpdate


class ConsultationApiPort(ABC):
    """Remote consultations collaborator. Every method raises NetworkError on failure."""

    @abstractmethod
    def create_consultation(self, request: CreateRequest) -> Booking:
        """Create a consultation. Returns the authoritative record."""
        raise NotImplementedError

    @abstractmethod
    def list_consultations(self) -> list[Booking]:
        raise NotImplementedError

    @abstractmethod
    def update_consultation_status(self, update: StatusUpdate) -> Booking:
        """Patch status. Returns the updated record."""
        raise NotImplementedError

    @abstractmethod
    def delete_consultation(self, request: CancelRequest) -> None:
        raise NotImplementedError

    @abstractmethod
    def list_availability(self) -> list[AvailabilityRecord]:
        raise NotImplementedError
