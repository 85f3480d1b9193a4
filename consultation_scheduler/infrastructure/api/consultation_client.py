from __future__ import annotations

import logging
from typing import Any

import httpx

from consultation_scheduler.application.exceptions import NetworkError
from consultation_scheduler.application.ports.consultation_api import ConsultationApiPort
from consultation_scheduler.core.config import settings
from consultation_scheduler.domain.entities.availability import AvailabilityRecord
from consultation_scheduler.domain.entities.booking import Booking, BookingStatus, utcnow
from consultation_scheduler.domain.entities.requests import CancelRequest, CreateRequest, StatusUpdate


class HttpConsultationApi(ConsultationApiPort):
    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = (base_url or settings.CONSULTATION_API_BASE_URL).rstrip("/")
        self._client = client or httpx.Client(
            timeout=timeout or settings.CONSULTATION_API_TIMEOUT_SECONDS
        )
        self._logger = logging.getLogger(__name__)

    def create_consultation(self, request: CreateRequest) -> Booking:
        now = utcnow().isoformat().replace("+00:00", "Z")
        payload = {
            **request.to_payload(),
            "status": BookingStatus.pending.value,
            "createdAt": now,
            "updatedAt": now,
        }
        data = self._request("create", "POST", "/api/consultations", json=payload)
        booking = self._parse("create", Booking.from_payload, data)
        self._logger.info("Consultation created", extra={"booking_id": booking.id})
        return booking

    def list_consultations(self) -> list[Booking]:
        data = self._request("list", "GET", "/api/consultations")
        if not isinstance(data, list):
            raise NetworkError("list", "Expected a list of consultations")
        return [self._parse("list", Booking.from_payload, item) for item in data]

    def update_consultation_status(self, update: StatusUpdate) -> Booking:
        payload = {
            "status": update.status.value,
            "updatedAt": utcnow().isoformat().replace("+00:00", "Z"),
        }
        data = self._request(
            "update_status", "PATCH", f"/api/consultations/{update.booking_id}", json=payload
        )
        return self._parse("update_status", Booking.from_payload, data)

    def delete_consultation(self, request: CancelRequest) -> None:
        self._request("cancel", "DELETE", f"/api/consultations/{request.booking_id}")

    def list_availability(self) -> list[AvailabilityRecord]:
        data = self._request("availability", "GET", "/api/availability")
        if not isinstance(data, list):
            raise NetworkError("availability", "Expected a list of availability records")
        return [self._parse("availability", AvailabilityRecord.from_payload, item) for item in data]

    def _request(self, operation: str, method: str, path: str, json: Any = None) -> Any:
        url = f"{self._base_url}{path}"
        try:
            response = self._client.request(method, url, json=json)
        except httpx.HTTPError as e:
            self._logger.error(
                "Consultations API unreachable",
                extra={"operation": operation, "error": str(e)},
            )
            raise NetworkError(operation, f"Request to {path} failed: {e}") from e

        if response.status_code >= 400:
            self._logger.error(
                "Consultations API error",
                extra={"operation": operation, "status_code": response.status_code},
            )
            raise NetworkError(
                operation,
                f"Request to {path} failed: {response.status_code}",
                status_code=response.status_code,
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise NetworkError(operation, f"Invalid JSON from {path}") from e

    def _parse(self, operation: str, parser: Any, item: Any) -> Any:
        try:
            return parser(item)
        except (KeyError, TypeError, ValueError) as e:
            raise NetworkError(operation, f"Malformed response: {e}") from e
