from __future__ import annotations

import logging

from fastapi import Request

from consultation_scheduler.application.ports.consultation_api import ConsultationApiPort
from consultation_scheduler.application.use_cases.availability import AvailabilityResolver
from consultation_scheduler.application.use_cases.schedule_consultation import SchedulingCoordinator
from consultation_scheduler.application.utils.dates import today_in
from consultation_scheduler.core.config import Settings, settings
from consultation_scheduler.infrastructure.api.consultation_client import HttpConsultationApi
from consultation_scheduler.infrastructure.api.mock_consultation_api import MockConsultationApi
from consultation_scheduler.infrastructure.store.booking_store import BookingStore

logger = logging.getLogger(__name__)


def build_consultation_api(config: Settings = settings) -> ConsultationApiPort:
    if config.USE_MOCK_API or not config.CONSULTATION_API_BASE_URL:
        logger.info("Using MockConsultationApi", extra={"reason": "mock enabled or no base URL"})
        return MockConsultationApi()
    logger.info("Using HttpConsultationApi base_url=%s", config.CONSULTATION_API_BASE_URL)
    return HttpConsultationApi(
        base_url=config.CONSULTATION_API_BASE_URL,
        timeout=config.CONSULTATION_API_TIMEOUT_SECONDS,
    )


def build_booking_store(config: Settings = settings, api: ConsultationApiPort | None = None) -> BookingStore:
    return BookingStore(api=api or build_consultation_api(config))


def build_coordinator(store: BookingStore, config: Settings = settings) -> SchedulingCoordinator:
    return SchedulingCoordinator(
        store=store,
        resolver=AvailabilityResolver(store),
        today=lambda: today_in(config.BUSINESS_TIMEZONE),
        business_name=config.BUSINESS_NAME,
    )


def get_booking_store(request: Request) -> BookingStore:
    return request.app.state.booking_store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_resolver(request: Request) -> AvailabilityResolver:
    return AvailabilityResolver(get_booking_store(request))


def get_coordinator(request: Request) -> SchedulingCoordinator:
    return build_coordinator(get_booking_store(request), get_settings(request))
