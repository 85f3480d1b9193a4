"""
Tests for AvailabilityResolver precedence: authoritative record, confirmed
bookings, then degraded placeholder.
"""

from __future__ import annotations

from datetime import date

import pytest

from consultation_scheduler.application.use_cases import availability as availability_module
from consultation_scheduler.application.use_cases.availability import AvailabilityResolver
from consultation_scheduler.application.use_cases.fallback_availability import (
    degraded_unavailable_slots,
)
from consultation_scheduler.domain.entities.availability import AvailabilityRecord
from consultation_scheduler.domain.entities.booking import (
    BookingStatus,
    ContactDetails,
    PropertyType,
)
from consultation_scheduler.domain.entities.requests import CreateRequest, StatusUpdate
from consultation_scheduler.infrastructure.api.mock_consultation_api import MockConsultationApi
from consultation_scheduler.infrastructure.store.booking_store import BookingStore

DAY = date(2026, 10, 20)


def _request(slot: str) -> CreateRequest:
    return CreateRequest(
        contact=ContactDetails(name="Grace Hopper", email="grace@example.com", phone="555-0199"),
        property_type=PropertyType.condo,
        message="Gutter cleaning",
        date=DAY,
        time_slot=slot,
    )


def test_authoritative_record_is_returned_verbatim(monkeypatch):
    api = MockConsultationApi(availability=[AvailabilityRecord(DAY, frozenset({7}))])
    store = BookingStore(api=api)
    store.fetch_availability()

    def _fail(day):
        raise AssertionError("fallback must not run when a record exists")

    monkeypatch.setattr(availability_module, "degraded_unavailable_slots", _fail)
    resolver = AvailabilityResolver(store)

    assert resolver.unavailable_slots(DAY) == frozenset({7})
    assert degraded_unavailable_slots(DAY) != frozenset({7})


def test_confirmed_bookings_mark_their_slots():
    store = BookingStore(api=MockConsultationApi())
    confirmed = store.create(_request("1:00 PM"))
    store.create(_request("3:00 PM"))
    store.update_status(StatusUpdate(confirmed, BookingStatus.confirmed))

    resolver = AvailabilityResolver(store)

    assert resolver.unavailable_slots(DAY) == frozenset({4})


def test_confirmed_bookings_replace_degraded_slots_instead_of_merging():
    # Degraded slots for this day are {0, 4}; one confirmed booking at 10:00 AM
    # frees both of them.
    assert degraded_unavailable_slots(DAY) == frozenset({0, 4})
    store = BookingStore(api=MockConsultationApi())
    store.update_status(StatusUpdate(store.create(_request("10:00 AM")), BookingStatus.confirmed))

    resolver = AvailabilityResolver(store)

    assert resolver.unavailable_slots(DAY) == frozenset({1})
    assert resolver.is_available(DAY, 0)
    assert resolver.is_available(DAY, 4)
    assert not resolver.is_available(DAY, 1)


def test_falls_back_to_degraded_slots():
    store = BookingStore(api=MockConsultationApi())
    store.create(_request("1:00 PM"))  # pending, ignored

    resolver = AvailabilityResolver(store)

    assert resolver.unavailable_slots(DAY) == degraded_unavailable_slots(DAY)


def test_available_slots_lists_all_eight_labels():
    store = BookingStore(api=MockConsultationApi(availability=[AvailabilityRecord(DAY, frozenset({0, 5}))]))
    store.fetch_availability()
    resolver = AvailabilityResolver(store)

    options = resolver.available_slots(DAY)

    assert [o.label for o in options][:2] == ["9:00 AM", "10:00 AM"]
    assert len(options) == 8
    assert [o.index for o in options if not o.available] == [0, 5]
    assert resolver.is_available(DAY, 1)
    assert not resolver.is_available(DAY, 5)
    assert not resolver.is_available(DAY, 8)


def test_record_rejects_out_of_range_index():
    with pytest.raises(ValueError):
        AvailabilityRecord(DAY, frozenset({8}))
