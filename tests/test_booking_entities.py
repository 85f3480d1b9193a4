"""
Tests for booking entity helpers and the status lifecycle mapping.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from consultation_scheduler.domain.entities.booking import (
    Booking,
    BookingStatus,
    ContactDetails,
    PropertyType,
    slot_index,
)


def test_status_parse_maps_alternate_lifecycle():
    assert BookingStatus.parse("scheduled") == BookingStatus.confirmed
    assert BookingStatus.parse("rescheduled") == BookingStatus.pending
    assert BookingStatus.parse("completed") == BookingStatus.completed
    assert BookingStatus.parse("Cancelled") == BookingStatus.cancelled
    with pytest.raises(ValueError):
        BookingStatus.parse("archived")


def test_slot_index():
    assert slot_index("9:00 AM") == 0
    assert slot_index("4:00 PM") == 7
    with pytest.raises(ValueError):
        slot_index("5:00 PM")


def test_payload_round_trip_keeps_wire_names():
    ts = datetime(2026, 10, 16, 12, 0, tzinfo=timezone.utc)
    booking = Booking(
        id="42",
        contact=ContactDetails(name="Ada", email="ada@example.com", phone="555"),
        property_type=PropertyType.multi_family,
        message=None,
        date=date(2026, 10, 20),
        time_slot="12:00 PM",
        status=BookingStatus.pending,
        created_at=ts,
        updated_at=ts,
    )

    payload = booking.to_payload()

    assert payload["propertyType"] == "multi-family"
    assert payload["createdAt"] == "2026-10-16T12:00:00Z"
    assert "message" not in payload
    assert Booking.from_payload(payload) == booking


def test_with_status_touches_updated_at():
    ts = datetime(2026, 10, 16, 12, 0, tzinfo=timezone.utc)
    later = datetime(2026, 10, 17, 9, 0, tzinfo=timezone.utc)
    booking = Booking(
        id="1",
        contact=ContactDetails(name="A", email="a@example.com", phone="1"),
        property_type=PropertyType.other,
        message="hi",
        date=date(2026, 10, 20),
        time_slot="9:00 AM",
        status=BookingStatus.pending,
        created_at=ts,
        updated_at=ts,
    )

    updated = booking.with_status(BookingStatus.cancelled, later)

    assert updated.status == BookingStatus.cancelled
    assert updated.updated_at == later
    assert updated.created_at == ts
    assert booking.status == BookingStatus.pending
