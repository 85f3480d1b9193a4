from __future__ import annotations

from datetime import date, datetime, timezone

from consultation_scheduler.domain.entities.availability import AvailabilityRecord
from consultation_scheduler.domain.entities.booking import (
    Booking,
    BookingStatus,
    ContactDetails,
    PropertyType,
)


def seed_bookings() -> list[Booking]:
    """Example consultations shown when the API cannot be reached."""
    return [
        Booking(
            id="1",
            contact=ContactDetails(
                name="John Smith",
                email="john.smith@email.com",
                phone="(555) 123-4567",
            ),
            property_type=PropertyType.single_family,
            message="Interested in lawn care services",
            date=date(2024, 6, 10),
            time_slot="10:00 AM",
            status=BookingStatus.confirmed,
            created_at=datetime(2024, 6, 4, 10, 30, tzinfo=timezone.utc),
            updated_at=datetime(2024, 6, 4, 10, 30, tzinfo=timezone.utc),
        ),
        Booking(
            id="2",
            contact=ContactDetails(
                name="Sarah Johnson",
                email="sarah.johnson@email.com",
                phone="(555) 987-6543",
            ),
            property_type=PropertyType.condo,
            message="Need window cleaning and maintenance",
            date=date(2024, 6, 12),
            time_slot="2:00 PM",
            status=BookingStatus.pending,
            created_at=datetime(2024, 6, 4, 14, 15, tzinfo=timezone.utc),
            updated_at=datetime(2024, 6, 4, 14, 15, tzinfo=timezone.utc),
        ),
    ]


def seed_availability() -> list[AvailabilityRecord]:
    return [
        AvailabilityRecord(date(2024, 6, 10), frozenset({0, 3, 6})),
        AvailabilityRecord(date(2024, 6, 11), frozenset({1, 4})),
        AvailabilityRecord(date(2024, 6, 12), frozenset({2, 5, 7})),
    ]
