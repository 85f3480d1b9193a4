from __future__ import annotations

from datetime import date

from consultation_scheduler.domain.entities.booking import TIME_SLOTS

HASH_MULTIPLIER = 6151


def degraded_unavailable_slots(day: date) -> frozenset[int]:
    """Deterministic placeholder availability for dates with no authoritative record.

    Depends only on the day of month. Hash collisions are skipped, so the
    result may hold fewer than `2 + day % 3` indices.
    """
    d = day.day
    count = 2 + (d % 3)
    unavailable: list[int] = []
    for i in range(count):
        index = (d * (i + 1) * HASH_MULTIPLIER) % len(TIME_SLOTS)
        if index not in unavailable:
            unavailable.append(index)
    return frozenset(unavailable)
