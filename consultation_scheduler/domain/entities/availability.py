from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from consultation_scheduler.domain.entities.booking import TIME_SLOTS


@dataclass(frozen=True)
class AvailabilityRecord:
    date: date
    unavailable_slot_indices: frozenset[int]

    def __post_init__(self) -> None:
        for index in self.unavailable_slot_indices:
            if not 0 <= index < len(TIME_SLOTS):
                raise ValueError(f"Slot index out of range: {index}")

    def to_payload(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "unavailableSlots": sorted(self.unavailable_slot_indices),
        }

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "AvailabilityRecord":
        return cls(
            date=date.fromisoformat(str(data["date"])[:10]),
            unavailable_slot_indices=frozenset(int(i) for i in data.get("unavailableSlots", [])),
        )


@dataclass(frozen=True)
class TimeSlotOption:
    index: int
    label: str
    available: bool
