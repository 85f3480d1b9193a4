from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class CalendarCell:
    day_number: int
    in_current_month: bool
    is_today: bool = False
    is_past: bool = False
    is_weekend: bool = False
    is_selected: bool = False
    date: date | None = None  # only set for current-month cells

    @property
    def is_selectable(self) -> bool:
        return self.in_current_month and not self.is_past and not self.is_weekend
