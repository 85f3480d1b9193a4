from __future__ import annotations

import calendar
from datetime import date

from consultation_scheduler.domain.entities.calendar_cell import CalendarCell

GRID_SIZE = 42  # 6 weeks x 7 days, Sunday first
WEEKDAY_HEADERS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move `delta` months from (year, month), wrapping across years."""
    zero_based = year * 12 + (month - 1) + delta
    return zero_based // 12, zero_based % 12 + 1


def month_title(year: int, month: int) -> str:
    return f"{calendar.month_name[month]} {year}"


def sunday_first_weekday(day: date) -> int:
    return (day.weekday() + 1) % 7


def build_calendar_grid(
    year: int,
    month: int,
    selected_date: date | None,
    today: date,
) -> list[CalendarCell]:
    """Build the 42-cell month grid used by the date picker.

    Leading filler cells belong to the previous month and are always past.
    Trailing filler cells are numbered from 1 and carry no flags.
    """
    year, month = shift_month(year, month, 0)
    first = date(year, month, 1)
    days_in_month = calendar.monthrange(year, month)[1]
    leading = sunday_first_weekday(first)

    prev_year, prev_month = shift_month(year, month, -1)
    days_in_prev_month = calendar.monthrange(prev_year, prev_month)[1]

    cells: list[CalendarCell] = []
    for i in range(leading):
        cells.append(
            CalendarCell(
                day_number=days_in_prev_month - leading + i + 1,
                in_current_month=False,
                is_past=True,
            )
        )

    for day_number in range(1, days_in_month + 1):
        current = date(year, month, day_number)
        cells.append(
            CalendarCell(
                day_number=day_number,
                in_current_month=True,
                is_today=current == today,
                is_past=current < today,
                is_weekend=current.weekday() >= 5,
                is_selected=selected_date is not None and current == selected_date,
                date=current,
            )
        )

    for day_number in range(1, GRID_SIZE - len(cells) + 1):
        cells.append(CalendarCell(day_number=day_number, in_current_month=False))

    return cells
