#!/usr/bin/env python3
"""
Interactive local scheduling harness (no HTTP server).

Usage:
  python3 scripts/schedule_local.py [--offline]

What it does:
- Builds a BookingStore through the project wiring (--offline forces every
  remote call to fail so the local fallbacks can be watched)
- Walks the same SchedulingCoordinator flow the API uses: month grid,
  date, slot, contact form, submit
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from consultation_scheduler.application.use_cases.calendar_grid import WEEKDAY_HEADERS
from consultation_scheduler.application.use_cases.schedule_consultation import SchedulingCoordinator
from consultation_scheduler.core.config import settings
from consultation_scheduler.core.logging_config import configure_logging
from consultation_scheduler.domain.entities.booking import PropertyType
from consultation_scheduler.infrastructure.api.mock_consultation_api import MockConsultationApi
from consultation_scheduler.wiring.dependencies import build_booking_store, build_coordinator


def _print_calendar(coordinator: SchedulingCoordinator) -> None:
    print(f"\n{coordinator.title}")
    print(" ".join(f"{d:>3}" for d in WEEKDAY_HEADERS))
    cells = coordinator.calendar()
    for week in range(6):
        row = []
        for cell in cells[week * 7 : week * 7 + 7]:
            if not cell.in_current_month:
                row.append("  .")
            elif cell.is_selected:
                row.append(f"*{cell.day_number:>2}")
            elif cell.is_selectable:
                row.append(f"{cell.day_number:>3}")
            else:
                row.append("  -")
        print(" ".join(row))


def _print_slots(coordinator: SchedulingCoordinator) -> None:
    print(f"\n{coordinator.selected_date_label}")
    for option in coordinator.slot_options():
        marker = " " if option.available else "x"
        print(f"  [{marker}] {option.index}: {option.label}")


def _print_help() -> None:
    print("Commands:")
    print("  n / p        -> next / previous month")
    print("  d <day>      -> select a day of the displayed month")
    print("  s <index>    -> select a time slot")
    print("  f            -> fill in the contact form and submit")
    print("  list         -> show consultations held by the store")
    print("  reset        -> start over")
    print("  /quit        -> exit")


def _fill_form(coordinator: SchedulingCoordinator) -> None:
    types = ", ".join(t.value for t in PropertyType)
    coordinator.update_form(
        name=input("Full name: ").strip(),
        email=input("Email: ").strip(),
        phone=input("Phone: ").strip(),
        property_type=input(f"Property type ({types}): ").strip(),
        message=input("Message (optional): ").strip(),
    )
    step = coordinator.submit()
    if coordinator.validation_error:
        print(coordinator.validation_error)
        return
    print(f"\nConsultation Scheduled! ({step.value}, id={coordinator.state.booking_id})")
    print(coordinator.confirmation_message)
    if coordinator.error:
        print(f"(backend: {coordinator.error})")


def main() -> None:
    parser = argparse.ArgumentParser(description="Local consultation scheduling harness")
    parser.add_argument("--offline", action="store_true", help="force every remote call to fail")
    args = parser.parse_args()

    configure_logging(settings.LOG_LEVEL)
    api = MockConsultationApi(fail=True) if args.offline else None
    store = build_booking_store(settings, api)
    store.refresh()
    coordinator = build_coordinator(store, settings)

    print("\nLocal Scheduling Harness")
    print("-" * 60)
    _print_help()
    _print_calendar(coordinator)

    while True:
        try:
            text = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not text:
            continue
        cmd, _, arg = text.partition(" ")
        cmd = cmd.lower()

        if cmd in ("/quit", "/exit"):
            print("Bye!")
            return
        if cmd in ("/help", "help"):
            _print_help()
        elif cmd == "n":
            coordinator.next_month()
            _print_calendar(coordinator)
        elif cmd == "p":
            coordinator.previous_month()
            _print_calendar(coordinator)
        elif cmd == "d" and arg.isdigit():
            cells = [c for c in coordinator.calendar() if c.in_current_month and c.day_number == int(arg)]
            if cells and coordinator.select_cell(cells[0]):
                _print_slots(coordinator)
            else:
                print("That day cannot be booked.")
        elif cmd == "s" and arg.isdigit():
            if coordinator.select_slot(int(arg)):
                print(f"Selected slot {arg}. Type 'f' to fill in the form.")
            else:
                print("That slot is not available.")
        elif cmd == "f":
            _fill_form(coordinator)
        elif cmd == "list":
            for booking in store.bookings:
                print(f"  {booking.id}: {booking.date} {booking.time_slot} {booking.status.value} ({booking.contact.name})")
        elif cmd == "reset":
            coordinator.reset()
            _print_calendar(coordinator)
        else:
            print("Unknown command. Type /help.")


if __name__ == "__main__":
    main()
