from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo


def today_in(timezone: str) -> date:
    """Current calendar date in the business timezone (UTC if the name is unknown)."""
    try:
        tz = ZoneInfo(timezone)
    except Exception:
        tz = ZoneInfo("UTC")
    return datetime.now(tz).date()


def format_long_date(day: date | None) -> str:
    if day is None:
        return "Please select a date from the calendar"
    return f"{day:%A}, {day:%B} {day.day}, {day.year}"


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD. Raises ValueError on anything else."""
    return date.fromisoformat(value.strip()[:10])
