from __future__ import annotations

from datetime import date, datetime

from ..core.enums import TimeOfDay


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_instant(value: str) -> datetime:
    """Parse an ISO-8601 timestamp written by `to_iso`."""
    return datetime.fromisoformat(value)


def to_iso(value: datetime) -> str:
    return value.isoformat()


def now_local() -> datetime:
    """Current local time, carrying the UTC offset in effect right now.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now().astimezone()


def time_of_day(value: datetime) -> TimeOfDay:
    if value.hour < 12:
        return TimeOfDay.MORNING
    if value.hour < 17:
        return TimeOfDay.AFTERNOON
    return TimeOfDay.EVENING


def format_hms(seconds: int) -> str:
    seconds = max(0, int(seconds))
    return f"{seconds // 3600:02d}:{seconds % 3600 // 60:02d}:{seconds % 60:02d}"


def format_hm(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"
