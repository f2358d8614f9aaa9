from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Classification tag stored on each record."""

    PRESENT = "present"
    ABSENT = "absent"
    LEAVE = "leave"


class StatusLabel(str, Enum):
    """Display label derived from a record (report/history views)."""

    WORKING = "Working"
    LATE = "Late"
    EARLY_OUT = "Early Out"
    ON_TIME = "On Time"


class TimeOfDay(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
