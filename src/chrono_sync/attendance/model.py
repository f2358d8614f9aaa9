from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one clock-in/clock-out cycle.

    `check_in` and `check_out` are timezone-aware; `work_date` is the local
    calendar date of the clock-in and never moves, even when the session ends
    on a later day.
    """

    id: str
    user_id: str
    work_date: date
    check_in: datetime
    check_out: Optional[datetime]
    status: AttendanceStatus
    is_late: bool
    is_early_leave: bool = False
    work_duration_minutes: int = 0
    note: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.check_out is None


@dataclass(frozen=True)
class SessionTick:
    """Derived state of an open session at one instant."""

    elapsed_seconds: int
    threshold_reached: bool
    alarm_due: bool = False
