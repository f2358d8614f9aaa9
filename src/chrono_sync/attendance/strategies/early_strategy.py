from __future__ import annotations

from datetime import datetime

from .base import AttendanceStrategy, StatusDecision


class EarlyLeaveStrategy(AttendanceStrategy):
    """Clock-out before the required duration was worked."""

    def decide_checkin(self, *, now: datetime, work_start_time: str) -> StatusDecision:
        return StatusDecision(is_late=False)

    def decide_checkout(self, *, duration_minutes: int, required_minutes: int) -> StatusDecision:
        short = required_minutes - duration_minutes
        return StatusDecision(is_early_leave=True, note=f"Left {short} min before the required duration")
