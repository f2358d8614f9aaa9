from __future__ import annotations

from datetime import datetime

from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Late clock-in."""

    def decide_checkin(self, *, now: datetime, work_start_time: str) -> StatusDecision:
        return StatusDecision(is_late=True, note=f"Checked in at {now.strftime('%H:%M')}, after {work_start_time}")

    def decide_checkout(self, *, duration_minutes: int, required_minutes: int) -> StatusDecision:
        return StatusDecision(is_early_leave=False)
