from __future__ import annotations

from datetime import datetime

from .base import AttendanceStrategy, StatusDecision


class NormalStrategy(AttendanceStrategy):
    """On-time clock-in, full-length clock-out."""

    def decide_checkin(self, *, now: datetime, work_start_time: str) -> StatusDecision:
        return StatusDecision(is_late=False)

    def decide_checkout(self, *, duration_minutes: int, required_minutes: int) -> StatusDecision:
        return StatusDecision(is_early_leave=False)
