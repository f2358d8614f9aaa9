from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .strategies.base import AttendanceStrategy
from .strategies.early_strategy import EarlyLeaveStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules.

    Both rules use strict comparisons, so a clock-in exactly at the start
    time and a session of exactly the required length are not flagged.
    """

    def for_checkin(self, *, now: datetime, work_start_time: str) -> AttendanceStrategy:
        # Zero-padded HH:MM strings order the same way as the times they hold.
        if now.strftime("%H:%M") > work_start_time:
            return LateStrategy()
        return NormalStrategy()

    def for_checkout(self, *, duration_minutes: int, required_minutes: int) -> AttendanceStrategy:
        if duration_minutes < required_minutes:
            return EarlyLeaveStrategy()
        return NormalStrategy()
