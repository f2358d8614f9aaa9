from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class StatusDecision:
    is_late: bool = False
    is_early_leave: bool = False
    note: Optional[str] = None


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we classify a clock-in or clock-out."""

    @abstractmethod
    def decide_checkin(self, *, now: datetime, work_start_time: str) -> StatusDecision:
        raise NotImplementedError

    @abstractmethod
    def decide_checkout(self, *, duration_minutes: int, required_minutes: int) -> StatusDecision:
        raise NotImplementedError
