from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta
from typing import List, Optional

from ..common.datetime_utils import now_local
from ..core.constants import WORK_HOURS_REQUIRED, WORK_START_TIME
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..users.model import User
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, SessionTick
from .repository import AttendanceRepository

log = logging.getLogger(__name__)


def _aware(value: datetime) -> datetime:
    """Attach the local offset to naive datetimes."""
    return value if value.tzinfo is not None else value.astimezone()


def elapsed_whole_seconds(start: datetime, end: datetime) -> int:
    """Whole seconds from start to end, floored and clamped at 0."""
    delta = _aware(end) - _aware(start)
    seconds = delta.days * 86400 + delta.seconds
    return max(0, seconds)


class AttendanceService:
    """Session controller: opens and closes work sessions.

    At most one record per user is open at a time; the repository keeps its
    id as the current-session pointer.
    """

    def __init__(
        self,
        records: AttendanceRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        work_start_time: str = WORK_START_TIME,
        work_hours_required: int = WORK_HOURS_REQUIRED,
    ):
        self._records = records
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._work_start_time = work_start_time
        self._work_hours_required = int(work_hours_required)

    @property
    def work_start_time(self) -> str:
        return self._work_start_time

    @property
    def required_seconds(self) -> int:
        return self._work_hours_required * 3600

    def clock_in(self, user: User, *, now: datetime | None = None) -> AttendanceRecord:
        # The offset captured here stays with the record for its whole life.
        now = _aware(now or now_local())
        if self.load_current_session(user) is not None:
            raise ValidationError("You already have an open work session")

        strategy = self._factory.for_checkin(now=now, work_start_time=self._work_start_time)
        decision = strategy.decide_checkin(now=now, work_start_time=self._work_start_time)

        record = AttendanceRecord(
            id=uuid.uuid4().hex,
            user_id=user.id,
            work_date=now.date(),
            check_in=now,
            check_out=None,
            status=AttendanceStatus.PRESENT,
            is_late=decision.is_late,
            is_early_leave=False,
            work_duration_minutes=0,
            note=decision.note,
        )
        self._records.save_record(record)
        self._records.set_current_session_id(record.id)
        log.info("Clock-in user=%s record=%s late=%s", user.id, record.id, record.is_late)
        return record

    def clock_out(self, record: AttendanceRecord, *, now: datetime | None = None) -> AttendanceRecord:
        if not record.is_open:
            raise ValidationError("This work session is already closed")
        now = _aware(now or now_local())

        minutes = elapsed_whole_seconds(record.check_in, now) // 60
        required_minutes = self._work_hours_required * 60
        strategy = self._factory.for_checkout(duration_minutes=minutes, required_minutes=required_minutes)
        decision = strategy.decide_checkout(duration_minutes=minutes, required_minutes=required_minutes)

        closed = AttendanceRecord(
            id=record.id,
            user_id=record.user_id,
            work_date=record.work_date,
            check_in=record.check_in,
            check_out=now,
            status=record.status,
            is_late=record.is_late,
            is_early_leave=decision.is_early_leave,
            work_duration_minutes=minutes,
            note=decision.note or record.note,
        )
        self._records.save_record(closed)
        self._records.set_current_session_id(None)
        log.info(
            "Clock-out user=%s record=%s minutes=%d early=%s",
            record.user_id,
            record.id,
            minutes,
            closed.is_early_leave,
        )
        return closed

    def tick(self, record: AttendanceRecord, now: datetime) -> SessionTick:
        elapsed = elapsed_whole_seconds(record.check_in, now)
        return SessionTick(elapsed_seconds=elapsed, threshold_reached=elapsed >= self.required_seconds)

    def load_current_session(self, user: User) -> Optional[AttendanceRecord]:
        """Resolve the current-session pointer for `user`.

        A pointer that does not lead to an open record of this user is
        cleared. When no usable pointer exists but the user still owns an open
        record (signed out mid-session), the pointer is restored to it.
        """

        records = self._records.get_records()
        session_id = self._records.get_current_session_id()

        if session_id is not None:
            for r in records:
                if r.id == session_id and r.is_open and r.user_id == user.id:
                    return r
            log.warning("Clearing stale session pointer %r", session_id)
            self._records.set_current_session_id(None)

        open_records = [r for r in records if r.user_id == user.id and r.is_open]
        if not open_records:
            return None
        current = max(open_records, key=lambda r: r.check_in)
        self._records.set_current_session_id(current.id)
        log.info("Restored session pointer to open record %s", current.id)
        return current

    def alarm_fired_for(self, record: AttendanceRecord) -> bool:
        return self._records.get_alarmed_session_id() == record.id

    def mark_alarm_fired(self, record: AttendanceRecord) -> None:
        # Survives logout and restarts; only a new record id re-arms the alarm.
        self._records.set_alarmed_session_id(record.id)

    def get_history(self, user: User, *, limit: int | None = None) -> List[AttendanceRecord]:
        items = [r for r in self._records.get_records() if r.user_id == user.id]
        items.sort(key=lambda r: r.check_in, reverse=True)
        return items[:limit] if limit else items

    def estimated_end(self, record: AttendanceRecord) -> datetime:
        return record.check_in + timedelta(hours=self._work_hours_required)
