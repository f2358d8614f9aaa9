"""Per-session timer, its periodic task and the owner of that task.

`SessionTimer` turns the level signal "required duration reached" into a
one-shot alarm. `SessionTicker` drives a timer from a daemon thread once per
interval until cancelled. `SessionMonitor` keeps at most one ticker alive,
bound to the open session being displayed.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..core.constants import TICK_INTERVAL_SECONDS
from .model import AttendanceRecord, SessionTick
from .service import AttendanceService

log = logging.getLogger(__name__)

TickCallback = Callable[[AttendanceRecord, SessionTick], None]


class SessionTimer:
    """Derives ticks for one open record; the alarm fires at most once.

    The latch is kept in the store by record id, so a fresh timer for the
    same record (after sign-in again or a restart) stays silent.
    """

    def __init__(self, service: AttendanceService, record: AttendanceRecord):
        self._service = service
        self._record = record
        self._alarm_fired = service.alarm_fired_for(record)
        self._lock = threading.Lock()

    @property
    def record(self) -> AttendanceRecord:
        return self._record

    @property
    def alarm_fired(self) -> bool:
        return self._alarm_fired

    def advance(self, now: datetime) -> SessionTick:
        tick = self._service.tick(self._record, now)
        with self._lock:
            alarm_due = tick.threshold_reached and not self._alarm_fired
            if alarm_due:
                self._alarm_fired = True
                self._service.mark_alarm_fired(self._record)
        return SessionTick(
            elapsed_seconds=tick.elapsed_seconds,
            threshold_reached=tick.threshold_reached,
            alarm_due=alarm_due,
        )


class SessionTicker:
    """Scheduled task with a cancellation handle."""

    def __init__(
        self,
        timer: SessionTimer,
        *,
        interval: float = TICK_INTERVAL_SECONDS,
        clock: Callable[[], datetime] = now_local,
        on_tick: Optional[TickCallback] = None,
        on_alarm: Optional[TickCallback] = None,
    ):
        self._timer = timer
        self._interval = float(interval)
        self._clock = clock
        self._on_tick = on_tick
        self._on_alarm = on_alarm
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.last_tick: Optional[SessionTick] = None

    @property
    def timer(self) -> SessionTimer:
        return self._timer

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._stop.is_set()

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("SessionTicker can only be started once")
        self._thread = threading.Thread(
            target=self._run,
            name=f"session-ticker-{self._timer.record.id[:8]}",
            daemon=True,
        )
        self._thread.start()

    def cancel(self) -> None:
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=max(self._interval, 1.0) * 2)

    def run_once(self) -> SessionTick:
        record = self._timer.record
        tick = self._timer.advance(self._clock())
        self.last_tick = tick
        if self._on_tick:
            self._call(self._on_tick, record, tick)
        if tick.alarm_due and self._on_alarm:
            self._call(self._on_alarm, record, tick)
        return tick

    @staticmethod
    def _call(callback: TickCallback, record: AttendanceRecord, tick: SessionTick) -> None:
        try:
            callback(record, tick)
        except Exception:
            log.exception("Tick callback failed for record %s", record.id)

    def _run(self) -> None:
        while not self._stop.is_set():
            self.run_once()
            if self._stop.wait(self._interval):
                break


class SessionMonitor:
    """Owns the timer (and, when enabled, the ticker) of the open session."""

    def __init__(
        self,
        service: AttendanceService,
        *,
        interval: float = TICK_INTERVAL_SECONDS,
        ticker_enabled: bool = True,
        clock: Callable[[], datetime] = now_local,
        on_alarm: Optional[TickCallback] = None,
    ):
        self._service = service
        self._interval = interval
        self._ticker_enabled = ticker_enabled
        self._clock = clock
        self._on_alarm = on_alarm or _log_alarm
        self._timer: Optional[SessionTimer] = None
        self._ticker: Optional[SessionTicker] = None
        self._lock = threading.RLock()

    @property
    def timer(self) -> Optional[SessionTimer]:
        return self._timer

    @property
    def ticker(self) -> Optional[SessionTicker]:
        return self._ticker

    @property
    def alarm_fired(self) -> bool:
        return bool(self._timer and self._timer.alarm_fired)

    def watch(self, record: AttendanceRecord) -> SessionTimer:
        """Bind to `record`; keeps the current timer if it is the same session."""
        with self._lock:
            if self._timer is not None and self._timer.record.id == record.id:
                return self._timer
            self._stop_locked()
            self._timer = SessionTimer(self._service, record)
            if self._ticker_enabled:
                self._ticker = SessionTicker(
                    self._timer,
                    interval=self._interval,
                    clock=self._clock,
                    on_alarm=self._on_alarm,
                )
                self._ticker.start()
            return self._timer

    def poll(self, now: datetime | None = None) -> Optional[SessionTick]:
        with self._lock:
            timer = self._timer
        if timer is None:
            return None
        tick = timer.advance(now or self._clock())
        if tick.alarm_due:
            self._on_alarm(timer.record, tick)
        return tick

    def stop(self) -> None:
        with self._lock:
            self._stop_locked()

    def _stop_locked(self) -> None:
        if self._ticker is not None:
            self._ticker.cancel()
        self._ticker = None
        self._timer = None


def _log_alarm(record: AttendanceRecord, tick: SessionTick) -> None:
    log.warning(
        "Required work duration reached for record %s (%d s elapsed)",
        record.id,
        tick.elapsed_seconds,
    )
