from __future__ import annotations

import logging
from dataclasses import dataclass

from .assistant.gemini_client import GeminiClient
from .assistant.tips import TipService
from .attendance.factory import AttendanceStrategyFactory
from .attendance.service import AttendanceService
from .attendance.timer import SessionMonitor
from .common.validators import require_hhmm
from .core.constants import (
    ALARM_SOUND_URL,
    DEFAULT_TIP_TIMEOUT_SECONDS,
    GEMINI_MODEL,
    TICK_INTERVAL_SECONDS,
    WORK_HOURS_REQUIRED,
    WORK_START_TIME,
)
from .reports.service import MonthlyReportService
from .storage.kv_store import KeyValueStore
from .storage.local_record_store import LocalRecordStore
from .users.preferences import DisplaySettings
from .users.service import AuthService, UserService

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    store: LocalRecordStore
    settings: DisplaySettings

    auth_service: AuthService
    user_service: UserService
    attendance_service: AttendanceService
    session_monitor: SessionMonitor
    tip_service: TipService
    report_service: MonthlyReportService

    alarm_sound_url: str = ""


def build_container(
    *,
    data_dir: str,
    work_start_time: str = WORK_START_TIME,
    work_hours_required: int = WORK_HOURS_REQUIRED,
    gemini_api_key: str = "",
    gemini_model: str = GEMINI_MODEL,
    tip_timeout_seconds: float = DEFAULT_TIP_TIMEOUT_SECONDS,
    ticker_enabled: bool = True,
    tick_interval_seconds: float = TICK_INTERVAL_SECONDS,
    alarm_sound_url: str = ALARM_SOUND_URL,
) -> Container:
    store = LocalRecordStore(KeyValueStore(data_dir))

    settings = DisplaySettings.load(store)
    stored_user = store.get_user()
    if stored_user:
        settings.apply_user(stored_user)

    attendance_service = AttendanceService(
        store,
        strategy_factory=AttendanceStrategyFactory(),
        work_start_time=require_hhmm(work_start_time, "WORK_START_TIME"),
        work_hours_required=work_hours_required,
    )
    session_monitor = SessionMonitor(
        attendance_service,
        interval=tick_interval_seconds,
        ticker_enabled=ticker_enabled,
    )

    generator = None
    if gemini_api_key:
        generator = GeminiClient(gemini_api_key, gemini_model, timeout=tip_timeout_seconds)
    else:
        log.info("No Gemini API key configured; tips use fallback text")

    return Container(
        store=store,
        settings=settings,
        auth_service=AuthService(store, settings, session_monitor=session_monitor),
        user_service=UserService(store, settings),
        attendance_service=attendance_service,
        session_monitor=session_monitor,
        tip_service=TipService(generator),
        report_service=MonthlyReportService(store),
        alarm_sound_url=alarm_sound_url,
    )
