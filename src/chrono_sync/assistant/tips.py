from __future__ import annotations

import json
import logging
from typing import Optional, Protocol, Sequence

from ..attendance.model import AttendanceRecord
from ..core.constants import ANALYSIS_WINDOW
from ..core.enums import TimeOfDay

log = logging.getLogger(__name__)

TIP_NO_CLIENT = "Stay focused and keep moving forward!"
TIP_FAILED = "Consistency is the key to success."
ANALYSIS_NO_DATA = "Not enough data for analysis."
ANALYSIS_FAILED = "Great job keeping track of your time!"


class TextGenerator(Protocol):
    def generate(self, prompt: str) -> str: ...


class TipService:
    """Productivity tips and attendance feedback.

    Never raises: an unavailable or failing generator yields a fixed fallback
    line, so clock-in/out never waits on it.
    """

    def __init__(self, generator: Optional[TextGenerator] = None):
        self._generator = generator

    def productivity_tip(self, role: str, time_of_day: TimeOfDay | str) -> str:
        if self._generator is None:
            return TIP_NO_CLIENT

        bucket = time_of_day.value if isinstance(time_of_day, TimeOfDay) else str(time_of_day)
        prompt = (
            f"Give me a short, 1-sentence professional productivity tip or motivation quote "
            f"for a {role} working in the {bucket}. Be concise and inspiring."
        )
        try:
            return self._generator.generate(prompt)
        except Exception as e:
            log.warning("Tip generation failed: %s", e)
            return TIP_FAILED

    def analyze_attendance(self, records: Sequence[AttendanceRecord]) -> str:
        if self._generator is None or not records:
            return ANALYSIS_NO_DATA

        summary = [
            {
                "date": r.work_date.strftime("%Y-%m-%d"),
                "duration": r.work_duration_minutes,
                "late": r.is_late,
            }
            for r in list(records)[-ANALYSIS_WINDOW:]
        ]
        prompt = (
            f"Analyze these last {ANALYSIS_WINDOW} attendance records: {json.dumps(summary)}. "
            "Give a 2-sentence feedback to the employee about their punctuality "
            "and work hours consistency."
        )
        try:
            return self._generator.generate(prompt)
        except Exception as e:
            log.warning("Attendance analysis failed: %s", e)
            return ANALYSIS_FAILED
