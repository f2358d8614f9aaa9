from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import format_hm
from ..common.validators import require_month
from ..core.enums import StatusLabel
from ..users.model import User


def status_label(record: AttendanceRecord) -> StatusLabel:
    """Display label; lateness wins over early leave."""
    if record.is_open:
        return StatusLabel.WORKING
    if record.is_late:
        return StatusLabel.LATE
    if record.is_early_leave:
        return StatusLabel.EARLY_OUT
    return StatusLabel.ON_TIME


def duration_hours(record: AttendanceRecord) -> str:
    return f"{record.work_duration_minutes / 60:.2f} hrs"


@dataclass(frozen=True)
class ReportData:
    month: str
    rows: list[dict]
    summary: dict


class MonthlyReportService:
    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def records_for_month(self, user: User, month: str) -> List[AttendanceRecord]:
        """User's records dated in `month` (YYYY-MM), oldest check-in first."""
        month = require_month(month)
        items = [
            r
            for r in self._attendance.get_records()
            if r.user_id == user.id and r.work_date.strftime("%Y-%m") == month
        ]
        items.sort(key=lambda r: r.check_in)
        return items

    def build_month_report(self, user: User, month: str) -> ReportData:
        records = self.records_for_month(user, month)

        out_rows: list[dict] = []
        total_minutes = 0
        late = 0
        early = 0
        for r in reversed(records):
            out_rows.append(
                {
                    "id": r.id,
                    "date": r.work_date.strftime("%Y-%m-%d"),
                    "check_in": r.check_in.strftime("%H:%M"),
                    "check_out": r.check_out.strftime("%H:%M") if r.check_out else "-",
                    "duration": duration_hours(r),
                    "status": status_label(r).value,
                }
            )
            total_minutes += r.work_duration_minutes
            late += int(r.is_late)
            early += int(bool(r.check_out) and r.is_early_leave)

        summary = {
            "sessions": len(records),
            "total_hours": format_hm(total_minutes),
            "late_count": late,
            "early_leave_count": early,
        }
        return ReportData(month=month, rows=out_rows, summary=summary)
