from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.datetime_utils import format_hms, now_local, time_of_day, to_iso
from ..common.web import login_required
from ..container import Container
from ..core.exceptions import ValidationError
from ..reports.service import duration_hours, status_label
from .model import AttendanceRecord


def record_to_json(r: AttendanceRecord) -> dict:
    return {
        "id": r.id,
        "user_id": r.user_id,
        "date": r.work_date.strftime("%Y-%m-%d"),
        "check_in": to_iso(r.check_in),
        "check_out": to_iso(r.check_out) if r.check_out else None,
        "status": r.status.value,
        "is_late": r.is_late,
        "is_early_leave": r.is_early_leave,
        "work_duration_minutes": r.work_duration_minutes,
        "duration": duration_hours(r),
        "label": status_label(r).value,
        "note": r.note,
    }


def register(app: Flask, container: Container) -> None:
    attendance = container.attendance_service
    monitor = container.session_monitor
    auth = login_required(container.user_service)

    @app.route("/api/session", methods=["GET"], endpoint="current_session")
    @auth
    def current_session():
        record = attendance.load_current_session(g.user)
        if record is None:
            monitor.stop()
            return jsonify({"success": True, "active": False, "elapsed": format_hms(0)})

        monitor.watch(record)
        tick = monitor.poll()
        return jsonify(
            {
                "success": True,
                "active": True,
                "record": record_to_json(record),
                "elapsed_seconds": tick.elapsed_seconds,
                "elapsed": format_hms(tick.elapsed_seconds),
                "estimated_end": to_iso(attendance.estimated_end(record)),
                "threshold_reached": tick.threshold_reached,
                "alarm_due": tick.alarm_due,
                "alarm_fired": monitor.alarm_fired,
                "alarm_sound_url": container.alarm_sound_url,
                "work_start_time": attendance.work_start_time,
            }
        )

    @app.route("/api/clock-in", methods=["POST"], endpoint="clock_in")
    @auth
    def clock_in():
        record = attendance.clock_in(g.user)
        monitor.watch(record)
        return jsonify({"success": True, "message": "Work session started", "record": record_to_json(record)}), 201

    @app.route("/api/clock-out", methods=["POST"], endpoint="clock_out")
    @auth
    def clock_out():
        record = attendance.load_current_session(g.user)
        if record is None:
            raise ValidationError("You are not clocked in")
        closed = attendance.clock_out(record)
        monitor.stop()
        return jsonify({"success": True, "message": "Work session finished", "record": record_to_json(closed)})

    @app.route("/api/records", methods=["GET"], endpoint="records")
    @auth
    def records():
        limit = request.args.get("limit", type=int)
        if limit is not None and limit < 1:
            raise ValidationError("limit must be positive")
        rows = attendance.get_history(g.user, limit=limit)
        return jsonify({"success": True, "records": [record_to_json(r) for r in rows]})

    @app.route("/api/tip", methods=["GET"], endpoint="tip")
    @auth
    def tip():
        bucket = time_of_day(now_local())
        text = container.tip_service.productivity_tip(g.user.position, bucket)
        return jsonify({"success": True, "time_of_day": bucket.value, "tip": text})
