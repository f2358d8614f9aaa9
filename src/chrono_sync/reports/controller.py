from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.datetime_utils import now_local
from ..common.web import login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    auth = login_required(container.user_service)

    def _month() -> str:
        return request.args.get("month") or now_local().strftime("%Y-%m")

    @app.route("/api/report", methods=["GET"], endpoint="month_report")
    @auth
    def month_report():
        data = container.report_service.build_month_report(g.user, _month())
        return jsonify({"success": True, "month": data.month, "rows": data.rows, "summary": data.summary})

    @app.route("/api/report/analysis", methods=["GET"], endpoint="month_analysis")
    @auth
    def month_analysis():
        month = _month()
        records = container.report_service.records_for_month(g.user, month)
        text = container.tip_service.analyze_attendance(records)
        return jsonify({"success": True, "month": month, "analysis": text})
