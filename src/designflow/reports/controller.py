from __future__ import annotations

import csv
import io

from flask import Flask, jsonify, request

from ..common.datetime_utils import from_ms
from ..common.web import admin_required, api_errors
from ..container import Container
from .service import DashboardReport, HistoryRow


def _filters() -> dict:
    designer_id = request.args.get("designerId")
    return {
        "period": request.args.get("period"),
        "designer_id": None if designer_id in (None, "", "all") else designer_id,
        "start": request.args.get("start"),
        "end": request.args.get("end"),
    }


def dashboard_to_json(report: DashboardReport) -> dict:
    return {
        "start": report.period.start_ms,
        "end": report.period.end_ms,
        "totalArts": report.total_arts,
        "totalPoints": report.total_points,
        "activeDesigners": report.active_designers,
        "avgPointsPerDesigner": report.avg_points_per_designer,
        "designers": [
            {"id": r.user_id, "name": r.name, "points": r.points, "arts": r.arts} for r in report.designers
        ],
    }


def history_to_json(row: HistoryRow) -> dict:
    return {
        "id": row.session_id,
        "userId": row.user_id,
        "userName": row.user_name,
        "date": row.date,
        "startTime": row.start_time,
        "totalArts": row.total_arts,
        "totalPoints": row.total_points,
        "timestamp": row.timestamp,
    }


def register(app: Flask, container: Container) -> None:
    service = container.report_service

    def _write_history_csv(*, rows: list[HistoryRow], filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(
            out,
            fieldnames=["date", "start_time", "user_id", "user_name", "total_arts", "total_points"],
        )
        writer.writeheader()
        for r in rows:
            writer.writerow(
                {
                    "date": r.date,
                    "start_time": r.start_time,
                    "user_id": r.user_id,
                    "user_name": r.user_name,
                    "total_arts": r.total_arts,
                    "total_points": r.total_points,
                }
            )

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/reports/dashboard", methods=["GET"], endpoint="reports_dashboard")
    @admin_required
    @api_errors("Erro ao gerar relatório")
    def dashboard():
        return jsonify(dashboard_to_json(service.build_dashboard(**_filters())))

    @app.route("/api/reports/history", methods=["GET"], endpoint="reports_history")
    @admin_required
    @api_errors("Erro ao gerar histórico")
    def history():
        return jsonify([history_to_json(r) for r in service.build_history(**_filters())])

    @app.route("/api/reports/history.csv", methods=["GET"], endpoint="reports_history_csv")
    @admin_required
    @api_errors("Erro ao exportar histórico")
    def history_csv():
        filters = _filters()
        rows = service.build_history(**filters)
        window = service.resolve(filters["period"], start=filters["start"], end=filters["end"])
        first = from_ms(window.start_ms, container.tz).strftime("%Y%m%d")
        last = from_ms(window.end_ms, container.tz).strftime("%Y%m%d")
        return _write_history_csv(rows=rows, filename=f"historico_{first}_{last}.csv")
