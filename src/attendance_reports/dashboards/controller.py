from __future__ import annotations

import csv
import io
import logging
from datetime import date
from typing import Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.serialize import to_jsonable
from ..container import Container
from ..core.enums import SortDirection
from ..core.exceptions import DataSourceError, DomainError, ValidationError
from ..table.model import SortSpec, TableView
from ..table.projection import render_table
from .columns import COURSE_TOTAL_COLUMNS, SCHEDULE_COLUMNS, TIMETABLE_COLUMNS
from .model import DaySchedule

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.dashboard_service

    def _parse_day() -> Optional[date]:
        value = request.args.get("date")
        if not value:
            return None
        try:
            return parse_iso_date(value)
        except ValueError as e:
            raise ValidationError("date must be YYYY-MM-DD") from e

    def _parse_sort() -> SortSpec:
        column_key = request.args.get("sort") or None
        try:
            direction = SortDirection((request.args.get("direction") or "asc").lower())
        except ValueError as e:
            raise ValidationError("direction must be 'asc' or 'desc'") from e
        return SortSpec(column_key=column_key, direction=direction)

    def _dashboard_response(dashboard, tables: dict[str, TableView]):
        return jsonify(
            {
                "success": True,
                "data": to_jsonable(dashboard),
                "tables": to_jsonable(tables),
            }
        )

    @app.errorhandler(DataSourceError)
    def handle_data_source_error(e: DataSourceError):
        logger.error("Backend fetch failed: %s", e)
        return jsonify({"success": False, "message": str(e)}), 502

    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return jsonify({"success": False, "message": str(e)}), 400

    @app.route("/api/dashboards/teacher/<int:teacher_id>", methods=["GET"], endpoint="teacher_dashboard")
    def teacher_dashboard(teacher_id: int):
        dash = service.teacher_dashboard(teacher_id, today=_parse_day())
        return _dashboard_response(
            dash,
            {
                "today_classes": render_table(dash.today_classes, SCHEDULE_COLUMNS, row_id=lambda r: r.id),
                "course_totals": render_table(dash.course_totals, COURSE_TOTAL_COLUMNS, row_id=lambda r: r.course_id),
            },
        )

    @app.route("/api/dashboards/student/<int:student_id>", methods=["GET"], endpoint="student_dashboard")
    def student_dashboard(student_id: int):
        dash = service.student_dashboard(student_id, today=_parse_day())
        return _dashboard_response(
            dash,
            {
                "today_classes": render_table(dash.today_classes, SCHEDULE_COLUMNS, row_id=lambda r: r.id),
                "course_totals": render_table(dash.course_totals, COURSE_TOTAL_COLUMNS, row_id=lambda r: r.course_id),
            },
        )

    @app.route("/api/dashboards/admin", methods=["GET"], endpoint="admin_dashboard")
    def admin_dashboard():
        dash = service.admin_dashboard(today=_parse_day())
        return _dashboard_response(
            dash,
            {
                "today_classes": render_table(dash.today_classes, SCHEDULE_COLUMNS, row_id=lambda r: r.id),
                "course_breakdown": render_table(
                    dash.course_breakdown, COURSE_TOTAL_COLUMNS, row_id=lambda r: r.course_id
                ),
            },
        )

    def _timetable_response(days: tuple[DaySchedule, ...]):
        return jsonify(
            {
                "success": True,
                "data": to_jsonable(days),
                "tables": {
                    d.day.isoformat(): to_jsonable(render_table(d.classes, TIMETABLE_COLUMNS, row_id=lambda r: r.id))
                    for d in days
                },
            }
        )

    @app.route("/api/timetable/teacher/<int:teacher_id>", methods=["GET"], endpoint="teacher_timetable")
    def teacher_timetable(teacher_id: int):
        return _timetable_response(service.teacher_timetable(teacher_id))

    @app.route("/api/timetable/student/<int:student_id>", methods=["GET"], endpoint="student_timetable")
    def student_timetable(student_id: int):
        return _timetable_response(service.student_timetable(student_id))

    @app.route("/api/attendance/summary", methods=["GET"], endpoint="attendance_summary")
    def attendance_summary():
        summary = service.attendance_summary(filter_text=request.args.get("q", ""))
        return jsonify(
            {
                "success": True,
                "data": to_jsonable(summary),
                "table": to_jsonable(
                    render_table(summary.courses, COURSE_TOTAL_COLUMNS, row_id=lambda r: r.course_id)
                ),
            }
        )

    @app.route("/api/attendance/table", methods=["GET"], endpoint="attendance_table")
    def attendance_table():
        sort = _parse_sort()
        rows, view = service.attendance_table(filter_text=request.args.get("q", ""), sort=sort)
        return jsonify(
            {
                "success": True,
                "count": len(rows),
                "sort": to_jsonable(sort),
                "table": to_jsonable(view),
            }
        )

    @app.route("/api/attendance/table.csv", methods=["GET"], endpoint="attendance_table_csv")
    def attendance_table_csv():
        _, view = service.attendance_table(filter_text=request.args.get("q", ""), sort=_parse_sort())

        out = io.StringIO()
        writer = csv.writer(out)
        writer.writerow([h.label for h in view.headers])
        for row in view.rows:
            writer.writerow([cell.text for cell in row])

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": "attachment; filename=attendance.csv"},
        )
