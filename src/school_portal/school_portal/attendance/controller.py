from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.auth import caller_required, current_caller
from ..common.datetime_utils import format_iso_date
from ..common.http import json_body
from ..container import Container
from .service import as_work_date


def register(app: Flask, container: Container) -> None:
    login_required = caller_required(container.auth_service)

    def _own_department():
        # Staff routes always act on the caller's own department.
        return getattr(current_caller(), "department", None)

    @app.route("/staff/attendance", methods=["GET"], endpoint="staff_attendance")
    @login_required
    def staff_attendance():
        record = container.attendance_service.get_or_default(
            current_caller(),
            department=_own_department(),
            class_code=request.args.get("classCode", ""),
            work_date=request.args.get("date", ""),
        )
        return jsonify(record.to_dict())

    @app.route("/staff/attendance", methods=["POST"], endpoint="staff_save_attendance")
    @login_required
    def staff_save_attendance():
        data = json_body()
        entries = data.get("records") if "records" in data else data.get("entries")
        record = container.attendance_service.save(
            current_caller(),
            department=_own_department(),
            class_code=data.get("classCode", ""),
            work_date=data.get("date", ""),
            entries=entries,
        )
        return jsonify(record.to_dict())

    @app.route("/admin/attendance", methods=["GET"], endpoint="admin_attendance")
    @login_required
    def admin_attendance():
        record = container.attendance_service.get_saved(
            current_caller(),
            department=request.args.get("dept", ""),
            class_code=request.args.get("classCode", ""),
            work_date=request.args.get("date", ""),
        )
        return jsonify(record.to_dict())

    @app.route("/admin/attendance-summary", methods=["GET"], endpoint="admin_attendance_summary")
    @login_required
    def admin_attendance_summary():
        dept = request.args.get("dept", "")
        class_code = request.args.get("classCode", "")
        date_s = request.args.get("date", "")

        summary = container.summary_service.summarize_one(
            current_caller(),
            department=dept,
            class_code=class_code,
            work_date=date_s,
        )
        return jsonify(
            {
                "dept": dept,
                "classCode": class_code,
                "date": format_iso_date(as_work_date(date_s)),
                **summary.to_dict(),
            }
        )

    @app.route("/admin/attendance-summary-by-dept", methods=["GET"], endpoint="admin_attendance_summary_by_dept")
    @login_required
    def admin_attendance_summary_by_dept():
        dept = request.args.get("dept", "")
        date_s = request.args.get("date", "")

        classes = container.summary_service.summarize_department(current_caller(), department=dept, work_date=date_s)
        return jsonify(
            {
                "dept": dept,
                "date": format_iso_date(as_work_date(date_s)),
                "classes": [c.to_dict() for c in classes],
            }
        )
