from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.auth import caller_required, current_caller
from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required = caller_required(container.auth_service)

    @app.route("/staff/classes", methods=["GET"], endpoint="staff_classes")
    @login_required
    def staff_classes():
        rosters = container.roster_service.list_classes(current_caller())
        return jsonify([r.to_dict() for r in rosters])

    @app.route("/staff/classes/<class_code>", methods=["GET"], endpoint="staff_class_roster")
    @login_required
    def staff_class_roster(class_code: str):
        caller = current_caller()
        roster = container.roster_service.get_roster(
            caller,
            department=getattr(caller, "department", None),
            class_code=class_code,
        )
        return jsonify(roster.to_dict())

    @app.route("/staff/class-students", methods=["GET"], endpoint="staff_class_students")
    @login_required
    def staff_class_students():
        students = container.roster_service.get_students(current_caller(), class_code=request.args.get("classCode", ""))
        return jsonify({"students": [s.to_dict() for s in students]})

    @app.route("/staff/class-students", methods=["POST"], endpoint="staff_replace_class_students")
    @login_required
    def staff_replace_class_students():
        data = json_body()
        roster = container.roster_service.replace_students(
            current_caller(),
            class_code=data.get("classCode", ""),
            students=data.get("students"),
        )
        return jsonify(roster.to_dict())

    @app.route("/admin/departments", methods=["GET"], endpoint="admin_departments")
    @login_required
    def admin_departments():
        departments = container.roster_service.list_departments(current_caller())
        return jsonify({"departments": list(departments)})
