from __future__ import annotations

from flask import Flask, jsonify

from ..common.auth import caller_required, current_caller, issue_token
from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required = caller_required(container.auth_service)

    @app.route("/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        identity = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))
        app.logger.info("Login ok for user %s (%s)", identity.user_id, identity.role.value)
        return jsonify({"token": issue_token(identity), "staff": identity.to_dict()})

    @app.route("/admin/create-staff", methods=["POST"], endpoint="create_staff")
    @login_required
    def create_staff():
        data = json_body()
        staff = container.staff_service.create_staff(
            current_caller(),
            name=data.get("name", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
            department=data.get("dept", ""),
        )
        return jsonify(staff.to_dict())

    @app.route("/admin/staff", methods=["GET"], endpoint="list_staff")
    @login_required
    def list_staff():
        staff = container.staff_service.list_staff(current_caller())
        return jsonify([s.to_dict() for s in staff])

    @app.route("/admin/staff/<int:user_id>", methods=["DELETE"], endpoint="delete_staff")
    @login_required
    def delete_staff(user_id: int):
        container.staff_service.delete_staff(current_caller(), user_id)
        return jsonify({"ok": True})
