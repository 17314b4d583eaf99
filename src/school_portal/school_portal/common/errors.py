from __future__ import annotations

from flask import Flask, jsonify
from flask_jwt_extended import JWTManager
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    PastDateLockedError,
    ValidationError,
)

STATUS_BY_ERROR = (
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (PastDateLockedError, 400),
    (ValidationError, 400),
)


def error_response(code: str, message: str, status: int):
    return jsonify({"success": False, "error": code, "message": message}), status


def status_for(error: DomainError) -> int:
    for cls, status in STATUS_BY_ERROR:
        if isinstance(error, cls):
            return status
    return 400


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        status = status_for(e)
        if status >= 403:
            app.logger.info("%s -> %s (%s)", type(e).__name__, status, e.code)
        return error_response(e.code, e.message, status)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        code = (e.name or "error").lower().replace(" ", "-")
        return error_response(code, e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        app.logger.exception("Unhandled error: %s", e)
        message = f"Server error: {e}" if app.config.get("DEBUG") else "Server error"
        return error_response("server-error", message, 500)


def register_jwt_handlers(jwt: JWTManager) -> None:
    @jwt.unauthorized_loader
    def missing_token(reason: str):
        return error_response("unauthenticated", reason or "No token", 401)

    @jwt.invalid_token_loader
    def invalid_token(reason: str):
        return error_response("unauthenticated", reason or "Invalid token", 401)

    @jwt.expired_token_loader
    def expired_token(_header, _payload):
        return error_response("unauthenticated", "Token has expired", 401)
