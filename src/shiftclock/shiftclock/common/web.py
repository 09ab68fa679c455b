"""Session gating and error mapping shared by the JSON controllers."""
from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    OutOfPerimeter,
    ValidationError,
)
from ..users.service import SessionUser

logger = logging.getLogger(__name__)


def json_error(message: str, status: int, **extra):
    return jsonify({"success": False, "message": message, **extra}), status


def current_user() -> SessionUser:
    return SessionUser(
        user_id=int(session["user_id"]),
        display_name=session.get("name", ""),
        role=Role(session.get("role", Role.CARE_WORKER.value)),
    )


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return json_error("Please log in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def manager_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return json_error("Please log in to continue", 401)
        if session.get("role") != Role.MANAGER.value:
            return json_error("Managers only", 403)
        return view(*args, **kwargs)

    return wrapper


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(OutOfPerimeter)
    def _out_of_perimeter(e: OutOfPerimeter):
        return json_error(
            str(e),
            403,
            distanceMeters=round(e.distance_meters, 1),
            radiusMeters=e.radius_meters,
        )

    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return json_error(str(e), 400)

    @app.errorhandler(AuthenticationError)
    def _authentication(e: AuthenticationError):
        return json_error(str(e), 401)

    @app.errorhandler(AuthorizationError)
    def _authorization(e: AuthorizationError):
        return json_error(str(e), 403)

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        # Let Flask render 404/405 and friends itself.
        code = getattr(e, "code", None)
        if isinstance(code, int) and code < 500:
            return json_error(getattr(e, "description", str(e)), code)
        logger.exception("Unhandled error")
        return json_error("Internal server error", 500)
