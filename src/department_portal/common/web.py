"""Shared helpers for the JSON controllers: session guards and error mapping."""

from __future__ import annotations

import logging
from dataclasses import asdict, is_dataclass
from functools import wraps
from typing import Optional

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from ..core.result import Result

logger = logging.getLogger(__name__)

_STATUS = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
)


def status_for(error: DomainError) -> int:
    for cls, status in _STATUS:
        if isinstance(error, cls):
            return status
    return 400


def ok(message: str, **extra):
    return jsonify({"success": True, "message": message, **extra})


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def current_user_id() -> int:
    return int(session["user_id"])


def current_role() -> Role:
    return Role(session["role"])


def current_class_id() -> Optional[int]:
    return session.get("class_id")


def handle_errors(view):
    """Turn domain errors into ``{success: false, message}`` responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return fail(str(e), status_for(e))
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.path)
            return fail("An unexpected error occurred. Please try again.", 500)

    return wrapper


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Please log in to continue.", 401)
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    allowed = {r.value for r in roles}

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return fail("Please log in to continue.", 401)
            if session.get("role") not in allowed:
                return fail("You do not have permission to access this page.", 403)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def admin_required(view):
    return roles_required(Role.ADMIN)(view)


def _plain(value):
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if is_dataclass(value):
        return asdict(value)
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value


def result_response(result: Result):
    """Reporting payload: data is always present, error is set on soft failure."""

    return jsonify({"success": result.ok, "data": _plain(result.value), "error": result.error})
