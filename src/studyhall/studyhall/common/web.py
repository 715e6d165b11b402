"""Shared helpers for the JSON controllers."""

from __future__ import annotations

import logging
from datetime import date
from functools import wraps

from flask import jsonify, session

from ..core.enums import Role
from ..core.exceptions import (
    AlreadyCheckedInError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    SeatTakenError,
    ShiftAlreadyCompletedError,
    UserAlreadyBookedError,
)
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)

_CONFLICTS = (ConflictError, SeatTakenError, UserAlreadyBookedError, AlreadyCheckedInError, ShiftAlreadyCompletedError)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "code": "UNAUTHENTICATED", "message": "Please sign in"}), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "code": "UNAUTHENTICATED", "message": "Please sign in"}), 401
        if session.get("role") != Role.ADMIN.value:
            return jsonify({"success": False, "code": AuthorizationError.code, "message": "Admins only"}), 403
        return view(*args, **kwargs)

    return wrapper


def current_user_id() -> str:
    return str(session["user_id"])


def current_role() -> Role:
    return Role(session.get("role", Role.STUDENT.value))


def status_for(error: DomainError) -> int:
    if isinstance(error, _CONFLICTS):
        return 409
    if isinstance(error, AuthorizationError):
        return 403
    if isinstance(error, NotFoundError):
        return 404
    return 400


def domain_error_response(error: DomainError):
    return jsonify({"success": False, "code": error.code, "message": str(error)}), status_for(error)


def parse_optional_date(value) -> date | None:
    if not value:
        return None
    return parse_iso_date(str(value))
