from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.web import admin_required, current_role, current_user_id, domain_error_response, login_required
from ..container import Container
from ..core.enums import ApprovalStatus
from ..core.exceptions import DomainError, ValidationError
from .model import Account

logger = logging.getLogger(__name__)


def _account_json(a: Account) -> dict:
    return {
        "userId": a.user_id,
        "fullName": a.full_name,
        "email": a.email,
        "mobileNumber": a.mobile_number,
        "role": a.role.value,
        "approvalStatus": a.approval_status.value,
        "approvedBy": a.approved_by,
        "approvedAt": a.approved_at.isoformat() if a.approved_at else None,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/account", methods=["GET"], endpoint="api_my_account")
    @login_required
    def api_my_account():
        try:
            account = container.account_service.get(current_user_id())
        except DomainError as e:
            return domain_error_response(e)
        return jsonify({"success": True, "account": _account_json(account)})

    @app.route("/admin/api/students", methods=["GET"], endpoint="admin_students")
    @admin_required
    def admin_students():
        try:
            raw = request.args.get("status")
            try:
                status = ApprovalStatus(raw) if raw else None
            except ValueError:
                raise ValidationError("status must be pending, approved or rejected")
            students = container.account_service.list_students(current_role=current_role(), approval_status=status)
        except DomainError as e:
            return domain_error_response(e)
        return jsonify({"success": True, "students": [_account_json(a) for a in students]})

    def _decide(user_id: str, action: str):
        handler = container.account_service.approve if action == "approve" else container.account_service.reject
        try:
            account = handler(current_role=current_role(), admin_user_id=current_user_id(), user_id=user_id)
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("failed to %s account %s", action, user_id)
            return jsonify({"success": False, "message": f"Failed to {action} student account. Please try again."}), 500
        return jsonify(
            {
                "success": True,
                "message": f"Student account {account.approval_status.value} successfully",
                "account": _account_json(account),
            }
        )

    @app.route("/admin/api/students/<user_id>/approve", methods=["POST"], endpoint="admin_approve_student")
    @admin_required
    def admin_approve_student(user_id: str):
        return _decide(user_id, "approve")

    @app.route("/admin/api/students/<user_id>/reject", methods=["POST"], endpoint="admin_reject_student")
    @admin_required
    def admin_reject_student(user_id: str):
        return _decide(user_id, "reject")
