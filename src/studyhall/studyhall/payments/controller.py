from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.web import (
    admin_required,
    current_role,
    current_user_id,
    domain_error_response,
    login_required,
)
from ..container import Container
from ..core.exceptions import DomainError
from .model import Payment

logger = logging.getLogger(__name__)


def _payment_json(p: Payment) -> dict:
    return {
        "paymentId": p.payment_id,
        "userId": p.user_id,
        "amount": p.amount,
        "method": p.method.value,
        "status": p.status.value,
        "bookingId": p.booking_id,
        "admissionId": p.admission_id,
        "receiptNumber": p.receipt_number,
        "approvedBy": p.approved_by,
        "approvedAt": p.approved_at.isoformat() if p.approved_at else None,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payments/cash", methods=["POST"], endpoint="api_cash_payment")
    @login_required
    def api_cash_payment():
        data = request.get_json(silent=True) or {}
        try:
            payment_id = container.payment_service.create_cash_payment(
                user_id=current_user_id(),
                amount=data.get("amount"),
                booking_id=data.get("bookingId"),
                admission_id=data.get("admissionId"),
            )
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("cash payment submission failed")
            return jsonify({"success": False, "message": "Failed to submit payment. Please try again."}), 500
        return jsonify({"success": True, "paymentId": payment_id}), 201

    @app.route("/api/payments/mine", methods=["GET"], endpoint="api_my_payments")
    @login_required
    def api_my_payments():
        payments = container.payment_service.list_for_user(current_user_id())
        return jsonify({"success": True, "payments": [_payment_json(p) for p in payments]})

    @app.route("/admin/api/payments/pending", methods=["GET"], endpoint="admin_pending_payments")
    @admin_required
    def admin_pending_payments():
        try:
            payments = container.payment_service.list_pending(current_role=current_role())
        except DomainError as e:
            return domain_error_response(e)
        return jsonify({"success": True, "payments": [_payment_json(p) for p in payments]})

    def _decide(payment_id: int, action: str):
        handler = container.payment_service.approve if action == "approve" else container.payment_service.reject
        try:
            payment = handler(
                current_role=current_role(),
                admin_user_id=current_user_id(),
                payment_id=int(payment_id),
            )
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("failed to %s payment %s", action, payment_id)
            return jsonify({"success": False, "message": f"Failed to {action} payment. Please try again."}), 500
        verb = "approved" if action == "approve" else "rejected"
        return jsonify({"success": True, "message": f"Payment {verb} successfully.", "payment": _payment_json(payment)})

    @app.route("/admin/api/payments/<int:payment_id>/approve", methods=["POST"], endpoint="admin_approve_payment")
    @admin_required
    def admin_approve_payment(payment_id: int):
        return _decide(payment_id, "approve")

    @app.route("/admin/api/payments/<int:payment_id>/reject", methods=["POST"], endpoint="admin_reject_payment")
    @admin_required
    def admin_reject_payment(payment_id: int):
        return _decide(payment_id, "reject")
