from __future__ import annotations

import logging
from datetime import datetime

from flask import Flask, jsonify, request

from ..common.web import current_user_id, domain_error_response, login_required
from ..container import Container
from ..core.exceptions import DomainError
from ..shifts.calendar import list_shifts
from ..shifts.window import is_active
from .model import Admission

logger = logging.getLogger(__name__)


def _admission_json(a: Admission) -> dict:
    return {
        "admissionId": a.admission_id,
        "selectedShifts": list(a.selected_shifts),
        "duration": a.duration_months,
        "registrationFee": a.registration_fee,
        "shiftFee": a.shift_fee,
        "totalAmount": a.total_amount,
        "paymentStatus": a.payment_status.value,
        "startDate": a.start_date.isoformat() if a.start_date else None,
        "endDate": a.end_date.isoformat() if a.end_date else None,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/shifts", methods=["GET"], endpoint="api_shifts")
    def api_shifts():
        now = datetime.now()
        return jsonify(
            {
                "success": True,
                "shifts": [
                    {
                        "id": s.shift_id,
                        "name": s.name,
                        "timeRange": s.time_range,
                        "price": s.price,
                        "active": is_active(s.shift_id, now),
                    }
                    for s in list_shifts()
                ],
            }
        )

    @app.route("/api/fees/quote", methods=["POST"], endpoint="api_fee_quote")
    def api_fee_quote():
        data = request.get_json(silent=True) or {}
        try:
            quote = container.admission_service.quote(data.get("selectedShifts") or [])
        except DomainError as e:
            return domain_error_response(e)
        return jsonify({"success": True, **quote.to_dict()})

    @app.route("/api/admissions", methods=["POST"], endpoint="api_create_admission")
    @login_required
    def api_create_admission():
        data = request.get_json(silent=True) or {}
        try:
            admission = container.admission_service.create(
                user_id=current_user_id(),
                selected_shifts=data.get("selectedShifts") or [],
                duration_months=data.get("duration"),
                full_name=data.get("name"),
                course_name=data.get("courseName"),
            )
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("admission submission failed")
            return jsonify({"success": False, "message": "Failed to submit admission. Please try again."}), 500
        return jsonify({"success": True, "admission": _admission_json(admission)}), 201

    @app.route("/api/admissions/mine", methods=["GET"], endpoint="api_my_admissions")
    @login_required
    def api_my_admissions():
        admissions = container.admission_service.for_user(current_user_id())
        return jsonify({"success": True, "admissions": [_admission_json(a) for a in admissions]})
