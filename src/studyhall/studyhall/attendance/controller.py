from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.web import current_user_id, domain_error_response, login_required, parse_optional_date
from ..container import Container
from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _check_absent(date_value):
        try:
            target_date = parse_optional_date(date_value)
        except ValueError:
            return jsonify({"error": "Invalid date (YYYY-MM-DD)"}), 400
        try:
            result = container.absence_service.check_absent_students(target_date=target_date)
            return jsonify(result.to_dict())
        except Exception:
            logger.exception("Error checking absent students")
            return jsonify({"error": "Failed to check absent students"}), 500

    @app.route("/check-absent-students", methods=["POST"], endpoint="check_absent_students")
    def check_absent_students():
        data = request.get_json(silent=True) or {}
        return _check_absent(data.get("date"))

    @app.route("/check-absent-students", methods=["GET"], endpoint="check_absent_students_get")
    def check_absent_students_get():
        return _check_absent(request.args.get("date"))

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="api_check_in")
    @login_required
    def api_check_in():
        data = request.get_json(silent=True) or {}
        try:
            record = container.attendance_service.check_in(current_user_id(), str(data.get("shift") or ""))
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("check-in failed")
            return jsonify({"success": False, "message": "Failed to check in. Please try again."}), 500
        return jsonify(
            {
                "success": True,
                "message": f"Checked in successfully for {record.shift} shift!",
                "attendanceId": record.attendance_id,
                "checkInTime": record.check_in_time.isoformat(),
            }
        )

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="api_check_out")
    @login_required
    def api_check_out():
        data = request.get_json(silent=True) or {}
        try:
            record = container.attendance_service.check_out(
                current_user_id(),
                str(data.get("shift") or ""),
                int(data.get("attendanceId") or 0),
            )
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("check-out failed")
            return jsonify({"success": False, "message": "Failed to check out. Please try again."}), 500
        return jsonify(
            {
                "success": True,
                "message": f"Checked out successfully from {record.shift} shift!",
                "attendanceId": record.attendance_id,
                "checkOutTime": record.check_out_time.isoformat(),
            }
        )

    @app.route("/api/attendance/today", methods=["GET"], endpoint="api_attendance_today")
    @login_required
    def api_attendance_today():
        user_id = current_user_id()
        statuses = container.attendance_service.statuses(user_id)
        return jsonify(
            {
                "success": True,
                "validShifts": container.attendance_service.active_shifts(user_id),
                "shifts": [s.to_dict() for s in statuses],
            }
        )
