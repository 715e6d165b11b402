from __future__ import annotations

import logging
from datetime import date

from flask import Flask, jsonify, request

from ..common.web import (
    admin_required,
    current_user_id,
    domain_error_response,
    login_required,
    parse_optional_date,
)
from ..container import Container
from ..core.exceptions import DomainError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _date_arg(value) -> date:
        try:
            return parse_optional_date(value) or date.today()
        except ValueError:
            raise ValidationError("Invalid date (YYYY-MM-DD)")

    @app.route("/api/bookings", methods=["POST"], endpoint="api_book_seat")
    @login_required
    def api_book_seat():
        data = request.get_json(silent=True) or {}
        try:
            booking = container.booking_service.book(
                user_id=current_user_id(),
                shift=str(data.get("shift") or ""),
                seat_number=str(data.get("seatNumber") or ""),
                booking_date=_date_arg(data.get("date")),
            )
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("seat booking failed")
            return jsonify({"success": False, "message": "Unable to book the seat. Please try again."}), 500
        return (
            jsonify(
                {
                    "success": True,
                    "message": f"Your seat {booking.seat_number} for {booking.shift} shift has been booked successfully!",
                    "bookingId": booking.booking_id,
                    "bookingDate": booking.booking_date.isoformat(),
                }
            ),
            201,
        )

    @app.route("/api/bookings/seats", methods=["GET"], endpoint="api_seat_map")
    @login_required
    def api_seat_map():
        try:
            booking_date = _date_arg(request.args.get("date"))
            seats = container.booking_service.seat_map(
                shift=request.args.get("shift", ""),
                booking_date=booking_date,
                user_id=current_user_id(),
            )
        except DomainError as e:
            return domain_error_response(e)
        return jsonify(
            {
                "success": True,
                "date": booking_date.isoformat(),
                "seats": [
                    {"seatNumber": s.seat_number, "isBooked": s.is_booked, "isMine": s.is_mine} for s in seats
                ],
            }
        )

    @app.route("/api/bookings/mine", methods=["GET"], endpoint="api_my_bookings")
    @login_required
    def api_my_bookings():
        bookings = container.booking_service.user_bookings(current_user_id())
        return jsonify(
            {
                "success": True,
                "bookings": [
                    {
                        "bookingId": b.booking_id,
                        "shift": b.shift,
                        "seatNumber": b.seat_number,
                        "bookingDate": b.booking_date.isoformat(),
                        "bookingStatus": b.booking_status.value,
                    }
                    for b in bookings
                ],
            }
        )

    @app.route("/admin/api/occupancy", methods=["GET"], endpoint="admin_occupancy")
    @admin_required
    def admin_occupancy():
        try:
            booking_date = _date_arg(request.args.get("date"))
        except DomainError as e:
            return domain_error_response(e)
        occupancy = container.booking_service.occupancy(booking_date)
        return jsonify(
            {
                "success": True,
                "date": booking_date.isoformat(),
                "shiftOccupancy": {
                    shift: {"booked": o.booked, "total": o.total, "percentage": o.percentage}
                    for shift, o in occupancy.items()
                },
            }
        )
