from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..core.enums import BookingStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, db_transaction, fetchall, fetchone
from .model import NewSeatBooking, SeatBooking
from .repository import BookingRepository

_COLUMNS = "booking_id, user_id, shift, seat_number, booking_date, booking_status, created_at"


def _to_booking(r: Dict[str, Any]) -> SeatBooking:
    return SeatBooking(
        booking_id=int(r["booking_id"]),
        user_id=str(r["user_id"]),
        shift=r["shift"],
        seat_number=r["seat_number"],
        booking_date=r["booking_date"],
        booking_status=BookingStatus(r["booking_status"]),
        created_at=r.get("created_at"),
    )


class MySQLBookingRepository(BookingRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_bookings(self, booking_date: date) -> Sequence[SeatBooking]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM seat_bookings
                WHERE booking_date=%s
                ORDER BY booking_id
                """,
                (booking_date,),
            )
            return [_to_booking(r) for r in fetchall(cur)]

    def list_for_user(self, user_id: str, *, limit: int = 50) -> Sequence[SeatBooking]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM seat_bookings
                WHERE user_id=%s
                ORDER BY booking_date DESC, booking_id DESC
                LIMIT %s
                """,
                (user_id, int(limit)),
            )
            return [_to_booking(r) for r in fetchall(cur)]

    def get_booking(self, booking_id: int) -> Optional[SeatBooking]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM seat_bookings WHERE booking_id=%s", (int(booking_id),))
            r = fetchone(cur)
            return _to_booking(r) if r else None

    def create_booking(self, new: NewSeatBooking) -> SeatBooking:
        with db_transaction(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT booking_id
                FROM seat_bookings
                WHERE booking_date=%s AND shift=%s AND booking_status='booked'
                  AND (seat_number=%s OR user_id=%s)
                FOR UPDATE
                """,
                (new.booking_date, new.shift, new.seat_number, new.user_id),
            )
            if fetchall(cur):
                raise ConflictError("Seat or shift slot was booked by a concurrent request")

            cur.execute(
                """
                INSERT INTO seat_bookings(user_id, shift, seat_number, booking_date, booking_status)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (new.user_id, new.shift, new.seat_number, new.booking_date, new.booking_status.value),
            )
            booking_id = int(cur.lastrowid)

        return SeatBooking(
            booking_id=booking_id,
            user_id=new.user_id,
            shift=new.shift,
            seat_number=new.seat_number,
            booking_date=new.booking_date,
            booking_status=new.booking_status,
        )
