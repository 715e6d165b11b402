from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import BookingStatus, PaymentDecision, PaymentMethod
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, db_transaction, fetchall, fetchone
from .model import NewPayment, Payment, PaymentSettlement
from .repository import PaymentRepository

_COLUMNS = """
    payment_id, user_id, amount, method, status, booking_id, admission_id,
    receipt_number, approved_by, approved_at, created_at
"""


def _to_payment(r: Dict[str, Any]) -> Payment:
    return Payment(
        payment_id=int(r["payment_id"]),
        user_id=str(r["user_id"]),
        amount=int(r["amount"]),
        method=PaymentMethod(r["method"]),
        status=PaymentDecision(r["status"]),
        booking_id=int(r["booking_id"]) if r.get("booking_id") is not None else None,
        admission_id=int(r["admission_id"]) if r.get("admission_id") is not None else None,
        receipt_number=r.get("receipt_number"),
        approved_by=r.get("approved_by"),
        approved_at=r.get("approved_at"),
        created_at=r.get("created_at"),
    )


class MySQLPaymentRepository(PaymentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_payment(self, new: NewPayment) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payments(user_id, amount, method, status, booking_id, admission_id, receipt_number)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    new.user_id,
                    int(new.amount),
                    new.method.value,
                    PaymentDecision.PENDING.value,
                    new.booking_id,
                    new.admission_id,
                    new.receipt_number,
                ),
            )
            return int(cur.lastrowid)

    def get_payment(self, payment_id: int) -> Optional[Payment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payments WHERE payment_id=%s", (int(payment_id),))
            r = fetchone(cur)
            return _to_payment(r) if r else None

    def list_payments(
        self,
        *,
        status: Optional[PaymentDecision] = None,
        user_id: Optional[str] = None,
        limit: int = 200,
    ) -> Sequence[Payment]:
        where = []
        params: list[Any] = []
        if status is not None:
            where.append("status=%s")
            params.append(status.value)
        if user_id is not None:
            where.append("user_id=%s")
            params.append(user_id)

        sql = f"SELECT {_COLUMNS} FROM payments"
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY created_at DESC, payment_id DESC LIMIT %s"
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_payment(r) for r in fetchall(cur)]

    def settle_payment(self, settlement: PaymentSettlement) -> bool:
        with db_transaction(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT status FROM payments WHERE payment_id=%s FOR UPDATE",
                (int(settlement.payment_id),),
            )
            row = fetchone(cur)
            if not row or row["status"] != PaymentDecision.PENDING.value:
                return False

            cur.execute(
                "UPDATE payments SET status=%s, approved_by=%s, approved_at=%s WHERE payment_id=%s",
                (
                    settlement.status.value,
                    settlement.decided_by,
                    settlement.decided_at,
                    int(settlement.payment_id),
                ),
            )

            if settlement.confirm_booking_id is not None:
                cur.execute(
                    "UPDATE seat_bookings SET booking_status=%s WHERE booking_id=%s",
                    (BookingStatus.BOOKED.value, int(settlement.confirm_booking_id)),
                )
            if settlement.release_booking_id is not None:
                cur.execute("DELETE FROM seat_bookings WHERE booking_id=%s", (int(settlement.release_booking_id),))

            if settlement.admission_id is not None:
                cur.execute(
                    """
                    UPDATE admissions
                    SET payment_status=%s, payment_date=%s, start_date=%s, end_date=%s
                    WHERE admission_id=%s
                    """,
                    (
                        settlement.admission_status.value,
                        settlement.admission_paid_at,
                        settlement.admission_paid_at,
                        settlement.admission_end,
                        int(settlement.admission_id),
                    ),
                )
            return True
