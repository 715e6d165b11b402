from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import PaymentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..shifts.calendar import normalize_shift_id
from .model import Admission, NewAdmission
from .repository import AdmissionRepository

_COLUMNS = """
    admission_id, user_id, full_name, course_name, selected_shifts, duration_months,
    registration_fee, shift_fee, total_amount, payment_status, payment_date, start_date, end_date
"""


def _parse_shifts(value: str) -> tuple[str, ...]:
    return tuple(normalize_shift_id(s.strip()) for s in (value or "").split(",") if s.strip())


def _to_admission(r: Dict[str, Any]) -> Admission:
    return Admission(
        admission_id=int(r["admission_id"]),
        user_id=str(r["user_id"]),
        selected_shifts=_parse_shifts(r["selected_shifts"]),
        duration_months=int(r["duration_months"]),
        registration_fee=int(r["registration_fee"]),
        shift_fee=int(r["shift_fee"]),
        total_amount=int(r["total_amount"]),
        payment_status=PaymentStatus(r["payment_status"]),
        full_name=r.get("full_name"),
        course_name=r.get("course_name"),
        payment_date=r.get("payment_date"),
        start_date=r.get("start_date"),
        end_date=r.get("end_date"),
    )


class MySQLAdmissionRepository(AdmissionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_admissions(
        self,
        *,
        payment_status: Optional[PaymentStatus] = None,
        user_id: Optional[str] = None,
    ) -> Sequence[Admission]:
        where = []
        params: list[Any] = []
        if payment_status is not None:
            where.append("payment_status=%s")
            params.append(payment_status.value)
        if user_id is not None:
            where.append("user_id=%s")
            params.append(user_id)

        sql = f"SELECT {_COLUMNS} FROM admissions"
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY admission_id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_admission(r) for r in fetchall(cur)]

    def get_admission(self, admission_id: int) -> Optional[Admission]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM admissions WHERE admission_id=%s", (int(admission_id),))
            r = fetchone(cur)
            return _to_admission(r) if r else None

    def create_admission(self, new: NewAdmission) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO admissions(
                    user_id, full_name, course_name, selected_shifts, duration_months,
                    registration_fee, shift_fee, total_amount, payment_status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    new.user_id,
                    new.full_name,
                    new.course_name,
                    ",".join(new.selected_shifts),
                    int(new.duration_months),
                    int(new.registration_fee),
                    int(new.shift_fee),
                    int(new.total_amount),
                    PaymentStatus.PENDING.value,
                ),
            )
            return int(cur.lastrowid)
