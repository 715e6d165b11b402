from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..core.enums import AttendanceMark
from ..core.exceptions import ConflictError, NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, db_transaction, fetchall, fetchone
from .model import AbsenceRecord, AttendanceRecord, CheckInIntent, CheckOutIntent
from .repository import AttendanceRepository

_COLUMNS = "attendance_id, user_id, shift, work_date, check_in_time, check_out_time, status, reason"


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=str(r["user_id"]),
        shift=r["shift"],
        work_date=r["work_date"],
        check_in_time=r.get("check_in_time"),
        check_out_time=r.get("check_out_time"),
        status=AttendanceMark(r["status"]) if r.get("status") else None,
        reason=r.get("reason"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_attendance(self, user_id: str, work_date: Optional[date] = None) -> Sequence[AttendanceRecord]:
        sql = f"SELECT {_COLUMNS} FROM attendance_records WHERE user_id=%s"
        params: tuple = (user_id,)
        if work_date is not None:
            sql += " AND work_date=%s"
            params += (work_date,)
        sql += " ORDER BY work_date DESC, attendance_id DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_to_record(r) for r in fetchall(cur)]

    def get_attendance(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_attendance_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE work_date=%s ORDER BY attendance_id",
                (work_date,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def _get_locked(self, cur, attendance_id: int) -> Optional[AttendanceRecord]:
        cur.execute(
            f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s FOR UPDATE",
            (int(attendance_id),),
        )
        r = fetchone(cur)
        return _to_record(r) if r else None

    def create_attendance(self, intent: CheckInIntent) -> AttendanceRecord:
        with db_transaction(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id
                FROM attendance_records
                WHERE user_id=%s AND shift=%s AND work_date=%s AND check_in_time IS NOT NULL
                FOR UPDATE
                """,
                (intent.user_id, intent.shift, intent.work_date),
            )
            if fetchall(cur):
                raise ConflictError("A check-in for this shift was recorded by a concurrent request")

            if intent.replaces_id is not None:
                cur.execute(
                    """
                    UPDATE attendance_records
                    SET check_in_time=%s, status=%s, reason=NULL
                    WHERE attendance_id=%s AND check_in_time IS NULL
                    """,
                    (intent.check_in_time, AttendanceMark.PRESENT.value, int(intent.replaces_id)),
                )
                if cur.rowcount == 0:
                    raise ConflictError("The absence record changed before check-in")
                attendance_id = int(intent.replaces_id)
            else:
                cur.execute(
                    """
                    INSERT INTO attendance_records(user_id, shift, work_date, check_in_time, status)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (
                        intent.user_id,
                        intent.shift,
                        intent.work_date,
                        intent.check_in_time,
                        AttendanceMark.PRESENT.value,
                    ),
                )
                attendance_id = int(cur.lastrowid)

        return AttendanceRecord(
            attendance_id=attendance_id,
            user_id=intent.user_id,
            shift=intent.shift,
            work_date=intent.work_date,
            check_in_time=intent.check_in_time,
            status=AttendanceMark.PRESENT,
        )

    def update_attendance(self, intent: CheckOutIntent) -> AttendanceRecord:
        with db_transaction(self._conn_factory) as (_, cur):
            current = self._get_locked(cur, intent.attendance_id)
            if current is None:
                raise NotFoundError("Attendance record not found")
            if not current.is_open:
                raise ConflictError("The attendance record was closed by a concurrent request")

            cur.execute(
                "UPDATE attendance_records SET check_out_time=%s WHERE attendance_id=%s",
                (intent.check_out_time, int(intent.attendance_id)),
            )

        return AttendanceRecord(
            attendance_id=current.attendance_id,
            user_id=current.user_id,
            shift=current.shift,
            work_date=current.work_date,
            check_in_time=current.check_in_time,
            check_out_time=intent.check_out_time,
            status=current.status,
            reason=current.reason,
        )

    def upsert_absence(self, absence: AbsenceRecord) -> bool:
        with db_transaction(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, check_in_time, status
                FROM attendance_records
                WHERE user_id=%s AND shift=%s AND work_date=%s
                FOR UPDATE
                """,
                (absence.user_id, absence.shift, absence.date),
            )
            rows = fetchall(cur)
            if any(r.get("check_in_time") or r.get("status") == AttendanceMark.ABSENT.value for r in rows):
                return False

            cur.execute(
                """
                INSERT INTO attendance_records(user_id, shift, work_date, status, reason)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (absence.user_id, absence.shift, absence.date, absence.status.value, absence.reason),
            )
            return True
