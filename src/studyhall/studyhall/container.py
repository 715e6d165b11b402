from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .admissions.mysql_admission_repository import MySQLAdmissionRepository
from .admissions.repository import AdmissionRepository
from .admissions.service import AdmissionService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AbsenceService, AttendanceService
from .bookings.mysql_booking_repository import MySQLBookingRepository
from .bookings.repository import BookingRepository
from .bookings.service import BookingService
from .database.connection import DBConfig, DatabaseConnection
from .payments.mysql_payment_repository import MySQLPaymentRepository
from .payments.repository import PaymentRepository
from .payments.service import PaymentService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AccountService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    bookings_repo: BookingRepository
    attendance_repo: AttendanceRepository
    admissions_repo: AdmissionRepository
    payments_repo: PaymentRepository
    users_repo: UserRepository

    account_service: AccountService
    booking_service: BookingService
    attendance_service: AttendanceService
    absence_service: AbsenceService
    admission_service: AdmissionService
    payment_service: PaymentService

    def close(self) -> None:
        if self.conn is not None:
            self.conn.close()


def db_config_from_settings(db_config: dict) -> DBConfig:
    return DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        pool_size=int(db_config.get("pool_size", 5)),
    )


def wire(
    *,
    bookings_repo: BookingRepository,
    attendance_repo: AttendanceRepository,
    admissions_repo: AdmissionRepository,
    payments_repo: PaymentRepository,
    users_repo: UserRepository,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build services over the given repositories (MySQL in production, fakes in tests)."""
    account_service = AccountService(users_repo)
    return Container(
        conn=conn,
        bookings_repo=bookings_repo,
        attendance_repo=attendance_repo,
        admissions_repo=admissions_repo,
        payments_repo=payments_repo,
        users_repo=users_repo,
        account_service=account_service,
        booking_service=BookingService(bookings_repo, account_service),
        attendance_service=AttendanceService(attendance_repo, admissions_repo),
        absence_service=AbsenceService(attendance_repo, admissions_repo),
        admission_service=AdmissionService(admissions_repo),
        payment_service=PaymentService(payments_repo, bookings_repo, admissions_repo),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection(db_config_from_settings(db_config)).connect()
    return wire(
        conn=conn,
        bookings_repo=MySQLBookingRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        admissions_repo=MySQLAdmissionRepository(conn),
        payments_repo=MySQLPaymentRepository(conn),
        users_repo=MySQLUserRepository(conn),
    )
