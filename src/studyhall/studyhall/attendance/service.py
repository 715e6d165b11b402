from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional, Sequence

from ..admissions.repository import AdmissionRepository
from ..core.enums import AttendanceState, PaymentStatus
from ..core.exceptions import ConflictError, NotFoundError, ShiftNotPaidError
from ..shifts.calendar import get_shift, normalize_shift_id
from ..shifts.window import is_active, valid_shifts_now
from . import state_machine
from .model import AttendanceRecord, SweepResult
from .repository import AttendanceRepository
from .sweeper import sweep_absences

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShiftStatus:
    shift: str
    name: str
    time_range: str
    state: AttendanceState
    is_active: bool
    record: Optional[AttendanceRecord] = None

    def to_dict(self) -> dict:
        return {
            "shift": self.shift,
            "name": self.name,
            "timeRange": self.time_range,
            "status": self.state.value,
            "isActive": self.is_active,
            "attendanceId": self.record.attendance_id if self.record else None,
            "checkInTime": self.record.check_in_time.isoformat() if self.record and self.record.check_in_time else None,
            "checkOutTime": (
                self.record.check_out_time.isoformat() if self.record and self.record.check_out_time else None
            ),
        }


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, admissions: AdmissionRepository):
        self._attendance = attendance
        self._admissions = admissions

    def check_in(self, user_id: str, shift: str, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or datetime.now()
        today = now.date()
        shift = normalize_shift_id(shift)
        if shift not in self.paid_shifts(user_id):
            raise ShiftNotPaidError(shift)

        for attempt in (1, 2):
            existing = self._attendance.list_attendance(user_id, today)
            intent = state_machine.record_check_in(now, shift, existing, user_id=user_id, work_date=today)
            try:
                record = self._attendance.create_attendance(intent)
            except ConflictError:
                if attempt == 2:
                    raise
                logger.warning("check-in conflict for user %s shift %s, re-evaluating", user_id, intent.shift)
                continue

            logger.info("user %s checked in for %s at %s", user_id, intent.shift, now.strftime("%H:%M"))
            return record

        raise ConflictError("Check-in could not be completed")

    def check_out(self, user_id: str, shift: str, record_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or datetime.now()

        # looked up by id: a night check-in belongs to the previous day after midnight
        record = self._attendance.get_attendance(int(record_id))
        if record is None or record.user_id != user_id:
            raise NotFoundError("Attendance record not found")
        intent = state_machine.record_check_out(now, shift, record.attendance_id, [record])
        record = self._attendance.update_attendance(intent)

        logger.info("user %s checked out of %s at %s", user_id, record.shift, now.strftime("%H:%M"))
        return record

    def paid_shifts(self, user_id: str) -> List[str]:
        paid = self._admissions.list_admissions(payment_status=PaymentStatus.PAID, user_id=user_id)
        shifts: List[str] = []
        for admission in paid:
            for s in admission.selected_shifts:
                if s not in shifts:
                    shifts.append(s)
        return shifts

    def active_shifts(self, user_id: str, *, now: datetime | None = None) -> List[str]:
        """Shifts of the user's paid admissions that can be acted on right now."""
        now = now or datetime.now()
        return valid_shifts_now(self.paid_shifts(user_id), now)

    def statuses(
        self,
        user_id: str,
        shifts: Optional[Sequence[str]] = None,
        *,
        now: datetime | None = None,
    ) -> List[ShiftStatus]:
        now = now or datetime.now()
        if shifts is None:
            shifts = self.paid_shifts(user_id)

        records = self._attendance.list_attendance(user_id, now.date())
        result = []
        for s in shifts:
            shift = get_shift(normalize_shift_id(s))
            record = state_machine.current_record(records, shift.shift_id)
            result.append(
                ShiftStatus(
                    shift=shift.shift_id,
                    name=shift.name,
                    time_range=shift.time_range,
                    state=state_machine.compute_status(record, shift.shift_id, now),
                    is_active=is_active(shift.shift_id, now),
                    record=record,
                )
            )
        return result

    def history(self, user_id: str) -> List[AttendanceRecord]:
        return list(self._attendance.list_attendance(user_id))


class AbsenceService:
    """Batch reconciliation behind the check-absent-students endpoint."""

    def __init__(self, attendance: AttendanceRepository, admissions: AdmissionRepository):
        self._attendance = attendance
        self._admissions = admissions

    def check_absent_students(
        self,
        *,
        target_date: date | None = None,
        now: datetime | None = None,
        persist: bool = True,
    ) -> SweepResult:
        now = now or datetime.now()
        target_date = target_date or now.date()

        admissions = self._admissions.list_admissions(payment_status=PaymentStatus.PAID)
        attendance = self._attendance.list_attendance_for_date(target_date)
        absences = sweep_absences(admissions, attendance, now, target_date=target_date)

        written = 0
        if persist:
            for absence in absences:
                if self._attendance.upsert_absence(absence):
                    written += 1

        logger.info(
            "found %d absent students for %s (%d new rows)", len(absences), target_date.isoformat(), written
        )
        return SweepResult(date=target_date, absences=absences)
