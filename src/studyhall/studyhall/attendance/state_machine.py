"""Attendance lifecycle per (user, shift, date).

    Pending --check_in--> CheckedIn --check_out--> Completed
    Pending --shift closes without check-in--> Absent

Every transition is gated on the shift window: check-out is allowed only
while the shift is active, so a record left open past the window end cannot
be closed by the user.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, List, Optional

from ..core.enums import AttendanceState
from ..core.exceptions import (
    AlreadyCheckedInError,
    NotFoundError,
    OutsideShiftWindowError,
    ShiftAlreadyCompletedError,
    ValidationError,
)
from ..shifts.calendar import normalize_shift_id
from ..shifts.window import has_closed, is_active
from .model import AttendanceRecord, CheckInIntent, CheckOutIntent


def should_mark_absent(shift, has_checked_in: bool, now: datetime) -> bool:
    return has_closed(shift, now) and not has_checked_in


def _records_for(
    records: Iterable[AttendanceRecord], *, user_id: str, shift: str, work_date: date
) -> List[AttendanceRecord]:
    return [r for r in records if r.user_id == user_id and r.shift == shift and r.work_date == work_date]


def record_check_in(
    now: datetime,
    shift,
    existing_records: Iterable[AttendanceRecord],
    *,
    user_id: str,
    work_date: Optional[date] = None,
) -> CheckInIntent:
    shift = normalize_shift_id(shift)
    if not is_active(shift, now):
        raise OutsideShiftWindowError(shift)

    work_date = work_date or now.date()
    mine = _records_for(existing_records, user_id=user_id, shift=shift, work_date=work_date)

    if any(r.is_open for r in mine):
        raise AlreadyCheckedInError(shift)
    if any(r.is_completed for r in mine):
        raise ShiftAlreadyCompletedError(shift)

    absence = next((r for r in mine if r.is_absent), None)
    return CheckInIntent(
        user_id=user_id,
        shift=shift,
        work_date=work_date,
        check_in_time=now,
        replaces_id=absence.attendance_id if absence else None,
    )


def record_check_out(
    now: datetime,
    shift,
    record_id: int,
    existing_records: Iterable[AttendanceRecord],
) -> CheckOutIntent:
    shift = normalize_shift_id(shift)
    if not is_active(shift, now):
        raise OutsideShiftWindowError(shift)

    record = next((r for r in existing_records if r.attendance_id == record_id), None)
    if record is None:
        raise NotFoundError("Attendance record not found")
    if record.shift != shift:
        raise ValidationError(f"Attendance record does not belong to the {shift} shift")
    if not record.has_checked_in:
        raise ValidationError("You have not checked in for this shift yet")
    if record.check_out_time is not None:
        raise ShiftAlreadyCompletedError(shift)
    if now < record.check_in_time:
        raise ValidationError("Check-out time cannot be earlier than check-in time")

    return CheckOutIntent(attendance_id=record.attendance_id, check_out_time=now)


def compute_status(record: Optional[AttendanceRecord], shift, now: datetime) -> AttendanceState:
    if record is not None and record.is_completed:
        return AttendanceState.COMPLETED
    if record is not None and record.has_checked_in:
        return AttendanceState.CHECKED_IN
    if should_mark_absent(shift, False, now):
        return AttendanceState.ABSENT
    return AttendanceState.PENDING


def current_record(records: Iterable[AttendanceRecord], shift) -> Optional[AttendanceRecord]:
    """Pick the record that drives a shift's displayed state: open, then completed, then any."""
    shift = normalize_shift_id(shift)
    candidates = [r for r in records if r.shift == shift]
    for predicate in (lambda r: r.is_open, lambda r: r.is_completed):
        for r in candidates:
            if predicate(r):
                return r
    return candidates[0] if candidates else None
