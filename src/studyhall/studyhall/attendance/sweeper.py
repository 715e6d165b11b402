"""Absence sweep: mark paid admissions absent for closed shifts without a check-in."""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, List, Optional

from ..admissions.model import Admission
from ..core.enums import PaymentStatus
from ..shifts.window import has_closed
from .model import AbsenceRecord, AttendanceRecord


def sweep_absences(
    admissions: Iterable[Admission],
    attendance: Iterable[AttendanceRecord],
    now: datetime,
    *,
    target_date: Optional[date] = None,
) -> List[AbsenceRecord]:
    """Return one absence per (user, shift) that closed on ``target_date`` without a check-in.

    Closure is judged from the clock reading ``now``. The result is
    de-duplicated by key and does not depend on previous sweeps, so callers
    upserting on (user, shift, date) can repeat the sweep safely.
    """

    target_date = target_date or now.date()
    checked_in = {
        (r.user_id, r.shift)
        for r in attendance
        if r.work_date == target_date and r.check_in_time is not None
    }

    absences: List[AbsenceRecord] = []
    seen: set[tuple[str, str]] = set()
    for admission in admissions:
        if admission.payment_status != PaymentStatus.PAID:
            continue
        for shift in admission.selected_shifts:
            key = (admission.user_id, shift)
            if key in seen or key in checked_in:
                continue
            if not has_closed(shift, now):
                continue
            seen.add(key)
            absences.append(AbsenceRecord(user_id=admission.user_id, shift=shift, date=target_date))
    return absences
