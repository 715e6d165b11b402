from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional

from ..core.constants import ABSENCE_REASON_NO_CHECKIN
from ..core.enums import AttendanceMark


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: attendance of one user for one shift on one day."""

    attendance_id: int
    user_id: str
    shift: str
    work_date: date
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    status: Optional[AttendanceMark] = None
    reason: Optional[str] = None

    @property
    def has_checked_in(self) -> bool:
        return self.check_in_time is not None

    @property
    def is_open(self) -> bool:
        return self.check_in_time is not None and self.check_out_time is None

    @property
    def is_completed(self) -> bool:
        return self.check_in_time is not None and self.check_out_time is not None

    @property
    def is_absent(self) -> bool:
        return self.status == AttendanceMark.ABSENT and self.check_in_time is None


@dataclass(frozen=True)
class CheckInIntent:
    """A validated check-in. ``replaces_id`` names an absence row to convert in place."""

    user_id: str
    shift: str
    work_date: date
    check_in_time: datetime
    replaces_id: Optional[int] = None


@dataclass(frozen=True)
class CheckOutIntent:
    attendance_id: int
    check_out_time: datetime


@dataclass(frozen=True)
class AbsenceRecord:
    user_id: str
    shift: str
    date: date
    status: AttendanceMark = AttendanceMark.ABSENT
    reason: str = ABSENCE_REASON_NO_CHECKIN

    @property
    def key(self) -> tuple[str, str, date]:
        return (self.user_id, self.shift, self.date)

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "shift": self.shift,
            "date": self.date.isoformat(),
            "status": self.status.value,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class SweepResult:
    date: date
    absences: List[AbsenceRecord] = field(default_factory=list)

    @property
    def absent_count(self) -> int:
        return len(self.absences)

    def to_dict(self) -> dict:
        return {
            "success": True,
            "date": self.date.isoformat(),
            "absentCount": self.absent_count,
            "absentStudents": [a.to_dict() for a in self.absences],
        }
