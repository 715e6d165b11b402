from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AbsenceRecord, AttendanceRecord, CheckInIntent, CheckOutIntent


class AttendanceRepository(Protocol):
    def list_attendance(self, user_id: str, work_date: Optional[date] = None) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_attendance(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_attendance_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create_attendance(self, intent: CheckInIntent) -> AttendanceRecord:
        """Persist a check-in (converting ``intent.replaces_id`` if set).

        Raises ConflictError if an open or completed check-in for the same
        (user, shift, date) was written concurrently.
        """

        raise NotImplementedError

    def update_attendance(self, intent: CheckOutIntent) -> AttendanceRecord:
        raise NotImplementedError

    def upsert_absence(self, absence: AbsenceRecord) -> bool:
        """Insert the absence unless the key already has one or has a check-in. Returns True if a row was written."""

        raise NotImplementedError
