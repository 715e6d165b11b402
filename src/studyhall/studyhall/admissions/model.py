from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from ..core.enums import PaymentStatus


@dataclass(frozen=True)
class Admission:
    """Domain entity: a (paid or pending) enrollment for a set of shifts."""

    admission_id: int
    user_id: str
    selected_shifts: Tuple[str, ...]
    duration_months: int
    registration_fee: int
    shift_fee: int
    total_amount: int
    payment_status: PaymentStatus = PaymentStatus.PENDING
    full_name: Optional[str] = None
    course_name: Optional[str] = None
    payment_date: Optional[datetime] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


@dataclass(frozen=True)
class NewAdmission:
    user_id: str
    selected_shifts: Tuple[str, ...]
    duration_months: int
    registration_fee: int
    shift_fee: int
    total_amount: int
    full_name: Optional[str] = None
    course_name: Optional[str] = None


@dataclass(frozen=True)
class FeeQuote:
    selected_shifts: Tuple[str, ...]
    shift_fee: int
    registration_fee: int

    @property
    def total_amount(self) -> int:
        return self.shift_fee + self.registration_fee

    def to_dict(self) -> dict:
        return {
            "selectedShifts": list(self.selected_shifts),
            "shiftFee": self.shift_fee,
            "registrationFee": self.registration_fee,
            "totalAmount": self.total_amount,
        }
