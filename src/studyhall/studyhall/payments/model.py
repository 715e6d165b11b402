from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import PaymentDecision, PaymentMethod, PaymentStatus


@dataclass(frozen=True)
class Payment:
    """Domain entity: a payment for exactly one booking or one admission."""

    payment_id: int
    user_id: str
    amount: int
    method: PaymentMethod
    status: PaymentDecision
    booking_id: Optional[int] = None
    admission_id: Optional[int] = None
    receipt_number: Optional[str] = None
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class NewPayment:
    user_id: str
    amount: int
    method: PaymentMethod
    booking_id: Optional[int] = None
    admission_id: Optional[int] = None
    receipt_number: Optional[str] = None


@dataclass(frozen=True)
class PaymentSettlement:
    """A payment decision plus the booking/admission change it implies, applied as one unit of work."""

    payment_id: int
    status: PaymentDecision
    decided_by: str
    decided_at: datetime
    confirm_booking_id: Optional[int] = None
    release_booking_id: Optional[int] = None
    admission_id: Optional[int] = None
    admission_status: Optional[PaymentStatus] = None
    admission_paid_at: Optional[datetime] = None
    admission_end: Optional[datetime] = None
