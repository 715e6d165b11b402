from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    STUDENT = "student"


class ShiftId(str, Enum):
    """The four fixed daily shifts."""

    MORNING = "morning"
    NOON = "noon"
    EVENING = "evening"
    NIGHT = "night"


class BookingStatus(str, Enum):
    BOOKED = "booked"
    AVAILABLE = "available"
    PENDING = "pending"


class AttendanceMark(str, Enum):
    """Status persisted on an attendance row."""

    PRESENT = "present"
    ABSENT = "absent"


class AttendanceState(str, Enum):
    """Derived lifecycle state for a (user, shift, date) key."""

    PENDING = "pending"
    CHECKED_IN = "checked_in"
    COMPLETED = "completed"
    ABSENT = "absent"


class PaymentStatus(str, Enum):
    """Payment state of an admission."""

    PENDING = "pending"
    PAID = "paid"


class PaymentDecision(str, Enum):
    """Approval workflow state of a payment."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PaymentMethod(str, Enum):
    UPI = "upi"
    CASH = "cash"
    QR = "qr"


class ApprovalStatus(str, Enum):
    """Admin review state of a student account."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
