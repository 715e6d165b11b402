from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import BookingStatus


@dataclass(frozen=True)
class SeatBooking:
    """Domain entity: a seat held by a user for one shift on one day."""

    booking_id: int
    user_id: str
    shift: str
    seat_number: str
    booking_date: date
    booking_status: BookingStatus
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class NewSeatBooking:
    """Intent to create a booking, produced by the ledger after its checks pass."""

    user_id: str
    shift: str
    seat_number: str
    booking_date: date
    booking_status: BookingStatus = BookingStatus.BOOKED


@dataclass(frozen=True)
class ShiftOccupancy:
    shift: str
    booked: int
    total: int

    @property
    def percentage(self) -> int:
        if not self.total:
            return 0
        return round(self.booked * 100 / self.total)


@dataclass(frozen=True)
class SeatView:
    seat_number: str
    is_booked: bool
    is_mine: bool
