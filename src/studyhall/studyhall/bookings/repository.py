from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import NewSeatBooking, SeatBooking


class BookingRepository(Protocol):
    def list_bookings(self, booking_date: date) -> Sequence[SeatBooking]:
        raise NotImplementedError

    def list_for_user(self, user_id: str, *, limit: int = 50) -> Sequence[SeatBooking]:
        raise NotImplementedError

    def get_booking(self, booking_id: int) -> Optional[SeatBooking]:
        raise NotImplementedError

    def create_booking(self, new: NewSeatBooking) -> SeatBooking:
        """Persist a booking; raises ConflictError if the seat or the user's slot was taken meanwhile."""

        raise NotImplementedError
