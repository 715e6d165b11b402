from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Dict, List, Optional

from ..core.exceptions import ConflictError
from ..shifts.calendar import SHIFT_IDS, normalize_shift_id
from ..users.service import AccountService
from . import ledger
from .model import SeatBooking, SeatView, ShiftOccupancy
from .repository import BookingRepository

logger = logging.getLogger(__name__)


class BookingService:
    def __init__(self, bookings: BookingRepository, accounts: AccountService):
        self._bookings = bookings
        self._accounts = accounts

    def book(
        self,
        *,
        user_id: str,
        shift: str,
        seat_number: str,
        booking_date: date | None = None,
        now: datetime | None = None,
    ) -> SeatBooking:
        """Book a seat for an approved account, retrying once if a concurrent booking wins the race."""

        now = now or datetime.now()
        booking_date = booking_date or now.date()
        shift = normalize_shift_id(shift)
        self._accounts.require_approved(user_id)

        for attempt in (1, 2):
            snapshot = self._bookings.list_bookings(booking_date)
            intent = ledger.book_seat(snapshot, user_id, shift, seat_number, booking_date)
            try:
                booking = self._bookings.create_booking(intent)
            except ConflictError:
                if attempt == 2:
                    raise
                logger.warning(
                    "booking conflict for seat %s %s on %s, re-evaluating", seat_number, shift, booking_date
                )
                continue

            logger.info("user %s booked seat %s for %s on %s", user_id, seat_number, shift, booking_date)
            return booking

        raise ConflictError("Booking could not be completed")

    def seat_map(self, *, shift: str, booking_date: date, user_id: Optional[str] = None) -> List[SeatView]:
        snapshot = self._bookings.list_bookings(booking_date)
        return ledger.seat_map(snapshot, shift, user_id)

    def user_seat_for_shift(self, *, user_id: str, shift: str, booking_date: date) -> Optional[str]:
        snapshot = self._bookings.list_bookings(booking_date)
        return ledger.user_seat(snapshot, shift, user_id)

    def user_bookings(self, user_id: str, *, limit: int = 50) -> List[SeatBooking]:
        return list(self._bookings.list_for_user(user_id, limit=limit))

    def occupancy(self, booking_date: date) -> Dict[str, ShiftOccupancy]:
        """Per-shift occupancy of the seat pool for the admin dashboard."""
        snapshot = self._bookings.list_bookings(booking_date)
        return {shift: ledger.occupancy(snapshot, shift) for shift in SHIFT_IDS}
