"""Seat ledger: seat uniqueness per (date, shift).

Decisions are made over a snapshot of bookings; the caller persists the
returned intent through a repository that re-checks the same preconditions
inside a transaction.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional, Sequence

from ..core.constants import SEAT_POOL_SIZE, SEAT_PREFIX
from ..core.enums import BookingStatus
from ..core.exceptions import InvalidSeatError, SeatTakenError, UserAlreadyBookedError
from ..shifts.calendar import normalize_shift_id
from .model import NewSeatBooking, SeatBooking, SeatView, ShiftOccupancy


def seat_labels(pool_size: int = SEAT_POOL_SIZE) -> List[str]:
    return [f"{SEAT_PREFIX}{i}" for i in range(1, pool_size + 1)]


_SEATS = frozenset(seat_labels())


def is_valid_seat(seat_number: str) -> bool:
    return seat_number in _SEATS


def _booked(snapshot: Iterable[SeatBooking], shift: str, booking_date: Optional[date]) -> List[SeatBooking]:
    return [
        b
        for b in snapshot
        if b.booking_status == BookingStatus.BOOKED
        and b.shift == shift
        and (booking_date is None or b.booking_date == booking_date)
    ]


def book_seat(
    snapshot: Sequence[SeatBooking],
    user_id: str,
    shift,
    seat_number: str,
    booking_date: date,
) -> NewSeatBooking:
    """Decide whether ``user_id`` may take ``seat_number`` for ``shift`` on ``booking_date``.

    Raises UserAlreadyBookedError if the user already holds a seat for that
    shift and day, SeatTakenError if someone else holds the seat.
    """

    shift = normalize_shift_id(shift)
    if not is_valid_seat(seat_number):
        raise InvalidSeatError(seat_number)

    booked = _booked(snapshot, shift, booking_date)

    mine = next((b for b in booked if b.user_id == user_id), None)
    if mine is not None:
        raise UserAlreadyBookedError(shift, mine.seat_number)

    if any(b.seat_number == seat_number for b in booked):
        raise SeatTakenError(seat_number, shift)

    return NewSeatBooking(
        user_id=user_id,
        shift=shift,
        seat_number=seat_number,
        booking_date=booking_date,
    )



def is_booked(snapshot: Iterable[SeatBooking], seat_number: str, shift, booking_date: Optional[date] = None) -> bool:
    shift = normalize_shift_id(shift)
    return any(b.seat_number == seat_number for b in _booked(snapshot, shift, booking_date))


def is_owned_by(
    snapshot: Iterable[SeatBooking],
    seat_number: str,
    shift,
    user_id: str,
    booking_date: Optional[date] = None,
) -> bool:
    shift = normalize_shift_id(shift)
    return any(
        b.seat_number == seat_number and b.user_id == user_id for b in _booked(snapshot, shift, booking_date)
    )


def user_seat(snapshot: Iterable[SeatBooking], shift, user_id: str, booking_date: Optional[date] = None) -> Optional[str]:
    shift = normalize_shift_id(shift)
    for b in _booked(snapshot, shift, booking_date):
        if b.user_id == user_id:
            return b.seat_number
    return None


def seat_map(snapshot: Sequence[SeatBooking], shift, user_id: Optional[str] = None) -> List[SeatView]:
    shift = normalize_shift_id(shift)
    booked = {b.seat_number: b.user_id for b in _booked(snapshot, shift, None)}
    return [
        SeatView(
            seat_number=label,
            is_booked=label in booked,
            is_mine=user_id is not None and booked.get(label) == user_id,
        )
        for label in seat_labels()
    ]


def occupancy(snapshot: Sequence[SeatBooking], shift) -> ShiftOccupancy:
    shift = normalize_shift_id(shift)
    return ShiftOccupancy(shift=shift, booked=len(_booked(snapshot, shift, None)), total=SEAT_POOL_SIZE)
