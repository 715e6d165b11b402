from datetime import date

import pytest

from studyhall.bookings.ledger import (
    book_seat,
    is_booked,
    is_owned_by,
    occupancy,
    seat_labels,
    seat_map,
    user_seat,
)
from studyhall.bookings.model import SeatBooking
from studyhall.core.enums import BookingStatus
from studyhall.core.exceptions import InvalidSeatError, InvalidShiftError, SeatTakenError, UserAlreadyBookedError

D = date(2025, 3, 10)


def persist(snapshot, intent, status=BookingStatus.BOOKED):
    return snapshot + [
        SeatBooking(
            booking_id=len(snapshot) + 1,
            user_id=intent.user_id,
            shift=intent.shift,
            seat_number=intent.seat_number,
            booking_date=intent.booking_date,
            booking_status=status,
        )
    ]


def test_seat_pool_is_fifty_labels_in_numeric_order():
    labels = seat_labels()
    assert len(labels) == 50
    assert labels[:3] == ["S1", "S2", "S3"]
    assert labels[-1] == "S50"


def test_booking_sequence_rules():
    first = book_seat([], "U1", "morning", "S5", D)
    assert first.booking_status == BookingStatus.BOOKED
    snapshot = persist([], first)

    # same user, same seat, different shift
    noon = book_seat(snapshot, "U1", "noon", "S5", D)
    assert noon.shift == "noon"

    with pytest.raises(SeatTakenError):
        book_seat(snapshot, "U2", "morning", "S5", D)

    with pytest.raises(UserAlreadyBookedError) as exc:
        book_seat(snapshot, "U1", "morning", "S6", D)
    assert exc.value.seat_number == "S5"


def test_user_rule_is_checked_before_seat_rule():
    snapshot = persist([], book_seat([], "U1", "evening", "S9", D))
    with pytest.raises(UserAlreadyBookedError):
        book_seat(snapshot, "U1", "evening", "S9", D)


def test_other_days_and_non_booked_rows_do_not_block():
    snapshot = persist([], book_seat([], "U1", "morning", "S5", date(2025, 3, 9)))
    snapshot = persist(snapshot, book_seat([], "U3", "morning", "S7", D), status=BookingStatus.PENDING)

    assert book_seat(snapshot, "U2", "morning", "S5", D).seat_number == "S5"
    assert book_seat(snapshot, "U2", "morning", "S7", D).seat_number == "S7"


def test_invalid_seat_and_shift():
    with pytest.raises(InvalidSeatError):
        book_seat([], "U1", "morning", "S51", D)
    with pytest.raises(InvalidShiftError):
        book_seat([], "U1", "brunch", "S1", D)


def test_queries_over_snapshot():
    snapshot = persist([], book_seat([], "U1", "night", "S12", D))

    assert is_booked(snapshot, "S12", "night") is True
    assert is_booked(snapshot, "S12", "morning") is False
    assert is_owned_by(snapshot, "S12", "night", "U1") is True
    assert is_owned_by(snapshot, "S12", "night", "U2") is False
    assert user_seat(snapshot, "night", "U1") == "S12"
    assert user_seat(snapshot, "noon", "U1") is None


def test_seat_map_and_occupancy():
    snapshot = persist([], book_seat([], "U1", "noon", "S1", D))
    snapshot = persist(snapshot, book_seat(snapshot, "U2", "noon", "S2", D))

    seats = seat_map(snapshot, "noon", user_id="U2")
    assert len(seats) == 50
    assert (seats[0].is_booked, seats[0].is_mine) == (True, False)
    assert (seats[1].is_booked, seats[1].is_mine) == (True, True)
    assert seats[2].is_booked is False

    occ = occupancy(snapshot, "noon")
    assert (occ.booked, occ.total, occ.percentage) == (2, 50, 4)
    assert occupancy(snapshot, "morning").percentage == 0
