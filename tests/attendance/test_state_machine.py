from datetime import date, datetime

import pytest

from studyhall.attendance.model import AttendanceRecord
from studyhall.attendance.state_machine import (
    compute_status,
    current_record,
    record_check_in,
    record_check_out,
    should_mark_absent,
)
from studyhall.core.enums import AttendanceMark, AttendanceState
from studyhall.core.exceptions import (
    AlreadyCheckedInError,
    NotFoundError,
    OutsideShiftWindowError,
    ShiftAlreadyCompletedError,
    ValidationError,
)

D = date(2025, 3, 10)


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2025, 3, 10, hour, minute)


def rec(attendance_id=1, shift="morning", check_in=None, check_out=None, status=None, user_id="U1"):
    return AttendanceRecord(
        attendance_id=attendance_id,
        user_id=user_id,
        shift=shift,
        work_date=D,
        check_in_time=check_in,
        check_out_time=check_out,
        status=status,
    )


# A time inside, after, and outside each shift's window.
WINDOWS = {
    "morning": (at(8), at(12)),
    "noon": (at(12), at(17)),
    "evening": (at(18), at(22)),
    "night": (at(23), at(12)),
}


def test_check_in_inside_window():
    intent = record_check_in(at(6, 5), "morning", [], user_id="U1")
    assert intent.check_in_time == at(6, 5)
    assert intent.work_date == D
    assert intent.replaces_id is None


@pytest.mark.parametrize(
    "existing",
    [
        [],
        [rec(check_in=at(6))],
        [rec(check_in=at(6), check_out=at(9))],
    ],
)
def test_check_in_outside_window_wins_over_other_rules(existing):
    with pytest.raises(OutsideShiftWindowError):
        record_check_in(at(11, 0), "morning", existing, user_id="U1")


def test_cannot_check_in_twice():
    with pytest.raises(AlreadyCheckedInError):
        record_check_in(at(9), "morning", [rec(check_in=at(6, 30))], user_id="U1")


def test_cannot_check_in_after_completing():
    with pytest.raises(ShiftAlreadyCompletedError):
        record_check_in(at(9), "morning", [rec(check_in=at(6, 30), check_out=at(8))], user_id="U1")


def test_records_of_other_shifts_or_users_are_ignored():
    existing = [rec(shift="noon", check_in=at(11, 5)), rec(attendance_id=2, user_id="U2", check_in=at(6, 10))]
    assert record_check_in(at(9), "morning", existing, user_id="U1").shift == "morning"


def test_check_in_converts_existing_absence():
    absent = rec(attendance_id=7, shift="night", status=AttendanceMark.ABSENT)
    intent = record_check_in(at(22), "night", [absent], user_id="U1")
    assert intent.replaces_id == 7


def test_check_out_sets_time():
    intent = record_check_out(at(10), "morning", 1, [rec(check_in=at(7))])
    assert (intent.attendance_id, intent.check_out_time) == (1, at(10))


def test_check_out_is_time_gated_documented_quirk():
    # A user who misses the window can no longer close the record.
    with pytest.raises(OutsideShiftWindowError):
        record_check_out(at(11, 1), "morning", 1, [rec(check_in=at(7))])


def test_check_out_validation():
    with pytest.raises(NotFoundError):
        record_check_out(at(10), "morning", 99, [rec(check_in=at(7))])
    with pytest.raises(ShiftAlreadyCompletedError):
        record_check_out(at(10), "morning", 1, [rec(check_in=at(7), check_out=at(9))])
    with pytest.raises(ValidationError):
        record_check_out(at(10), "morning", 1, [rec()])
    with pytest.raises(ValidationError):
        record_check_out(at(13), "noon", 1, [rec(check_in=at(7))])


@pytest.mark.parametrize("shift", ["morning", "noon", "evening", "night"])
def test_compute_status_for_every_shift(shift):
    inside, closed = WINDOWS[shift]

    assert compute_status(None, shift, closed) == AttendanceState.ABSENT
    assert compute_status(None, shift, inside) == AttendanceState.PENDING
    assert compute_status(rec(shift=shift, check_in=inside), shift, closed) == AttendanceState.CHECKED_IN
    assert (
        compute_status(rec(shift=shift, check_in=inside, check_out=inside), shift, closed)
        == AttendanceState.COMPLETED
    )


def test_absence_row_without_check_in_follows_clock():
    absent = rec(shift="night", status=AttendanceMark.ABSENT)
    assert compute_status(absent, "night", at(12)) == AttendanceState.ABSENT
    assert compute_status(absent, "night", at(22)) == AttendanceState.PENDING


def test_should_mark_absent():
    assert should_mark_absent("noon", False, at(16)) is True
    assert should_mark_absent("noon", True, at(16)) is False
    assert should_mark_absent("noon", False, at(15, 59)) is False


def test_current_record_prefers_open_then_completed():
    done = rec(attendance_id=1, check_in=at(6), check_out=at(7))
    open_ = rec(attendance_id=2, check_in=at(8))
    assert current_record([done, open_], "morning") is open_
    assert current_record([done], "morning") is done
    assert current_record([done], "noon") is None
