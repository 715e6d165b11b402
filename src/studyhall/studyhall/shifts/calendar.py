"""Static shift catalog: ids, time windows and per-shift prices."""

from __future__ import annotations

from typing import Sequence

from ..core.enums import ShiftId
from ..core.exceptions import InvalidShiftError
from .model import Shift, ShiftWindow

SHIFTS: tuple[Shift, ...] = (
    Shift(ShiftId.MORNING.value, "Morning", ShiftWindow(6, 0, 11, 0, crosses_midnight=False), price=299),
    Shift(ShiftId.NOON.value, "Noon", ShiftWindow(11, 0, 16, 0, crosses_midnight=False), price=349),
    Shift(ShiftId.EVENING.value, "Evening", ShiftWindow(16, 0, 21, 0, crosses_midnight=False), price=299),
    Shift(ShiftId.NIGHT.value, "Night", ShiftWindow(21, 0, 5, 0, crosses_midnight=True), price=299),
)

_BY_ID = {s.shift_id: s for s in SHIFTS}

SHIFT_IDS: tuple[str, ...] = tuple(_BY_ID)


def _key(shift_id) -> str:
    if isinstance(shift_id, ShiftId):
        return shift_id.value
    return shift_id


def get_shift(shift_id) -> Shift:
    shift = _BY_ID.get(_key(shift_id))
    if shift is None:
        raise InvalidShiftError(shift_id)
    return shift


def window_for(shift_id) -> ShiftWindow:
    return get_shift(shift_id).window


def price_for(shift_id) -> int:
    return get_shift(shift_id).price


def is_known_shift(shift_id) -> bool:
    return _key(shift_id) in _BY_ID


def normalize_shift_id(shift_id) -> str:
    """Return the canonical string id, raising InvalidShiftError for unknown values."""
    return get_shift(shift_id).shift_id


def list_shifts() -> Sequence[Shift]:
    return SHIFTS
