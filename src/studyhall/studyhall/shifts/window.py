"""Shift window membership and closure checks.

All functions take the clock reading explicitly; only hour and minute are
considered, the calendar date of ``now`` is ignored.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, List

from ..common.datetime_utils import minutes_since_midnight
from .calendar import window_for


def is_active(shift_id, now: datetime) -> bool:
    window = window_for(shift_id)
    t = minutes_since_midnight(now)
    start, end = window.start_minutes, window.end_minutes

    if window.crosses_midnight:
        # Night shift (21:00 - 05:00): after start OR before end
        return t >= start or t < end
    return start <= t < end


def has_closed(shift_id, now: datetime) -> bool:
    """Whether the shift's window counts as ended for absence marking.

    Day shifts are closed from their end until midnight. The night shift is
    only closed between its end and its next start (05:00 - 21:00); before
    05:00 it is still running and from 21:00 it has started again.
    """

    window = window_for(shift_id)
    t = minutes_since_midnight(now)

    if window.crosses_midnight:
        return window.end_minutes <= t < window.start_minutes
    return t >= window.end_minutes


def valid_shifts_now(shift_ids: Iterable[str], now: datetime) -> List[str]:
    return [s for s in shift_ids if is_active(s, now)]


def can_act_on_shift(shift_id, now: datetime) -> bool:
    """Gate for user actions (check-in, check-out) on a shift."""
    return is_active(shift_id, now)
