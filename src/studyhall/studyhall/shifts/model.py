from __future__ import annotations

from dataclasses import dataclass
from datetime import time


@dataclass(frozen=True)
class ShiftWindow:
    """Daily time window of a shift, in wall-clock hours and minutes."""

    start_hour: int
    start_minute: int
    end_hour: int
    end_minute: int
    crosses_midnight: bool

    @property
    def start_minutes(self) -> int:
        return self.start_hour * 60 + self.start_minute

    @property
    def end_minutes(self) -> int:
        return self.end_hour * 60 + self.end_minute

    @property
    def start_time(self) -> time:
        return time(self.start_hour, self.start_minute)

    @property
    def end_time(self) -> time:
        return time(self.end_hour, self.end_minute)


@dataclass(frozen=True)
class Shift:
    """Domain entity: one of the four fixed library shifts."""

    shift_id: str
    name: str
    window: ShiftWindow
    price: int

    @property
    def time_range(self) -> str:
        return f"{_format_12h(self.window.start_time)} – {_format_12h(self.window.end_time)}"


def _format_12h(value: time) -> str:
    return value.strftime("%I:%M %p")
