from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional

from ..common.datetime_utils import minute_of_day
from ..core.constants import MINUTES_PER_DAY
from ..core.exceptions import InvariantViolation


@dataclass(frozen=True)
class Shift:
    """Domain entity: a named time-of-day interval, possibly crossing midnight."""

    shift_id: str
    name: str
    start_minute: int
    end_minute: int
    color: Optional[str] = None

    def __post_init__(self) -> None:
        for value in (self.start_minute, self.end_minute):
            if not 0 <= value < MINUTES_PER_DAY:
                raise InvariantViolation(f"Shift {self.shift_id!r}: minute {value} outside 0..{MINUTES_PER_DAY - 1}")
        if self.start_minute == self.end_minute:
            # Zero or full-day shifts must be split into two shifts.
            raise InvariantViolation(f"Shift {self.shift_id!r}: start equals end")

    @classmethod
    def from_times(cls, shift_id: str, name: str, start: time, end: time, color: Optional[str] = None) -> "Shift":
        return cls(shift_id=shift_id, name=name, start_minute=minute_of_day(start), end_minute=minute_of_day(end), color=color)

    @property
    def is_overnight(self) -> bool:
        return self.end_minute <= self.start_minute

    @property
    def duration(self) -> int:
        return (self.end_minute + MINUTES_PER_DAY - self.start_minute) % MINUTES_PER_DAY

    def offset_of(self, minute: int) -> int:
        """Minutes from the shift start to minute, on the wrapping clock."""
        return (minute - self.start_minute) % MINUTES_PER_DAY

    def contains_minute(self, minute: int) -> bool:
        """Start-inclusive, end-exclusive membership."""
        return self.offset_of(minute) < self.duration
