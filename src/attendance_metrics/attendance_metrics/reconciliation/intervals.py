from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import minutes_between


@dataclass(frozen=True)
class OpenInterval:
    """State of one start/stop pair scan (IN/OUT or BREAK/RESUME).

    Transitions:
    - ``open``: always replaces the current start (the last opener wins).
    - ``close``: yields the elapsed minutes and a closed state; closing a
      closed interval is a no-op worth zero minutes (orphan stop).
    - ``settle``: minutes still owed by an interval left open at the end of
      the scan; only the current day runs up to ``now``.
    """

    started_at: Optional[datetime] = None
    tag: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.started_at is not None

    def open(self, at: datetime, tag: Optional[str] = None) -> "OpenInterval":
        return OpenInterval(started_at=at, tag=tag)

    def close(self, at: datetime) -> tuple["OpenInterval", int]:
        if self.started_at is None:
            return self, 0
        return CLOSED, minutes_between(self.started_at, at)

    def settle(self, day: date, now: datetime) -> int:
        if self.started_at is None or day != now.date():
            return 0
        return minutes_between(self.started_at, now)


CLOSED = OpenInterval()
