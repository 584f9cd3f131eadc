from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import PunchEvent


class PunchRepository(Protocol):
    def list_for_range(self, *, employee_id: str, start: date, end: date) -> Sequence[PunchEvent]:
        """Punches with a timestamp on any day of [start, end], any order."""

        raise NotImplementedError

    def employee_ids_in_range(self, *, start: date, end: date) -> Sequence[str]:
        raise NotImplementedError
