from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import Assignment


class AssignmentRepository(Protocol):
    def list_for_week(self, *, employee_id: str, week_start: date) -> Sequence[Assignment]:
        """All rows of one employee's week (every weekday)."""

        raise NotImplementedError

    def employee_ids_in_range(self, *, start: date, end: date) -> Sequence[str]:
        """Employees with at least one row in a week overlapping [start, end]."""

        raise NotImplementedError
