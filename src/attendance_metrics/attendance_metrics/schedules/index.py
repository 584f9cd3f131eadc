from __future__ import annotations

from datetime import date
from typing import Sequence

from ..common.datetime_utils import day_of_week_for, week_start_for
from .model import Assignment
from .repository import AssignmentRepository


def is_explicit_rest(assignments: Sequence[Assignment]) -> bool:
    """True only for a non-empty day made entirely of rest markers."""
    return bool(assignments) and all(a.is_rest for a in assignments)


class ShiftAssignmentIndex:
    """Per employee, per day view over the weekly schedule rows.

    An empty result means nothing is configured for that day; no default
    shift is ever guessed.
    """

    def __init__(self, assignments: AssignmentRepository):
        self._assignments = assignments
        self._weeks: dict[tuple[str, date], Sequence[Assignment]] = {}

    def _week(self, employee_id: str, week_start: date) -> Sequence[Assignment]:
        key = (employee_id, week_start)
        if key not in self._weeks:
            self._weeks[key] = self._assignments.list_for_week(employee_id=employee_id, week_start=week_start)
        return self._weeks[key]

    def assignments_for(self, employee_id: str, day: date) -> list[Assignment]:
        weekday = day_of_week_for(day)
        return [a for a in self._week(employee_id, week_start_for(day)) if a.day_of_week == weekday]

    def employee_ids_in_range(self, start: date, end: date) -> Sequence[str]:
        return self._assignments.employee_ids_in_range(start=start, end=end)
