from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Assignment:
    """One weekly-schedule row: a shift, a rest marker, or nothing for that weekday.

    Several rows may exist for the same (employee, week, weekday), e.g. a split
    shift, and a rest row may coexist with shift rows.
    """

    employee_id: str
    week_start: date
    day_of_week: int
    shift_id: Optional[str] = None
    is_rest: bool = False

    @classmethod
    def rest(cls, employee_id: str, week_start: date, day_of_week: int) -> "Assignment":
        return cls(employee_id=employee_id, week_start=week_start, day_of_week=day_of_week, is_rest=True)
