from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Sequence

from ..common.datetime_utils import week_start_for
from ..database.mysql import MySQLReader
from .model import Assignment
from .repository import AssignmentRepository


def _as_date(value) -> date:
    return value.date() if isinstance(value, datetime) else value


def _to_assignment(r: Dict[str, Any]) -> Assignment:
    return Assignment(
        employee_id=str(r["employee_id"]),
        week_start=_as_date(r["week_start"]),
        day_of_week=int(r["day_of_week"]),
        shift_id=str(r["schedule_id"]) if r.get("schedule_id") is not None else None,
        is_rest=bool(r.get("is_rest")),
    )


class MySQLAssignmentRepository(AssignmentRepository):
    def __init__(self, db: MySQLReader):
        self._db = db

    def list_for_week(self, *, employee_id: str, week_start: date) -> Sequence[Assignment]:
        rows = self._db.query(
            """
            SELECT employee_id, week_start, day_of_week, schedule_id, is_rest
            FROM weekly_schedules
            WHERE employee_id=%s AND week_start=%s
            ORDER BY day_of_week, id
            """,
            (employee_id, week_start),
        )
        return [_to_assignment(r) for r in rows]

    def employee_ids_in_range(self, *, start: date, end: date) -> Sequence[str]:
        rows = self._db.query(
            """
            SELECT DISTINCT employee_id
            FROM weekly_schedules
            WHERE week_start BETWEEN %s AND %s
            ORDER BY employee_id
            """,
            (week_start_for(start), end),
        )
        return [str(r["employee_id"]) for r in rows]
