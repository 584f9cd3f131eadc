from __future__ import annotations

from datetime import date, datetime, time
from typing import Any, Dict, Sequence

from ..core.enums import PunchKind
from ..core.exceptions import InvariantViolation
from ..database.mysql import MySQLReader
from .model import PunchEvent
from .repository import PunchRepository


def _day_bounds(start: date, end: date) -> tuple[datetime, datetime]:
    return datetime.combine(start, time.min), datetime.combine(end, time.max)


def _to_punch(r: Dict[str, Any]) -> PunchEvent:
    try:
        kind = PunchKind(str(r["type"]).upper())
    except ValueError:
        raise InvariantViolation(f"Time entry {r['id']} has unknown type {r['type']!r}")
    return PunchEvent(
        punch_id=str(r["id"]),
        employee_id=str(r["employee_id"]),
        timestamp=r["timestamp"],
        kind=kind,
        break_type_id=str(r["break_type_id"]) if r.get("break_type_id") is not None else None,
    )


class MySQLPunchRepository(PunchRepository):
    def __init__(self, db: MySQLReader):
        self._db = db

    def list_for_range(self, *, employee_id: str, start: date, end: date) -> Sequence[PunchEvent]:
        rows = self._db.query(
            """
            SELECT id, employee_id, timestamp, type, break_type_id
            FROM time_entries
            WHERE employee_id=%s AND timestamp BETWEEN %s AND %s
            ORDER BY timestamp ASC, id ASC
            """,
            (employee_id, *_day_bounds(start, end)),
        )
        return [_to_punch(r) for r in rows]

    def employee_ids_in_range(self, *, start: date, end: date) -> Sequence[str]:
        rows = self._db.query(
            """
            SELECT DISTINCT employee_id
            FROM time_entries
            WHERE timestamp BETWEEN %s AND %s
            ORDER BY employee_id
            """,
            _day_bounds(start, end),
        )
        return [str(r["employee_id"]) for r in rows]
