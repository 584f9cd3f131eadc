from __future__ import annotations

from datetime import time, timedelta
from typing import Any, Dict, Optional

from ..common.datetime_utils import minute_of_day
from ..core.constants import MINUTES_PER_DAY
from ..core.exceptions import InvariantViolation
from ..database.mysql import MySQLReader
from .model import Shift
from .repository import ShiftRepository


def _to_minute(value: Any) -> int:
    """Minute of day of a MySQL TIME column.

    mysql-connector hands TIME back as ``timedelta`` (its default), ``time`` or
    an ``'HH:MM[:SS]'`` string depending on the cursor and driver build.
    """
    if isinstance(value, time):
        return minute_of_day(value)
    if isinstance(value, timedelta):
        return int(value.total_seconds()) // 60 % MINUTES_PER_DAY
    if isinstance(value, str):
        parts = value.strip().split(":")
        try:
            if len(parts) < 2:
                raise ValueError(value)
            return int(parts[0]) * 60 + int(parts[1])
        except ValueError:
            raise InvariantViolation(f"Invalid time string: {value!r}")
    raise InvariantViolation(f"Unsupported MySQL TIME value type: {type(value)!r}")


def _to_shift(r: Dict[str, Any]) -> Shift:
    shift_id = str(r["id"])
    try:
        start, end = _to_minute(r["start_time"]), _to_minute(r["end_time"])
    except InvariantViolation as e:
        raise InvariantViolation(f"Shift {shift_id!r}: {e}")
    return Shift(shift_id=shift_id, name=r["name"], start_minute=start, end_minute=end, color=r.get("color"))


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, db: MySQLReader):
        self._db = db

    def get_by_id(self, shift_id: str) -> Optional[Shift]:
        r = self._db.query_one(
            """
            SELECT id, name, start_time, end_time, color
            FROM shifts
            WHERE id=%s
            """,
            (shift_id,),
        )
        return _to_shift(r) if r else None
