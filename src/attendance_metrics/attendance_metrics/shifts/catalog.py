from __future__ import annotations

import logging
from typing import Iterable

from ..core.exceptions import StaleReference
from ..schedules.model import Assignment
from .model import Shift
from .repository import ShiftRepository

logger = logging.getLogger(__name__)


class ScheduleCatalog:
    """Read-only shift lookup.

    Shifts are cached for the lifetime of the catalog instance, so build a new
    catalog per report run to pick up edits. Reports always see the latest
    shift definition, including for past dates.
    """

    def __init__(self, shifts: ShiftRepository):
        self._shifts = shifts
        self._cache: dict[str, Shift | None] = {}

    def shift_by_id(self, shift_id: str) -> Shift:
        if shift_id not in self._cache:
            self._cache[shift_id] = self._shifts.get_by_id(shift_id)
        shift = self._cache[shift_id]
        if shift is None:
            raise StaleReference(shift_id)
        return shift

    def resolve(self, assignments: Iterable[Assignment]) -> list[Shift]:
        """Shifts referenced by the assignments, in input order.

        Rest and unassigned rows carry no shift. Stale references are dropped
        with a warning instead of failing the day.
        """
        shifts: list[Shift] = []
        for a in assignments:
            if a.shift_id is None:
                continue
            try:
                shifts.append(self.shift_by_id(a.shift_id))
            except StaleReference as e:
                logger.warning(
                    "Ignoring stale shift reference %s for employee %s (week %s, day %s)",
                    e.shift_id,
                    a.employee_id,
                    a.week_start.isoformat(),
                    a.day_of_week,
                )
        return shifts
