from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Sequence

from .model import PunchEvent
from .repository import PunchRepository


def sort_punches(punches: Sequence[PunchEvent]) -> list[PunchEvent]:
    # Stable: punches sharing a timestamp keep their ledger order.
    return sorted(punches, key=lambda p: p.timestamp)


class PunchLedger:
    """Read view over the punch ledger, bucketed by calendar day."""

    def __init__(self, punches: PunchRepository):
        self._punches = punches

    def punches_for(self, employee_id: str, day: date) -> list[PunchEvent]:
        return self.punches_by_day(employee_id, day, day).get(day, [])

    def punches_by_day(self, employee_id: str, start: date, end: date) -> dict[date, list[PunchEvent]]:
        buckets: dict[date, list[PunchEvent]] = defaultdict(list)
        for p in sort_punches(self._punches.list_for_range(employee_id=employee_id, start=start, end=end)):
            day = p.timestamp.date()
            if start <= day <= end:
                buckets[day].append(p)
        return dict(buckets)

    def employee_ids_in_range(self, start: date, end: date) -> Sequence[str]:
        return self._punches.employee_ids_in_range(start=start, end=end)
