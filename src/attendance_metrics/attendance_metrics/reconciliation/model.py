from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Union


@dataclass(frozen=True)
class DayMetrics:
    """Derived (never persisted) result of reconciling one employee-day.

    ``break_minutes_by_type`` and ``break_entries_by_type`` key untyped breaks
    under ``None``.
    """

    employee_id: str
    day: date
    gross_minutes: int = 0
    net_minutes: int = 0
    break_minutes_by_type: dict[Optional[str], int] = field(default_factory=dict)
    break_entries_by_type: dict[Optional[str], int] = field(default_factory=dict)
    delay_minutes: int = 0
    scheduled_start_minute: Optional[int] = None
    first_in: Optional[datetime] = None
    out_of_schedule_event_count: int = 0
    out_of_schedule_punch_ids: tuple[str, ...] = ()
    is_explicit_rest: bool = False
    punch_count: int = 0
    scheduled_minutes_by_shift: dict[str, int] = field(default_factory=dict)

    @property
    def is_scheduled(self) -> bool:
        return self.gross_minutes > 0

    @property
    def worked(self) -> bool:
        return self.net_minutes > 0

    @property
    def is_absence(self) -> bool:
        return self.gross_minutes > 0 and self.net_minutes == 0

    @property
    def is_unscheduled(self) -> bool:
        return self.gross_minutes == 0 and not self.is_explicit_rest

    @property
    def total_break_minutes(self) -> int:
        return sum(self.break_minutes_by_type.values())


@dataclass(frozen=True)
class UnavailableDay:
    """Marker for an employee-day whose reconciliation aborted."""

    employee_id: str
    day: date
    reason: str

    def to_dict(self) -> dict:
        return {"employee_id": self.employee_id, "date": self.day.isoformat(), "reason": self.reason}


DayResult = Union[DayMetrics, UnavailableDay]
