"""Report payloads.

Each report kind has its own frozen dataclass tagged with ``kind``;
``ReportPayload`` is the union of all of them. ``to_dict`` produces the JSON
shape handed to the HTTP layer (dates as ISO strings, enums as values).
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional, Union

from ..common.validators import require_date_range
from ..core.enums import GroupBy, ReportKind, Trend


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, dict):
        return {_jsonable(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


class _Payload:
    def to_dict(self) -> dict:
        return _jsonable(asdict(self))


@dataclass(frozen=True)
class ReportFilters(_Payload):
    start: date
    end: date
    employee_ids: tuple[str, ...] = ()
    group_by: GroupBy = GroupBy.DAY

    def __post_init__(self) -> None:
        require_date_range(self.start, self.end)

    def includes(self, employee_id: str, day: date) -> bool:
        if not self.start <= day <= self.end:
            return False
        return not self.employee_ids or employee_id in self.employee_ids


@dataclass(frozen=True)
class Period:
    start: date
    end: date


# Time report


@dataclass(frozen=True)
class TimeDetail:
    period: str
    total_minutes: int
    total_hours: float
    employee_count: int
    entry_count: int


@dataclass(frozen=True)
class TimeSummary:
    total_minutes: int
    total_hours: float
    total_entries: int
    total_employees: int
    period: Period


@dataclass(frozen=True)
class TimeReport(_Payload):
    summary: TimeSummary
    details: tuple[TimeDetail, ...]
    filters: ReportFilters
    unavailable: tuple[dict, ...] = ()
    kind: ReportKind = field(default=ReportKind.TIME, init=False)


# Attendance report


@dataclass(frozen=True)
class AttendanceStats:
    employee_id: str
    work_days: int
    worked_days: int
    attended_days: int
    absences: int
    rest_days: int
    unscheduled_days: int
    late_entries: int
    total_delay_minutes: int
    total_minutes: int
    total_hours: float
    attendance_rate: float


@dataclass(frozen=True)
class AttendanceSummary:
    total_employees: int
    total_work_days: int
    total_worked_days: int
    total_absences: int
    overall_attendance_rate: float
    period: Period


@dataclass(frozen=True)
class AttendanceReport(_Payload):
    summary: AttendanceSummary
    details: tuple[AttendanceStats, ...]
    filters: ReportFilters
    unavailable: tuple[dict, ...] = ()
    kind: ReportKind = field(default=ReportKind.ATTENDANCE, init=False)


# Employee summary report


@dataclass(frozen=True)
class EmployeeSummaryDetail:
    employee_id: str
    total_minutes: int
    total_hours: float
    work_days: int
    worked_days: int
    attendance_rate: float
    late_entries: int
    total_delay_minutes: int
    average_hours_per_day: float
    scheduled_hours_by_shift: dict[str, float]


@dataclass(frozen=True)
class EmployeeSummary:
    total_employees: int
    total_hours: float
    average_attendance_rate: float
    period: Period


@dataclass(frozen=True)
class EmployeeSummaryReport(_Payload):
    summary: EmployeeSummary
    details: tuple[EmployeeSummaryDetail, ...]
    filters: ReportFilters
    unavailable: tuple[dict, ...] = ()
    kind: ReportKind = field(default=ReportKind.EMPLOYEE_SUMMARY, init=False)


# Break-type report


@dataclass(frozen=True)
class BreakTypeDetail:
    break_type_id: str
    total_minutes: int
    total_hours: float
    entry_count: int
    employee_count: int


@dataclass(frozen=True)
class BreakTypeSummary:
    total_break_minutes: int
    total_break_hours: float
    total_break_entries: int
    average_break_duration: int
    most_used_break_type: Optional[str]


@dataclass(frozen=True)
class BreakTypeReport(_Payload):
    summary: BreakTypeSummary
    details: tuple[BreakTypeDetail, ...]
    filters: ReportFilters
    unavailable: tuple[dict, ...] = ()
    kind: ReportKind = field(default=ReportKind.BREAK_TYPE, init=False)


# Delay report


@dataclass(frozen=True)
class DelayEntry:
    day: date
    first_in: Optional[datetime]
    scheduled_start: str
    delay_minutes: int
    delay_hours: float


@dataclass(frozen=True)
class DelayDetail:
    employee_id: str
    delays: tuple[DelayEntry, ...]
    total_delays: int
    total_delay_minutes: int
    total_delay_hours: float
    average_delay_minutes: float


@dataclass(frozen=True)
class MostDelayedEmployee:
    employee_id: str
    total_delay_minutes: int


@dataclass(frozen=True)
class DelaySummary:
    total_employees: int
    total_delays: int
    total_delay_minutes: int
    total_delay_hours: float
    average_delay_minutes: float
    most_delayed_employee: Optional[MostDelayedEmployee]
    period: Period


@dataclass(frozen=True)
class DelayReport(_Payload):
    summary: DelaySummary
    details: tuple[DelayDetail, ...]
    filters: ReportFilters
    unavailable: tuple[dict, ...] = ()
    kind: ReportKind = field(default=ReportKind.DELAYS, init=False)


# Monthly analytics


@dataclass(frozen=True)
class PeriodInfo:
    start: date
    end: date
    days_in_period: int
    work_days: int


@dataclass(frozen=True)
class WeekdayShare:
    day: str
    hours: float
    entries: int


@dataclass(frozen=True)
class ShiftHours:
    shift_name: str
    hours: float


@dataclass(frozen=True)
class PeakDay:
    day: date
    hours: float
    employee_count: int


@dataclass(frozen=True)
class TrendInfo:
    trend: Trend
    change: float


@dataclass(frozen=True)
class MonthlyAnalytics:
    weekday_distribution: tuple[WeekdayShare, ...]
    hours_by_shift: tuple[ShiftHours, ...]
    peak_days: tuple[PeakDay, ...]
    trend: TrendInfo


@dataclass(frozen=True)
class MonthlyDetails:
    time: tuple[TimeDetail, ...]
    attendance: tuple[AttendanceStats, ...]
    employees: tuple[EmployeeSummaryDetail, ...]


@dataclass(frozen=True)
class MonthlyReport(_Payload):
    period_info: PeriodInfo
    time_summary: TimeSummary
    attendance_summary: AttendanceSummary
    employee_summary: EmployeeSummary
    analytics: MonthlyAnalytics
    details: MonthlyDetails
    filters: ReportFilters
    unavailable: tuple[dict, ...] = ()
    kind: ReportKind = field(default=ReportKind.MONTHLY, init=False)


ReportPayload = Union[TimeReport, AttendanceReport, EmployeeSummaryReport, BreakTypeReport, DelayReport, MonthlyReport]
