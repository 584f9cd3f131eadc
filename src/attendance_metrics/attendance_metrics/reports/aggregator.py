"""Fold reconciled employee-days into report payloads.

``aggregate`` is a pure fold: it never reconciles or fetches anything itself.
Rates and averages are always recomputed from summed numerators and
denominators, so building from merged partial accumulators gives the same
report as building from the whole stream.
"""
from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Callable, Iterable, Optional

from ..common.datetime_utils import count_weekdays, format_minute_of_day, week_start_for
from ..core.constants import WEEKDAY_NAMES
from ..core.enums import GroupBy, ReportKind, Trend
from ..core.exceptions import ValidationError
from ..core.settings import EngineSettings
from ..reconciliation.model import DayResult
from .accumulator import DayTotals, EmployeeTotals, ReportAccumulator, fold
from .model import (
    AttendanceReport,
    AttendanceStats,
    AttendanceSummary,
    BreakTypeDetail,
    BreakTypeReport,
    BreakTypeSummary,
    DelayDetail,
    DelayEntry,
    DelayReport,
    DelaySummary,
    EmployeeSummary,
    EmployeeSummaryDetail,
    EmployeeSummaryReport,
    MonthlyAnalytics,
    MonthlyDetails,
    MonthlyReport,
    MostDelayedEmployee,
    PeakDay,
    Period,
    PeriodInfo,
    ReportFilters,
    ReportPayload,
    ShiftHours,
    TimeDetail,
    TimeReport,
    TimeSummary,
    TrendInfo,
    WeekdayShare,
)


def _hours(minutes: int) -> float:
    return minutes / 60


def _rate(numerator: int, denominator: int) -> float:
    return numerator / denominator * 100 if denominator > 0 else 0.0


def _period(filters: ReportFilters) -> Period:
    return Period(start=filters.start, end=filters.end)


def _unavailable(acc: ReportAccumulator) -> tuple[dict, ...]:
    ordered = sorted(acc.unavailable, key=lambda u: (u.day, u.employee_id))
    return tuple(u.to_dict() for u in ordered)


def _period_key(day: date, group_by: GroupBy) -> str:
    if group_by == GroupBy.WEEK:
        return week_start_for(day).isoformat()
    if group_by == GroupBy.MONTH:
        return f"{day.year:04d}-{day.month:02d}"
    return day.isoformat()


# Time


def _time_details(acc: ReportAccumulator, group_by: GroupBy) -> tuple[TimeDetail, ...]:
    groups: dict[str, DayTotals] = defaultdict(DayTotals)
    for day, totals in acc.days.items():
        groups[_period_key(day, group_by)].merge(totals)

    return tuple(
        TimeDetail(
            period=key,
            total_minutes=g.net_minutes,
            total_hours=_hours(g.net_minutes),
            employee_count=len(g.employee_ids),
            entry_count=g.entry_count,
        )
        for key, g in sorted(groups.items())
    )


def _time_summary(acc: ReportAccumulator, filters: ReportFilters) -> TimeSummary:
    total_minutes = sum(d.net_minutes for d in acc.days.values())
    employees: set[str] = set()
    for d in acc.days.values():
        employees |= d.employee_ids
    return TimeSummary(
        total_minutes=total_minutes,
        total_hours=_hours(total_minutes),
        total_entries=sum(d.entry_count for d in acc.days.values()),
        total_employees=len(employees),
        period=_period(filters),
    )


def build_time_report(acc: ReportAccumulator, filters: ReportFilters) -> TimeReport:
    return TimeReport(
        summary=_time_summary(acc, filters),
        details=_time_details(acc, filters.group_by),
        filters=filters,
        unavailable=_unavailable(acc),
    )


# Attendance


def _attendance_stats(employee_id: str, t: EmployeeTotals) -> AttendanceStats:
    return AttendanceStats(
        employee_id=employee_id,
        work_days=t.work_days,
        worked_days=t.worked_days,
        attended_days=t.attended_days,
        absences=t.absences,
        rest_days=t.rest_days,
        unscheduled_days=t.unscheduled_days,
        late_entries=t.late_entries,
        total_delay_minutes=t.delay_minutes,
        total_minutes=t.net_minutes,
        total_hours=_hours(t.net_minutes),
        attendance_rate=_rate(t.attended_days, t.work_days),
    )


def _attendance_summary(acc: ReportAccumulator, filters: ReportFilters) -> AttendanceSummary:
    totals = acc.employees.values()
    work_days = sum(t.work_days for t in totals)
    return AttendanceSummary(
        total_employees=len(acc.employees),
        total_work_days=work_days,
        total_worked_days=sum(t.worked_days for t in totals),
        total_absences=sum(t.absences for t in totals),
        overall_attendance_rate=_rate(sum(t.attended_days for t in totals), work_days),
        period=_period(filters),
    )


def build_attendance_report(acc: ReportAccumulator, filters: ReportFilters) -> AttendanceReport:
    return AttendanceReport(
        summary=_attendance_summary(acc, filters),
        details=tuple(_attendance_stats(eid, t) for eid, t in sorted(acc.employees.items())),
        filters=filters,
        unavailable=_unavailable(acc),
    )


# Employee summary


def _employee_detail(employee_id: str, t: EmployeeTotals) -> EmployeeSummaryDetail:
    hours = _hours(t.net_minutes)
    return EmployeeSummaryDetail(
        employee_id=employee_id,
        total_minutes=t.net_minutes,
        total_hours=hours,
        work_days=t.work_days,
        worked_days=t.worked_days,
        attendance_rate=_rate(t.attended_days, t.work_days),
        late_entries=t.late_entries,
        total_delay_minutes=t.delay_minutes,
        average_hours_per_day=hours / t.worked_days if t.worked_days else 0.0,
        scheduled_hours_by_shift={name: _hours(m) for name, m in sorted(t.scheduled_minutes_by_shift.items())},
    )


def _employee_summary(acc: ReportAccumulator, filters: ReportFilters) -> EmployeeSummary:
    totals = acc.employees.values()
    return EmployeeSummary(
        total_employees=len(acc.employees),
        total_hours=_hours(sum(t.net_minutes for t in totals)),
        average_attendance_rate=_rate(sum(t.attended_days for t in totals), sum(t.work_days for t in totals)),
        period=_period(filters),
    )


def build_employee_summary_report(acc: ReportAccumulator, filters: ReportFilters) -> EmployeeSummaryReport:
    return EmployeeSummaryReport(
        summary=_employee_summary(acc, filters),
        details=tuple(_employee_detail(eid, t) for eid, t in sorted(acc.employees.items())),
        filters=filters,
        unavailable=_unavailable(acc),
    )


# Break types


def build_break_type_report(acc: ReportAccumulator, filters: ReportFilters) -> BreakTypeReport:
    details = tuple(
        BreakTypeDetail(
            break_type_id=type_id,
            total_minutes=t.minutes,
            total_hours=_hours(t.minutes),
            entry_count=t.entries,
            employee_count=len(t.employee_ids),
        )
        for type_id, t in sorted(acc.break_types.items())
    )

    total_minutes = sum(d.total_minutes for d in details)
    total_entries = sum(d.entry_count for d in details)
    most_used: Optional[BreakTypeDetail] = None
    for d in details:
        # details are id-ordered, so strict > keeps the smallest id on ties
        if most_used is None or d.total_minutes > most_used.total_minutes:
            most_used = d

    return BreakTypeReport(
        summary=BreakTypeSummary(
            total_break_minutes=total_minutes,
            total_break_hours=_hours(total_minutes),
            total_break_entries=total_entries,
            average_break_duration=round(total_minutes / total_entries) if total_entries else 0,
            most_used_break_type=most_used.break_type_id if most_used else None,
        ),
        details=details,
        filters=filters,
        unavailable=_unavailable(acc),
    )


# Delays


def _delay_detail(employee_id: str, t: EmployeeTotals) -> DelayDetail:
    entries = tuple(
        DelayEntry(
            day=m.day,
            first_in=m.first_in,
            scheduled_start=format_minute_of_day(m.scheduled_start_minute) if m.scheduled_start_minute is not None else "",
            delay_minutes=m.delay_minutes,
            delay_hours=_hours(m.delay_minutes),
        )
        for m in sorted(t.late_days, key=lambda m: m.day)
    )
    return DelayDetail(
        employee_id=employee_id,
        delays=entries,
        total_delays=t.late_entries,
        total_delay_minutes=t.delay_minutes,
        total_delay_hours=_hours(t.delay_minutes),
        average_delay_minutes=t.delay_minutes / t.late_entries if t.late_entries else 0.0,
    )


def build_delay_report(acc: ReportAccumulator, filters: ReportFilters) -> DelayReport:
    details = tuple(_delay_detail(eid, t) for eid, t in sorted(acc.employees.items()))

    total_delays = sum(d.total_delays for d in details)
    total_minutes = sum(d.total_delay_minutes for d in details)
    most_delayed: Optional[DelayDetail] = None
    for d in details:
        # details are id-ordered, so strict > keeps the smallest id on ties
        if d.total_delay_minutes > 0 and (most_delayed is None or d.total_delay_minutes > most_delayed.total_delay_minutes):
            most_delayed = d

    return DelayReport(
        summary=DelaySummary(
            total_employees=len(details),
            total_delays=total_delays,
            total_delay_minutes=total_minutes,
            total_delay_hours=_hours(total_minutes),
            average_delay_minutes=total_minutes / total_delays if total_delays else 0.0,
            most_delayed_employee=(
                MostDelayedEmployee(employee_id=most_delayed.employee_id, total_delay_minutes=most_delayed.total_delay_minutes)
                if most_delayed
                else None
            ),
            period=_period(filters),
        ),
        details=details,
        filters=filters,
        unavailable=_unavailable(acc),
    )


# Monthly analytics


def weekday_distribution(acc: ReportAccumulator) -> tuple[WeekdayShare, ...]:
    minutes = [0] * 7
    entries = [0] * 7
    for day, totals in acc.days.items():
        minutes[day.weekday()] += totals.net_minutes
        entries[day.weekday()] += totals.entry_count
    return tuple(WeekdayShare(day=name, hours=_hours(minutes[i]), entries=entries[i]) for i, name in enumerate(WEEKDAY_NAMES))


def hours_by_shift(acc: ReportAccumulator) -> tuple[ShiftHours, ...]:
    minutes: dict[str, int] = defaultdict(int)
    for t in acc.employees.values():
        for name, m in t.scheduled_minutes_by_shift.items():
            minutes[name] += m
    return tuple(ShiftHours(shift_name=name, hours=_hours(m)) for name, m in sorted(minutes.items()))


def peak_days(acc: ReportAccumulator, limit: int) -> tuple[PeakDay, ...]:
    ranked = sorted(acc.days.items(), key=lambda item: (-item[1].net_minutes, item[0]))
    return tuple(
        PeakDay(day=day, hours=_hours(t.net_minutes), employee_count=len(t.employee_ids)) for day, t in ranked[:limit]
    )


def trend(daily_minutes: list[int], threshold_percent: float) -> TrendInfo:
    """Compare the average of the first half of the days with the second half."""
    if len(daily_minutes) < 2:
        return TrendInfo(trend=Trend.INSUFFICIENT_DATA, change=0.0)

    middle = len(daily_minutes) // 2
    first, second = daily_minutes[:middle], daily_minutes[middle:]
    first_avg = sum(first) / len(first)
    second_avg = sum(second) / len(second)

    if first_avg == 0:
        change = 100.0 if second_avg > 0 else 0.0
    else:
        change = round((second_avg - first_avg) / first_avg * 100, 2)

    if change > threshold_percent:
        direction = Trend.INCREASING
    elif change < -threshold_percent:
        direction = Trend.DECREASING
    else:
        direction = Trend.STABLE
    return TrendInfo(trend=direction, change=change)


def build_monthly_report(acc: ReportAccumulator, filters: ReportFilters, settings: EngineSettings) -> MonthlyReport:
    daily = [totals.net_minutes for _, totals in sorted(acc.days.items())]
    employees = sorted(acc.employees.items())
    return MonthlyReport(
        period_info=PeriodInfo(
            start=filters.start,
            end=filters.end,
            days_in_period=(filters.end - filters.start).days + 1,
            work_days=count_weekdays(filters.start, filters.end),
        ),
        time_summary=_time_summary(acc, filters),
        attendance_summary=_attendance_summary(acc, filters),
        employee_summary=_employee_summary(acc, filters),
        analytics=MonthlyAnalytics(
            weekday_distribution=weekday_distribution(acc),
            hours_by_shift=hours_by_shift(acc),
            peak_days=peak_days(acc, settings.peak_days),
            trend=trend(daily, settings.trend_threshold_percent),
        ),
        details=MonthlyDetails(
            time=_time_details(acc, GroupBy.DAY),
            attendance=tuple(_attendance_stats(eid, t) for eid, t in employees),
            employees=tuple(_employee_detail(eid, t) for eid, t in employees),
        ),
        filters=filters,
        unavailable=_unavailable(acc),
    )


_BUILDERS: dict[ReportKind, Callable[[ReportAccumulator, ReportFilters, EngineSettings], ReportPayload]] = {
    ReportKind.TIME: lambda acc, f, _: build_time_report(acc, f),
    ReportKind.ATTENDANCE: lambda acc, f, _: build_attendance_report(acc, f),
    ReportKind.EMPLOYEE_SUMMARY: lambda acc, f, _: build_employee_summary_report(acc, f),
    ReportKind.BREAK_TYPE: lambda acc, f, _: build_break_type_report(acc, f),
    ReportKind.DELAYS: lambda acc, f, _: build_delay_report(acc, f),
    ReportKind.MONTHLY: build_monthly_report,
}


def parse_report_kind(value) -> ReportKind:
    try:
        return ReportKind(value)
    except ValueError:
        raise ValidationError(f"Unknown report kind {value!r}")


def build_report(
    report_kind: ReportKind | str,
    acc: ReportAccumulator,
    filters: ReportFilters,
    *,
    settings: Optional[EngineSettings] = None,
) -> ReportPayload:
    kind = parse_report_kind(report_kind)
    return _BUILDERS[kind](acc, filters, settings or EngineSettings())


def aggregate(
    report_kind: ReportKind | str,
    day_results: Iterable[DayResult],
    filters: ReportFilters,
    *,
    settings: Optional[EngineSettings] = None,
) -> ReportPayload:
    """Fold the employee-day stream (restricted to ``filters``) into one report."""
    kind = parse_report_kind(report_kind)
    return build_report(kind, fold(day_results, filters.includes), filters, settings=settings)
