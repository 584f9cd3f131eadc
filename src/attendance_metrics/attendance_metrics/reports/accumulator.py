"""Mergeable running totals behind every report.

Only sums, counts, sets and keyed maps are kept, so ``merge`` is associative
and commutative: partial accumulators built over disjoint slices of the
employee-day stream (other date ranges, other workers) combine to the same
state in any order. Rates, averages and rankings are derived at build time.
"""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable

from ..reconciliation.model import DayMetrics, DayResult, UnavailableDay


def _add_counts(into: dict, other: dict) -> None:
    for key, value in other.items():
        into[key] = into.get(key, 0) + value


@dataclass
class EmployeeTotals:
    net_minutes: int = 0
    work_days: int = 0
    worked_days: int = 0
    attended_days: int = 0
    absences: int = 0
    rest_days: int = 0
    unscheduled_days: int = 0
    late_entries: int = 0
    delay_minutes: int = 0
    scheduled_minutes_by_shift: dict[str, int] = field(default_factory=dict)
    late_days: list[DayMetrics] = field(default_factory=list)

    def add(self, m: DayMetrics) -> None:
        self.net_minutes += m.net_minutes
        self.work_days += int(m.is_scheduled)
        self.worked_days += int(m.worked)
        self.attended_days += int(m.is_scheduled and m.worked)
        self.absences += int(m.is_absence)
        self.rest_days += int(m.is_explicit_rest)
        self.unscheduled_days += int(m.is_unscheduled)
        _add_counts(self.scheduled_minutes_by_shift, m.scheduled_minutes_by_shift)
        if m.delay_minutes > 0:
            self.late_entries += 1
            self.delay_minutes += m.delay_minutes
            self.late_days.append(m)

    def merge(self, other: "EmployeeTotals") -> None:
        self.net_minutes += other.net_minutes
        self.work_days += other.work_days
        self.worked_days += other.worked_days
        self.attended_days += other.attended_days
        self.absences += other.absences
        self.rest_days += other.rest_days
        self.unscheduled_days += other.unscheduled_days
        self.late_entries += other.late_entries
        self.delay_minutes += other.delay_minutes
        _add_counts(self.scheduled_minutes_by_shift, other.scheduled_minutes_by_shift)
        self.late_days.extend(other.late_days)


@dataclass
class DayTotals:
    """Activity of one calendar day across employees (days with punches only)."""

    net_minutes: int = 0
    entry_count: int = 0
    employee_ids: set[str] = field(default_factory=set)

    def merge(self, other: "DayTotals") -> None:
        self.net_minutes += other.net_minutes
        self.entry_count += other.entry_count
        self.employee_ids |= other.employee_ids


@dataclass
class BreakTypeTotals:
    minutes: int = 0
    entries: int = 0
    employee_ids: set[str] = field(default_factory=set)

    def merge(self, other: "BreakTypeTotals") -> None:
        self.minutes += other.minutes
        self.entries += other.entries
        self.employee_ids |= other.employee_ids


@dataclass
class ReportAccumulator:
    employees: dict[str, EmployeeTotals] = field(default_factory=lambda: defaultdict(EmployeeTotals))
    days: dict[date, DayTotals] = field(default_factory=lambda: defaultdict(DayTotals))
    break_types: dict[str, BreakTypeTotals] = field(default_factory=lambda: defaultdict(BreakTypeTotals))
    unavailable: list[UnavailableDay] = field(default_factory=list)

    def add(self, result: DayResult) -> None:
        if isinstance(result, UnavailableDay):
            self.unavailable.append(result)
            return

        m = result
        self.employees[m.employee_id].add(m)

        if m.punch_count:
            day = self.days[m.day]
            day.net_minutes += m.net_minutes
            day.entry_count += m.punch_count
            day.employee_ids.add(m.employee_id)

        # Untyped breaks (None) have no break-type row.
        for type_id, entries in m.break_entries_by_type.items():
            if type_id is None:
                continue
            totals = self.break_types[type_id]
            totals.entries += entries
            totals.minutes += m.break_minutes_by_type.get(type_id, 0)
            totals.employee_ids.add(m.employee_id)

    def merge(self, other: "ReportAccumulator") -> "ReportAccumulator":
        for employee_id, totals in other.employees.items():
            self.employees[employee_id].merge(totals)
        for day, totals in other.days.items():
            self.days[day].merge(totals)
        for type_id, totals in other.break_types.items():
            self.break_types[type_id].merge(totals)
        self.unavailable.extend(other.unavailable)
        return self


def fold(results: Iterable[DayResult], accepts=None) -> ReportAccumulator:
    acc = ReportAccumulator()
    for r in results:
        if accepts is None or accepts(r.employee_id, r.day):
            acc.add(r)
    return acc


def merge_accumulators(parts: Iterable[ReportAccumulator]) -> ReportAccumulator:
    merged = ReportAccumulator()
    for part in parts:
        merged.merge(part)
    return merged
