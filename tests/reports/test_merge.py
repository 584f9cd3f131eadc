from __future__ import annotations

from datetime import date, datetime, time

import pytest

from attendance_metrics.core.enums import PunchKind, ReportKind
from attendance_metrics.punches.model import PunchEvent
from attendance_metrics.reconciliation.reconciler import reconcile_day
from attendance_metrics.reports.accumulator import fold, merge_accumulators
from attendance_metrics.reports.aggregator import build_report
from attendance_metrics.reports.model import ReportFilters
from attendance_metrics.schedules.model import Assignment
from attendance_metrics.shifts.model import Shift

DAY_SHIFT = Shift.from_times("s1", "Day", time(9, 0), time(17, 0))
START = date(2024, 3, 4)
END = date(2024, 3, 10)


def _stream(now):
    results = []
    for offset in range(7):
        day = date(2024, 3, 4 + offset)
        for employee_id, late in (("e1", 5 * offset), ("e2", 0)):
            assignments = [Assignment(employee_id, START, (day.weekday() + 1) % 7, shift_id="s1")] if day.weekday() < 5 else []
            shifts = [DAY_SHIFT] if assignments else []
            punches = []
            if offset % 3 != 2:
                base = datetime.combine(day, time(9, 0))
                punches = [
                    PunchEvent(f"{employee_id}-{offset}-1", employee_id, base.replace(minute=late % 60), PunchKind.IN),
                    PunchEvent(f"{employee_id}-{offset}-2", employee_id, base.replace(hour=12), PunchKind.BREAK, "lunch"),
                    PunchEvent(f"{employee_id}-{offset}-3", employee_id, base.replace(hour=12, minute=45), PunchKind.RESUME),
                    PunchEvent(f"{employee_id}-{offset}-4", employee_id, base.replace(hour=17), PunchKind.OUT),
                ]
            results.append(reconcile_day(employee_id, day, shifts, assignments, punches, now))
    return results


@pytest.mark.parametrize("kind", list(ReportKind))
def test_merged_partial_ranges_equal_the_whole(fixed_now, kind):
    results = _stream(fixed_now)
    filters = ReportFilters(start=START, end=END)
    first = fold(r for r in results if r.day <= date(2024, 3, 6))
    second = fold(r for r in results if r.day > date(2024, 3, 6))

    whole = build_report(kind, fold(results), filters)
    merged = build_report(kind, merge_accumulators([second, first]), filters)

    assert merged == whole


def test_merge_by_employee_partition(fixed_now):
    results = _stream(fixed_now)
    filters = ReportFilters(start=START, end=END)
    parts = [fold(r for r in results if r.employee_id == eid) for eid in ("e2", "e1")]

    assert build_report("delays", merge_accumulators(parts), filters) == build_report("delays", fold(results), filters)
