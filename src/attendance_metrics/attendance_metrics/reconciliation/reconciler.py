"""Interval reconciler: one employee-day of shifts and punches into DayMetrics.

The reconciler is pure. It never reads the clock (``now`` is explicit), never
performs I/O and never raises for merely messy input: unordered punches,
unmatched pairs and days without shifts all produce a DayMetrics with reduced
precision. Only programmer errors raise ``InvariantViolation``.
"""
from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import PunchKind
from ..core.exceptions import InvariantViolation
from ..punches.ledger import sort_punches
from ..punches.model import PunchEvent
from ..schedules.index import is_explicit_rest
from ..schedules.model import Assignment
from ..shifts.model import Shift
from .intervals import CLOSED, OpenInterval
from .model import DayMetrics


def _check_ownership(employee_id: str, assignments: Sequence[Assignment], punches: Sequence[PunchEvent]) -> None:
    for p in punches:
        if p.employee_id != employee_id:
            raise InvariantViolation(f"Punch {p.punch_id} belongs to employee {p.employee_id}, not {employee_id}")
    for a in assignments:
        if a.employee_id != employee_id:
            raise InvariantViolation(f"Assignment for employee {a.employee_id} passed for {employee_id}")


def gross_minutes(shifts: Sequence[Shift]) -> int:
    # Overlapping shifts are additive.
    return sum(s.duration for s in shifts)


def earliest_shift(shifts: Sequence[Shift]) -> Optional[Shift]:
    """Shift with the smallest start minute; ties go to the first in input order."""
    earliest: Optional[Shift] = None
    for s in shifts:
        if earliest is None or s.start_minute < earliest.start_minute:
            earliest = s
    return earliest


def delay_minutes(shift: Shift, first_in_minute: int) -> int:
    """Lateness of a clock-in against the shift start on the same calendar day.

    Only the day's own punches are reconciled, so for an overnight shift the
    minutes before its start (including 00:00 up to the end of last night's
    segment) precede this evening's shift and are never late.
    """
    return max(first_in_minute - shift.start_minute, 0)


def is_out_of_schedule(punch: PunchEvent, shifts: Sequence[Shift]) -> bool:
    if not shifts:
        return False
    return not any(s.contains_minute(punch.minute_of_day) for s in shifts)


def reconcile_day(
    employee_id: str,
    day: date,
    shifts: Sequence[Shift],
    assignments: Sequence[Assignment],
    punches: Sequence[PunchEvent],
    now: datetime,
) -> DayMetrics:
    _check_ownership(employee_id, assignments, punches)
    ordered = sort_punches(punches)

    work: OpenInterval = CLOSED
    rest: OpenInterval = CLOSED
    net = 0
    break_minutes: dict[Optional[str], int] = defaultdict(int)
    break_entries: dict[Optional[str], int] = defaultdict(int)
    first_in: Optional[PunchEvent] = None
    flagged: list[str] = []

    for p in ordered:
        # A clock-out ending an open work interval belongs to that interval;
        # overtime past the shift end is not an out-of-schedule event.
        closes_work = p.kind == PunchKind.OUT and work.is_open
        if not closes_work and is_out_of_schedule(p, shifts):
            flagged.append(p.punch_id)

        if p.kind == PunchKind.IN:
            work = work.open(p.timestamp)
            if first_in is None:
                first_in = p
        elif p.kind == PunchKind.OUT:
            work, minutes = work.close(p.timestamp)
            net += minutes
        elif p.kind == PunchKind.BREAK:
            rest = rest.open(p.timestamp, tag=p.break_type_id)
            break_entries[p.break_type_id] += 1
            break_minutes.setdefault(p.break_type_id, 0)
        elif p.kind == PunchKind.RESUME:
            tag = rest.tag
            rest, minutes = rest.close(p.timestamp)
            if minutes:
                break_minutes[tag] += minutes

    net += work.settle(day, now)
    if rest.is_open:
        break_minutes[rest.tag] += rest.settle(day, now)

    delay = 0
    scheduled_start: Optional[int] = None
    first_shift = earliest_shift(shifts)
    if first_shift is not None:
        scheduled_start = first_shift.start_minute
        if first_in is not None:
            delay = delay_minutes(first_shift, first_in.minute_of_day)

    by_shift: dict[str, int] = defaultdict(int)
    for s in shifts:
        by_shift[s.name] += s.duration

    return DayMetrics(
        employee_id=employee_id,
        day=day,
        gross_minutes=gross_minutes(shifts),
        net_minutes=net,
        break_minutes_by_type=dict(break_minutes),
        break_entries_by_type=dict(break_entries),
        delay_minutes=delay,
        scheduled_start_minute=scheduled_start,
        first_in=first_in.timestamp if first_in else None,
        out_of_schedule_event_count=len(flagged),
        out_of_schedule_punch_ids=tuple(flagged),
        is_explicit_rest=is_explicit_rest(assignments),
        punch_count=len(ordered),
        scheduled_minutes_by_shift=dict(by_shift),
    )
