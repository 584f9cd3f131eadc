from __future__ import annotations

from datetime import date

from attendance_metrics.schedules.index import ShiftAssignmentIndex, is_explicit_rest
from attendance_metrics.schedules.model import Assignment


class InMemoryAssignmentRepo:
    def __init__(self, rows):
        self._rows = list(rows)
        self.week_reads = []

    def list_for_week(self, *, employee_id, week_start):
        self.week_reads.append((employee_id, week_start))
        return [r for r in self._rows if r.employee_id == employee_id and r.week_start == week_start]

    def employee_ids_in_range(self, *, start, end):
        return sorted({r.employee_id for r in self._rows})


WEEK = date(2024, 3, 4)  # Monday


def test_day_maps_to_week_monday_and_sunday_zero_numbering():
    rows = [
        Assignment("e1", WEEK, 1, shift_id="s1"),  # Monday
        Assignment("e1", WEEK, 0, shift_id="s2"),  # Sunday 2024-03-10
    ]
    index = ShiftAssignmentIndex(InMemoryAssignmentRepo(rows))

    assert [a.shift_id for a in index.assignments_for("e1", date(2024, 3, 4))] == ["s1"]
    assert [a.shift_id for a in index.assignments_for("e1", date(2024, 3, 10))] == ["s2"]
    assert index.assignments_for("e1", date(2024, 3, 5)) == []


def test_week_rows_are_read_once():
    repo = InMemoryAssignmentRepo([Assignment("e1", WEEK, 1, shift_id="s1")])
    index = ShiftAssignmentIndex(repo)

    index.assignments_for("e1", date(2024, 3, 4))
    index.assignments_for("e1", date(2024, 3, 6))

    assert repo.week_reads == [("e1", WEEK)]


def test_split_shift_returns_every_row():
    rows = [Assignment("e1", WEEK, 2, shift_id="am"), Assignment("e1", WEEK, 2, shift_id="pm")]
    index = ShiftAssignmentIndex(InMemoryAssignmentRepo(rows))

    assert [a.shift_id for a in index.assignments_for("e1", date(2024, 3, 5))] == ["am", "pm"]


def test_explicit_rest_detection():
    rest = Assignment.rest("e1", WEEK, 1)
    shift = Assignment("e1", WEEK, 1, shift_id="s1")

    assert is_explicit_rest([rest])
    assert not is_explicit_rest([])
    # a rest row next to a shift row does not make the day a rest day
    assert not is_explicit_rest([rest, shift])
