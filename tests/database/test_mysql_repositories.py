from __future__ import annotations

from datetime import date, datetime, time, timedelta

import pytest

from attendance_metrics.core.enums import PunchKind
from attendance_metrics.core.exceptions import InvariantViolation
from attendance_metrics.punches.mysql_punch_repository import MySQLPunchRepository
from attendance_metrics.schedules.mysql_assignment_repository import MySQLAssignmentRepository
from attendance_metrics.shifts.mysql_shift_repository import MySQLShiftRepository


class FakeReader:
    """Stands in for MySQLReader: returns canned rows and records the queries."""

    def __init__(self, rows):
        self._rows = rows
        self.calls = []

    def query(self, sql, params=()):
        self.calls.append((" ".join(sql.split()), tuple(params)))
        return list(self._rows)

    def query_one(self, sql, params=()):
        rows = self.query(sql, params)
        return rows[0] if rows else None


@pytest.mark.parametrize(
    "start,end",
    [
        (timedelta(hours=22), timedelta(hours=6)),
        (time(22, 0), time(6, 0)),
        ("22:00:00", "06:00"),
    ],
)
def test_shift_rows_accept_every_time_representation(start, end):
    reader = FakeReader([{"id": 7, "name": "Night", "start_time": start, "end_time": end, "color": "#000"}])

    shift = MySQLShiftRepository(reader).get_by_id("7")

    assert (shift.shift_id, shift.start_minute, shift.end_minute) == ("7", 1320, 360)
    assert reader.calls[0][1] == ("7",)


def test_missing_shift_row_gives_none():
    assert MySQLShiftRepository(FakeReader([])).get_by_id("1") is None


def test_assignment_rows_map_rest_and_unassigned():
    reader = FakeReader(
        [
            {"employee_id": 3, "week_start": datetime(2024, 3, 4), "day_of_week": 1, "schedule_id": 5, "is_rest": 0},
            {"employee_id": 3, "week_start": date(2024, 3, 4), "day_of_week": 0, "schedule_id": None, "is_rest": 1},
        ]
    )

    rows = MySQLAssignmentRepository(reader).list_for_week(employee_id="3", week_start=date(2024, 3, 4))

    assert rows[0].shift_id == "5" and rows[0].week_start == date(2024, 3, 4)
    assert rows[1].is_rest and rows[1].shift_id is None


def test_assignment_employee_lookup_starts_at_week_monday():
    reader = FakeReader([{"employee_id": 3}])

    ids = MySQLAssignmentRepository(reader).employee_ids_in_range(start=date(2024, 3, 6), end=date(2024, 3, 8))

    assert ids == ["3"]
    assert reader.calls[0][1] == (date(2024, 3, 4), date(2024, 3, 8))


def test_punch_rows_map_kind_and_break_type():
    reader = FakeReader(
        [
            {"id": 1, "employee_id": 3, "timestamp": datetime(2024, 3, 4, 12, 0), "type": "break", "break_type_id": 2},
            {"id": 2, "employee_id": 3, "timestamp": datetime(2024, 3, 4, 12, 30), "type": "RESUME", "break_type_id": None},
        ]
    )

    punches = MySQLPunchRepository(reader).list_for_range(employee_id="3", start=date(2024, 3, 4), end=date(2024, 3, 4))

    assert [(p.punch_id, p.kind, p.break_type_id) for p in punches] == [("1", PunchKind.BREAK, "2"), ("2", PunchKind.RESUME, None)]
    assert reader.calls[0][1] == ("3", datetime(2024, 3, 4, 0, 0), datetime.combine(date(2024, 3, 4), time.max))


@pytest.mark.parametrize("bad", ["9", "nine:00", 540])
def test_malformed_shift_time_raises_invariant_violation(bad):
    reader = FakeReader([{"id": 4, "name": "Broken", "start_time": bad, "end_time": "17:00", "color": None}])

    with pytest.raises(InvariantViolation, match="Shift '4'"):
        MySQLShiftRepository(reader).get_by_id("4")


def test_unknown_punch_type_raises_invariant_violation():
    reader = FakeReader([{"id": 8, "employee_id": 3, "timestamp": datetime(2024, 3, 4, 9, 0), "type": "LUNCH", "break_type_id": None}])

    with pytest.raises(InvariantViolation, match="unknown type 'LUNCH'"):
        MySQLPunchRepository(reader).list_for_range(employee_id="3", start=date(2024, 3, 4), end=date(2024, 3, 4))
