from __future__ import annotations

from datetime import date, datetime, time

import pytest
from flask import Flask

from attendance_metrics.core.enums import PunchKind
from attendance_metrics.core.settings import EngineSettings
from attendance_metrics.punches.ledger import PunchLedger
from attendance_metrics.punches.model import PunchEvent
from attendance_metrics.reports import controller
from attendance_metrics.reports.controller import register
from attendance_metrics.reports.service import ReportService
from attendance_metrics.schedules.index import ShiftAssignmentIndex
from attendance_metrics.schedules.model import Assignment
from attendance_metrics.shifts.catalog import ScheduleCatalog
from attendance_metrics.shifts.model import Shift

WEEK = date(2024, 3, 4)
DAY_SHIFT = Shift.from_times("s1", "Day", time(9, 0), time(17, 0))


class InMemoryShiftRepo:
    def get_by_id(self, shift_id):
        return DAY_SHIFT if shift_id == "s1" else None


class InMemoryAssignmentRepo:
    rows = [Assignment("e1", WEEK, 1, shift_id="s1"), Assignment("e2", WEEK, 1, shift_id="s1")]

    def list_for_week(self, *, employee_id, week_start):
        return [r for r in self.rows if r.employee_id == employee_id and r.week_start == week_start]

    def employee_ids_in_range(self, *, start, end):
        return ["e1", "e2"]


class InMemoryPunchRepo:
    punches = [
        PunchEvent("1", "e1", datetime(2024, 3, 4, 9, 20), PunchKind.IN),
        PunchEvent("2", "e1", datetime(2024, 3, 4, 17, 0), PunchKind.OUT),
        PunchEvent("3", "e2", datetime(2024, 3, 4, 9, 0), PunchKind.IN),
        PunchEvent("4", "e2", datetime(2024, 3, 4, 12, 0), PunchKind.OUT),
    ]

    def list_for_range(self, *, employee_id, start, end):
        return [p for p in self.punches if p.employee_id == employee_id and start <= p.timestamp.date() <= end]

    def employee_ids_in_range(self, *, start, end):
        return ["e1", "e2"]


class FakeContainer:
    def __init__(self, service=None):
        self._service = service

    def report_service(self):
        if self._service is not None:
            return self._service
        return ReportService(
            ScheduleCatalog(InMemoryShiftRepo()),
            ShiftAssignmentIndex(InMemoryAssignmentRepo()),
            PunchLedger(InMemoryPunchRepo()),
            settings=EngineSettings(),
        )


class ExplodingService:
    def build(self, report_kind, filters, now):
        raise RuntimeError("database gone")


def _client(container):
    app = Flask(__name__)
    app.config["TESTING"] = True
    register(app, container)
    return app.test_client()


@pytest.fixture
def client():
    return _client(FakeContainer())


def test_time_report_endpoint(client):
    resp = client.get("/api/reports/time?start=2024-03-04&end=2024-03-04")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert body["data"]["kind"] == "time"
    assert body["data"]["summary"]["total_minutes"] == 640


def test_employee_ids_accept_repeated_and_comma_separated_values(client):
    resp = client.get("/api/reports/delays?start=2024-03-04&end=2024-03-04&employee_id=e1,e2&employee_id=e1")

    data = resp.get_json()["data"]
    assert resp.status_code == 200
    assert data["filters"]["employee_ids"] == ["e1", "e2"]
    assert data["summary"]["most_delayed_employee"] == {"employee_id": "e1", "total_delay_minutes": 20}


def test_group_by_week(client):
    resp = client.get("/api/reports/time?start=2024-03-04&end=2024-03-10&group_by=week")

    details = resp.get_json()["data"]["details"]
    assert [d["period"] for d in details] == ["2024-03-04"]


@pytest.mark.parametrize(
    "url",
    [
        "/api/reports/payroll?start=2024-03-04&end=2024-03-04",
        "/api/reports/time?start=2024-03-05&end=2024-03-04",
        "/api/reports/time?start=not-a-date&end=2024-03-04",
        "/api/reports/time?start=2024-03-04&end=2024-03-04&group_by=year",
    ],
)
def test_bad_requests_return_400(client, url):
    resp = client.get(url)

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_unexpected_errors_return_500():
    client = _client(FakeContainer(ExplodingService()))

    resp = client.get("/api/reports/time?start=2024-03-04&end=2024-03-04")

    assert resp.status_code == 500
    assert resp.get_json()["success"] is False


def test_default_range_ends_on_the_clock_date(client, monkeypatch):
    monkeypatch.setattr(controller, "now_local", lambda: datetime(2024, 3, 10, 8, 0))

    resp = client.get("/api/reports/time")

    data = resp.get_json()["data"]
    assert (data["filters"]["start"], data["filters"]["end"]) == ("2024-03-04", "2024-03-10")
    assert data["summary"]["total_minutes"] == 640
