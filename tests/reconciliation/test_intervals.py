from __future__ import annotations

from datetime import date, datetime

from attendance_metrics.reconciliation.intervals import CLOSED


def test_close_returns_elapsed_minutes():
    state = CLOSED.open(datetime(2024, 3, 4, 9, 0))

    state, minutes = state.close(datetime(2024, 3, 4, 12, 30, 45))

    assert minutes == 210
    assert not state.is_open


def test_closing_a_closed_interval_is_a_no_op():
    state, minutes = CLOSED.close(datetime(2024, 3, 4, 8, 0))

    assert minutes == 0
    assert state is CLOSED


def test_last_opener_wins():
    state = CLOSED.open(datetime(2024, 3, 4, 9, 0), tag="lunch").open(datetime(2024, 3, 4, 10, 0), tag="coffee")

    assert state.tag == "coffee"
    assert state.close(datetime(2024, 3, 4, 10, 15))[1] == 15


def test_settle_only_counts_on_the_current_day(fixed_now):
    state = CLOSED.open(datetime(2024, 3, 4, 9, 0))

    assert state.settle(date(2024, 3, 4), fixed_now) == 150
    assert state.settle(date(2024, 3, 1), fixed_now) == 0
    assert CLOSED.settle(date(2024, 3, 4), fixed_now) == 0
