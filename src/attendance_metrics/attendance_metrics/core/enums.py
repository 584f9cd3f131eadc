from __future__ import annotations

from enum import Enum


class PunchKind(str, Enum):
    """Kind of a raw punch event in the ledger."""

    IN = "IN"
    OUT = "OUT"
    BREAK = "BREAK"
    RESUME = "RESUME"


class ReportKind(str, Enum):
    """Report shapes the aggregator can produce."""

    TIME = "time"
    ATTENDANCE = "attendance"
    EMPLOYEE_SUMMARY = "employee-summary"
    BREAK_TYPE = "break-type"
    DELAYS = "delays"
    MONTHLY = "monthly"


class GroupBy(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class Trend(str, Enum):
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"
    INSUFFICIENT_DATA = "insufficient_data"
