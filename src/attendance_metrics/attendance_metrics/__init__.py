"""Attendance metrics package.

Reconciles each employee-day of assigned shifts and raw punches into
DayMetrics and folds them into report payloads. Organized by feature modules
(shifts, schedules, punches, reconciliation, reports) with a thin Flask
controller and service/repository layers.
"""
from __future__ import annotations

from .core.exceptions import DomainError, InvariantViolation, StaleReference, ValidationError
from .reconciliation.model import DayMetrics, UnavailableDay
from .reconciliation.reconciler import reconcile_day
from .reports.aggregator import aggregate
from .reports.model import ReportFilters, ReportPayload

__all__ = [
    "DayMetrics",
    "DomainError",
    "InvariantViolation",
    "ReportFilters",
    "ReportPayload",
    "StaleReference",
    "UnavailableDay",
    "ValidationError",
    "aggregate",
    "reconcile_day",
]
