from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import iter_days
from ..core.enums import ReportKind
from ..core.exceptions import InvariantViolation
from ..core.settings import EngineSettings
from ..punches.ledger import PunchLedger
from ..punches.model import PunchEvent
from ..reconciliation.model import DayResult, UnavailableDay
from ..reconciliation.reconciler import reconcile_day
from ..schedules.index import ShiftAssignmentIndex
from ..shifts.catalog import ScheduleCatalog
from .aggregator import aggregate, parse_report_kind
from .model import ReportFilters, ReportPayload

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _EmployeeDay:
    employee_id: str
    day: date
    punches: Sequence[PunchEvent]
    error: Optional[str] = None


class ReportService:
    """Drives the engine for a report request.

    Inputs for every (employee, day) of the range are materialised through the
    catalog, assignment index and punch ledger before reconciliation, so the
    reconciliation step itself does no I/O and can run on a worker pool.
    """

    def __init__(
        self,
        catalog: ScheduleCatalog,
        assignments: ShiftAssignmentIndex,
        ledger: PunchLedger,
        *,
        settings: Optional[EngineSettings] = None,
    ):
        self._catalog = catalog
        self._assignments = assignments
        self._ledger = ledger
        self._settings = settings or EngineSettings()

    def _employee_ids(self, filters: ReportFilters) -> list[str]:
        if filters.employee_ids:
            return list(dict.fromkeys(filters.employee_ids))
        ids = set(self._assignments.employee_ids_in_range(filters.start, filters.end))
        ids.update(self._ledger.employee_ids_in_range(filters.start, filters.end))
        return sorted(ids)

    def _units(self, filters: ReportFilters) -> list[_EmployeeDay]:
        units: list[_EmployeeDay] = []
        for employee_id in self._employee_ids(filters):
            error: Optional[str] = None
            try:
                by_day = self._ledger.punches_by_day(employee_id, filters.start, filters.end)
            except InvariantViolation as e:
                # Unreadable punch rows affect every day of this employee's range.
                by_day, error = {}, str(e)
            for day in iter_days(filters.start, filters.end):
                units.append(_EmployeeDay(employee_id, day, by_day.get(day, []), error))
        return units

    def reconcile(self, employee_id: str, day: date, punches: Sequence[PunchEvent], now: datetime) -> DayResult:
        """One employee-day; an InvariantViolation only marks this day unavailable."""
        try:
            assignments = self._assignments.assignments_for(employee_id, day)
            shifts = self._catalog.resolve(assignments)
            return reconcile_day(employee_id, day, shifts, assignments, punches, now)
        except InvariantViolation as e:
            return self._unavailable(employee_id, day, str(e))

    def _unavailable(self, employee_id: str, day: date, reason: str) -> UnavailableDay:
        logger.warning("Employee %s on %s unavailable: %s", employee_id, day.isoformat(), reason)
        return UnavailableDay(employee_id=employee_id, day=day, reason=reason)

    def _reconcile_unit(self, unit: _EmployeeDay, now: datetime) -> DayResult:
        if unit.error is not None:
            return self._unavailable(unit.employee_id, unit.day, unit.error)
        return self.reconcile(unit.employee_id, unit.day, unit.punches, now)

    def collect(self, filters: ReportFilters, now: datetime) -> list[DayResult]:
        units = self._units(filters)

        if self._settings.workers > 1 and len(units) > 1:
            # Concurrent cache misses in the catalog/index only repeat a read.
            with ThreadPoolExecutor(max_workers=self._settings.workers) as pool:
                results = list(pool.map(lambda u: self._reconcile_unit(u, now), units))
        else:
            results = [self._reconcile_unit(u, now) for u in units]

        logger.debug(
            "Reconciled %d employee-days (%d unavailable) for %s..%s",
            len(results),
            sum(1 for r in results if isinstance(r, UnavailableDay)),
            filters.start.isoformat(),
            filters.end.isoformat(),
        )
        return results

    def build(self, report_kind: ReportKind | str, filters: ReportFilters, now: datetime) -> ReportPayload:
        kind = parse_report_kind(report_kind)
        return aggregate(kind, self.collect(filters, now), filters, settings=self._settings)
