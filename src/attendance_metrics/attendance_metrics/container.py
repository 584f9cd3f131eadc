from __future__ import annotations

from dataclasses import dataclass

from .core.settings import EngineSettings
from .database.mysql import DBConfig, MySQLReader
from .punches.ledger import PunchLedger
from .punches.mysql_punch_repository import MySQLPunchRepository
from .punches.repository import PunchRepository
from .reports.service import ReportService
from .schedules.index import ShiftAssignmentIndex
from .schedules.mysql_assignment_repository import MySQLAssignmentRepository
from .schedules.repository import AssignmentRepository
from .shifts.catalog import ScheduleCatalog
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftRepository


@dataclass(frozen=True)
class Container:
    shifts_repo: ShiftRepository
    assignments_repo: AssignmentRepository
    punches_repo: PunchRepository
    settings: EngineSettings

    def report_service(self) -> ReportService:
        # Catalog and index cache lookups, so each report run gets fresh ones.
        return ReportService(
            ScheduleCatalog(self.shifts_repo),
            ShiftAssignmentIndex(self.assignments_repo),
            PunchLedger(self.punches_repo),
            settings=self.settings,
        )


def build_container(*, db_config: dict, settings: EngineSettings | None = None) -> Container:
    db = MySQLReader.get_instance(DBConfig.from_settings(db_config))

    return Container(
        shifts_repo=MySQLShiftRepository(db),
        assignments_repo=MySQLAssignmentRepository(db),
        punches_repo=MySQLPunchRepository(db),
        settings=settings or EngineSettings(),
    )
