from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .breaks.mysql_break_repository import MySQLBreakRepository
from .breaks.service import BreakService
from .database.connection import DBConfig, DatabaseConnection
from .reconciliation.engine import ReconciliationEngine
from .reconciliation.model import ReconciliationSettings
from .reconciliation.mysql_clears_repository import MySQLIssueClearRepository
from .reconciliation.scanner import IssueScanner
from .reconciliation.service import IssueClearService
from .work_records.mysql_work_record_repository import MySQLWorkRecordRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    settings: ReconciliationSettings

    breaks_repo: MySQLBreakRepository
    attendance_repo: MySQLAttendanceRepository
    work_records_repo: MySQLWorkRecordRepository
    clears_repo: MySQLIssueClearRepository

    break_service: BreakService
    attendance_service: AttendanceService
    reconciliation_engine: ReconciliationEngine
    issue_scanner: IssueScanner
    issue_clear_service: IssueClearService


def build_container(*, db_config: dict, settings: Optional[ReconciliationSettings] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))
    settings = settings or ReconciliationSettings()

    breaks_repo = MySQLBreakRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    work_records_repo = MySQLWorkRecordRepository(conn)
    clears_repo = MySQLIssueClearRepository(conn)

    break_service = BreakService(breaks_repo)
    attendance_service = AttendanceService(attendance_repo, breaks_repo)
    reconciliation_engine = ReconciliationEngine(
        attendance_repo,
        work_records_repo,
        breaks_repo,
        clears_repo,
        settings=settings,
    )
    issue_scanner = IssueScanner(reconciliation_engine, attendance_repo)
    issue_clear_service = IssueClearService(clears_repo)

    return Container(
        conn=conn,
        settings=settings,
        breaks_repo=breaks_repo,
        attendance_repo=attendance_repo,
        work_records_repo=work_records_repo,
        clears_repo=clears_repo,
        break_service=break_service,
        attendance_service=attendance_service,
        reconciliation_engine=reconciliation_engine,
        issue_scanner=issue_scanner,
        issue_clear_service=issue_clear_service,
    )
