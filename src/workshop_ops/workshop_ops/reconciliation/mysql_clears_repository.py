from __future__ import annotations

from datetime import date
from typing import Sequence

import structlog

from ..core.exceptions import DataAccessFailure
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_missing_table, normalize_mysql_date
from .clears_repository import IssueClearRepository
from .model import IssueClear

log = structlog.get_logger(__name__)


class MySQLIssueClearRepository(IssueClearRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def fetch_cleared_exclusions(self) -> set[tuple[int, date]]:
        # Deployments without the clears table simply have nothing cleared.
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("SELECT userId, workDate FROM workRecordIssueClears")
                rows = fetchall(cur)
        except DataAccessFailure as e:
            if not is_missing_table(e):
                raise
            log.warning("issue_clears_table_missing")
            return set()
        return {(int(r["userId"]), normalize_mysql_date(r["workDate"])) for r in rows}

    def exists(self, *, user_id: int, work_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id FROM workRecordIssueClears WHERE userId=%s AND workDate=%s LIMIT 1",
                (int(user_id), work_date),
            )
            return fetchone(cur) is not None

    def create(self, *, user_id: int, work_date: date, cleared_by: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO workRecordIssueClears(userId, workDate, clearedBy)
                VALUES(%s,%s,%s)
                """,
                (int(user_id), work_date, int(cleared_by)),
            )
            return int(cur.lastrowid)

    def list_all(self) -> Sequence[IssueClear]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    SELECT id, userId, workDate, clearedBy, clearedAt
                    FROM workRecordIssueClears
                    ORDER BY clearedAt DESC, id DESC
                    """
                )
                rows = fetchall(cur)
        except DataAccessFailure as e:
            if not is_missing_table(e):
                raise
            log.warning("issue_clears_table_missing")
            return []
        return [
            IssueClear(
                clear_id=int(r["id"]),
                user_id=int(r["userId"]),
                work_date=normalize_mysql_date(r["workDate"]),
                cleared_by=int(r["clearedBy"]),
                cleared_at=r.get("clearedAt"),
            )
            for r in rows
        ]
