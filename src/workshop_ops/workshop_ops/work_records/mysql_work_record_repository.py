from __future__ import annotations

from datetime import date
from typing import Sequence

from ..common.datetime_utils import local_day_bounds_utc
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import RawSession
from .repository import WorkRecordRepository


class MySQLWorkRecordRepository(WorkRecordRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def fetch_work_sessions(self, user_id: int, work_date: date, tz_name: str) -> Sequence[RawSession]:
        # workRecords timestamps are UTC; filter on the local day's UTC bounds.
        day_start, day_end = local_day_bounds_utc(work_date, tz_name)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT DISTINCT
                    wr.id, wr.userId, wr.startTime, wr.endTime,
                    v.vehicleNumber, p.name AS processName
                FROM workRecords wr
                LEFT JOIN vehicles v ON v.id = wr.vehicleId
                LEFT JOIN processes p ON p.id = wr.processId
                WHERE wr.userId=%s AND wr.startTime >= %s AND wr.startTime < %s
                ORDER BY wr.startTime ASC
                """,
                (int(user_id), day_start, day_end),
            )
            rows = fetchall(cur)
            return [
                RawSession(
                    record_id=int(r["id"]),
                    user_id=int(r["userId"]),
                    start_instant=r["startTime"],
                    end_instant=r.get("endTime"),
                    vehicle_number=r.get("vehicleNumber"),
                    process_name=r.get("processName"),
                )
                for r in rows
            ]
