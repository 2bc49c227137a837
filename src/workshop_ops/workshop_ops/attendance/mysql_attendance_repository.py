from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date, normalize_mysql_time
from .model import AttendanceRecord, ScanCandidate
from .repository import AttendanceRepository


def _to_record(r: dict) -> AttendanceRecord:
    stored = r.get("workMinutes")
    return AttendanceRecord(
        attendance_id=int(r["id"]),
        user_id=int(r["userId"]),
        work_date=normalize_mysql_date(r["workDate"]),
        clock_in=normalize_mysql_time(r.get("clockInTime")),
        clock_out=normalize_mysql_time(r.get("clockOutTime")),
        stored_work_minutes=int(stored) if stored is not None else None,
    )


def _placeholders(values: Sequence) -> str:
    return ",".join(["%s"] * len(values))


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def fetch_attendance(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, userId, workDate, clockInTime, clockOutTime, workMinutes
                FROM attendanceRecords
                WHERE userId=%s AND workDate=%s AND clockInTime IS NOT NULL
                ORDER BY id ASC
                LIMIT 1
                """,
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            if not r:
                return None
            return _to_record(r)

    def list_candidates(
        self,
        *,
        work_dates: Sequence[date],
        include_roles: Optional[Iterable[Role]] = None,
        exclude_roles: Optional[Iterable[Role]] = None,
    ) -> Sequence[ScanCandidate]:
        if not work_dates:
            return []

        where = [f"ar.workDate IN ({_placeholders(work_dates)})", "ar.clockInTime IS NOT NULL"]
        params: list = list(work_dates)

        included = [Role(r).value for r in (include_roles or [])]
        if included:
            where.append(f"u.role IN ({_placeholders(included)})")
            params.extend(included)
        excluded = [Role(r).value for r in (exclude_roles or [])]
        if excluded:
            where.append(f"u.role NOT IN ({_placeholders(excluded)})")
            params.extend(excluded)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT DISTINCT ar.userId, ar.workDate, u.name, u.username, u.role
                FROM attendanceRecords ar
                INNER JOIN users u ON u.id = ar.userId
                WHERE {' AND '.join(where)}
                ORDER BY ar.workDate DESC, ar.userId ASC
                """,
                tuple(params),
            )
            rows = fetchall(cur)
            return [
                ScanCandidate(
                    user_id=int(r["userId"]),
                    user_name=r.get("name") or r.get("username") or "",
                    role=Role(r["role"]),
                    work_date=normalize_mysql_date(r["workDate"]),
                )
                for r in rows
            ]

    def list_closed_records(self) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, userId, workDate, clockInTime, clockOutTime, workMinutes
                FROM attendanceRecords
                WHERE clockInTime IS NOT NULL AND clockOutTime IS NOT NULL
                ORDER BY id ASC
                """
            )
            return [_to_record(r) for r in fetchall(cur)]

    def update_work_minutes(self, *, attendance_id: int, work_minutes: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendanceRecords SET workMinutes=%s WHERE id=%s",
                (int(work_minutes), int(attendance_id)),
            )
            return cur.rowcount > 0
