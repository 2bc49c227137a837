from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import BreakWindow
from .repository import BreakRepository

_COLUMNS = {
    "name": "name",
    "start_time": "startTime",
    "end_time": "endTime",
    "duration_minutes": "durationMinutes",
    "is_active": "isActive",
}


def _to_window(r: dict) -> BreakWindow:
    return BreakWindow(
        break_id=int(r["id"]),
        name=r["name"],
        start_time=normalize_mysql_time(r["startTime"]) or "",
        end_time=normalize_mysql_time(r["endTime"]) or "",
        duration_minutes=int(r.get("durationMinutes") or 0),
        is_active=str(r.get("isActive")) == "true",
    )


def _to_db_value(field: str, value):
    if field == "is_active":
        return "true" if value else "false"
    return value


class MySQLBreakRepository(BreakRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def fetch_active_break_windows(self) -> Sequence[BreakWindow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, startTime, endTime, durationMinutes, isActive
                FROM breakTimes
                WHERE isActive='true'
                ORDER BY startTime
                """
            )
            return [_to_window(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[BreakWindow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, startTime, endTime, durationMinutes, isActive
                FROM breakTimes
                ORDER BY startTime
                """
            )
            return [_to_window(r) for r in fetchall(cur)]

    def get_by_id(self, break_id: int) -> Optional[BreakWindow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, startTime, endTime, durationMinutes, isActive
                FROM breakTimes
                WHERE id=%s
                """,
                (int(break_id),),
            )
            r = fetchone(cur)
            return _to_window(r) if r else None

    def create(self, *, name: str, start_time: str, end_time: str, duration_minutes: int, is_active: bool) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO breakTimes(name, startTime, endTime, durationMinutes, isActive)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (name, start_time, end_time, int(duration_minutes), _to_db_value("is_active", is_active)),
            )
            return int(cur.lastrowid)

    def update(self, *, break_id: int, fields: dict) -> bool:
        assignments = []
        params: list[object] = []
        for field, value in fields.items():
            column = _COLUMNS.get(field)
            if column is None:
                raise KeyError(f"Unknown break field: {field}")
            assignments.append(f"{column}=%s")
            params.append(_to_db_value(field, value))
        if not assignments:
            return False

        params.append(int(break_id))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE breakTimes SET {', '.join(assignments)} WHERE id=%s", tuple(params))
            return cur.rowcount > 0

    def delete(self, *, break_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM breakTimes WHERE id=%s", (int(break_id),))
            return cur.rowcount > 0
