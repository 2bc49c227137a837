from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from src.workshop_ops.workshop_ops.attendance.model import AttendanceRecord, ScanCandidate
from src.workshop_ops.workshop_ops.breaks.model import BreakWindow
from src.workshop_ops.workshop_ops.core.enums import Role
from src.workshop_ops.workshop_ops.reconciliation.engine import ReconciliationEngine
from src.workshop_ops.workshop_ops.reconciliation.model import IssueClear, ReconciliationSettings
from src.workshop_ops.workshop_ops.work_records.model import RawSession

FIXED_NOW = datetime(2025, 3, 10, 9, 0, 0)  # naive UTC, 18:00 in Tokyo


class InMemoryBreakRepo:
    def __init__(self, windows=()):
        self._rows: dict[int, BreakWindow] = {}
        self._next_id = 1
        for w in windows:
            self.create(
                name=w.name,
                start_time=w.start_time,
                end_time=w.end_time,
                duration_minutes=w.duration_minutes,
                is_active=w.is_active,
            )

    def fetch_active_break_windows(self):
        return [w for w in self._rows.values() if w.is_active]

    def list_all(self):
        return list(self._rows.values())

    def get_by_id(self, break_id):
        return self._rows.get(int(break_id))

    def create(self, *, name, start_time, end_time, duration_minutes, is_active):
        break_id = self._next_id
        self._next_id += 1
        self._rows[break_id] = BreakWindow(
            break_id=break_id,
            name=name,
            start_time=start_time,
            end_time=end_time,
            duration_minutes=duration_minutes,
            is_active=is_active,
        )
        return break_id

    def update(self, *, break_id, fields):
        current = self._rows.get(int(break_id))
        if not current:
            return False
        data = {
            "break_id": current.break_id,
            "name": current.name,
            "start_time": current.start_time,
            "end_time": current.end_time,
            "duration_minutes": current.duration_minutes,
            "is_active": current.is_active,
        }
        data.update(fields)
        self._rows[int(break_id)] = BreakWindow(**data)
        return True

    def delete(self, *, break_id):
        return self._rows.pop(int(break_id), None) is not None


class InMemoryAttendanceRepo:
    def __init__(self):
        self.records: dict[tuple[int, date], AttendanceRecord] = {}
        self.users: dict[int, tuple[str, Role]] = {}
        self.updates: list[tuple[int, int]] = []
        self._next_id = 1

    def add_user(self, user_id, name, role=Role.FIELD_WORKER):
        self.users[int(user_id)] = (name, role)

    def add(self, user_id, work_date, clock_in, clock_out=None, stored_work_minutes=None):
        record = AttendanceRecord(
            attendance_id=self._next_id,
            user_id=int(user_id),
            work_date=work_date,
            clock_in=clock_in,
            clock_out=clock_out,
            stored_work_minutes=stored_work_minutes,
        )
        self._next_id += 1
        self.records[(int(user_id), work_date)] = record
        return record

    def fetch_attendance(self, user_id, work_date):
        record = self.records.get((int(user_id), work_date))
        if record is None or not record.clock_in:
            return None
        return record

    def list_candidates(self, *, work_dates, include_roles=None, exclude_roles=None):
        out = []
        for (user_id, work_date), record in self.records.items():
            if work_date not in work_dates or not record.clock_in:
                continue
            name, role = self.users.get(user_id, (f"user{user_id}", Role.FIELD_WORKER))
            if include_roles and role not in include_roles:
                continue
            if exclude_roles and role in exclude_roles:
                continue
            out.append(ScanCandidate(user_id=user_id, user_name=name, role=role, work_date=work_date))
        return out

    def list_closed_records(self):
        return [r for r in self.records.values() if r.clock_in and r.clock_out]

    def update_work_minutes(self, *, attendance_id, work_minutes):
        self.updates.append((int(attendance_id), int(work_minutes)))
        return True


class InMemoryWorkRecordRepo:
    def __init__(self):
        self.sessions: dict[tuple[int, date], list[RawSession]] = {}
        self.calls = 0
        self._next_id = 1

    def add(self, user_id, work_date, start_instant, end_instant, **extra):
        session = RawSession(
            record_id=self._next_id,
            user_id=int(user_id),
            start_instant=start_instant,
            end_instant=end_instant,
            **extra,
        )
        self._next_id += 1
        self.sessions.setdefault((int(user_id), work_date), []).append(session)
        return session

    def fetch_work_sessions(self, user_id, work_date, tz_name):
        self.calls += 1
        return list(self.sessions.get((int(user_id), work_date), []))


class InMemoryClearsRepo:
    def __init__(self):
        self.rows: list[IssueClear] = []

    def fetch_cleared_exclusions(self):
        return {(c.user_id, c.work_date) for c in self.rows}

    def exists(self, *, user_id, work_date):
        return (int(user_id), work_date) in self.fetch_cleared_exclusions()

    def create(self, *, user_id, work_date, cleared_by):
        clear_id = len(self.rows) + 1
        self.rows.append(
            IssueClear(
                clear_id=clear_id,
                user_id=int(user_id),
                work_date=work_date,
                cleared_by=int(cleared_by),
                cleared_at=FIXED_NOW,
            )
        )
        return clear_id

    def list_all(self):
        return list(self.rows)


def utc(work_date: date, hh_mm: str, *, day_offset: int = 0) -> datetime:
    """Naive UTC instant for a Tokyo wall-clock time on work_date (+day_offset)."""

    hour, minute = (int(p) for p in hh_mm.split(":"))
    local = datetime(work_date.year, work_date.month, work_date.day, hour, minute)
    return local + timedelta(days=day_offset) - timedelta(hours=9)


@pytest.fixture
def lunch_break():
    return BreakWindow(name="Lunch", start_time="12:00", end_time="13:00", duration_minutes=60)


@pytest.fixture
def morning_break():
    return BreakWindow(name="Morning", start_time="06:00", end_time="08:30", duration_minutes=150)


@pytest.fixture
def breaks_repo(lunch_break):
    return InMemoryBreakRepo([lunch_break])


@pytest.fixture
def attendance_repo():
    return InMemoryAttendanceRepo()


@pytest.fixture
def work_records_repo():
    return InMemoryWorkRecordRepo()


@pytest.fixture
def clears_repo():
    return InMemoryClearsRepo()


@pytest.fixture
def engine(attendance_repo, work_records_repo, breaks_repo, clears_repo):
    return ReconciliationEngine(
        attendance_repo,
        work_records_repo,
        breaks_repo,
        clears_repo,
        settings=ReconciliationSettings(timezone="Asia/Tokyo"),
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def at():
    return utc


@pytest.fixture
def make_breaks_repo():
    return InMemoryBreakRepo
