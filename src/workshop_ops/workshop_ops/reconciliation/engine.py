from __future__ import annotations

from datetime import date, datetime
from typing import Callable, Collection, Iterable, Optional

import structlog

from ..attendance.calculator import AttendanceMinutesCalculator
from ..attendance.repository import AttendanceRepository
from ..breaks.catalog import BreakCatalog
from ..breaks.repository import BreakRepository
from ..common.datetime_utils import now_utc
from ..core.enums import Classification
from ..work_records.deduction import BreakDeduction
from ..work_records.model import MergedInterval, to_session_span
from ..work_records.repository import WorkRecordRepository
from .clears_repository import IssueClearRepository
from .computation import describe_work_sessions
from .model import ReconciliationResult, ReconciliationSettings, SessionDetail, WorkReportDetail

log = structlog.get_logger(__name__)

Exclusions = Collection[tuple[int, date]]


class ReconciliationEngine:
    """Compare attendance minutes with reported work minutes per worker-day.

    Each evaluation reads a fresh break catalog, so the engine holds no state
    between calls and re-running a day gives the same result for the same rows.
    `clock` supplies "now" for sessions that are still open.
    """

    def __init__(
        self,
        attendance_repo: AttendanceRepository,
        work_records_repo: WorkRecordRepository,
        breaks_repo: BreakRepository,
        clears_repo: Optional[IssueClearRepository] = None,
        *,
        settings: Optional[ReconciliationSettings] = None,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._attendance = attendance_repo
        self._work_records = work_records_repo
        self._breaks = breaks_repo
        self._clears = clears_repo
        self._settings = settings or ReconciliationSettings()
        self._clock = clock
        self._calculator = AttendanceMinutesCalculator()
        self._deduction = BreakDeduction()

    @property
    def settings(self) -> ReconciliationSettings:
        return self._settings

    def now(self) -> datetime:
        """Current naive-UTC instant from the injected clock."""

        return self._clock()

    def load_catalog(self) -> BreakCatalog:
        return BreakCatalog(self._breaks.fetch_active_break_windows())

    def cleared_exclusions(self) -> set[tuple[int, date]]:
        if self._clears is None:
            return set()
        return self._clears.fetch_cleared_exclusions()

    def classify(self, attendance_minutes: int, work_minutes: int, session_count: int) -> Classification:
        if session_count == 0:
            return Classification.MISSING_REPORT
        diff = work_minutes - attendance_minutes
        if abs(diff) > self._settings.mismatch_threshold_minutes:
            return Classification.UNDER_REPORT if diff < 0 else Classification.OVER_REPORT
        return Classification.OK

    def is_excessive(self, attendance_minutes: int, work_minutes: int) -> bool:
        return work_minutes - attendance_minutes > self._settings.excessive_work_threshold_minutes

    def reconcile_day(
        self,
        user_id: int,
        work_date: date,
        *,
        ignore_before_0830: bool = True,
        exclusions: Optional[Exclusions] = None,
    ) -> Optional[ReconciliationResult]:
        """Evaluate one worker-day; None when there is no clock-in to compare against."""

        attendance = self._attendance.fetch_attendance(user_id, work_date)
        if attendance is None or not attendance.clock_in:
            log.debug("day_not_evaluated", user_id=user_id, work_date=work_date.isoformat())
            return None

        catalog = self.load_catalog()
        attendance_minutes = self._calculator.compute(
            attendance.clock_in,
            attendance.clock_out,
            catalog,
            ignore_before_0830,
        )

        tz = self._settings.timezone
        raw_sessions = self._work_records.fetch_work_sessions(user_id, work_date, tz)
        now = self.now()
        spans = [to_session_span(s, tz, now) for s in raw_sessions]
        work_minutes = sum(
            d.duration
            for d in describe_work_sessions(spans, catalog, merge_gap_minutes=self._settings.merge_gap_minutes)
        )

        if exclusions is None:
            exclusions = self.cleared_exclusions()
        cleared = (int(user_id), work_date) in exclusions

        result = ReconciliationResult(
            user_id=int(user_id),
            work_date=work_date,
            attendance_minutes=attendance_minutes,
            work_minutes=work_minutes,
            difference_minutes=work_minutes - attendance_minutes,
            classification=self.classify(attendance_minutes, work_minutes, len(raw_sessions)),
            excessive_work=self.is_excessive(attendance_minutes, work_minutes),
            cleared=cleared,
            session_count=len(raw_sessions),
        )
        log.debug(
            "day_reconciled",
            user_id=result.user_id,
            work_date=work_date.isoformat(),
            classification=result.classification.value,
            difference_minutes=result.difference_minutes,
            cleared=cleared,
        )
        return result

    def reconcile_range(
        self,
        user_id: int,
        work_dates: Iterable[date],
        *,
        ignore_before_0830: bool = True,
        exclusions: Optional[Exclusions] = None,
    ) -> list[ReconciliationResult]:
        if exclusions is None:
            exclusions = self.cleared_exclusions()
        results: list[ReconciliationResult] = []
        for work_date in work_dates:
            result = self.reconcile_day(
                user_id,
                work_date,
                ignore_before_0830=ignore_before_0830,
                exclusions=exclusions,
            )
            if result is not None:
                results.append(result)
        return results

    def detail_day(
        self,
        user_id: int,
        work_date: date,
        *,
        ignore_before_0830: bool = True,
    ) -> Optional[WorkReportDetail]:
        """Per-session and per-interval breakdown of one worker-day."""

        attendance = self._attendance.fetch_attendance(user_id, work_date)
        tz = self._settings.timezone
        raw_sessions = self._work_records.fetch_work_sessions(user_id, work_date, tz)
        if attendance is None and not raw_sessions:
            return None

        catalog = self.load_catalog()
        breakdown = None
        if attendance is not None:
            breakdown = self._calculator.breakdown(
                attendance.clock_in,
                attendance.clock_out,
                catalog,
                ignore_before_0830,
            )

        now = self.now()
        sessions: list[SessionDetail] = []
        spans = []
        for raw in raw_sessions:
            span = to_session_span(raw, tz, now)
            spans.append(span)
            deduction = self._deduction.deduct(MergedInterval(start=span.start, end=span.end), catalog)
            sessions.append(
                SessionDetail(
                    record_id=raw.record_id,
                    start=span.start,
                    end=span.end,
                    duration_minutes=deduction.duration if deduction else 0,
                    is_open=raw.is_open,
                    vehicle_number=raw.vehicle_number,
                    process_name=raw.process_name,
                )
            )

        intervals = describe_work_sessions(spans, catalog, merge_gap_minutes=self._settings.merge_gap_minutes)
        return WorkReportDetail(
            user_id=int(user_id),
            work_date=work_date,
            attendance=breakdown,
            sessions=tuple(sessions),
            intervals=tuple(intervals),
            attendance_minutes=breakdown.minutes if breakdown else 0,
            work_minutes=sum(i.duration for i in intervals),
        )
