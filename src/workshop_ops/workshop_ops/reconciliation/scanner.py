from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional, Sequence

import structlog

from ..attendance.model import ScanCandidate
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import previous_days, recent_business_days, to_local
from ..core.constants import EXCESSIVE_WORK_BUSINESS_DAYS, ISSUE_SCAN_DAYS
from ..core.enums import FlagRule, Role
from ..core.exceptions import DataAccessFailure
from .engine import Exclusions, ReconciliationEngine
from .model import FlaggedUser, ReconciliationResult, ScanFailure, ScanReport

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CheckProfile:
    """Which worker-days a report looks at and what gets a worker flagged."""

    name: str
    work_dates: Callable[[date], list[date]]
    rule: FlagRule
    include_roles: frozenset[Role] = frozenset()
    exclude_roles: frozenset[Role] = frozenset()
    ignore_before_0830: bool = True
    honour_clears: bool = False

    def flags(self, result: ReconciliationResult, mismatch_threshold_minutes: int) -> bool:
        if self.rule == FlagRule.EXCESSIVE_WORK:
            return result.excessive_work
        if self.rule == FlagRule.ATTENDANCE_GAP:
            # a day with no sessions only counts once the gap itself is large
            return result.absolute_difference > mismatch_threshold_minutes
        return result.needs_attention


WORK_RECORD_ISSUES = CheckProfile(
    name="work_record_issues",
    work_dates=lambda today: previous_days(today, ISSUE_SCAN_DAYS),
    rule=FlagRule.DISCREPANCY,
    exclude_roles=frozenset({Role.EXTERNAL, Role.ADMIN, Role.SALES_OFFICE}),
    honour_clears=True,
)

EXCESSIVE_WORK = CheckProfile(
    name="excessive_work",
    work_dates=lambda today: recent_business_days(today, EXCESSIVE_WORK_BUSINESS_DAYS),
    rule=FlagRule.EXCESSIVE_WORK,
    include_roles=frozenset({Role.FIELD_WORKER}),
)

LOW_WORK = CheckProfile(
    name="low_work",
    work_dates=lambda today: previous_days(today, 1),
    rule=FlagRule.ATTENDANCE_GAP,
    include_roles=frozenset({Role.FIELD_WORKER}),
    ignore_before_0830=False,
)

PROFILES = {p.name: p for p in (WORK_RECORD_ISSUES, EXCESSIVE_WORK, LOW_WORK)}


class IssueScanner:
    """Run a check profile over every eligible worker-day.

    A storage failure for one worker-day is logged and reported in
    `ScanReport.failures`; the remaining days are still evaluated.
    """

    def __init__(
        self,
        engine: ReconciliationEngine,
        attendance_repo: AttendanceRepository,
        *,
        max_workers: Optional[int] = None,
    ):
        self._engine = engine
        self._attendance = attendance_repo
        self._max_workers = max(1, int(max_workers or engine.settings.scan_max_workers))

    def today(self) -> date:
        return to_local(self._engine.now(), self._engine.settings.timezone).date()

    def scan(self, profile: CheckProfile, *, today: Optional[date] = None) -> ScanReport:
        today = today or self.today()
        work_dates = profile.work_dates(today)

        candidates = self._attendance.list_candidates(
            work_dates=work_dates,
            include_roles=profile.include_roles or None,
            exclude_roles=profile.exclude_roles or None,
        )
        exclusions: Exclusions = self._engine.cleared_exclusions() if profile.honour_clears else frozenset()

        def evaluate(candidate: ScanCandidate):
            try:
                return candidate, self._engine.reconcile_day(
                    candidate.user_id,
                    candidate.work_date,
                    ignore_before_0830=profile.ignore_before_0830,
                    exclusions=exclusions,
                ), None
            except DataAccessFailure as e:
                log.warning(
                    "scan_day_failed",
                    profile=profile.name,
                    user_id=candidate.user_id,
                    work_date=candidate.work_date.isoformat(),
                    error=str(e),
                )
                return candidate, None, ScanFailure(candidate.user_id, candidate.work_date, str(e))

        if self._max_workers > 1 and len(candidates) > 1:
            with ThreadPoolExecutor(max_workers=self._max_workers, thread_name_prefix="issue-scan") as pool:
                outcomes = list(pool.map(evaluate, candidates))
        else:
            outcomes = [evaluate(c) for c in candidates]

        report = self._build_report(
            profile,
            work_dates,
            outcomes,
            self._engine.settings.mismatch_threshold_minutes,
        )
        log.info(
            "scan_finished",
            profile=profile.name,
            work_dates=[d.isoformat() for d in work_dates],
            evaluated=report.evaluated,
            flagged=len(report.flagged),
            failures=len(report.failures),
        )
        return report

    @staticmethod
    def _build_report(
        profile: CheckProfile,
        work_dates: Sequence[date],
        outcomes,
        mismatch_threshold_minutes: int,
    ) -> ScanReport:
        names: dict[int, str] = {}
        hits: dict[int, list[ReconciliationResult]] = {}
        failures: list[ScanFailure] = []
        evaluated = 0

        for candidate, result, failure in outcomes:
            if failure is not None:
                failures.append(failure)
                continue
            if result is None:
                continue
            evaluated += 1
            if profile.flags(result, mismatch_threshold_minutes):
                names[candidate.user_id] = candidate.user_name
                bucket = hits.setdefault(candidate.user_id, [])
                if all(r.work_date != result.work_date for r in bucket):
                    bucket.append(result)

        flagged = []
        for user_id in sorted(hits):
            results = sorted(hits[user_id], key=lambda r: r.work_date, reverse=True)
            flagged.append(
                FlaggedUser(
                    user_id=user_id,
                    user_name=names[user_id],
                    dates=tuple(r.work_date for r in results),
                    results=tuple(results),
                )
            )

        return ScanReport(
            profile=profile.name,
            work_dates=tuple(work_dates),
            evaluated=evaluated,
            flagged=tuple(flagged),
            failures=tuple(failures),
        )
