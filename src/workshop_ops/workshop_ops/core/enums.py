from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization and scan filtering."""

    FIELD_WORKER = "field_worker"
    SALES_OFFICE = "sales_office"
    SUB_ADMIN = "sub_admin"
    ADMIN = "admin"
    EXTERNAL = "external"


class Classification(str, Enum):
    """Outcome of reconciling one worker-day."""

    OK = "ok"
    UNDER_REPORT = "under_report"
    OVER_REPORT = "over_report"
    MISSING_REPORT = "missing_report"


class FlagRule(str, Enum):
    """Which part of a reconciliation result a scan reports on."""

    DISCREPANCY = "discrepancy"
    EXCESSIVE_WORK = "excessive_work"
    ATTENDANCE_GAP = "attendance_gap"


MANAGER_ROLES = frozenset({Role.ADMIN, Role.SUB_ADMIN})
