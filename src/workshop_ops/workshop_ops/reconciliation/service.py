from __future__ import annotations

from datetime import date
from typing import Sequence

import structlog

from ..common.validators import require_role
from ..core.enums import MANAGER_ROLES, Role
from .clears_repository import IssueClearRepository
from .model import IssueClear

log = structlog.get_logger(__name__)


class IssueClearService:
    def __init__(self, clears: IssueClearRepository):
        self._clears = clears

    def clear_issue(self, *, current_user_id: int, user_id: int, work_date: date) -> bool:
        """Mark a worker-day as reviewed. Returns False if it was already cleared."""

        if self._clears.exists(user_id=int(user_id), work_date=work_date):
            return False
        clear_id = self._clears.create(user_id=int(user_id), work_date=work_date, cleared_by=int(current_user_id))
        log.info(
            "work_record_issue_cleared",
            clear_id=clear_id,
            user_id=int(user_id),
            work_date=work_date.isoformat(),
            cleared_by=int(current_user_id),
        )
        return True

    def list_clears(self, *, current_role: Role) -> Sequence[IssueClear]:
        require_role(current_role, MANAGER_ROLES)
        return self._clears.list_all()
