from __future__ import annotations

from typing import Optional, Sequence

import structlog

from ..common.time_of_day import normalize_end, require_time_of_day
from ..common.validators import require_non_empty, require_role
from ..core.enums import Role
from ..core.exceptions import ValidationError
from .catalog import BreakCatalog
from .model import BreakWindow
from .repository import BreakRepository

log = structlog.get_logger(__name__)

_ADMIN_ONLY = frozenset({Role.ADMIN})


class BreakService:
    def __init__(self, breaks: BreakRepository):
        self._breaks = breaks

    def snapshot(self) -> BreakCatalog:
        """Fresh catalog of the active break windows."""
        return BreakCatalog(self._breaks.fetch_active_break_windows())

    def list_all(self) -> Sequence[BreakWindow]:
        return self._breaks.list_all()

    def create(
        self,
        *,
        current_role: Role,
        name: str,
        start_time: str,
        end_time: str,
        duration_minutes: Optional[int] = None,
        is_active: bool = True,
    ) -> int:
        require_role(current_role, _ADMIN_ONLY)

        name = require_non_empty(name, "name")
        start = require_time_of_day(start_time, "start_time")
        end = require_time_of_day(end_time, "end_time")
        duration = self._resolve_duration(start, end, duration_minutes)

        break_id = self._breaks.create(
            name=name,
            start_time=start_time.strip()[:5],
            end_time=end_time.strip()[:5],
            duration_minutes=duration,
            is_active=bool(is_active),
        )
        log.info("break_window_created", break_id=break_id, name=name, start_time=start_time, end_time=end_time)
        return break_id

    def update(
        self,
        *,
        current_role: Role,
        break_id: int,
        name: Optional[str] = None,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
        duration_minutes: Optional[int] = None,
        is_active: Optional[bool] = None,
    ) -> None:
        require_role(current_role, _ADMIN_ONLY)

        existing = self._breaks.get_by_id(int(break_id))
        if not existing:
            raise ValidationError("Break window not found")

        fields: dict = {}
        if name is not None:
            fields["name"] = require_non_empty(name, "name")
        if start_time is not None:
            require_time_of_day(start_time, "start_time")
            fields["start_time"] = start_time.strip()[:5]
        if end_time is not None:
            require_time_of_day(end_time, "end_time")
            fields["end_time"] = end_time.strip()[:5]
        if is_active is not None:
            fields["is_active"] = bool(is_active)

        if duration_minutes is not None:
            fields["duration_minutes"] = self._resolve_duration(0, 0, duration_minutes)
        elif "start_time" in fields or "end_time" in fields:
            start = require_time_of_day(fields.get("start_time", existing.start_time), "start_time")
            end = require_time_of_day(fields.get("end_time", existing.end_time), "end_time")
            fields["duration_minutes"] = self._resolve_duration(start, end, None)

        if not fields:
            return

        if not self._breaks.update(break_id=int(break_id), fields=fields):
            raise ValidationError("Updating break window failed")
        log.info("break_window_updated", break_id=int(break_id), fields=sorted(fields))

    def delete(self, *, current_role: Role, break_id: int) -> None:
        require_role(current_role, _ADMIN_ONLY)

        if not self._breaks.get_by_id(int(break_id)):
            raise ValidationError("Break window not found")
        if not self._breaks.delete(break_id=int(break_id)):
            raise ValidationError("Deleting break window failed")
        log.info("break_window_deleted", break_id=int(break_id))

    @staticmethod
    def _resolve_duration(start: int, end: int, duration_minutes: Optional[int]) -> int:
        if duration_minutes is None:
            return normalize_end(start, end) - start
        if int(duration_minutes) < 0:
            raise ValidationError("duration_minutes must not be negative")
        return int(duration_minutes)
