from __future__ import annotations

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_role(current_role: Role, allowed: frozenset[Role] | set[Role]) -> None:
    if current_role not in allowed:
        raise AuthorizationError("You do not have permission for this action")
