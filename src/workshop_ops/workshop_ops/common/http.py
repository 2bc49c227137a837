from __future__ import annotations

import dataclasses
from datetime import date, datetime
from enum import Enum
from functools import wraps
from typing import Any

import structlog
from flask import jsonify, session

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, DataAccessFailure, ValidationError

log = structlog.get_logger(__name__)


def to_jsonable(value: Any) -> Any:
    """Dataclasses, enums and dates to plain JSON types (dates as ISO strings)."""

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        out = {f.name: to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
        to_dict = getattr(value, "to_dict", None)
        if callable(to_dict):
            out.update(to_jsonable(to_dict()))
        return out
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_jsonable(v) for v in value]
    return value


def ok(data: Any = None, status: int = 200):
    body: dict = {"success": True}
    if data is not None:
        body["data"] = to_jsonable(data)
    return jsonify(body), status


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def current_role() -> Role:
    try:
        return Role(session.get("role"))
    except ValueError as e:
        raise AuthorizationError("Unknown role") from e


def current_user_id() -> int:
    return int(session["user_id"])


def json_endpoint(view):
    """Require a session and map domain errors to JSON responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Login required", 401)
        try:
            return view(*args, **kwargs)
        except ValidationError as e:
            return fail(str(e), 400)
        except AuthorizationError as e:
            return fail(str(e), 403)
        except DataAccessFailure as e:
            log.error("request_data_access_failed", endpoint=view.__name__, error=str(e))
            return fail("Database is unavailable", 503)

    return wrapper
