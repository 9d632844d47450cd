"""JSON helpers shared by the feature controllers.

Identity (``user_id``, ``role``, ``company_id``) comes from the Flask session
and is trusted as issued by the identity provider.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, Optional

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..core.results import OperationResult, RejectionKind

logger = logging.getLogger(__name__)

_STATUS_BY_KIND = {
    RejectionKind.ALREADY_EXISTS: 400,
    RejectionKind.FACE_MISMATCH: 400,
    RejectionKind.PRECONDITION_FAILED: 400,
    RejectionKind.GEOFENCE_VIOLATION: 403,
}


@dataclass(frozen=True)
class Identity:
    user_id: int
    role: Role
    company_id: Optional[int]


def current_identity() -> Identity:
    company_id = session.get("company_id")
    return Identity(
        user_id=int(session["user_id"]),
        role=Role(session.get("role", Role.EMPLOYEE.value)),
        company_id=int(company_id) if company_id is not None else None,
    )


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def pick(body: dict, *names: str, default: Any = None) -> Any:
    """First non-null value among ``names`` (snake_case and camelCase aliases)."""
    for name in names:
        if body.get(name) is not None:
            return body[name]
    return default


def error(message: str, status: int, **extra: Any):
    return jsonify({"message": message, **extra}), status


def login_required(view: Callable):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error("Unauthorized", 401)
        return view(*args, **kwargs)

    return wrapper


def hr_required(view: Callable):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error("Unauthorized", 401)
        try:
            role = Role(session.get("role"))
        except ValueError:
            return error("HR Access Required", 403)
        if not role.is_hr:
            return error("HR Access Required", 403)
        return view(*args, **kwargs)

    return wrapper


def handle_errors(failure_message: str):
    """Map domain exceptions to 4xx; anything else is logged and becomes a 500."""

    def decorate(view: Callable):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except ValidationError as e:
                return error(str(e), 400)
            except AuthorizationError as e:
                return error(str(e), 403)
            except NotFoundError as e:
                return error(str(e), 404)
            except Exception:
                logger.exception("%s failed", view.__name__)
                return error(failure_message, 500)

        return wrapper

    return decorate


def result_response(result: OperationResult, payload: Callable[[Any], dict], *, success_status: int = 200):
    if result.ok:
        return jsonify({"message": result.message, **payload(result.value)}), success_status
    status = _STATUS_BY_KIND.get(result.kind, 400)
    return error(result.message, status, reason=result.reason.value, **result.details)
