"""Structured outcomes for expected domain-rule rejections.

Services return an ``OperationResult`` instead of raising when a rule such as
"already marked for today" rejects a request. Only infrastructure failures
propagate as exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


class RejectionKind(str, Enum):
    ALREADY_EXISTS = "ALREADY_EXISTS"
    FACE_MISMATCH = "FACE_MISMATCH"
    GEOFENCE_VIOLATION = "GEOFENCE_VIOLATION"
    PRECONDITION_FAILED = "PRECONDITION_FAILED"


class RejectionReason(str, Enum):
    ALREADY_MARKED = "already-marked"
    FACE_REQUIRED = "face-required"
    FACE_MISMATCH = "face-mismatch"
    OUTSIDE_GEOFENCE = "outside-geofence"
    MISSING_REPORT = "missing-report"
    NO_ACTIVE_SESSION = "no-active-session"
    ALREADY_ON_BREAK = "already-on-break"
    COMPANY_INACTIVE = "company-inactive"
    PHOTO_TOO_LARGE = "photo-too-large"
    LEAVE_OVERLAP = "leave-overlap"
    HOLIDAY_EXISTS = "holiday-exists"
    REQUEST_ALREADY_DECIDED = "request-already-decided"

    @property
    def kind(self) -> RejectionKind:
        return _KIND_BY_REASON.get(self, RejectionKind.PRECONDITION_FAILED)


_KIND_BY_REASON = {
    RejectionReason.ALREADY_MARKED: RejectionKind.ALREADY_EXISTS,
    RejectionReason.LEAVE_OVERLAP: RejectionKind.ALREADY_EXISTS,
    RejectionReason.HOLIDAY_EXISTS: RejectionKind.ALREADY_EXISTS,
    RejectionReason.FACE_MISMATCH: RejectionKind.FACE_MISMATCH,
    RejectionReason.OUTSIDE_GEOFENCE: RejectionKind.GEOFENCE_VIOLATION,
}


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    ok: bool
    value: Optional[T] = None
    reason: Optional[RejectionReason] = None
    message: str = ""
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def kind(self) -> Optional[RejectionKind]:
        return self.reason.kind if self.reason else None

    @classmethod
    def success(cls, value: T, message: str = "") -> "OperationResult[T]":
        return cls(ok=True, value=value, message=message)

    @classmethod
    def rejected(cls, reason: RejectionReason, message: str, **details: Any) -> "OperationResult[T]":
        return cls(ok=False, reason=reason, message=message, details=dict(details))
