from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import DayType, LeaveType, RequestStatus


@dataclass(frozen=True)
class LeaveRequest:
    """Leave / WFH request over an inclusive calendar-date range."""

    user_id: int
    company_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: str
    day_type: DayType = DayType.FULL_DAY
    days_count: float = 1.0
    status: RequestStatus = RequestStatus.PENDING
    created_at: Optional[datetime] = None
    action_by: Optional[int] = None
    action_at: Optional[datetime] = None
    reject_reason: str = ""
    request_id: Optional[int] = field(default=None, compare=False)

    @property
    def is_half_day(self) -> bool:
        return self.day_type == DayType.HALF_DAY

    @property
    def blocks_new_requests(self) -> bool:
        return self.status in {RequestStatus.PENDING, RequestStatus.APPROVED}

    def overlaps(self, start: date, end: date) -> bool:
        return self.start_date <= end and self.end_date >= start

    def to_dict(self) -> dict:
        return {
            "request_id": self.request_id,
            "user_id": self.user_id,
            "company_id": self.company_id,
            "leave_type": self.leave_type.value,
            "day_type": self.day_type.value,
            "start_date": self.start_date.strftime("%Y-%m-%d"),
            "end_date": self.end_date.strftime("%Y-%m-%d"),
            "days_count": self.days_count,
            "reason": self.reason,
            "status": self.status.value,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "action_by": self.action_by,
            "action_at": self.action_at.isoformat() if self.action_at else None,
            "reject_reason": self.reject_reason,
        }
