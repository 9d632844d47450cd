from __future__ import annotations

from datetime import date

from ...core.enums import AttendanceMode, AttendanceStatus
from ..model import LeaveRequest
from .base import LeaveDayOutcome, LeaveDayStrategy


class UnpaidLeaveStrategy(LeaveDayStrategy):
    def outcome_for(self, *, leave: LeaveRequest, day: date, time_zone: str) -> LeaveDayOutcome:
        return LeaveDayOutcome(
            status=AttendanceStatus.ABSENT,
            mode=AttendanceMode.UNPAID_LEAVE,
            net_work_hours=0.0,
            remarks="Unpaid Leave Approved",
        )
