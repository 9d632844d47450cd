from __future__ import annotations

from datetime import date

from ...core.constants import FULL_DAY_HOURS, HALF_DAY_HOURS
from ...core.enums import AttendanceMode, AttendanceStatus
from ..model import LeaveRequest
from .base import LeaveDayOutcome, LeaveDayStrategy, synthetic_window


class PaidLeaveStrategy(LeaveDayStrategy):
    """Paid, Sick and Casual leave."""

    def outcome_for(self, *, leave: LeaveRequest, day: date, time_zone: str) -> LeaveDayOutcome:
        punch_in, punch_out = synthetic_window(day, time_zone)
        if leave.is_half_day:
            status, hours = AttendanceStatus.HALF_DAY, HALF_DAY_HOURS
        else:
            status, hours = AttendanceStatus.ON_LEAVE, FULL_DAY_HOURS
        return LeaveDayOutcome(
            status=status,
            mode=AttendanceMode.PAID_LEAVE,
            net_work_hours=hours,
            punch_in_time=punch_in,
            punch_out_time=punch_out,
            remarks=f"Approved: {leave.leave_type.value}",
        )
