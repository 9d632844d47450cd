from __future__ import annotations

from datetime import date

from ...core.constants import FULL_DAY_HOURS
from ...core.enums import AttendanceMode, AttendanceStatus
from ..model import LeaveRequest
from .base import LeaveDayOutcome, LeaveDayStrategy, synthetic_window


class WorkFromHomeStrategy(LeaveDayStrategy):
    """Approved WFH counts as a full present day, whatever the day type."""

    def outcome_for(self, *, leave: LeaveRequest, day: date, time_zone: str) -> LeaveDayOutcome:
        punch_in, punch_out = synthetic_window(day, time_zone)
        return LeaveDayOutcome(
            status=AttendanceStatus.PRESENT,
            mode=AttendanceMode.WFH,
            net_work_hours=FULL_DAY_HOURS,
            punch_in_time=punch_in,
            punch_out_time=punch_out,
            remarks="WFH Approved",
        )
