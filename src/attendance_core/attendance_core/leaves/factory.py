from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import LeaveType
from .strategies.base import LeaveDayStrategy
from .strategies.paid_strategy import PaidLeaveStrategy
from .strategies.unpaid_strategy import UnpaidLeaveStrategy
from .strategies.wfh_strategy import WorkFromHomeStrategy


@dataclass
class LeaveStrategyFactory:
    """Factory Pattern: choose the attendance strategy for a leave type."""

    def for_leave_type(self, leave_type: LeaveType) -> LeaveDayStrategy:
        if leave_type == LeaveType.UNPAID:
            return UnpaidLeaveStrategy()
        if leave_type == LeaveType.WFH:
            return WorkFromHomeStrategy()
        return PaidLeaveStrategy()
