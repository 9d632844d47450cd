from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..leaves.model import LeaveRequest


@dataclass(frozen=True)
class PayrollInputs:
    """Everything the accrual needs for one employee and one window."""

    user_id: int
    basic_salary: float
    window_start: date
    window_end: date
    attendance: Sequence[AttendanceRecord] = field(default_factory=tuple)
    holiday_count: int = 0
    approved_leaves: Sequence[LeaveRequest] = field(default_factory=tuple)
    joining_date: Optional[date] = None


@dataclass(frozen=True)
class PayrollSummary:
    user_id: int
    window_start: date
    window_end: date
    present_days: int
    half_days: int
    wfh_days: int
    holiday_count: int
    paid_leave_days: float
    unpaid_leave_days: float
    total_payable_days: float
    basic_salary: float
    per_day_salary: float
    estimated_salary: int
    breakdown: str = ""

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "start_date": self.window_start.strftime("%Y-%m-%d"),
            "end_date": self.window_end.strftime("%Y-%m-%d"),
            "present_days": self.present_days,
            "half_days": self.half_days,
            "wfh_days": self.wfh_days,
            "holidays": self.holiday_count,
            "paid_leave_days": self.paid_leave_days,
            "unpaid_leave_days": self.unpaid_leave_days,
            "total_payable_days": self.total_payable_days,
            "basic_salary": self.basic_salary,
            "per_day_salary": round(self.per_day_salary, 2),
            "estimated_salary": self.estimated_salary,
            "breakdown": self.breakdown,
        }
