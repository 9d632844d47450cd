from __future__ import annotations

from ...attendance.worktime import round_half_up
from ...common.datetime_utils import days_in_month, parse_iso_date
from ...core.enums import AttendanceMode, AttendanceStatus, LeaveType
from ..model import PayrollInputs, PayrollSummary
from .base import PayrollCalculator

_PRESENT_STATUSES = frozenset({AttendanceStatus.PRESENT, AttendanceStatus.COMPLETED})


def _num(value: float) -> str:
    return f"{value:g}"


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: present + holidays + paid leave + half days x 0.5.

    Per-day salary is basic / days in the month of the window start, for the
    whole window. The calculation is pure: same inputs, same summary.
    """

    def compute(self, inputs: PayrollInputs) -> PayrollSummary:
        present = half = wfh = 0
        for rec in inputs.attendance:
            if inputs.joining_date and parse_iso_date(rec.work_date) < inputs.joining_date:
                continue
            if rec.status == AttendanceStatus.HALF_DAY:
                half += 1
            elif rec.status in _PRESENT_STATUSES:
                present += 1
            # Tracked on its own; a WFH day is usually also a present day.
            if rec.mode == AttendanceMode.WFH:
                wfh += 1

        paid_leave = unpaid_leave = 0.0
        for leave in inputs.approved_leaves:
            days = 0.5 if leave.is_half_day else float(leave.days_count)
            if leave.leave_type.is_paid:
                paid_leave += days
            elif leave.leave_type == LeaveType.UNPAID:
                unpaid_leave += days

        holidays = int(inputs.holiday_count)
        payable = present + holidays + paid_leave + half * 0.5

        basic = float(inputs.basic_salary or 0)
        per_day = basic / days_in_month(inputs.window_start) if basic > 0 else 0.0
        estimated = int(round_half_up(per_day * payable))

        breakdown = (
            f"Present {present} + Holidays {holidays} + Paid leave {_num(paid_leave)}"
            f" + Half days {half} x 0.5 = {_num(payable)} payable days"
            f" x {per_day:.2f}/day = {estimated}"
        )

        return PayrollSummary(
            user_id=inputs.user_id,
            window_start=inputs.window_start,
            window_end=inputs.window_end,
            present_days=present,
            half_days=half,
            wfh_days=wfh,
            holiday_count=holidays,
            paid_leave_days=paid_leave,
            unpaid_leave_days=unpaid_leave,
            total_payable_days=payable,
            basic_salary=basic,
            per_day_salary=per_day,
            estimated_salary=estimated,
            breakdown=breakdown,
        )
