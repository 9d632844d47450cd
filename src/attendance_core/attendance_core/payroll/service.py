from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import format_date, local_date, month_range, parse_iso_date, utc_now
from ..companies.repository import CompanyRepository
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..holidays.repository import HolidayRepository
from ..leaves.repository import LeaveRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PayrollInputs, PayrollSummary


class PayrollService:
    """Loads one employee's window and hands it to the calculator."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        holidays: HolidayRepository,
        leaves: LeaveRepository,
        employees: EmployeeRepository,
        companies: CompanyRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._attendance = attendance
        self._holidays = holidays
        self._leaves = leaves
        self._employees = employees
        self._companies = companies
        self._calculator = calculator or StandardPayrollCalculator()

    def payroll_summary(
        self,
        *,
        current_role: Role,
        actor_company_id: Optional[int],
        user_id: int,
        start: str = "",
        end: str = "",
        now: datetime | None = None,
    ) -> PayrollSummary:
        if not current_role.is_hr:
            raise AuthorizationError("HR Access Required")

        employee = self._employees.get_by_id(int(user_id))
        if not employee:
            raise NotFoundError("User not found")
        if current_role != Role.SUPER_ADMIN and employee.company_id != actor_company_id:
            raise AuthorizationError("Access denied")

        company = self._companies.get_by_id(employee.company_id)
        if not company:
            raise NotFoundError("Company not linked")

        # Default window: the current month in the company's timezone.
        default_start, default_end = month_range(local_date(now or utc_now(), company.time_zone))
        window_start = parse_iso_date(start) if start else default_start
        window_end = parse_iso_date(end) if end else default_end
        if window_end < window_start:
            raise ValidationError("Invalid date range")

        inputs = PayrollInputs(
            user_id=employee.user_id,
            basic_salary=employee.basic_salary,
            window_start=window_start,
            window_end=window_end,
            attendance=self._attendance.list_for_user_between(
                employee.user_id, format_date(window_start), format_date(window_end)
            ),
            holiday_count=len(self._holidays.list_between(employee.company_id, window_start, window_end)),
            approved_leaves=self._leaves.list_approved_starting_from(employee.user_id, window_start),
            joining_date=employee.joining_date,
        )
        return self._calculator.compute(inputs)
