from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Iterable, Optional

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import format_date, parse_iso_date
from ..common.validators import clamp_str, require_non_empty
from ..core.constants import MAX_HOLIDAY_REASON_LENGTH
from ..core.enums import AttendanceMode, AttendanceSource, AttendanceStatus, Role
from ..core.exceptions import AuthorizationError, DuplicateRecordError, ValidationError
from ..core.results import OperationResult, RejectionReason
from ..employees.repository import EmployeeRepository
from .model import Holiday
from .repository import HolidayRepository

logger = logging.getLogger(__name__)

HOLIDAY_EXISTS_MESSAGE = "Holiday already exists for this date"


@dataclass(frozen=True)
class HolidayMarking:
    holiday: Holiday
    created: list[int] = field(default_factory=list)
    skipped: list[int] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "holiday": self.holiday.to_dict(),
            "attendance_created": len(self.created),
            "attendance_skipped": len(self.skipped),
        }


class HolidayService:
    def __init__(self, holidays: HolidayRepository, attendance: AttendanceRepository, employees: EmployeeRepository):
        self._holidays = holidays
        self._attendance = attendance
        self._employees = employees

    def mark_holiday(
        self,
        *,
        current_role: Role,
        actor_company_id: Optional[int],
        holiday_date: str,
        reason: str,
        company_id: Optional[int] = None,
        employee_ids: Optional[Iterable[int]] = None,
    ) -> OperationResult[HolidayMarking]:
        """Register a company holiday and mark it on the attendance sheet.

        ``employee_ids`` defaults to every active employee of the company and
        may only name those employees.
        Employees who already have a record for that date keep it.
        """
        if not current_role.is_hr:
            raise AuthorizationError("HR Access Required")

        target_company = company_id if current_role == Role.SUPER_ADMIN else actor_company_id
        if target_company is None:
            raise ValidationError("Company missing")

        day = parse_iso_date(holiday_date)
        reason = clamp_str(require_non_empty(reason, "Reason"), MAX_HOLIDAY_REASON_LENGTH)

        active = set(self._employees.list_active_ids(int(target_company)))
        if employee_ids is None:
            targets = sorted(active)
        else:
            targets = [int(user_id) for user_id in employee_ids]
            foreign = sorted(set(targets) - active)
            if foreign:
                raise ValidationError(f"Not active employees of company {target_company}: {foreign}")

        if self._holidays.get_for_date(int(target_company), day):
            return OperationResult.rejected(RejectionReason.HOLIDAY_EXISTS, HOLIDAY_EXISTS_MESSAGE)

        holiday = Holiday(company_id=int(target_company), holiday_date=day, reason=reason)
        try:
            holiday_id = self._holidays.create(holiday)
        except DuplicateRecordError:
            return OperationResult.rejected(RejectionReason.HOLIDAY_EXISTS, HOLIDAY_EXISTS_MESSAGE)
        holiday = replace(holiday, holiday_id=holiday_id)

        work_date = format_date(day)
        marking = HolidayMarking(holiday=holiday)
        for user_id in targets:
            if self._attendance.get_for_user_and_date(user_id, work_date):
                marking.skipped.append(user_id)
                continue
            record = AttendanceRecord(
                user_id=user_id,
                company_id=int(target_company),
                work_date=work_date,
                status=AttendanceStatus.HOLIDAY,
                mode=AttendanceMode.HOLIDAY,
                source=AttendanceSource.SYSTEM,
                remarks=reason,
            )
            try:
                self._attendance.create(record)
            except DuplicateRecordError:
                marking.skipped.append(user_id)
                continue
            marking.created.append(user_id)

        logger.info(
            "holiday %s marked for company %s: created=%d skipped=%d",
            work_date,
            target_company,
            len(marking.created),
            len(marking.skipped),
        )
        return OperationResult.success(marking, "Holiday marked & Attendance updated")

    def list_between(self, company_id: int, start: str, end: str) -> list[Holiday]:
        return list(self._holidays.list_between(int(company_id), parse_iso_date(start), parse_iso_date(end)))
