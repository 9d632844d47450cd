from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import days_inclusive, local_date, parse_iso_date, utc_now
from ..common.validators import clamp_str, require_non_empty
from ..companies.model import Company
from ..companies.repository import CompanyRepository
from ..core.constants import MAX_LEAVE_REASON_LENGTH, MAX_REMARKS_LENGTH
from ..core.enums import DayType, LeaveType, RequestStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..core.results import OperationResult, RejectionReason
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .model import LeaveRequest
from .reconciler import LeaveReconciler, ReconcileSummary
from .repository import LeaveRepository

logger = logging.getLogger(__name__)

_LEAVE_TYPE_ALIASES = {
    "paid": LeaveType.PAID,
    "paid leave": LeaveType.PAID,
    "sick": LeaveType.SICK,
    "sick leave": LeaveType.SICK,
    "casual": LeaveType.CASUAL,
    "casual leave": LeaveType.CASUAL,
    "unpaid": LeaveType.UNPAID,
    "unpaid leave": LeaveType.UNPAID,
    "wfh": LeaveType.WFH,
    "work from home": LeaveType.WFH,
}


def normalize_leave_type(value: object) -> LeaveType:
    """Case-insensitive leave type lookup; blank means Paid."""
    text = str(value or "").strip().lower()
    if not text:
        return LeaveType.PAID
    try:
        return _LEAVE_TYPE_ALIASES[text]
    except KeyError:
        raise ValidationError(f"Unknown leave type: {value!r}")


def normalize_day_type(value: object) -> DayType:
    text = str(value or "").strip().lower().replace("-", " ").replace("_", " ")
    if not text or text in {"full day", "full", "fullday"}:
        return DayType.FULL_DAY
    if text in {"half day", "half", "halfday"}:
        return DayType.HALF_DAY
    raise ValidationError(f"Unknown day type: {value!r}")


@dataclass(frozen=True)
class LeaveDecision:
    leave: LeaveRequest
    reconciliation: Optional[ReconcileSummary] = None

    def to_dict(self) -> dict:
        out = {"leave": self.leave.to_dict()}
        if self.reconciliation is not None:
            out["attendance_created"] = self.reconciliation.created_count
            out["attendance_skipped"] = self.reconciliation.skipped_count
        return out


class LeaveService:
    def __init__(
        self,
        leaves: LeaveRepository,
        employees: EmployeeRepository,
        companies: CompanyRepository,
        reconciler: LeaveReconciler,
    ):
        self._leaves = leaves
        self._employees = employees
        self._companies = companies
        self._reconciler = reconciler

    def _employee(self, user_id: int) -> Employee:
        employee = self._employees.get_by_id(int(user_id))
        if not employee:
            raise NotFoundError("User not found")
        return employee

    def _company(self, company_id: int) -> Company:
        company = self._companies.get_by_id(int(company_id))
        if not company:
            raise NotFoundError("Company not linked")
        return company

    def _submit(self, leave: LeaveRequest) -> OperationResult[LeaveRequest]:
        existing = self._leaves.find_blocking_overlap(leave.user_id, leave.start_date, leave.end_date)
        if existing:
            return OperationResult.rejected(
                RejectionReason.LEAVE_OVERLAP,
                f"You already have a {existing.status.value} request for overlapping dates.",
                request_id=existing.request_id,
            )

        request_id = self._leaves.create(leave)
        logger.info(
            "leave request %s filed by user %s: %s %s..%s",
            request_id,
            leave.user_id,
            leave.leave_type.value,
            leave.start_date,
            leave.end_date,
        )
        return OperationResult.success(replace(leave, request_id=request_id), "Request Submitted Successfully")

    def apply_leave(
        self,
        *,
        user_id: int,
        leave_type: str,
        start_date: str,
        end_date: str,
        reason: str,
        day_type: str = "",
    ) -> OperationResult[LeaveRequest]:
        employee = self._employee(user_id)
        kind = normalize_leave_type(leave_type)
        day_kind = normalize_day_type(day_type)
        start = parse_iso_date(start_date)
        end = parse_iso_date(end_date)
        reason = require_non_empty(reason, "Reason")

        if end < start:
            raise ValidationError("End Date cannot be before Start Date")
        if day_kind == DayType.HALF_DAY and start != end:
            raise ValidationError("Half Day leave must be for a single date")

        return self._submit(
            LeaveRequest(
                user_id=employee.user_id,
                company_id=employee.company_id,
                leave_type=kind,
                day_type=day_kind,
                start_date=start,
                end_date=end,
                days_count=0.5 if day_kind == DayType.HALF_DAY else float(days_inclusive(start, end)),
                reason=clamp_str(reason, MAX_LEAVE_REASON_LENGTH),
            )
        )

    def submit_wfh_request(
        self,
        *,
        user_id: int,
        reason: str = "",
        now: datetime | None = None,
    ) -> OperationResult[LeaveRequest]:
        """One-day WFH request for the company-local today."""
        employee = self._employee(user_id)
        company = self._company(employee.company_id)
        today = local_date(now or utc_now(), company.time_zone)

        return self._submit(
            LeaveRequest(
                user_id=employee.user_id,
                company_id=employee.company_id,
                leave_type=LeaveType.WFH,
                day_type=DayType.FULL_DAY,
                start_date=today,
                end_date=today,
                days_count=1.0,
                reason=clamp_str((reason or "").strip() or "Work From Home Request", MAX_LEAVE_REASON_LENGTH),
            )
        )

    def list_mine(self, *, user_id: int) -> Sequence[LeaveRequest]:
        return self._leaves.list_for_user(int(user_id))

    def list_company(
        self,
        *,
        current_role: Role,
        company_id: Optional[int],
        status: Optional[RequestStatus] = None,
    ) -> Sequence[LeaveRequest]:
        if not current_role.is_hr:
            raise AuthorizationError("HR Access Required")
        scope = None if current_role == Role.SUPER_ADMIN else company_id
        if scope is None and current_role != Role.SUPER_ADMIN:
            raise AuthorizationError("Company missing")
        return self._leaves.list_for_company(scope, status=status)

    def _load_for_decision(self, *, current_role: Role, actor_company_id: Optional[int], request_id: int) -> LeaveRequest:
        if not current_role.is_hr:
            raise AuthorizationError("HR Access Required")
        leave = self._leaves.get_by_id(int(request_id))
        if not leave:
            raise NotFoundError("Leave not found")
        if current_role != Role.SUPER_ADMIN and leave.company_id != actor_company_id:
            raise AuthorizationError("Access denied")
        return leave

    def approve(
        self,
        *,
        current_role: Role,
        actor_id: int,
        actor_company_id: Optional[int],
        request_id: int,
        now: datetime | None = None,
    ) -> OperationResult[LeaveDecision]:
        leave = self._load_for_decision(current_role=current_role, actor_company_id=actor_company_id, request_id=request_id)
        if leave.status != RequestStatus.PENDING:
            return OperationResult.rejected(RejectionReason.REQUEST_ALREADY_DECIDED, "Request already processed")

        action_at = now or utc_now()
        decided = self._leaves.decide(
            leave.request_id,
            status=RequestStatus.APPROVED,
            action_by=int(actor_id),
            action_at=action_at,
        )
        if not decided:
            return OperationResult.rejected(RejectionReason.REQUEST_ALREADY_DECIDED, "Request already processed")

        approved = replace(leave, status=RequestStatus.APPROVED, action_by=int(actor_id), action_at=action_at, reject_reason="")
        company = self._company(leave.company_id)
        summary = self._reconciler.reconcile(approved, time_zone=company.time_zone)
        return OperationResult.success(LeaveDecision(leave=approved, reconciliation=summary), "Request Approved successfully")

    def reject(
        self,
        *,
        current_role: Role,
        actor_id: int,
        actor_company_id: Optional[int],
        request_id: int,
        reject_reason: str = "",
        now: datetime | None = None,
    ) -> OperationResult[LeaveDecision]:
        leave = self._load_for_decision(current_role=current_role, actor_company_id=actor_company_id, request_id=request_id)
        if leave.status != RequestStatus.PENDING:
            return OperationResult.rejected(RejectionReason.REQUEST_ALREADY_DECIDED, "Request already processed")

        action_at = now or utc_now()
        note = clamp_str((reject_reason or "").strip(), MAX_REMARKS_LENGTH)
        decided = self._leaves.decide(
            leave.request_id,
            status=RequestStatus.REJECTED,
            action_by=int(actor_id),
            action_at=action_at,
            reject_reason=note,
        )
        if not decided:
            return OperationResult.rejected(RejectionReason.REQUEST_ALREADY_DECIDED, "Request already processed")

        rejected = replace(leave, status=RequestStatus.REJECTED, action_by=int(actor_id), action_at=action_at, reject_reason=note)
        return OperationResult.success(LeaveDecision(leave=rejected), "Request Rejected successfully")
