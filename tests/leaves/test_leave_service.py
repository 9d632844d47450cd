from datetime import date, datetime, timezone

import pytest

from src.attendance_core.attendance_core.container import assemble
from src.attendance_core.attendance_core.core.enums import AttendanceStatus, DayType, LeaveType, RequestStatus, Role
from src.attendance_core.attendance_core.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.attendance_core.attendance_core.core.results import RejectionReason
from src.attendance_core.attendance_core.leaves.model import LeaveRequest
from src.attendance_core.attendance_core.leaves.service import normalize_day_type, normalize_leave_type
from tests.fakes import (
    InMemoryAttendance,
    InMemoryCompanies,
    InMemoryEmployees,
    InMemoryHolidays,
    InMemoryLeaves,
    make_company,
    make_employee,
)

HR = dict(current_role=Role.COMPANY_ADMIN, actor_id=1, actor_company_id=1)


def _build():
    leaves = InMemoryLeaves()
    attendance = InMemoryAttendance()
    container = assemble(
        employees_repo=InMemoryEmployees([make_employee(7, 1), make_employee(8, 2)]),
        companies_repo=InMemoryCompanies([make_company(1), make_company(2)]),
        attendance_repo=attendance,
        leaves_repo=leaves,
        holidays_repo=InMemoryHolidays(),
    )
    return container.leave_service, leaves, attendance


def _apply(service, start, end, **overrides):
    kwargs = dict(user_id=7, leave_type="Paid", start_date=start, end_date=end, reason="Family trip")
    kwargs.update(overrides)
    return service.apply_leave(**kwargs)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("", LeaveType.PAID),
        (None, LeaveType.PAID),
        ("paid leave", LeaveType.PAID),
        ("SICK", LeaveType.SICK),
        ("Casual Leave", LeaveType.CASUAL),
        ("unpaid", LeaveType.UNPAID),
        ("Work From Home", LeaveType.WFH),
        ("wfh", LeaveType.WFH),
    ],
)
def test_normalize_leave_type(raw, expected):
    assert normalize_leave_type(raw) == expected


def test_normalize_rejects_unknown_values():
    with pytest.raises(ValidationError):
        normalize_leave_type("sabbatical")
    with pytest.raises(ValidationError):
        normalize_day_type("quarter")
    assert normalize_day_type("half-day") == DayType.HALF_DAY
    assert normalize_day_type("") == DayType.FULL_DAY


def test_apply_counts_inclusive_days():
    service, _, _ = _build()

    result = _apply(service, "2024-05-06", "2024-05-08")

    assert result.ok
    assert result.value.days_count == 3.0
    assert result.value.status == RequestStatus.PENDING
    assert result.value.request_id is not None


def test_half_day_is_single_date_and_counts_half():
    service, _, _ = _build()

    result = _apply(service, "2024-05-06", "2024-05-06", day_type="Half Day")
    assert result.value.days_count == 0.5

    with pytest.raises(ValidationError):
        _apply(service, "2024-05-10", "2024-05-11", day_type="Half Day")


def test_invalid_ranges_and_missing_reason():
    service, _, _ = _build()
    with pytest.raises(ValidationError):
        _apply(service, "2024-05-08", "2024-05-06")
    with pytest.raises(ValidationError):
        _apply(service, "2024-05-06", "2024-05-06", reason="   ")
    with pytest.raises(NotFoundError):
        _apply(service, "2024-05-06", "2024-05-06", user_id=404)


@pytest.mark.parametrize(
    "start, end, blocked",
    [
        ("2024-05-01", "2024-05-05", False),  # ends the day before
        ("2024-05-01", "2024-05-06", True),  # shares the first day
        ("2024-05-10", "2024-05-12", True),  # shares the last day
        ("2024-05-07", "2024-05-07", True),  # inside
        ("2024-05-01", "2024-05-31", True),  # covers
        ("2024-05-11", "2024-05-15", False),  # starts the day after
    ],
)
def test_overlap_with_pending_request_is_rejected(start, end, blocked):
    service, _, _ = _build()
    assert _apply(service, "2024-05-06", "2024-05-10").ok

    result = _apply(service, start, end)

    assert (not result.ok) is blocked
    if blocked:
        assert result.reason == RejectionReason.LEAVE_OVERLAP
        assert result.message == "You already have a Pending request for overlapping dates."


def test_rejected_requests_do_not_block():
    service, _, _ = _build()
    first = _apply(service, "2024-05-06", "2024-05-10").value
    service.reject(**HR, request_id=first.request_id)

    assert _apply(service, "2024-05-06", "2024-05-10").ok


def test_approved_requests_block_with_their_status():
    service, _, _ = _build()
    first = _apply(service, "2024-05-06", "2024-05-10").value
    service.approve(**HR, request_id=first.request_id)

    result = _apply(service, "2024-05-09", "2024-05-09")
    assert result.message == "You already have a Approved request for overlapping dates."


def test_wfh_request_is_for_company_local_today():
    service, leaves, _ = _build()
    now = datetime(2024, 5, 1, 20, 0, tzinfo=timezone.utc)  # already May 2 in IST

    result = service.submit_wfh_request(user_id=7, now=now)

    assert result.ok
    leave = leaves.get_by_id(result.value.request_id)
    assert leave.leave_type == LeaveType.WFH
    assert leave.start_date == leave.end_date == date(2024, 5, 2)
    assert leave.reason == "Work From Home Request"

    again = service.submit_wfh_request(user_id=7, reason="Plumber visit", now=now)
    assert again.reason == RejectionReason.LEAVE_OVERLAP


def test_approve_reconciles_attendance():
    service, leaves, attendance = _build()
    leave = _apply(service, "2024-05-06", "2024-05-08", leave_type="Sick").value
    now = datetime(2024, 5, 3, 6, 0, tzinfo=timezone.utc)

    result = service.approve(**HR, request_id=leave.request_id, now=now)

    assert result.ok
    assert result.message == "Request Approved successfully"
    assert result.value.reconciliation.created == ["2024-05-06", "2024-05-07", "2024-05-08"]
    stored = leaves.get_by_id(leave.request_id)
    assert stored.status == RequestStatus.APPROVED
    assert stored.action_by == 1
    assert stored.action_at == now
    assert attendance.get_for_user_and_date(7, "2024-05-07").status == AttendanceStatus.ON_LEAVE
    assert result.value.to_dict()["attendance_created"] == 3


def test_reject_records_reason_and_touches_no_attendance():
    service, leaves, attendance = _build()
    leave = _apply(service, "2024-05-06", "2024-05-06").value

    result = service.reject(**HR, request_id=leave.request_id, reject_reason="  Peak season ")

    assert result.message == "Request Rejected successfully"
    assert leaves.get_by_id(leave.request_id).reject_reason == "Peak season"
    assert leaves.get_by_id(leave.request_id).status == RequestStatus.REJECTED
    assert attendance.all() == []


def test_decisions_are_final():
    service, _, _ = _build()
    leave = _apply(service, "2024-05-06", "2024-05-06").value
    assert service.approve(**HR, request_id=leave.request_id).ok

    again = service.approve(**HR, request_id=leave.request_id)
    assert again.reason == RejectionReason.REQUEST_ALREADY_DECIDED
    assert again.message == "Request already processed"
    assert service.reject(**HR, request_id=leave.request_id).reason == RejectionReason.REQUEST_ALREADY_DECIDED


def test_decision_access_rules():
    service, leaves, _ = _build()
    other = leaves.seed(
        LeaveRequest(
            user_id=8,
            company_id=2,
            leave_type=LeaveType.PAID,
            start_date=date(2024, 5, 6),
            end_date=date(2024, 5, 6),
            reason="x",
        )
    )

    with pytest.raises(AuthorizationError):
        service.approve(**HR, request_id=other.request_id)
    with pytest.raises(AuthorizationError):
        service.approve(current_role=Role.EMPLOYEE, actor_id=8, actor_company_id=2, request_id=other.request_id)
    with pytest.raises(NotFoundError):
        service.approve(**HR, request_id=999)

    assert service.approve(
        current_role=Role.SUPER_ADMIN, actor_id=99, actor_company_id=None, request_id=other.request_id
    ).ok


def test_company_listing_is_scoped():
    service, _, _ = _build()
    _apply(service, "2024-05-06", "2024-05-06")
    service.apply_leave(user_id=8, leave_type="", start_date="2024-05-06", end_date="2024-05-06", reason="x")

    assert len(service.list_company(current_role=Role.ADMIN, company_id=1)) == 1
    assert len(service.list_company(current_role=Role.SUPER_ADMIN, company_id=None)) == 2
    assert service.list_company(current_role=Role.ADMIN, company_id=1, status=RequestStatus.APPROVED) == []
    assert len(service.list_mine(user_id=7)) == 1
    with pytest.raises(AuthorizationError):
        service.list_company(current_role=Role.EMPLOYEE, company_id=1)
