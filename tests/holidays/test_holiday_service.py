from datetime import date

import pytest

from src.attendance_core.attendance_core.attendance.model import AttendanceRecord
from src.attendance_core.attendance_core.container import assemble
from src.attendance_core.attendance_core.core.enums import AttendanceMode, AttendanceSource, AttendanceStatus, Role
from src.attendance_core.attendance_core.core.exceptions import AuthorizationError, ValidationError
from src.attendance_core.attendance_core.core.results import RejectionReason
from tests.fakes import (
    InMemoryAttendance,
    InMemoryCompanies,
    InMemoryEmployees,
    InMemoryHolidays,
    InMemoryLeaves,
    make_company,
    make_employee,
)


def _build():
    attendance = InMemoryAttendance()
    holidays = InMemoryHolidays()
    employees = InMemoryEmployees(
        [
            make_employee(7, 1),
            make_employee(8, 1),
            make_employee(9, 1, is_active=False),
            make_employee(10, 1, role=Role.COMPANY_ADMIN),
            make_employee(20, 2),
        ]
    )
    container = assemble(
        employees_repo=employees,
        companies_repo=InMemoryCompanies([make_company(1), make_company(2)]),
        attendance_repo=attendance,
        leaves_repo=InMemoryLeaves(),
        holidays_repo=holidays,
    )
    return container.holiday_service, attendance, holidays


def _mark(service, **overrides):
    kwargs = dict(current_role=Role.COMPANY_ADMIN, actor_company_id=1, holiday_date="2024-08-15", reason="Independence Day")
    kwargs.update(overrides)
    return service.mark_holiday(**kwargs)


def test_marks_holiday_for_every_active_employee():
    service, attendance, holidays = _build()

    result = _mark(service)

    assert result.ok
    assert result.message == "Holiday marked & Attendance updated"
    assert result.value.created == [7, 8]
    assert holidays.get_for_date(1, date(2024, 8, 15)).reason == "Independence Day"
    rec = attendance.get_for_user_and_date(7, "2024-08-15")
    assert rec.status == AttendanceStatus.HOLIDAY
    assert rec.mode == AttendanceMode.HOLIDAY
    assert rec.source == AttendanceSource.SYSTEM
    assert rec.remarks == "Independence Day"
    assert attendance.get_for_user_and_date(20, "2024-08-15") is None


def test_existing_attendance_is_not_overwritten():
    service, attendance, _ = _build()
    attendance.create(
        AttendanceRecord(user_id=8, company_id=1, work_date="2024-08-15", status=AttendanceStatus.COMPLETED)
    )

    result = _mark(service)

    assert result.value.created == [7]
    assert result.value.skipped == [8]
    assert attendance.get_for_user_and_date(8, "2024-08-15").status == AttendanceStatus.COMPLETED


def test_explicit_employee_list():
    service, attendance, _ = _build()
    result = _mark(service, employee_ids=[8])
    assert result.value.created == [8]
    assert attendance.get_for_user_and_date(7, "2024-08-15") is None


@pytest.mark.parametrize("employee_ids", [[7, 20], [999], [9], [10]])
def test_employee_list_must_name_active_employees_of_the_company(employee_ids):
    service, attendance, holidays = _build()

    with pytest.raises(ValidationError):
        _mark(service, employee_ids=employee_ids)

    assert holidays.get_for_date(1, date(2024, 8, 15)) is None
    assert attendance.all() == []


def test_same_date_twice_is_rejected():
    service, _, _ = _build()
    assert _mark(service).ok

    again = _mark(service, reason="Duplicate")

    assert again.reason == RejectionReason.HOLIDAY_EXISTS


def test_super_admin_targets_any_company():
    service, attendance, _ = _build()

    assert _mark(service, current_role=Role.SUPER_ADMIN, actor_company_id=None, company_id=2).ok
    assert attendance.get_for_user_and_date(20, "2024-08-15").status == AttendanceStatus.HOLIDAY

    with pytest.raises(ValidationError):
        _mark(service, current_role=Role.SUPER_ADMIN, actor_company_id=None)


def test_company_admin_cannot_target_another_company():
    service, attendance, _ = _build()
    _mark(service, company_id=2)
    # Their own company is used regardless.
    assert attendance.get_for_user_and_date(20, "2024-08-15") is None
    assert attendance.get_for_user_and_date(7, "2024-08-15") is not None


def test_requires_hr_and_valid_input():
    service, _, _ = _build()
    with pytest.raises(AuthorizationError):
        _mark(service, current_role=Role.EMPLOYEE)
    with pytest.raises(ValidationError):
        _mark(service, holiday_date="15-08-2024")
    with pytest.raises(ValidationError):
        _mark(service, reason="")


def test_list_between():
    service, _, _ = _build()
    _mark(service)
    _mark(service, holiday_date="2024-10-02", reason="Gandhi Jayanti")

    names = [h.reason for h in service.list_between(1, "2024-08-01", "2024-09-30")]
    assert names == ["Independence Day"]
