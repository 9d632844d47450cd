from datetime import datetime, timezone

import pytest

from src.attendance_core.attendance_core.container import assemble
from src.attendance_core.attendance_core.core.enums import AttendanceMode, AttendanceSource, AttendanceStatus, Role
from src.attendance_core.attendance_core.core.exceptions import AuthorizationError, ValidationError
from tests.fakes import (
    InMemoryAttendance,
    InMemoryCompanies,
    InMemoryEmployees,
    InMemoryHolidays,
    InMemoryLeaves,
    make_company,
    make_employee,
)


def _service():
    repo = InMemoryAttendance()
    container = assemble(
        employees_repo=InMemoryEmployees([make_employee(7, 1), make_employee(8, 2)]),
        companies_repo=InMemoryCompanies([make_company(1), make_company(2)]),
        attendance_repo=repo,
        leaves_repo=InMemoryLeaves(),
        holidays_repo=InMemoryHolidays(),
    )
    return container.attendance_service, repo


def _entry(service, **overrides):
    kwargs = dict(
        current_role=Role.COMPANY_ADMIN,
        actor_id=1,
        actor_company_id=1,
        user_id=7,
        work_date="2024-05-02",
        status=AttendanceStatus.PRESENT,
    )
    kwargs.update(overrides)
    return service.manual_entry(**kwargs)


def test_present_defaults_to_nine_to_six_local():
    service, repo = _service()

    result = _entry(service)

    assert result.ok
    rec = repo.get_for_user_and_date(7, "2024-05-02")
    assert rec.punch_in_time == datetime(2024, 5, 2, 3, 30, tzinfo=timezone.utc)
    assert rec.punch_out_time == datetime(2024, 5, 2, 12, 30, tzinfo=timezone.utc)
    assert rec.net_work_hours == 9.0
    assert rec.mode == AttendanceMode.MANUAL
    assert rec.source == AttendanceSource.MANUAL_HR
    assert rec.is_manual_entry and rec.is_edited
    assert rec.added_by == 1 and rec.edited_by == 1
    assert rec.remarks == "Manual entry by HR"


def test_explicit_times_and_half_day_default():
    service, repo = _service()

    _entry(service, in_time="10:00", out_time="13:15", remarks="Client visit")
    rec = repo.get_for_user_and_date(7, "2024-05-02")
    assert rec.net_work_hours == 3.25
    assert rec.remarks == "Client visit"

    _entry(service, work_date="2024-05-03", status=AttendanceStatus.HALF_DAY, in_time="09:30")
    half = repo.get_for_user_and_date(7, "2024-05-03")
    assert half.net_work_hours == 4.0


@pytest.mark.parametrize(
    "status, mode",
    [
        (AttendanceStatus.HOLIDAY, AttendanceMode.HOLIDAY),
        (AttendanceStatus.ON_LEAVE, AttendanceMode.PAID_LEAVE),
        (AttendanceStatus.ABSENT, AttendanceMode.UNPAID_LEAVE),
    ],
)
def test_non_working_statuses_have_no_punches(status, mode):
    service, repo = _service()

    _entry(service, status=status, in_time="09:00")

    rec = repo.get_for_user_and_date(7, "2024-05-02")
    assert rec.mode == mode
    assert rec.punch_in_time is None and rec.punch_out_time is None
    assert rec.net_work_hours == 0.0


def test_manual_entry_overwrites_existing_record():
    service, repo = _service()
    first = _entry(service, status=AttendanceStatus.ABSENT)
    second = _entry(service, status=AttendanceStatus.PRESENT, actor_id=2)

    rec = repo.get_for_user_and_date(7, "2024-05-02")
    assert len(repo.all()) == 1
    assert second.value.attendance_id == first.value.attendance_id
    assert rec.status == AttendanceStatus.PRESENT
    assert rec.edited_by == 2


def test_access_rules():
    service, _ = _service()

    with pytest.raises(AuthorizationError):
        _entry(service, current_role=Role.EMPLOYEE)
    with pytest.raises(AuthorizationError):
        _entry(service, user_id=8)

    assert _entry(service, current_role=Role.SUPER_ADMIN, actor_company_id=None, user_id=8).ok


def test_bad_input():
    service, _ = _service()
    with pytest.raises(ValidationError):
        _entry(service, work_date="02/05/2024")
    with pytest.raises(ValidationError):
        _entry(service, in_time="18:00", out_time="09:00")


@pytest.mark.parametrize("field, value", [("in_time", "9am"), ("out_time", "25:00"), ("in_time", "09:75")])
def test_malformed_times_are_rejected_not_defaulted(field, value):
    service, repo = _service()

    with pytest.raises(ValidationError):
        _entry(service, **{field: value})
    assert repo.all() == []


def test_blank_times_fall_back_to_defaults():
    service, repo = _service()

    assert _entry(service, in_time="  ", out_time="").ok

    rec = repo.get_for_user_and_date(7, "2024-05-02")
    assert rec.punch_in_time == datetime(2024, 5, 2, 3, 30, tzinfo=timezone.utc)
    assert rec.net_work_hours == 9.0
