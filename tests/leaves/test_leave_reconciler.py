from datetime import date, datetime, timezone

import pytest

from src.attendance_core.attendance_core.attendance.model import AttendanceRecord
from src.attendance_core.attendance_core.core.enums import (
    AttendanceMode,
    AttendanceSource,
    AttendanceStatus,
    DayType,
    LeaveType,
    RequestStatus,
)
from src.attendance_core.attendance_core.leaves.factory import LeaveStrategyFactory
from src.attendance_core.attendance_core.leaves.model import LeaveRequest
from src.attendance_core.attendance_core.leaves.reconciler import LeaveReconciler
from src.attendance_core.attendance_core.leaves.strategies.paid_strategy import PaidLeaveStrategy
from src.attendance_core.attendance_core.leaves.strategies.unpaid_strategy import UnpaidLeaveStrategy
from src.attendance_core.attendance_core.leaves.strategies.wfh_strategy import WorkFromHomeStrategy
from tests.fakes import InMemoryAttendance

TZ = "Asia/Kolkata"


def _leave(leave_type=LeaveType.PAID, start=date(2024, 5, 6), end=date(2024, 5, 8), day_type=DayType.FULL_DAY):
    return LeaveRequest(
        user_id=7,
        company_id=1,
        leave_type=leave_type,
        start_date=start,
        end_date=end,
        reason="x",
        day_type=day_type,
        status=RequestStatus.APPROVED,
        request_id=3,
    )


@pytest.mark.parametrize(
    "leave_type, strategy",
    [
        (LeaveType.PAID, PaidLeaveStrategy),
        (LeaveType.SICK, PaidLeaveStrategy),
        (LeaveType.CASUAL, PaidLeaveStrategy),
        (LeaveType.UNPAID, UnpaidLeaveStrategy),
        (LeaveType.WFH, WorkFromHomeStrategy),
    ],
)
def test_factory_picks_strategy_by_leave_type(leave_type, strategy):
    assert isinstance(LeaveStrategyFactory().for_leave_type(leave_type), strategy)


def test_paid_leave_days_use_synthetic_window():
    repo = InMemoryAttendance()

    summary = LeaveReconciler(repo).reconcile(_leave(), time_zone=TZ)

    assert summary.created == ["2024-05-06", "2024-05-07", "2024-05-08"]
    rec = repo.get_for_user_and_date(7, "2024-05-07")
    assert rec.status == AttendanceStatus.ON_LEAVE
    assert rec.mode == AttendanceMode.PAID_LEAVE
    assert rec.source == AttendanceSource.SYSTEM
    assert rec.net_work_hours == 8.0
    assert rec.punch_in_time == datetime(2024, 5, 7, 3, 30, tzinfo=timezone.utc)
    assert rec.punch_out_time == datetime(2024, 5, 7, 12, 30, tzinfo=timezone.utc)
    assert rec.remarks == "Approved: Paid"


def test_unpaid_and_wfh_outcomes():
    repo = InMemoryAttendance()
    reconciler = LeaveReconciler(repo)

    reconciler.reconcile(_leave(LeaveType.UNPAID, end=date(2024, 5, 6)), time_zone=TZ)
    unpaid = repo.get_for_user_and_date(7, "2024-05-06")
    assert unpaid.status == AttendanceStatus.ABSENT
    assert unpaid.mode == AttendanceMode.UNPAID_LEAVE
    assert unpaid.punch_in_time is None
    assert unpaid.net_work_hours == 0.0

    reconciler.reconcile(_leave(LeaveType.WFH, start=date(2024, 5, 9), end=date(2024, 5, 9)), time_zone=TZ)
    wfh = repo.get_for_user_and_date(7, "2024-05-09")
    assert wfh.status == AttendanceStatus.PRESENT
    assert wfh.mode == AttendanceMode.WFH
    assert wfh.net_work_hours == 8.0


def test_half_day_leave_writes_only_the_first_day():
    repo = InMemoryAttendance()

    summary = LeaveReconciler(repo).reconcile(
        _leave(day_type=DayType.HALF_DAY, start=date(2024, 5, 6), end=date(2024, 5, 6)), time_zone=TZ
    )

    assert summary.created == ["2024-05-06"]
    rec = repo.get_for_user_and_date(7, "2024-05-06")
    assert rec.status == AttendanceStatus.HALF_DAY
    assert rec.net_work_hours == 4.0


def test_existing_days_are_kept_and_rerun_is_a_no_op():
    repo = InMemoryAttendance()
    punched = AttendanceRecord(
        user_id=7,
        company_id=1,
        work_date="2024-05-07",
        status=AttendanceStatus.COMPLETED,
        punch_in_time=datetime(2024, 5, 7, 3, 30, tzinfo=timezone.utc),
    )
    repo.create(punched)
    reconciler = LeaveReconciler(repo)

    first = reconciler.reconcile(_leave(), time_zone=TZ)
    second = reconciler.reconcile(_leave(), time_zone=TZ)

    assert first.created == ["2024-05-06", "2024-05-08"]
    assert first.skipped == ["2024-05-07"]
    assert second.created_count == 0
    assert second.skipped_count == 3
    assert repo.get_for_user_and_date(7, "2024-05-07").status == AttendanceStatus.COMPLETED
    assert len(repo.all()) == 3


def test_insert_race_counts_as_skip():
    class LateArrival(InMemoryAttendance):
        def existing_dates(self, user_id, work_dates):
            return set()

    repo = LateArrival()
    repo.create(AttendanceRecord(user_id=7, company_id=1, work_date="2024-05-06", status=AttendanceStatus.PRESENT))

    summary = LeaveReconciler(repo).reconcile(_leave(), time_zone=TZ)

    assert summary.skipped == ["2024-05-06"]
    assert summary.created == ["2024-05-07", "2024-05-08"]
