from datetime import datetime, timedelta, timezone

from src.attendance_core.attendance_core.attendance.worktime import (
    compute_net_hours,
    elapsed_break_minutes,
    round_half_up,
    status_for_net_hours,
)
from src.attendance_core.attendance_core.core.enums import AttendanceStatus

T0 = datetime(2024, 5, 1, 3, 30, tzinfo=timezone.utc)


def test_half_day_boundary_is_strictly_below_four_hours():
    assert status_for_net_hours(4.0) == AttendanceStatus.COMPLETED
    assert status_for_net_hours(3.99) == AttendanceStatus.HALF_DAY
    assert status_for_net_hours(0.0) == AttendanceStatus.HALF_DAY


def test_net_hours_rounds_half_up_to_two_places():
    # 2h 0m 18s = 2.005h
    assert compute_net_hours(T0, T0 + timedelta(hours=2, seconds=18)) == 2.01
    assert round_half_up(2.345, 2) == 2.35
    assert round_half_up(7.5) == 8.0


def test_net_hours_subtracts_breaks_and_never_goes_negative():
    assert compute_net_hours(T0, T0 + timedelta(hours=9), break_minutes=60) == 8.0
    assert compute_net_hours(T0, T0 + timedelta(minutes=30), break_minutes=90) == 0.0
    assert compute_net_hours(T0, T0 - timedelta(hours=1)) == 0.0
    assert compute_net_hours(None, T0) == 0.0


def test_elapsed_break_minutes_rounds_to_nearest_minute():
    assert elapsed_break_minutes(None, T0) == 0
    assert elapsed_break_minutes(T0, T0 + timedelta(seconds=89)) == 1
    assert elapsed_break_minutes(T0, T0 + timedelta(seconds=90)) == 2
    assert elapsed_break_minutes(T0 + timedelta(minutes=5), T0) == 0
