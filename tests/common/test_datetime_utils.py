from __future__ import annotations

from datetime import date, datetime, time, timezone

import pytest

from src.attendance_core.attendance_core.common.datetime_utils import (
    date_string_in_tz,
    days_in_month,
    iter_days,
    local_time_to_utc,
    parse_hhmm,
    parse_iso_date,
)
from src.attendance_core.attendance_core.core.exceptions import ValidationError


def test_date_string_uses_company_timezone_not_utc():
    instant = datetime(2024, 4, 30, 20, 0, tzinfo=timezone.utc)  # 01:30 next day in IST
    assert date_string_in_tz(instant, "Asia/Kolkata") == "2024-05-01"
    assert date_string_in_tz(instant, "America/New_York") == "2024-04-30"


def test_naive_instants_are_treated_as_utc():
    assert date_string_in_tz(datetime(2024, 4, 30, 20, 0), "Asia/Kolkata") == "2024-05-01"


def test_local_time_to_utc():
    assert local_time_to_utc(date(2024, 5, 1), time(9, 0), "Asia/Kolkata") == datetime(
        2024, 5, 1, 3, 30, tzinfo=timezone.utc
    )


def test_unknown_zone_is_a_validation_error():
    with pytest.raises(ValidationError):
        date_string_in_tz(datetime(2024, 1, 1, tzinfo=timezone.utc), "Mars/Olympus")


def test_iter_days_is_inclusive_and_crosses_months():
    days = list(iter_days(date(2024, 2, 28), date(2024, 3, 1)))
    assert days == [date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)]
    assert list(iter_days(date(2024, 3, 2), date(2024, 3, 1))) == []


def test_parsers():
    assert parse_iso_date(" 2024-05-01 ") == date(2024, 5, 1)
    with pytest.raises(ValidationError):
        parse_iso_date("01/05/2024")
    assert parse_hhmm("9:15") == time(9, 15)
    assert parse_hhmm("") is None
    assert parse_hhmm("25:00") is None
    assert days_in_month(date(2024, 2, 10)) == 29
