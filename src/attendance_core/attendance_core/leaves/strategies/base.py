from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ...common.datetime_utils import local_time_to_utc
from ...core.constants import SYNTHETIC_PUNCH_IN, SYNTHETIC_PUNCH_OUT
from ...core.enums import AttendanceMode, AttendanceStatus
from ..model import LeaveRequest


@dataclass(frozen=True)
class LeaveDayOutcome:
    """What one approved leave day turns into on the attendance sheet."""

    status: AttendanceStatus
    mode: AttendanceMode
    net_work_hours: float
    punch_in_time: Optional[datetime] = None
    punch_out_time: Optional[datetime] = None
    remarks: str = ""


def synthetic_window(day: date, time_zone: str) -> tuple[datetime, datetime]:
    """09:00-18:00 local on ``day``, as UTC instants."""
    return (
        local_time_to_utc(day, SYNTHETIC_PUNCH_IN, time_zone),
        local_time_to_utc(day, SYNTHETIC_PUNCH_OUT, time_zone),
    )


class LeaveDayStrategy(ABC):
    """Strategy Pattern: how an approved leave type is written to attendance."""

    @abstractmethod
    def outcome_for(self, *, leave: LeaveRequest, day: date, time_zone: str) -> LeaveDayOutcome:
        raise NotImplementedError
