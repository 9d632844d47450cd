from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable

from ..core.enums import AttendanceMode, AttendanceStatus
from .model import AttendanceRecord


@dataclass(frozen=True)
class AttendanceStats:
    """Per-employee day counts for one month window."""

    window_start: date
    window_end: date
    present: int = 0
    absent: int = 0
    leaves: int = 0
    half_days: int = 0
    holidays: int = 0
    wfh: int = 0

    @property
    def payable_days(self) -> float:
        return self.present + self.wfh + self.leaves + self.holidays + self.half_days * 0.5

    def to_dict(self) -> dict:
        return {
            "start_date": self.window_start.strftime("%Y-%m-%d"),
            "end_date": self.window_end.strftime("%Y-%m-%d"),
            "present": self.present,
            "absent": self.absent,
            "leaves": self.leaves,
            "half_days": self.half_days,
            "holidays": self.holidays,
            "wfh": self.wfh,
            "payable_days": self.payable_days,
        }


def summarize(records: Iterable[AttendanceRecord], *, window_start: date, window_end: date) -> AttendanceStats:
    """Bucket each record exactly once.

    Buckets are checked in order: WFH mode, holiday, half day, paid leave,
    unpaid leave/absent, present. Records in no bucket (e.g. still on break)
    are not counted.
    """
    counts = dict(present=0, absent=0, leaves=0, half_days=0, holidays=0, wfh=0)
    for rec in records:
        if rec.mode == AttendanceMode.WFH:
            counts["wfh"] += 1
        elif rec.mode == AttendanceMode.HOLIDAY or rec.status == AttendanceStatus.HOLIDAY:
            counts["holidays"] += 1
        elif rec.status == AttendanceStatus.HALF_DAY:
            counts["half_days"] += 1
        elif rec.mode == AttendanceMode.PAID_LEAVE or rec.status == AttendanceStatus.ON_LEAVE:
            counts["leaves"] += 1
        elif rec.mode == AttendanceMode.UNPAID_LEAVE or rec.status == AttendanceStatus.ABSENT:
            counts["absent"] += 1
        elif rec.status in {AttendanceStatus.PRESENT, AttendanceStatus.COMPLETED}:
            counts["present"] += 1
    return AttendanceStats(window_start=window_start, window_end=window_end, **counts)
