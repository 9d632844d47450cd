from __future__ import annotations

import math
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ..core.constants import HALF_DAY_HOURS_THRESHOLD
from ..core.enums import AttendanceStatus


def round_half_up(value: float, places: int = 0) -> float:
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def compute_net_hours(punch_in: Optional[datetime], punch_out: Optional[datetime], break_minutes: int = 0) -> float:
    """max(0, out - in - breaks) in hours, rounded to 2 decimals."""
    if not punch_in or not punch_out:
        return 0.0
    seconds = (punch_out - punch_in).total_seconds() - max(0, int(break_minutes)) * 60
    if seconds <= 0:
        return 0.0
    return round_half_up(seconds / 3600, 2)


def elapsed_break_minutes(break_start: Optional[datetime], now: datetime) -> int:
    if break_start is None:
        return 0
    return max(0, math.floor((now - break_start).total_seconds() / 60 + 0.5))


def status_for_net_hours(net_hours: float) -> AttendanceStatus:
    # Boundary is "< 4": exactly four hours is a full day.
    if net_hours < HALF_DAY_HOURS_THRESHOLD:
        return AttendanceStatus.HALF_DAY
    return AttendanceStatus.COMPLETED
