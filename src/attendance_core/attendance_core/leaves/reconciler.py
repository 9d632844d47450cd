from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import format_date, iter_days
from ..core.enums import AttendanceSource
from ..core.exceptions import DuplicateRecordError
from .factory import LeaveStrategyFactory
from .model import LeaveRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconcileSummary:
    created: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def created_count(self) -> int:
        return len(self.created)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


class LeaveReconciler:
    """Write one attendance record per day of an approved leave.

    Days that already have a record (a real punch, an HR entry, an earlier
    reconciliation) are skipped, never overwritten, so running it again over
    the same leave is a no-op. Each day is its own insert; a failure midway
    leaves earlier days in place and a retry picks up the rest.
    """

    def __init__(self, attendance: AttendanceRepository, *, factory: LeaveStrategyFactory | None = None):
        self._attendance = attendance
        self._factory = factory or LeaveStrategyFactory()

    def reconcile(self, leave: LeaveRequest, *, time_zone: str) -> ReconcileSummary:
        days = list(iter_days(leave.start_date, leave.end_date))
        if leave.is_half_day:
            days = days[:1]

        strategy = self._factory.for_leave_type(leave.leave_type)
        existing = self._attendance.existing_dates(leave.user_id, [format_date(d) for d in days])
        summary = ReconcileSummary()

        for day in days:
            work_date = format_date(day)
            if work_date in existing:
                summary.skipped.append(work_date)
                continue

            outcome = strategy.outcome_for(leave=leave, day=day, time_zone=time_zone)
            record = AttendanceRecord(
                user_id=leave.user_id,
                company_id=leave.company_id,
                work_date=work_date,
                status=outcome.status,
                mode=outcome.mode,
                source=AttendanceSource.SYSTEM,
                punch_in_time=outcome.punch_in_time,
                punch_out_time=outcome.punch_out_time,
                net_work_hours=outcome.net_work_hours,
                remarks=outcome.remarks,
            )
            try:
                self._attendance.create(record)
            except DuplicateRecordError:
                # A punch landed between the read and the insert.
                summary.skipped.append(work_date)
                continue
            summary.created.append(work_date)

        logger.info(
            "reconciled leave %s for user %s: created=%d skipped=%d",
            leave.request_id,
            leave.user_id,
            summary.created_count,
            summary.skipped_count,
        )
        return summary
