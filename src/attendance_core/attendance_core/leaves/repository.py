from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import RequestStatus
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def find_blocking_overlap(self, user_id: int, start_date: date, end_date: date) -> Optional[LeaveRequest]:
        """First Pending/Approved request of the user intersecting [start_date, end_date]."""

        raise NotImplementedError

    def create(self, leave: LeaveRequest) -> int:
        raise NotImplementedError

    def decide(
        self,
        request_id: int,
        *,
        status: RequestStatus,
        action_by: int,
        action_at: datetime,
        reject_reason: str = "",
    ) -> bool:
        """Move a Pending request to ``status``. False if it was no longer Pending."""

        raise NotImplementedError

    def list_for_user(self, user_id: int) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def list_for_company(self, company_id: Optional[int], *, status: Optional[RequestStatus] = None) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def list_approved_starting_from(self, user_id: int, start_date: date) -> Sequence[LeaveRequest]:
        """Approved requests with ``start_date >= start_date`` (no upper bound)."""

        raise NotImplementedError
