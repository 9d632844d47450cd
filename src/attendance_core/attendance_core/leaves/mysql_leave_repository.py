from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional, Sequence

from ..core.enums import DayType, LeaveType, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime
from .model import LeaveRequest
from .repository import LeaveRepository

_COLUMNS = """
    request_id, user_id, company_id, leave_type, day_type, start_date, end_date, days_count,
    reason, status, created_at, action_by, action_at, reject_reason
"""


def _row_to_leave(r: dict[str, Any]) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(r["request_id"]),
        user_id=int(r["user_id"]),
        company_id=int(r["company_id"]),
        leave_type=LeaveType(r["leave_type"]),
        day_type=DayType(r["day_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        days_count=float(r["days_count"] or 0),
        reason=r["reason"],
        status=RequestStatus(r["status"]),
        created_at=from_db_datetime(r.get("created_at")),
        action_by=r.get("action_by"),
        action_at=from_db_datetime(r.get("action_at")),
        reject_reason=r.get("reject_reason") or "",
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests WHERE request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return _row_to_leave(r) if r else None

    def find_blocking_overlap(self, user_id: int, start_date: date, end_date: date) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE user_id=%s
                  AND status IN (%s, %s)
                  AND start_date <= %s
                  AND end_date >= %s
                ORDER BY start_date ASC
                LIMIT 1
                """,
                (
                    int(user_id),
                    RequestStatus.PENDING.value,
                    RequestStatus.APPROVED.value,
                    end_date,
                    start_date,
                ),
            )
            r = fetchone(cur)
            return _row_to_leave(r) if r else None

    def create(self, leave: LeaveRequest) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(
                    user_id, company_id, leave_type, day_type, start_date, end_date, days_count, reason, status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(leave.user_id),
                    int(leave.company_id),
                    leave.leave_type.value,
                    leave.day_type.value,
                    leave.start_date,
                    leave.end_date,
                    float(leave.days_count),
                    leave.reason,
                    leave.status.value,
                ),
            )
            return int(cur.lastrowid)

    def decide(
        self,
        request_id: int,
        *,
        status: RequestStatus,
        action_by: int,
        action_at: datetime,
        reject_reason: str = "",
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, action_by=%s, action_at=%s, reject_reason=%s
                WHERE request_id=%s AND status=%s
                """,
                (
                    status.value,
                    int(action_by),
                    to_db_datetime(action_at),
                    reject_reason,
                    int(request_id),
                    RequestStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0

    def list_for_user(self, user_id: int) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM leave_requests WHERE user_id=%s ORDER BY created_at DESC",
                (int(user_id),),
            )
            return [_row_to_leave(r) for r in fetchall(cur)]

    def list_for_company(self, company_id: Optional[int], *, status: Optional[RequestStatus] = None) -> Sequence[LeaveRequest]:
        clauses = ["1=1"]
        params: list[object] = []

        if company_id is not None:
            clauses.append("company_id=%s")
            params.append(int(company_id))
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM leave_requests WHERE {where} ORDER BY created_at DESC",
                tuple(params),
            )
            return [_row_to_leave(r) for r in fetchall(cur)]

    def list_approved_starting_from(self, user_id: int, start_date: date) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE user_id=%s AND status=%s AND start_date >= %s
                ORDER BY start_date ASC
                """,
                (int(user_id), RequestStatus.APPROVED.value, start_date),
            )
            return [_row_to_leave(r) for r in fetchall(cur)]
