from __future__ import annotations

from datetime import date
from typing import Any, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Holiday
from .repository import HolidayRepository


def _row_to_holiday(r: dict[str, Any]) -> Holiday:
    return Holiday(
        holiday_id=int(r["holiday_id"]),
        company_id=int(r["company_id"]),
        holiday_date=r["holiday_date"],
        reason=r["reason"],
    )


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_date(self, company_id: int, holiday_date: date) -> Optional[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT holiday_id, company_id, holiday_date, reason
                FROM holidays
                WHERE company_id=%s AND holiday_date=%s
                """,
                (int(company_id), holiday_date),
            )
            r = fetchone(cur)
            return _row_to_holiday(r) if r else None

    def create(self, holiday: Holiday) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO holidays(company_id, holiday_date, reason, year) VALUES(%s,%s,%s,%s)",
                (int(holiday.company_id), holiday.holiday_date, holiday.reason, holiday.year),
            )
            return int(cur.lastrowid)

    def list_between(self, company_id: int, start_date: date, end_date: date) -> Sequence[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT holiday_id, company_id, holiday_date, reason
                FROM holidays
                WHERE company_id=%s AND holiday_date BETWEEN %s AND %s
                ORDER BY holiday_date ASC
                """,
                (int(company_id), start_date, end_date),
            )
            return [_row_to_holiday(r) for r in fetchall(cur)]
