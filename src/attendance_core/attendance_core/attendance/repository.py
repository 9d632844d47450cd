from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import AttendanceRecord, AttendanceSearch


class AttendanceRepository(Protocol):
    def get_for_user_and_date(self, user_id: int, work_date: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_user_between(self, user_id: int, start_date: str, end_date: str) -> Sequence[AttendanceRecord]:
        """Records with ``start_date <= work_date <= end_date``."""

        raise NotImplementedError

    def existing_dates(self, user_id: int, work_dates: Iterable[str]) -> set[str]:
        raise NotImplementedError

    def list_for_company(self, company_id: int, search: AttendanceSearch) -> Sequence[AttendanceRecord]:
        """Company records matching ``search``, newest date first."""

        raise NotImplementedError

    def list_for_user(self, user_id: int, company_id: int, search: AttendanceSearch) -> Sequence[AttendanceRecord]:
        """One employee's records within ``company_id``, newest date first."""

        raise NotImplementedError

    def create(self, record: AttendanceRecord) -> int:
        """Insert a new record.

        Must raise ``DuplicateRecordError`` when (user_id, work_date) is
        already taken; the check has to be atomic in the storage layer.
        """

        raise NotImplementedError

    def update(self, record: AttendanceRecord) -> bool:
        """Overwrite the mutable fields of an existing record by id."""

        raise NotImplementedError

    def upsert(self, record: AttendanceRecord) -> int:
        """HR override: insert or replace the record for (user_id, work_date)."""

        raise NotImplementedError
