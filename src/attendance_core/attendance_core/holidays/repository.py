from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Holiday


class HolidayRepository(Protocol):
    def get_for_date(self, company_id: int, holiday_date: date) -> Optional[Holiday]:
        raise NotImplementedError

    def create(self, holiday: Holiday) -> int:
        """Insert; raises ``DuplicateRecordError`` if (company, date) exists."""

        raise NotImplementedError

    def list_between(self, company_id: int, start_date: date, end_date: date) -> Sequence[Holiday]:
        raise NotImplementedError
