from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Holiday:
    company_id: int
    holiday_date: date
    reason: str
    holiday_id: Optional[int] = field(default=None, compare=False)

    @property
    def year(self) -> int:
        return self.holiday_date.year

    def to_dict(self) -> dict:
        return {
            "holiday_id": self.holiday_id,
            "company_id": self.company_id,
            "date": self.holiday_date.strftime("%Y-%m-%d"),
            "reason": self.reason,
            "year": self.year,
        }
