from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Note (DIP): services depend on this interface, not on a concrete DB."""

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_active_ids(self, company_id: int) -> Sequence[int]:
        raise NotImplementedError
