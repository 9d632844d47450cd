from __future__ import annotations

from typing import Optional, Protocol

from .model import Company


class CompanyRepository(Protocol):
    """Tenant directory: office location, radius, timezone and status."""

    def get_by_id(self, company_id: int) -> Optional[Company]:
        raise NotImplementedError
