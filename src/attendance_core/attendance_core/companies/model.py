from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import DEFAULT_GEOFENCE_RADIUS_M, DEFAULT_TIME_ZONE
from ..core.enums import CompanyStatus


@dataclass(frozen=True)
class OfficeLocation:
    """Office reference point. Either coordinate missing means geofencing is off."""

    lat: Optional[float]
    lng: Optional[float]
    radius: float = DEFAULT_GEOFENCE_RADIUS_M
    address: str = ""

    @property
    def is_configured(self) -> bool:
        return self.lat is not None and self.lng is not None


@dataclass(frozen=True)
class Company:
    """Tenant as seen by the attendance engine."""

    company_id: int
    name: str
    status: CompanyStatus = CompanyStatus.ACTIVE
    office: Optional[OfficeLocation] = None
    time_zone: str = DEFAULT_TIME_ZONE

    @property
    def is_active(self) -> bool:
        return self.status == CompanyStatus.ACTIVE

    @property
    def geofence(self) -> Optional[OfficeLocation]:
        if self.office is None or not self.office.is_configured:
            return None
        return self.office
