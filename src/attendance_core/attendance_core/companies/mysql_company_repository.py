from __future__ import annotations

from typing import Optional

from ..core.constants import DEFAULT_GEOFENCE_RADIUS_M, DEFAULT_TIME_ZONE
from ..core.enums import CompanyStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Company, OfficeLocation
from .repository import CompanyRepository


class MySQLCompanyRepository(CompanyRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, default_time_zone: str = DEFAULT_TIME_ZONE):
        self._conn_factory = conn_factory
        self._default_time_zone = default_time_zone

    def get_by_id(self, company_id: int) -> Optional[Company]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT company_id, name, status, office_lat, office_lng, office_radius_m, office_address, time_zone
                FROM companies
                WHERE company_id=%s
                """,
                (int(company_id),),
            )
            r = fetchone(cur)
            if not r:
                return None

            office = None
            if r.get("office_lat") is not None or r.get("office_lng") is not None:
                office = OfficeLocation(
                    lat=float(r["office_lat"]) if r.get("office_lat") is not None else None,
                    lng=float(r["office_lng"]) if r.get("office_lng") is not None else None,
                    radius=float(r.get("office_radius_m") or DEFAULT_GEOFENCE_RADIUS_M),
                    address=r.get("office_address") or "",
                )

            return Company(
                company_id=int(r["company_id"]),
                name=r["name"],
                status=CompanyStatus(r.get("status") or CompanyStatus.ACTIVE.value),
                office=office,
                time_zone=r.get("time_zone") or self._default_time_zone,
            )
