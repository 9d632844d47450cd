"""Office geofence.

Geofencing is opt-in per company: without a complete office location every
punch passes (fail-open). Once the office is configured, a punch without a
usable user location is rejected (fail-closed).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..core.constants import DEFAULT_GEOFENCE_RADIUS_M, EARTH_RADIUS_M


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float
    address: str = ""

    def as_dict(self) -> dict:
        return {"lat": self.lat, "lng": self.lng, "address": self.address}


@dataclass(frozen=True)
class GeofenceCheck:
    inside: bool
    distance_m: Optional[float] = None


def _number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _field(loc: Any, *names: str) -> Any:
    for name in names:
        if isinstance(loc, Mapping):
            if loc.get(name) is not None:
                return loc[name]
        elif getattr(loc, name, None) is not None:
            return getattr(loc, name)
    return None


def normalize_location(loc: Any) -> Optional[GeoPoint]:
    """Accept ``lat/lng`` or ``latitude/longitude`` mappings or objects."""
    if loc is None:
        return None
    if isinstance(loc, GeoPoint):
        return loc
    lat = _number(_field(loc, "lat", "latitude"))
    lng = _number(_field(loc, "lng", "longitude"))
    if lat is None or lng is None:
        return None
    address = _field(loc, "address", "addr") or ""
    return GeoPoint(lat=lat, lng=lng, address=str(address))


def distance_meters(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle (haversine) distance in meters."""
    phi1 = math.radians(a.lat)
    phi2 = math.radians(b.lat)
    d_phi = math.radians(b.lat - a.lat)
    d_lambda = math.radians(b.lng - a.lng)

    x = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(x), math.sqrt(1 - x))
    return EARTH_RADIUS_M * c


def office_radius(office_loc: Any, default: float = DEFAULT_GEOFENCE_RADIUS_M) -> float:
    radius = _number(_field(office_loc, "radius", "radius_m", "radiusMeters")) if office_loc is not None else None
    return radius if radius and radius > 0 else float(default)


def check_geofence(user_loc: Any, office_loc: Any, *, default_radius: float = DEFAULT_GEOFENCE_RADIUS_M) -> GeofenceCheck:
    office = normalize_location(office_loc)
    if office is None:
        return GeofenceCheck(inside=True)

    user = normalize_location(user_loc)
    if user is None:
        return GeofenceCheck(inside=False)

    distance = distance_meters(user, office)
    return GeofenceCheck(inside=distance <= office_radius(office_loc, default_radius), distance_m=distance)


def is_inside_office(user_loc: Any, office_loc: Any, *, default_radius: float = DEFAULT_GEOFENCE_RADIUS_M) -> bool:
    return check_geofence(user_loc, office_loc, default_radius=default_radius).inside
