from __future__ import annotations

import math

import pytest

from src.attendance_core.attendance_core.companies.model import OfficeLocation
from src.attendance_core.attendance_core.geo.geofence import (
    GeoPoint,
    check_geofence,
    distance_meters,
    is_inside_office,
    normalize_location,
)

EARTH_RADIUS_M = 6_371_000.0


def _north_of(lat: float, lng: float, meters: float) -> dict:
    return {"lat": lat + math.degrees(meters / EARTH_RADIUS_M), "lng": lng}


def test_missing_office_fails_open():
    assert is_inside_office({"lat": 1, "lng": 1}, None) is True
    assert is_inside_office({"lat": 1, "lng": 1}, {}) is True
    assert is_inside_office({"lat": 1, "lng": 1}, {"lat": 1}) is True
    assert is_inside_office(None, OfficeLocation(lat=None, lng=None)) is True


def test_missing_user_location_fails_closed():
    office = {"lat": 1, "lng": 1, "radius": 3000}
    assert is_inside_office(None, office) is False
    assert is_inside_office({}, office) is False
    assert is_inside_office({"lat": "nan", "lng": 1}, office) is False


def test_boundary_is_inclusive():
    office = {"lat": 12.9716, "lng": 77.5946, "radius": 500}
    assert is_inside_office(_north_of(12.9716, 77.5946, 499.999), office)
    assert not is_inside_office(_north_of(12.9716, 77.5946, 501), office)


def test_default_radius_is_three_kilometres():
    office = {"lat": 0.0, "lng": 0.0}
    assert is_inside_office(_north_of(0.0, 0.0, 2990), office)
    assert not is_inside_office(_north_of(0.0, 0.0, 3010), office)


def test_check_reports_distance():
    check = check_geofence(_north_of(10.0, 10.0, 1200), {"lat": 10.0, "lng": 10.0, "radius": 1000})
    assert check.inside is False
    assert check.distance_m == pytest.approx(1200, abs=0.5)


def test_haversine_known_distance():
    # One degree of longitude on the equator.
    d = distance_meters(GeoPoint(0.0, 0.0), GeoPoint(0.0, 1.0))
    assert d == pytest.approx(111_195, rel=1e-4)


def test_normalize_accepts_long_names_and_string_numbers():
    point = normalize_location({"latitude": "12.5", "longitude": "77.1", "address": "Desk 4"})
    assert point == GeoPoint(lat=12.5, lng=77.1, address="Desk 4")
    assert normalize_location({"lat": True, "lng": 1}) is None
