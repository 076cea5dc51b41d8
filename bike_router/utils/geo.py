# path: bike-router-api/bike_router/utils/geo.py

from __future__ import annotations

from typing import Protocol
import math


EARTH_RADIUS_M = 6371000.0


class HasLatLng(Protocol):
    lat: float
    lng: float


def haversine_m(a_lat: float, a_lng: float, b_lat: float, b_lng: float) -> float:
    phi1 = math.radians(a_lat)
    phi2 = math.radians(b_lat)
    dphi = math.radians(b_lat - a_lat)
    dlmb = math.radians(b_lng - a_lng)

    h = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
    # Rounding can push h a hair outside [0, 1] for antipodal points.
    h = min(1.0, max(0.0, h))
    return 2 * EARTH_RADIUS_M * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def distance_m(a: HasLatLng, b: HasLatLng) -> float:
    """Great-circle distance in meters between anything carrying lat/lng."""
    return haversine_m(a.lat, a.lng, b.lat, b.lng)
