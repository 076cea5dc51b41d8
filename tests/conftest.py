from typing import Dict, List, Optional, Tuple

import pytest

from bike_router.models.route_models import Coordinates, Point, RawLeg, RawRoute, RawStep


# Roughly 1.11 m per 0.00001 degree of latitude.
M_PER_DEG_LAT = 111194.93


def north_of(lat: float, lng: float, meters: float) -> Tuple[float, float]:
    return lat + meters / M_PER_DEG_LAT, lng


def make_point(lat: float, lng: float, description: str = "", elevation: float = 0.0) -> Point:
    return Point(lat=lat, lng=lng, description=description, elevation=elevation)


def line_of_points(count: int, spacing_m: float, start=(43.8231, -111.7924), labels=None) -> List[Point]:
    """Points due north of start, spacing_m apart, each with a distinct label unless given."""
    lat, lng = start
    pts = []
    for i in range(count):
        p_lat, p_lng = north_of(lat, lng, i * spacing_m)
        desc = labels[i] if labels else f"p{i}"
        pts.append(make_point(p_lat, p_lng, desc))
    return pts


class StubLookups:
    """Deterministic lookups keyed by (lat, lng); missing keys behave like failed lookups."""

    def __init__(self, elevations: Optional[Dict] = None, labels: Optional[Dict] = None):
        self.elevations = elevations or {}
        self.labels = labels or {}
        self.calls: List[Tuple[str, Tuple[float, float]]] = []

    def lookup_elevation(self, coord: Coordinates) -> Optional[float]:
        self.calls.append(("elevation", (coord.lat, coord.lng)))
        return self.elevations.get((coord.lat, coord.lng))

    def lookup_label(self, coord: Coordinates) -> Optional[str]:
        self.calls.append(("label", (coord.lat, coord.lng)))
        return self.labels.get((coord.lat, coord.lng))


class FakeProvider(StubLookups):
    def __init__(self, routes: Optional[List[RawRoute]] = None, error: Optional[Exception] = None, **kwargs):
        super().__init__(**kwargs)
        self.routes = routes or []
        self.error = error
        self.requests: List[Tuple[Coordinates, str]] = []

    def directions(self, origin: Coordinates, destination: str) -> List[RawRoute]:
        self.requests.append((origin, destination))
        if self.error is not None:
            raise self.error
        return self.routes


def step(start, end, markup="", dist=0, dur=0, maneuver="") -> RawStep:
    return RawStep(
        start_location=Coordinates(lat=start[0], lng=start[1]),
        end_location=Coordinates(lat=end[0], lng=end[1]),
        html_instructions=markup,
        distance_m=dist,
        duration_s=dur,
        maneuver=maneuver,
    )


def leg(steps: List[RawStep], end) -> RawLeg:
    return RawLeg(steps=steps, end_location=Coordinates(lat=end[0], lng=end[1]))


@pytest.fixture
def two_leg_route() -> RawRoute:
    # Rexburg, ID: two legs split around an intermediate stop.
    a, b, c = (43.8231, -111.7924), (43.8260, -111.7924), (43.8260, -111.7880)
    d, e = (43.8300, -111.7880), (43.8300, -111.7840)
    return RawRoute(
        legs=[
            leg(
                [
                    step(a, b, "Head <b>north</b> on <b>S Center St</b>", 320, 60),
                    step(b, c, "Turn <b>right</b> onto <b>E Main St</b>", 350, 70, "turn-right"),
                ],
                c,
            ),
            leg(
                [
                    step(c, d, "Turn <b>left</b> onto <b>N 2nd E</b>", 445, 90, "turn-left"),
                    step(d, e, "Continue straight", 320, 65, "straight"),
                ],
                e,
            ),
        ]
    )
