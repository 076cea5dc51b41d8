# path: bike-router-api/bike_router/services/instruction_aggregator.py

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Protocol, Sequence, Tuple

from bike_router.models.route_models import Coordinates, Instruction, Point, RawLeg
from bike_router.utils.labels import resolve_label, strip_html


logger = logging.getLogger(__name__)

ARRIVE_MANEUVER = "arrive"
DEFAULT_DESTINATION_LABEL = "Destination"


class RouteLookups(Protocol):
    """Per-coordinate collaborator lookups. Both return None when the lookup fails."""

    def lookup_elevation(self, coord: Coordinates) -> Optional[float]:
        ...

    def lookup_label(self, coord: Coordinates) -> Optional[str]:
        ...


LookupResult = Tuple[float, str]  # (elevation, external label)


def _lookup_one(lookups: RouteLookups, coord: Coordinates) -> LookupResult:
    elevation = lookups.lookup_elevation(coord)
    label = lookups.lookup_label(coord)
    return (elevation if elevation is not None else 0.0, label or "")


def _lookup_all(
    lookups: RouteLookups, coords: Sequence[Coordinates], max_workers: int
) -> List[LookupResult]:
    if max_workers <= 1 or len(coords) <= 1:
        return [_lookup_one(lookups, c) for c in coords]
    # executor.map yields in submission order, so results line up with coords.
    with ThreadPoolExecutor(max_workers=min(max_workers, len(coords))) as pool:
        return list(pool.map(lambda c: _lookup_one(lookups, c), coords))


def _lookup_coords(legs: Sequence[RawLeg]) -> List[Coordinates]:
    coords: List[Coordinates] = []
    for leg in legs:
        coords.extend(step.start_location for step in leg.steps)
        coords.append(leg.end_location)
    return coords


def aggregate_route(
    legs: Sequence[RawLeg], lookups: RouteLookups, max_workers: int = 1
) -> Tuple[List[Instruction], List[Point]]:
    """
    Folds the provider's legs/steps into turn-by-turn instructions and raw waypoints.

    Each instruction carries the distance and time accumulated *before* its step,
    counted from the start of the route (not the leg). Every leg closes with an
    "arrive" instruction and a waypoint at the leg's end.

    Returns:
        (instructions, points), both in travel order. Points are not yet simplified.
    """
    looked_up = iter(_lookup_all(lookups, _lookup_coords(legs), max_workers))

    instructions: List[Instruction] = []
    points: List[Point] = []
    cum_dist = 0
    cum_time = 0

    for leg in legs:
        for step in leg.steps:
            elevation, external = next(looked_up)
            street = resolve_label(step.html_instructions, external) or strip_html(step.html_instructions)

            instructions.append(
                Instruction(
                    instruction=step.html_instructions,
                    distance_meters=cum_dist,
                    duration_seconds=cum_time,
                    maneuver=step.maneuver,
                    street_name=street,
                    start_location=step.start_location,
                )
            )
            points.append(
                Point(
                    lat=step.start_location.lat,
                    lng=step.start_location.lng,
                    description=street,
                    elevation=elevation,
                )
            )
            cum_dist += step.distance_m
            cum_time += step.duration_s

        elevation, end_label = next(looked_up)
        end_label = end_label or DEFAULT_DESTINATION_LABEL
        instructions.append(
            Instruction(
                instruction=f"Arrive at {end_label}",
                distance_meters=cum_dist,
                duration_seconds=cum_time,
                maneuver=ARRIVE_MANEUVER,
                street_name=end_label,
                start_location=leg.end_location,
            )
        )
        points.append(
            Point(
                lat=leg.end_location.lat,
                lng=leg.end_location.lng,
                description=end_label,
                elevation=elevation,
            )
        )

    logger.debug("Aggregated %d legs into %d instructions", len(legs), len(instructions))
    return instructions, points
