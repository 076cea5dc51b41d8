# path: bike-router-api/bike_router/services/route_simplifier.py

from __future__ import annotations

import logging
from typing import List, Sequence

from bike_router.models.route_models import Point
from bike_router.utils.geo import distance_m


logger = logging.getLogger(__name__)


def decimate(points: Sequence[Point], min_spacing_m: float) -> List[Point]:
    """Drops interior points closer than min_spacing_m to the last kept point."""
    if len(points) <= 2:
        return list(points)

    kept = [points[0]]
    for curr in points[1:-1]:
        if distance_m(kept[-1], curr) >= min_spacing_m:
            kept.append(curr)
    kept.append(points[-1])
    return kept


def remove_zigzags(points: Sequence[Point], max_detour_m: float) -> List[Point]:
    """
    Drops short out-and-back detours.

    An interior point is a detour when going straight from the last kept point
    to the next point is shorter than either leg through it, and shorter than
    max_detour_m.
    """
    if len(points) <= 2:
        return list(points)

    kept = [points[0]]
    for i in range(1, len(points) - 1):
        prev = kept[-1]
        curr = points[i]
        nxt = points[i + 1]

        d1 = distance_m(prev, curr)
        d2 = distance_m(curr, nxt)
        back = distance_m(prev, nxt)
        if back < d1 and back < d2 and back < max_detour_m:
            continue
        kept.append(curr)
    kept.append(points[-1])
    return kept


def merge_duplicate_labels(points: Sequence[Point]) -> List[Point]:
    kept: List[Point] = []
    for p in points:
        if kept and kept[-1].description == p.description:
            continue
        kept.append(p)
    return kept


def simplify_route(points: Sequence[Point], min_spacing_m: float, max_detour_m: float) -> List[Point]:
    decimated = decimate(points, min_spacing_m)
    unzigged = remove_zigzags(decimated, max_detour_m)
    merged = merge_duplicate_labels(unzigged)
    logger.debug(
        "Simplified route: %d -> %d (decimate) -> %d (zigzag) -> %d (labels)",
        len(points), len(decimated), len(unzigged), len(merged),
    )
    return merged
