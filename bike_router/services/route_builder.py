# path: bike-router-api/bike_router/services/route_builder.py

from __future__ import annotations

import logging
from typing import Sequence

from bike_router.models.route_models import RawRoute, Route, RouteOutput
from bike_router.services.instruction_aggregator import RouteLookups, aggregate_route
from bike_router.services.route_annotator import annotate_downhill
from bike_router.services.route_simplifier import simplify_route


logger = logging.getLogger(__name__)


def build_route(
    route_id: int,
    raw: RawRoute,
    lookups: RouteLookups,
    spacing_m: float,
    zigzag_m: float,
    max_workers: int = 1,
) -> Route:
    instructions, raw_points = aggregate_route(raw.legs, lookups, max_workers=max_workers)
    points = annotate_downhill(simplify_route(raw_points, spacing_m, zigzag_m))
    return Route(id=route_id, points=points, instructions=instructions)


def build_route_set(
    raw_routes: Sequence[RawRoute],
    lookups: RouteLookups,
    spacing_m: float,
    zigzag_m: float,
    max_workers: int = 1,
) -> RouteOutput:
    """Refines every provider alternative, numbering them from 1 in provider order."""
    routes = [
        build_route(i, raw, lookups, spacing_m, zigzag_m, max_workers=max_workers)
        for i, raw in enumerate(raw_routes, start=1)
    ]
    logger.debug("Built %d routes (spacing=%.1fm, zigzag=%.1fm)", len(routes), spacing_m, zigzag_m)
    return RouteOutput(routes=routes)
