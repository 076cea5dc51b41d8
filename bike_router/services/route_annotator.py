# path: bike-router-api/bike_router/services/route_annotator.py

from __future__ import annotations

from typing import List, Sequence

from bike_router.models.route_models import Point


def annotate_downhill(points: Sequence[Point]) -> List[Point]:
    """
    Flags each point whose successor sits lower as downhill.
    The last point has no successor and keeps whatever flag it came with.
    """
    out: List[Point] = []
    for i, p in enumerate(points):
        if i + 1 < len(points):
            p = p.model_copy(update={"is_down_hill": points[i + 1].elevation < p.elevation})
        out.append(p)
    return out
