# path: bike-router-api/bike_router/api/routes/routes.py

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from bike_router.clients.google_maps import DirectionsError, GoogleMapsProvider
from bike_router.config import Settings
from bike_router.dependencies import get_app_settings, get_provider
from bike_router.models.route_models import RouteInput, RouteOutput
from bike_router.services.route_builder import build_route_set
from bike_router.utils.notifications import (
    format_error_notification,
    format_info_notification,
    send_notification,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["route"])

CONTEXT = "Route Handler"


@router.post("/route", response_model=RouteOutput)
def create_route(
    req: RouteInput,
    provider: GoogleMapsProvider = Depends(get_provider),
    settings: Settings = Depends(get_app_settings),
) -> RouteOutput:
    origin = req.origin.as_param()
    try:
        raw_routes = provider.directions(req.origin, req.destination)
    except DirectionsError as e:
        logger.error("Directions failed for %s -> %s: %s", origin, req.destination, e)
        send_notification(format_error_notification(Exception(f"directions error: {e}"), CONTEXT, settings), settings)
        raise HTTPException(status_code=500, detail=f"directions error: {e}")

    if not raw_routes:
        raise HTTPException(status_code=404, detail="no routes")

    out = build_route_set(
        raw_routes,
        provider,
        spacing_m=req.spacing_m or settings.spacing_m,
        zigzag_m=req.zigzag_m or settings.zigzag_m,
        max_workers=settings.lookup_max_workers,
    )

    info = f"Route request processed: Origin={origin}, Destination={req.destination}, RoutesFound={len(out.routes)}"
    logger.info(info)
    send_notification(format_info_notification(info, CONTEXT, settings), settings)
    return out
