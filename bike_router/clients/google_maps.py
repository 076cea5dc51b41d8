# path: bike-router-api/bike_router/clients/google_maps.py

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import googlemaps
from googlemaps import exceptions as gmaps_errors

from bike_router.config import Settings
from bike_router.models.route_models import Coordinates, RawLeg, RawRoute, RawStep


logger = logging.getLogger(__name__)

TRAVEL_MODE = "bicycling"

# Everything the googlemaps client raises for a failed call.
MAPS_ERRORS = (
    gmaps_errors.ApiError,
    gmaps_errors.TransportError,
    gmaps_errors.Timeout,
)


class DirectionsError(Exception):
    """Raised when the provider cannot produce directions."""
    pass


def _coords(loc: Dict[str, Any]) -> Coordinates:
    return Coordinates(lat=float(loc["lat"]), lng=float(loc["lng"]))


def parse_step(step: Dict[str, Any]) -> RawStep:
    return RawStep(
        start_location=_coords(step["start_location"]),
        end_location=_coords(step["end_location"]),
        html_instructions=step.get("html_instructions", ""),
        distance_m=int(step.get("distance", {}).get("value", 0)),
        duration_s=int(step.get("duration", {}).get("value", 0)),
        maneuver=step.get("maneuver", ""),
    )


def parse_directions(payload: List[Dict[str, Any]]) -> List[RawRoute]:
    """Maps a Directions API result list onto RawRoute models, keeping provider order."""
    routes = []
    for route in payload:
        legs = [
            RawLeg(
                steps=[parse_step(s) for s in leg.get("steps", [])],
                end_location=_coords(leg["end_location"]),
            )
            for leg in route.get("legs", [])
        ]
        routes.append(RawRoute(legs=legs))
    return routes


class GoogleMapsProvider:
    """
    Google Maps adapter / client

    Sole responsibility:
    - Talk to the Directions, Elevation and Geocoding APIs
    - Convert responses to the internal Raw* models
    - Degrade lookups to None instead of raising
    """

    def __init__(self, settings: Settings, client: Optional[googlemaps.Client] = None):
        self.alternatives = settings.alternatives
        if client is None:
            if not settings.google_maps_api_key:
                raise ValueError("set GOOGLE_MAPS_API_KEY environment variable")
            client = googlemaps.Client(key=settings.google_maps_api_key, timeout=settings.maps_timeout_s)
        self.client = client

    def directions(self, origin: Coordinates, destination: str) -> List[RawRoute]:
        try:
            payload = self.client.directions(
                origin.as_param(),
                destination,
                mode=TRAVEL_MODE,
                alternatives=self.alternatives,
            )
        except MAPS_ERRORS as exc:
            raise DirectionsError(str(exc)) from exc
        try:
            return parse_directions(payload or [])
        except (KeyError, TypeError, ValueError) as exc:
            raise DirectionsError(f"malformed directions response: {exc}") from exc

    def lookup_elevation(self, coord: Coordinates) -> Optional[float]:
        try:
            results = self.client.elevation((coord.lat, coord.lng))
        except MAPS_ERRORS as exc:
            logger.warning("Elevation lookup failed for %s: %s", coord.as_param(), exc)
            return None
        if not results:
            return None
        return float(results[0].get("elevation", 0.0))

    def lookup_label(self, coord: Coordinates) -> Optional[str]:
        try:
            results = self.client.reverse_geocode((coord.lat, coord.lng))
        except MAPS_ERRORS as exc:
            logger.warning("Reverse geocode failed for %s: %s", coord.as_param(), exc)
            return None
        if not results:
            return None
        # Prefer the street name; the full address is a last resort.
        for comp in results[0].get("address_components", []):
            if "route" in comp.get("types", []):
                return comp.get("long_name")
        return results[0].get("formatted_address")
