# path: bike-router-api/bike_router/dependencies.py

from functools import lru_cache

from fastapi import Depends

from bike_router.clients.google_maps import GoogleMapsProvider
from bike_router.config import Settings, get_settings


@lru_cache(maxsize=1)
def get_provider_instance() -> GoogleMapsProvider:
    return GoogleMapsProvider(get_settings())


def get_provider(provider: GoogleMapsProvider = Depends(get_provider_instance)) -> GoogleMapsProvider:
    return provider


def get_app_settings() -> Settings:
    return get_settings()
