# path: bike-router-api/bike_router/config.py

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import dotenv_values


DEFAULT_SPACING_M = 15.0
DEFAULT_ZIGZAG_M = 30.0
DEFAULT_LOOKUP_MAX_WORKERS = 8
DEFAULT_MAPS_TIMEOUT_S = 10
DEFAULT_NTFY_BASE_URL = "https://ntfy.sh"
DEFAULT_NTFY_ERROR_TOPIC = "bike-byui-hack-errors"
DEFAULT_NTFY_INFO_TOPIC = "bike-byui-hack-info"


@dataclass(frozen=True)
class Settings:
    google_maps_api_key: str = ""
    spacing_m: float = DEFAULT_SPACING_M
    zigzag_m: float = DEFAULT_ZIGZAG_M
    alternatives: bool = True
    lookup_max_workers: int = DEFAULT_LOOKUP_MAX_WORKERS
    maps_timeout_s: int = DEFAULT_MAPS_TIMEOUT_S
    ntfy_base_url: str = DEFAULT_NTFY_BASE_URL
    ntfy_error_topic: str = DEFAULT_NTFY_ERROR_TOPIC
    ntfy_info_topic: str = DEFAULT_NTFY_INFO_TOPIC
    notifications_enabled: bool = True
    log_level: str = "INFO"


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_settings(env_file: str = ".env") -> Settings:
    # Process environment wins over the .env file.
    file_values = dotenv_values(env_file)

    def get(name: str, default: str) -> str:
        value = os.getenv(name) or file_values.get(name)
        return value if value else default

    return Settings(
        google_maps_api_key=get("GOOGLE_MAPS_API_KEY", ""),
        spacing_m=float(get("ROUTE_SPACING_M", str(DEFAULT_SPACING_M))),
        zigzag_m=float(get("ROUTE_ZIGZAG_M", str(DEFAULT_ZIGZAG_M))),
        alternatives=_as_bool(get("ROUTE_ALTERNATIVES", "true")),
        lookup_max_workers=int(get("LOOKUP_MAX_WORKERS", str(DEFAULT_LOOKUP_MAX_WORKERS))),
        maps_timeout_s=int(get("MAPS_TIMEOUT_S", str(DEFAULT_MAPS_TIMEOUT_S))),
        ntfy_base_url=get("NTFY_BASE_URL", DEFAULT_NTFY_BASE_URL).rstrip("/"),
        ntfy_error_topic=get("NTFY_ERROR_TOPIC", DEFAULT_NTFY_ERROR_TOPIC),
        ntfy_info_topic=get("NTFY_INFO_TOPIC", DEFAULT_NTFY_INFO_TOPIC),
        notifications_enabled=_as_bool(get("NOTIFICATIONS_ENABLED", "true")),
        log_level=get("LOG_LEVEL", "INFO").upper(),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
