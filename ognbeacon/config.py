"""Configuration settings for the OGN beacon service."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _get_bool(env_var: str, default: bool = False) -> bool:
    """Parse an environment variable into a boolean with a default."""

    value = os.getenv(env_var)
    if value is None:
        return default

    return value.lower() in {"1", "true", "yes", "on"}


def _get_float(env_var: str) -> float | None:
    value = os.getenv(env_var)
    return float(value) if value else None


@dataclass
class Settings:
    """Application configuration loaded from environment variables."""

    ognbeacon_env: str = os.getenv("OGNBEACON_ENV", "local")
    log_level: str = os.getenv("OGNBEACON_LOG_LEVEL", "INFO")

    # APRS-IS feed
    feed_enabled: bool = _get_bool("FEED_ENABLED")
    feed_host: str = os.getenv("FEED_HOST", "aprs.glidernet.org")
    feed_port: int = int(os.getenv("FEED_PORT", "14580"))
    feed_callsign: str | None = os.getenv("FEED_CALLSIGN")
    # -1 logs in read-only
    feed_passcode: str = os.getenv("FEED_PASSCODE", "-1")
    feed_filter: str | None = os.getenv("FEED_FILTER")
    feed_filter_center_lat: float | None = _get_float("FEED_FILTER_CENTER_LAT")
    feed_filter_center_lon: float | None = _get_float("FEED_FILTER_CENTER_LON")
    feed_filter_radius_km: float | None = _get_float("FEED_FILTER_RADIUS_KM")
    process_aircraft_beacons: bool = _get_bool("PROCESS_AIRCRAFT_BEACONS", default=True)
    process_receiver_beacons: bool = _get_bool("PROCESS_RECEIVER_BEACONS", default=True)

    # FlarmNet device registry
    registry_url: str = os.getenv("REGISTRY_URL", "http://flarmnet.org/files/data.fln")
    registry_timeout: float = float(os.getenv("REGISTRY_TIMEOUT", "30.0"))
    registry_reload_on_startup: bool = _get_bool("REGISTRY_RELOAD_ON_STARTUP")

    api_base_url: str = os.getenv("API_BASE_URL", "http://localhost:8000")


settings = Settings()

__all__ = ["settings", "Settings"]
