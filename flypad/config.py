"""Configuration settings for the flypad backend."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger("flypad.config")


def _get_bool(env_var: str, default: bool = False) -> bool:
    """Parse an environment variable into a boolean with a default."""

    value = os.getenv(env_var)
    if value is None:
        return default

    return value.lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    """Application configuration loaded from environment variables."""

    flypad_env: str = os.getenv("FLYPAD_ENV", "local")
    log_level: str = os.getenv("FLYPAD_LOG_LEVEL", "INFO")

    # Weather (METAR/TAF) service
    weather_base_url: str = os.getenv(
        "WEATHER_BASE_URL", "https://aviationweather.gov/api/data/metar"
    )
    weather_timeout: float = float(os.getenv("WEATHER_TIMEOUT", "10.0"))
    weather_include_taf: bool = _get_bool("WEATHER_INCLUDE_TAF", default=True)

    # Flight planning service
    simbrief_base_url: str = os.getenv(
        "SIMBRIEF_BASE_URL", "https://www.simbrief.com/api/xml.fetcher.php"
    )
    simbrief_timeout: float = float(os.getenv("SIMBRIEF_TIMEOUT", "15.0"))
    simbrief_default_user_id: str = os.getenv("SIMBRIEF_USER_ID", "")

    # Persisted user identifier
    user_id_path: str = os.getenv("FLYPAD_USER_ID_PATH", "user.json")


settings = Settings()

__all__ = ["settings", "Settings"]
