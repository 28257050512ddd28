"""Configuration helpers for credentials and defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from dotenv import dotenv_values

from ..errors import InvalidApiKey

DEFAULT_LAT = 51.505
DEFAULT_LON = -0.09
DEFAULT_USER_AGENT = "airexplorer/0.1 (air quality dashboard)"


@dataclass(frozen=True)
class Settings:
    openweather_api_key: Optional[str]
    default_lat: float = DEFAULT_LAT
    default_lon: float = DEFAULT_LON
    nominatim_user_agent: str = DEFAULT_USER_AGENT

    def require_api_key(self) -> str:
        if not self.openweather_api_key:
            raise InvalidApiKey(
                "OpenWeather API key must be set in OPENWEATHER_API_KEY or .env"
            )
        return self.openweather_api_key


def _read_env(env_path: Path | None) -> Dict[str, Optional[str]]:
    env_path = env_path or Path(".env")
    values: Dict[str, Optional[str]] = {}
    if env_path.exists():
        values.update(dotenv_values(str(env_path)))
    for key, value in os.environ.items():
        if value:
            values[key] = value
    return values


def load_settings(env_path: Path | None = None) -> Settings:
    """Load settings from environment variables, falling back to a .env file."""
    values = _read_env(env_path)
    return Settings(
        openweather_api_key=values.get("OPENWEATHER_API_KEY") or None,
        default_lat=float(values.get("AIREXPLORER_DEFAULT_LAT") or DEFAULT_LAT),
        default_lon=float(values.get("AIREXPLORER_DEFAULT_LON") or DEFAULT_LON),
        nominatim_user_agent=values.get("AIREXPLORER_NOMINATIM_USER_AGENT") or DEFAULT_USER_AGENT,
    )
