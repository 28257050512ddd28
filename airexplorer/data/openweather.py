"""Access the OpenWeather Air Pollution API."""

from __future__ import annotations

import logging
from typing import Dict, Optional

import requests

from ..errors import FetchError, InvalidApiKey, NotFound
from .readings import AirPollutionResponse, Coordinates, TimeRange

LOGGER = logging.getLogger(__name__)

OPENWEATHER_BASE_URL = "https://api.openweathermap.org/data/2.5/air_pollution"
PROBE_LOCATION = Coordinates(lat=51.505, lon=-0.09)

_ENDPOINTS: Dict[str, str] = {
    "current": "",
    "forecast": "/forecast",
    "historical": "/history",
}


def response_detail(response: Optional[requests.Response]) -> str:
    """Best-effort error text from a failed response."""
    if response is None:
        return ""
    try:
        payload = response.json()
    except ValueError:
        return (response.text or "").strip()[:200]
    if isinstance(payload, dict):
        return str(payload.get("message", ""))
    return ""


class OpenWeatherClient:
    """Thin wrapper around the OpenWeather air pollution endpoints."""

    def __init__(
        self,
        api_key: Optional[str],
        session: Optional[requests.Session] = None,
        base_url: str = OPENWEATHER_BASE_URL,
        timeout: float = 30,
    ) -> None:
        self.api_key = api_key
        self.session = session or requests.Session()
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _get(self, url: str, params: Dict[str, object]) -> dict:
        if not self.api_key:
            raise InvalidApiKey("OpenWeather API key is not configured")
        query = dict(params)
        query["appid"] = self.api_key
        LOGGER.debug("Requesting OpenWeather %s lat=%s lon=%s", url, params.get("lat"), params.get("lon"))
        try:
            response = self.session.get(url, params=query, timeout=self.timeout)
        except requests.RequestException as exc:
            LOGGER.warning("OpenWeather request failed: %s", exc)
            raise FetchError(f"Unable to reach OpenWeather: {exc}") from exc

        if response.status_code == 401:
            raise InvalidApiKey("OpenWeather rejected the API key", status=401)
        if response.status_code == 404:
            raise NotFound("OpenWeather has no data for this request", status=404)
        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            detail = response_detail(response)
            LOGGER.warning("OpenWeather returned status %s: %s", response.status_code, detail)
            if detail:
                message = f"OpenWeather request failed (status {response.status_code}): {detail}"
            else:
                message = f"OpenWeather request failed with status {response.status_code}."
            raise FetchError(message, status=response.status_code) from exc

        try:
            return response.json()
        except ValueError as exc:
            raise FetchError("OpenWeather returned a malformed payload") from exc

    def fetch(
        self,
        lat: float,
        lon: float,
        time_range: TimeRange = "current",
        start: Optional[int] = None,
        end: Optional[int] = None,
    ) -> AirPollutionResponse:
        """Fetch readings for a location; ``historical`` needs unix start and end."""
        coordinates = Coordinates(lat=lat, lon=lon)
        if time_range not in _ENDPOINTS:
            raise ValueError(f"Unsupported time range {time_range}")

        params: Dict[str, object] = {"lat": coordinates.lat, "lon": coordinates.lon}
        if time_range == "historical":
            if start is None or end is None:
                raise ValueError("Historical data requires start and end timestamps")
            params.update({"start": int(start), "end": int(end)})

        payload = self._get(f"{self.base_url}{_ENDPOINTS[time_range]}", params)
        try:
            return AirPollutionResponse.from_payload(payload)
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise FetchError(f"Unexpected OpenWeather payload: {exc}") from exc

    def validate_api_key(self) -> bool:
        """Return True when a probe request with the configured key succeeds."""
        try:
            self.fetch(PROBE_LOCATION.lat, PROBE_LOCATION.lon)
        except InvalidApiKey:
            return False
        except FetchError as exc:
            LOGGER.warning("Could not validate OpenWeather API key: %s", exc)
            return False
        return True
