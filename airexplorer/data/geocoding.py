"""Place-name lookup through OpenStreetMap Nominatim."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import requests

from ..errors import FetchError, NotFound
from ..utils.config import DEFAULT_USER_AGENT
from .readings import Coordinates

LOGGER = logging.getLogger(__name__)

NOMINATIM_SEARCH_URL = "https://nominatim.openstreetmap.org/search"


@dataclass(frozen=True)
class Place:
    name: str
    coordinates: Coordinates


class GeocodingClient:
    def __init__(
        self,
        session: Optional[requests.Session] = None,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 30,
    ) -> None:
        self.session = session or requests.Session()
        self.user_agent = user_agent
        self.timeout = timeout

    def search(self, query: str) -> Place:
        """Return the best match for ``query``."""
        query = query.strip()
        if not query:
            raise ValueError("Please enter a place name")

        LOGGER.debug("Geocoding %r", query)
        try:
            response = self.session.get(
                NOMINATIM_SEARCH_URL,
                params={"format": "json", "q": query, "limit": 1},
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout,
            )
            response.raise_for_status()
            results = response.json()
        except requests.RequestException as exc:
            LOGGER.warning("Geocoding request for %r failed: %s", query, exc)
            raise FetchError(f"Error searching for location: {exc}") from exc
        except ValueError as exc:
            raise FetchError("Geocoding service returned a malformed payload") from exc

        if isinstance(results, dict) and "error" in results:
            LOGGER.warning("Geocoding service error for %r: %s", query, results["error"])
            raise FetchError(f"Error searching for location: {results['error']}")
        if not isinstance(results, list):
            raise FetchError("Geocoding service returned a malformed payload")
        if not results:
            raise NotFound(f"Location not found: {query}")

        best = results[0]
        try:
            return Place(
                name=best.get("display_name", query),
                coordinates=Coordinates(lat=float(best["lat"]), lon=float(best["lon"])),
            )
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise FetchError(f"Geocoding service returned an unusable result: {exc}") from exc
