"""Exception hierarchy shared by the API clients and the analyzer."""

from __future__ import annotations

from typing import Optional


class AirExplorerError(Exception):
    """Base class for recoverable errors surfaced to the dashboard."""


class FetchError(AirExplorerError):
    """A remote service could not be reached or returned an unusable answer."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class InvalidApiKey(FetchError):
    """The OpenWeather API key is missing or was rejected."""


class NotFound(FetchError):
    """The requested location or resource does not exist."""


class InvalidArgument(ValueError):
    """A pollutant reading carried a negative or non-numeric concentration."""
