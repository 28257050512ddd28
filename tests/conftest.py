from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest
import requests

from airexplorer.services.analysis import PollutantAnalyzer
from airexplorer.services.pollutants import PollutantCatalog


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("No JSON payload")
        return self._payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error", response=self)


class FakeSession:
    """Records GET calls and replays queued responses."""

    def __init__(self, *responses: Any) -> None:
        self.responses: List[Any] = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def get(self, url: str, params: Optional[dict] = None, **kwargs: Any) -> FakeResponse:
        self.calls.append({"url": url, "params": params or {}, **kwargs})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def catalog() -> PollutantCatalog:
    return PollutantCatalog.default()


@pytest.fixture
def analyzer(catalog: PollutantCatalog) -> PollutantAnalyzer:
    return PollutantAnalyzer(catalog)


def pollution_payload(*items: Dict[str, Any]) -> Dict[str, Any]:
    return {"coord": {"lat": 51.505, "lon": -0.09}, "list": list(items)}


def pollution_item(dt: int, aqi: int, **components: float) -> Dict[str, Any]:
    return {"dt": dt, "main": {"aqi": aqi}, "components": components}
