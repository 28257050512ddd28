"""Typed records for OpenWeather air pollution payloads."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Dict, Iterator, List, Literal, Mapping, Optional, Tuple

from ..errors import InvalidArgument

TimeRange = Literal["current", "forecast", "historical"]

COMPONENT_KEYS: Tuple[str, ...] = ("co", "no", "no2", "o3", "so2", "pm2_5", "pm10", "nh3")


def _coerce_concentration(key: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidArgument(f"Concentration for {key} must be numeric, got {value!r}")
    value = float(value)
    if math.isnan(value) or value < 0:
        raise InvalidArgument(f"Concentration for {key} must be a non-negative number, got {value}")
    return value


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lon: float

    def __post_init__(self) -> None:
        if not -90 <= self.lat <= 90:
            raise ValueError("Latitude must be between -90 and 90")
        if not -180 <= self.lon <= 180:
            raise ValueError("Longitude must be between -180 and 180")


@dataclass(frozen=True)
class PollutantReading:
    """Concentrations in μg/m³ for one location at one timestamp.

    Every field is optional. ``order`` remembers the key order of the mapping
    the reading was built from so that consumers can report pollutants in the
    order the API listed them.
    """

    co: Optional[float] = None
    no: Optional[float] = None
    no2: Optional[float] = None
    o3: Optional[float] = None
    so2: Optional[float] = None
    pm2_5: Optional[float] = None
    pm10: Optional[float] = None
    nh3: Optional[float] = None
    order: Tuple[str, ...] = field(default=(), compare=False, repr=False)

    def __post_init__(self) -> None:
        for key in COMPONENT_KEYS:
            value = getattr(self, key)
            if value is not None:
                object.__setattr__(self, key, _coerce_concentration(key, value))
        unknown = [key for key in self.order if key not in COMPONENT_KEYS]
        if unknown:
            raise ValueError(f"Unknown pollutant keys in order: {unknown}")

    @classmethod
    def from_mapping(cls, components: Mapping[str, Any]) -> "PollutantReading":
        """Build a reading from a raw ``components`` mapping, skipping unknown keys."""
        values: Dict[str, Any] = {}
        for key, value in components.items():
            if key in COMPONENT_KEYS and value is not None:
                values[key] = value
        return cls(order=tuple(values), **values)

    def items(self) -> Iterator[Tuple[str, float]]:
        keys = self.order or COMPONENT_KEYS
        for key in keys:
            value = getattr(self, key)
            if value is not None:
                yield key, value

    def as_dict(self) -> Dict[str, float]:
        return dict(self.items())


@dataclass(frozen=True)
class AirQualityRecord:
    dt: int
    aqi: int
    components: PollutantReading

    @classmethod
    def from_payload(cls, item: Mapping[str, Any]) -> "AirQualityRecord":
        if not isinstance(item, Mapping):
            raise TypeError(f"Expected a reading object, got {type(item).__name__}")
        components = item.get("components") or {}
        if not isinstance(components, Mapping):
            raise TypeError(f"Expected components object, got {type(components).__name__}")
        return cls(
            dt=int(item["dt"]),
            aqi=int(item["main"]["aqi"]),
            components=PollutantReading.from_mapping(components),
        )


@dataclass(frozen=True)
class AirPollutionResponse:
    coord: Coordinates
    records: List[AirQualityRecord]

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "AirPollutionResponse":
        if not isinstance(payload, Mapping):
            raise TypeError(f"Expected a response object, got {type(payload).__name__}")
        coord = payload.get("coord") or {}
        items = payload.get("list") or []
        if not isinstance(coord, Mapping) or not isinstance(items, list):
            raise TypeError("Response coord must be an object and list must be an array")
        return cls(
            coord=Coordinates(lat=float(coord["lat"]), lon=float(coord["lon"])),
            records=[AirQualityRecord.from_payload(item) for item in items],
        )

    @property
    def latest(self) -> Optional[AirQualityRecord]:
        return self.records[0] if self.records else None
