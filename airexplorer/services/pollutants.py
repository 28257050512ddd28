"""Pollutant definitions and threshold bands."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Tuple


class Band(IntEnum):
    """Severity classes, numbered like the OpenWeather AQI index."""

    GOOD = 1
    FAIR = 2
    MODERATE = 3
    POOR = 4
    VERY_POOR = 5

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()


BAND_COLORS: Dict[Band, str] = {
    Band.GOOD: "#50c878",
    Band.FAIR: "#f4d03f",
    Band.MODERATE: "#f39c12",
    Band.POOR: "#e74c3c",
    Band.VERY_POOR: "#8e44ad",
}
UNKNOWN_COLOR = "#9e9e9e"


@dataclass(frozen=True)
class ThresholdSet:
    """Upper limits of the Good, Fair, Moderate and Poor bands.

    Anything above ``poor`` is Very Poor. A value equal to a boundary stays in
    the lower band.
    """

    good: float
    fair: float
    moderate: float
    poor: float

    def __post_init__(self) -> None:
        if not 0 < self.good < self.fair < self.moderate < self.poor:
            raise ValueError(f"Thresholds must be positive and strictly increasing: {self}")

    @property
    def boundaries(self) -> Tuple[float, float, float, float]:
        return (self.good, self.fair, self.moderate, self.poor)

    def classify(self, value: float) -> Band:
        band = Band.GOOD
        for boundary in self.boundaries:
            if value > boundary:
                band = Band(band + 1)
        return band


@dataclass(frozen=True)
class PollutantDefinition:
    key: str
    name: str
    full_name: str
    unit: str
    description: str
    sources: Tuple[str, ...]
    health_effects: str
    thresholds: ThresholdSet


class PollutantCatalog(Mapping[str, PollutantDefinition]):
    """Read-only lookup of pollutant definitions keyed by API component name."""

    def __init__(self, definitions: Mapping[str, PollutantDefinition]) -> None:
        for key, definition in definitions.items():
            if key != definition.key:
                raise ValueError(f"Definition for {definition.key} registered under {key}")
        self._definitions = MappingProxyType(dict(definitions))

    def __getitem__(self, key: str) -> PollutantDefinition:
        return self._definitions[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    @classmethod
    def default(cls) -> "PollutantCatalog":
        return cls({definition.key: definition for definition in _DEFAULT_DEFINITIONS})


UNIT = "μg/m³"

_DEFAULT_DEFINITIONS: Tuple[PollutantDefinition, ...] = (
    PollutantDefinition(
        key="co",
        name="CO",
        full_name="Carbon Monoxide",
        unit=UNIT,
        description=(
            "Carbon monoxide is a colorless, odorless gas produced by incomplete "
            "combustion of carbon-containing fuels."
        ),
        sources=("Vehicle exhaust", "Coal and wood burning", "Gas furnaces and stoves", "Industrial processes"),
        health_effects=(
            "Carbon monoxide reduces the blood's ability to carry oxygen. Low levels can cause "
            "dizziness, headaches, and fatigue. High levels can be fatal."
        ),
        thresholds=ThresholdSet(good=4400, fair=9400, moderate=12400, poor=15400),
    ),
    PollutantDefinition(
        key="no2",
        name="NO₂",
        full_name="Nitrogen Dioxide",
        unit=UNIT,
        description=(
            "Nitrogen dioxide is a reddish-brown gas with a sharp odor. It's part of a group "
            "of pollutants called nitrogen oxides (NOx)."
        ),
        sources=("Vehicle emissions", "Power plants", "Industrial processes", "Gas stoves and heaters"),
        health_effects=(
            "NO₂ can irritate the respiratory system, worsen asthma, and contribute to the "
            "development of respiratory infections."
        ),
        thresholds=ThresholdSet(good=40, fair=70, moderate=150, poor=200),
    ),
    PollutantDefinition(
        key="o3",
        name="O₃",
        full_name="Ozone",
        unit=UNIT,
        description=(
            "Ground-level ozone forms when nitrogen oxides and volatile organic compounds "
            "react in sunlight."
        ),
        sources=(
            "Vehicle exhaust",
            "Industrial emissions",
            "Chemical solvents",
            "Created by sunlight reacting with other pollutants",
        ),
        health_effects=(
            "Ozone can cause coughing, throat irritation, chest pain, and reduced lung function. "
            "It can worsen asthma, bronchitis, and emphysema."
        ),
        thresholds=ThresholdSet(good=60, fair=100, moderate=140, poor=180),
    ),
    PollutantDefinition(
        key="so2",
        name="SO₂",
        full_name="Sulfur Dioxide",
        unit=UNIT,
        description="Sulfur dioxide is a colorless gas with a sharp odor, released by burning sulfur-bearing fuels.",
        sources=("Coal and oil burning power plants", "Industrial processes", "Smelters", "Diesel vehicles"),
        health_effects=(
            "SO₂ irritates the respiratory system, causing coughing, mucus secretion, and "
            "aggravation of asthma."
        ),
        thresholds=ThresholdSet(good=20, fair=80, moderate=250, poor=350),
    ),
    PollutantDefinition(
        key="pm2_5",
        name="PM2.5",
        full_name="Fine Particulate Matter",
        unit=UNIT,
        description="Particles or droplets in the air that are 2.5 micrometers or less in width.",
        sources=("Vehicle exhaust", "Power plants", "Wood burning", "Industrial processes", "Wildfires"),
        health_effects=(
            "PM2.5 can penetrate deep into the lungs and enter the bloodstream, causing "
            "respiratory and cardiovascular problems."
        ),
        thresholds=ThresholdSet(good=10, fair=25, moderate=50, poor=75),
    ),
    PollutantDefinition(
        key="pm10",
        name="PM10",
        full_name="Coarse Particulate Matter",
        unit=UNIT,
        description="Inhalable particles with diameters generally 10 micrometers and smaller.",
        sources=(
            "Dust from roads and construction",
            "Agricultural operations",
            "Industrial processes",
            "Pollen and mold spores",
        ),
        health_effects=(
            "PM10 can irritate the eyes, nose, and throat, and can cause respiratory issues, "
            "especially for people with asthma."
        ),
        thresholds=ThresholdSet(good=20, fair=50, moderate=100, poor=200),
    ),
    PollutantDefinition(
        key="nh3",
        name="NH₃",
        full_name="Ammonia",
        unit=UNIT,
        description="Ammonia is a colorless gas with a pungent odor, released mostly by agriculture.",
        sources=("Agricultural activities", "Livestock waste", "Fertilizer application", "Industrial processes"),
        health_effects=(
            "Ammonia can irritate the respiratory tract, eyes, and skin. High concentrations "
            "can cause coughing and breathing difficulty."
        ),
        thresholds=ThresholdSet(good=100, fair=200, moderate=400, poor=800),
    ),
)


def aqi_band(index: int) -> Optional[Band]:
    try:
        return Band(index)
    except ValueError:
        return None


def aqi_category(index: int) -> str:
    band = aqi_band(index)
    return band.label if band else "Unknown"


def aqi_color(index: int) -> str:
    band = aqi_band(index)
    return BAND_COLORS[band] if band else UNKNOWN_COLOR
