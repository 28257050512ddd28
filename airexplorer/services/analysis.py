"""Significant-pollutant analysis for a single reading."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Union

from ..data.readings import PollutantReading
from .pollutants import Band, PollutantCatalog

LOGGER = logging.getLogger(__name__)

SIGNIFICANT_BAND = Band.MODERATE

HEALTH_MESSAGES: Dict[Band, str] = {
    Band.GOOD: "Air quality is satisfactory and poses little or no health risk.",
    Band.FAIR: (
        "Air quality is acceptable; unusually sensitive people should consider "
        "limiting prolonged outdoor exertion."
    ),
    Band.MODERATE: (
        "Sensitive groups such as children, older adults and people with heart or lung "
        "disease may experience health effects and should reduce outdoor exertion."
    ),
    Band.POOR: (
        "Everyone may begin to experience health effects; sensitive groups may "
        "experience more serious effects and should avoid outdoor activity."
    ),
    Band.VERY_POOR: (
        "Health alert: everyone may experience serious health effects. Avoid outdoor "
        "activities and keep windows closed."
    ),
}


@dataclass(frozen=True)
class AnalysisResult:
    significant_pollutants: List[str]
    potential_sources: List[str]
    health_implications: str
    worst_band: Optional[Band] = None


class PollutantAnalyzer:
    """Classify a reading against a pollutant catalog.

    A pollutant is significant when it reaches Moderate or worse. The health
    message follows the worst band among significant pollutants and falls back
    to the Good message when nothing is significant.
    """

    def __init__(self, catalog: PollutantCatalog) -> None:
        self.catalog = catalog

    def analyze(self, reading: Union[PollutantReading, Mapping[str, Any]]) -> AnalysisResult:
        if not isinstance(reading, PollutantReading):
            reading = PollutantReading.from_mapping(reading)

        significant: List[str] = []
        sources: Dict[str, None] = {}
        worst: Optional[Band] = None
        for key, value in reading.items():
            definition = self.catalog.get(key)
            if definition is None:
                continue
            band = definition.thresholds.classify(value)
            if band < SIGNIFICANT_BAND:
                continue
            significant.append(definition.name)
            sources.update(dict.fromkeys(definition.sources))
            worst = band if worst is None else max(worst, band)

        LOGGER.debug("Significant pollutants: %s (worst band %s)", significant, worst)
        return AnalysisResult(
            significant_pollutants=significant,
            potential_sources=list(sources),
            health_implications=HEALTH_MESSAGES[worst or Band.GOOD],
            worst_band=worst,
        )
