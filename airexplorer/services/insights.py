"""Display-ready summaries of readings and time series."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from ..data.readings import AirQualityRecord, PollutantReading
from ..utils.dates import format_timestamp
from .pollutants import Band, PollutantCatalog, ThresholdSet, aqi_category


@dataclass(frozen=True)
class PollutantSummary:
    key: str
    name: str
    full_name: str
    value: float
    unit: str
    band: Band
    percentage: float


def severity_percentage(value: Optional[float], thresholds: ThresholdSet) -> float:
    """Map a concentration onto a 0-100 gauge, 25 points per band up to ``poor``."""
    if not value:
        return 0.0
    if value >= thresholds.poor:
        return 100.0
    lower = 0.0
    for step, upper in enumerate(thresholds.boundaries):
        if value < upper:
            return step * 25 + (value - lower) / (upper - lower) * 25
        lower = upper
    return 100.0


def summarize_reading(reading: PollutantReading, catalog: PollutantCatalog) -> List[PollutantSummary]:
    summaries = []
    for key, value in reading.items():
        definition = catalog.get(key)
        if definition is None:
            continue
        summaries.append(
            PollutantSummary(
                key=key,
                name=definition.name,
                full_name=definition.full_name,
                value=value,
                unit=definition.unit,
                band=definition.thresholds.classify(value),
                percentage=severity_percentage(value, definition.thresholds),
            )
        )
    return summaries


def summarize_series(records: Sequence[AirQualityRecord]) -> Dict[str, object]:
    if not records:
        return {"message": "No air quality data available for the selected period."}
    latest = max(records, key=lambda record: record.dt)
    worst = max(records, key=lambda record: record.aqi)
    return {
        "latest_time": format_timestamp(latest.dt),
        "latest_aqi": latest.aqi,
        "latest_category": aqi_category(latest.aqi),
        "peak_time": format_timestamp(worst.dt),
        "peak_aqi": worst.aqi,
        "peak_category": aqi_category(worst.aqi),
        "record_count": len(records),
    }
