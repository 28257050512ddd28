"""Frames and plotly figures for the forecast, history and map views."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from ..data.readings import COMPONENT_KEYS, AirQualityRecord, Coordinates
from .analysis import PollutantAnalyzer
from .pollutants import BAND_COLORS, Band, PollutantCatalog, ThresholdSet, aqi_category, aqi_color

LINE_COLORS = {
    "co": "#9A6324",
    "no": "#808000",
    "no2": "#e6194B",
    "o3": "#3cb44b",
    "so2": "#808080",
    "pm2_5": "#9400D3",
    "pm10": "#4363d8",
    "nh3": "#ffe119",
}
DEFAULT_LINE_COLOR = "#000000"

# Charted without thresholds.
UNCLASSIFIED_NAMES = {"no": "NO"}
CHART_POLLUTANTS = COMPONENT_KEYS

FRAME_COLUMNS = ["datetime", "day", "time", *COMPONENT_KEYS, "aqi", "aqi_category"]


def pollutant_label(key: str, catalog: PollutantCatalog) -> str:
    definition = catalog.get(key)
    if definition is not None:
        return definition.name
    return UNCLASSIFIED_NAMES.get(key, key)


def records_to_frame(records: Iterable[AirQualityRecord]) -> pd.DataFrame:
    rows = []
    for record in records:
        row = {"dt": record.dt, "aqi": record.aqi, "aqi_category": aqi_category(record.aqi)}
        row.update(record.components.as_dict())
        rows.append(row)
    if not rows:
        return pd.DataFrame(columns=FRAME_COLUMNS)

    frame = pd.DataFrame(rows)
    frame["datetime"] = pd.to_datetime(frame["dt"], unit="s", utc=True)
    frame["day"] = frame["datetime"].dt.strftime("%Y-%m-%d")
    frame["time"] = frame["datetime"].dt.strftime("%H:%M")
    for key in COMPONENT_KEYS:
        if key not in frame:
            frame[key] = float("nan")
    return frame[FRAME_COLUMNS].sort_values("datetime").reset_index(drop=True)


def y_axis_range(values: Sequence[float], thresholds: Optional[ThresholdSet]) -> List[Optional[float]]:
    """Upper bound snaps to the next threshold so the guide lines stay visible."""
    if thresholds is None:
        return [0, None]
    clean = [value for value in values if value is not None and not pd.isna(value)]
    max_value = max(clean) if clean else 0.0
    for boundary in thresholds.boundaries:
        if max_value < boundary:
            return [0, boundary]
    return [0, max_value * 1.1]


def build_pollutant_chart(
    frame: pd.DataFrame,
    pollutant: str,
    catalog: PollutantCatalog,
    day: Optional[str] = None,
    title: Optional[str] = None,
) -> go.Figure:
    if day is not None:
        frame = frame[frame["day"] == day]
    definition = catalog.get(pollutant)
    name = pollutant_label(pollutant, catalog)
    unit = definition.unit if definition else ""

    figure = go.Figure()
    figure.add_trace(
        go.Scatter(
            x=frame["datetime"],
            y=frame[pollutant],
            name=name,
            mode="lines+markers",
            line=dict(color=LINE_COLORS.get(pollutant, DEFAULT_LINE_COLOR), width=2),
            marker=dict(size=6),
        )
    )
    thresholds = definition.thresholds if definition else None
    y_range = y_axis_range(frame[pollutant].tolist(), thresholds)
    if thresholds is not None:
        for band, boundary in zip(Band, thresholds.boundaries):
            if y_range[1] is not None and boundary > y_range[1]:
                break
            figure.add_hline(
                y=boundary,
                line_dash="dot",
                line_color=BAND_COLORS[band],
                annotation_text=f"{band.label} limit",
                annotation_position="top left",
            )
    figure.update_layout(
        title=title or f"{name} concentration",
        xaxis_title="Time",
        yaxis_title=f"Concentration ({unit})" if unit else "Concentration",
        yaxis_range=y_range if y_range[1] is not None else None,
    )
    return figure


def build_location_map(
    coordinates: Coordinates,
    record: Optional[AirQualityRecord],
    analyzer: Optional[PollutantAnalyzer] = None,
) -> go.Figure:
    hover = "No data"
    aqi = 0
    if record is not None:
        aqi = record.aqi
        hover = f"AQI {aqi} - {aqi_category(aqi)}"
        if analyzer is not None:
            result = analyzer.analyze(record.components)
            if result.significant_pollutants:
                hover += "<br>Significant: " + ", ".join(result.significant_pollutants)
    frame = pd.DataFrame(
        [{"lat": coordinates.lat, "lon": coordinates.lon, "aqi": str(aqi) if aqi else "?", "label": hover}]
    )
    figure = px.scatter_map(
        frame,
        lat="lat",
        lon="lon",
        text="aqi",
        hover_name="label",
        hover_data={"lat": ":.4f", "lon": ":.4f", "aqi": False},
        zoom=10,
        height=450,
    )
    figure.update_traces(marker=dict(size=28, color=aqi_color(aqi)), textfont=dict(color="white"))
    figure.update_layout(map_style="open-street-map", margin=dict(l=0, r=0, t=0, b=0))
    return figure
