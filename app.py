#!/usr/bin/env python3
"""Urban Air Pollution Explorer dashboard."""

from __future__ import annotations

import logging
from datetime import datetime, time, timezone
from typing import List, Optional, Sequence

import pandas as pd
import streamlit as st

from airexplorer.data.geocoding import GeocodingClient
from airexplorer.data.openweather import OpenWeatherClient
from airexplorer.data.readings import AirQualityRecord, Coordinates
from airexplorer.errors import AirExplorerError, InvalidApiKey
from airexplorer.services.analysis import PollutantAnalyzer
from airexplorer.services.charts import (
    CHART_POLLUTANTS,
    build_location_map,
    build_pollutant_chart,
    pollutant_label,
    records_to_frame,
)
from airexplorer.services.insights import summarize_reading, summarize_series
from airexplorer.services.pollutants import PollutantCatalog, aqi_category
from airexplorer.utils.config import load_settings
from airexplorer.utils.dates import default_history_range, format_timestamp, historical_window
from airexplorer.utils.logging import configure_logging

configure_logging()
LOGGER = logging.getLogger(__name__)

CATALOG = PollutantCatalog.default()
ANALYZER = PollutantAnalyzer(CATALOG)


@st.cache_data(show_spinner=False, ttl=600)
def load_records(
    api_key: str,
    lat: float,
    lon: float,
    time_range: str,
    start: Optional[int] = None,
    end: Optional[int] = None,
) -> List[AirQualityRecord]:
    client = OpenWeatherClient(api_key)
    return client.fetch(lat, lon, time_range=time_range, start=start, end=end).records


@st.cache_data(show_spinner=False, ttl=300)
def check_api_key(api_key: str) -> bool:
    return OpenWeatherClient(api_key).validate_api_key()


@st.cache_data(show_spinner=False)
def geocode(query: str, user_agent: str) -> Coordinates:
    return GeocodingClient(user_agent=user_agent).search(query).coordinates


def sidebar_location(default: Coordinates, user_agent: str) -> Coordinates:
    st.sidebar.header("Location")
    if "coordinates" not in st.session_state:
        st.session_state["coordinates"] = default

    query = st.sidebar.text_input("Search for a place")
    if st.sidebar.button("Search") and query:
        try:
            st.session_state["coordinates"] = geocode(query, user_agent)
            st.sidebar.success(f"Location found: {query}")
        except ValueError as exc:
            st.sidebar.error(str(exc))
        except AirExplorerError as exc:
            st.sidebar.error(str(exc))

    current: Coordinates = st.session_state["coordinates"]
    lat = st.sidebar.number_input("Latitude", value=current.lat, min_value=-90.0, max_value=90.0, format="%.4f")
    lon = st.sidebar.number_input("Longitude", value=current.lon, min_value=-180.0, max_value=180.0, format="%.4f")
    st.session_state["coordinates"] = Coordinates(lat=lat, lon=lon)
    return st.session_state["coordinates"]


def pollutant_selector(key: str, options: Sequence[str] = tuple(CATALOG)) -> str:
    return st.radio(
        "Pollutant",
        list(options),
        format_func=lambda code: pollutant_label(code, CATALOG),
        horizontal=True,
        index=list(options).index("pm2_5"),
        key=key,
    )


def render_current(record: AirQualityRecord) -> None:
    st.subheader("Current Air Quality")
    st.caption(f"As of {format_timestamp(record.dt)}")
    st.metric("AQI", f"{record.aqi} - {aqi_category(record.aqi)}")

    summaries = summarize_reading(record.components, CATALOG)
    cols = st.columns(4)
    for index, summary in enumerate(summaries):
        col = cols[index % len(cols)]
        col.metric(summary.name, f"{summary.value:.1f} {summary.unit}", summary.band.label, delta_color="off")
        col.progress(int(summary.percentage))

    result = ANALYZER.analyze(record.components)
    st.subheader("Air Quality Analysis")
    if result.significant_pollutants:
        st.markdown("**Significant pollutants:** " + ", ".join(result.significant_pollutants))
        st.markdown("**Potential sources:**")
        st.markdown("\n".join(f"- {source}" for source in result.potential_sources))
    else:
        st.success("No significant pollutants detected at concerning levels.")
    st.markdown(f"**Health implications:** {result.health_implications}")

    with st.expander("Pollutant details"):
        code = pollutant_selector("details_pollutant")
        definition = CATALOG[code]
        st.markdown(f"### {definition.full_name} ({definition.name})")
        st.write(definition.description)
        st.markdown("**Health effects:** " + definition.health_effects)
        st.markdown("**Sources:** " + ", ".join(definition.sources))
        thresholds = definition.thresholds
        st.table(
            pd.DataFrame(
                {
                    "Band": ["Good", "Fair", "Moderate", "Poor"],
                    f"Upper limit ({definition.unit})": list(thresholds.boundaries),
                }
            )
        )


def render_series(records: List[AirQualityRecord], key: str) -> None:
    if not records:
        st.info("No data available for the selected period.")
        return
    summary = summarize_series(records)
    st.info(
        f"Latest AQI {summary['latest_aqi']} ({summary['latest_category']}) at {summary['latest_time']}; "
        f"peak AQI {summary['peak_aqi']} ({summary['peak_category']}) at {summary['peak_time']}."
    )
    frame = records_to_frame(records)
    pollutant = pollutant_selector(f"{key}_pollutant", CHART_POLLUTANTS)
    days = frame["day"].unique().tolist()
    day_tabs = st.tabs(days)
    for tab, day in zip(day_tabs, days):
        with tab:
            st.plotly_chart(build_pollutant_chart(frame, pollutant, CATALOG, day=day), use_container_width=True)


def main() -> None:
    st.set_page_config(page_title="Urban Air Pollution Explorer", layout="wide")
    st.title("Urban Air Pollution Explorer")
    st.caption("Monitor and analyze air quality data using OpenWeather's Air Pollution API.")

    settings = load_settings()
    coordinates = sidebar_location(
        Coordinates(lat=settings.default_lat, lon=settings.default_lon),
        settings.nominatim_user_agent,
    )

    try:
        api_key = settings.require_api_key()
    except InvalidApiKey as exc:
        st.error(str(exc))
        return
    if not check_api_key(api_key):
        st.error("OpenWeather API key could not be validated. Check OPENWEATHER_API_KEY and your connection.")
        return

    current_record: Optional[AirQualityRecord] = None
    current_error: Optional[str] = None
    try:
        with st.spinner("Fetching current air quality..."):
            records = load_records(api_key, coordinates.lat, coordinates.lon, "current")
        current_record = records[0] if records else None
    except AirExplorerError as exc:
        LOGGER.warning("Current data unavailable: %s", exc)
        current_error = str(exc)

    st.plotly_chart(build_location_map(coordinates, current_record, ANALYZER), use_container_width=True)

    tabs = st.tabs(["Current", "Forecast", "Historical"])

    with tabs[0]:
        if current_error:
            st.warning(current_error)
        elif current_record is None:
            st.info("No current data returned for this location.")
        else:
            render_current(current_record)

    with tabs[1]:
        st.subheader("Air Quality Forecast")
        try:
            with st.spinner("Fetching forecast..."):
                forecast = load_records(api_key, coordinates.lat, coordinates.lon, "forecast")
        except AirExplorerError as exc:
            st.warning(f"Failed to fetch forecast: {exc}")
        else:
            render_series(forecast, "forecast")

    with tabs[2]:
        st.subheader("Historical Data Analysis")
        default_start, default_end = default_history_range()
        picked = st.date_input("Date range", value=(default_start.date(), default_end.date()))
        if isinstance(picked, tuple) and len(picked) == 2:
            start_date, end_date = picked
        else:
            st.info("Please select start and end dates.")
            return
        if st.button("Load history"):
            try:
                start, end = historical_window(
                    datetime.combine(start_date, time.min, tzinfo=timezone.utc),
                    datetime.combine(end_date, time.max, tzinfo=timezone.utc),
                )
                with st.spinner("Fetching historical data..."):
                    st.session_state["history"] = load_records(
                        api_key, coordinates.lat, coordinates.lon, "historical", start, end
                    )
            except ValueError as exc:
                st.error(str(exc))
            except AirExplorerError as exc:
                st.error(f"Failed to fetch historical data: {exc}")
        if "history" in st.session_state:
            render_series(st.session_state["history"], "history")


if __name__ == "__main__":
    main()
