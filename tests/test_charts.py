import math

from airexplorer.data.readings import AirQualityRecord, Coordinates, PollutantReading
from airexplorer.services.charts import (
    CHART_POLLUTANTS,
    LINE_COLORS,
    build_location_map,
    build_pollutant_chart,
    pollutant_label,
    records_to_frame,
    y_axis_range,
)
from airexplorer.services.pollutants import ThresholdSet

PM25 = ThresholdSet(good=10, fair=25, moderate=50, poor=75)


def make_records():
    return [
        AirQualityRecord(dt=1700003600, aqi=3, components=PollutantReading(pm2_5=30.0, no=1.0)),
        AirQualityRecord(dt=1700000000, aqi=2, components=PollutantReading(pm2_5=12.0)),
        AirQualityRecord(dt=1700090000, aqi=1, components=PollutantReading(pm2_5=4.0)),
    ]


def test_records_to_frame_is_sorted_with_all_columns():
    frame = records_to_frame(make_records())
    assert frame["aqi"].tolist() == [2, 3, 1]
    assert frame["aqi_category"].tolist() == ["Fair", "Moderate", "Good"]
    assert frame["day"].tolist() == ["2023-11-14", "2023-11-14", "2023-11-15"]
    assert math.isnan(frame["co"].iloc[0])
    assert frame["no"].iloc[1] == 1.0


def test_records_to_frame_empty():
    frame = records_to_frame([])
    assert frame.empty
    assert "pm2_5" in frame.columns


def test_y_axis_range_snaps_to_next_threshold():
    assert y_axis_range([3, 8], PM25) == [0, 10]
    assert y_axis_range([10], PM25) == [0, 25]
    assert y_axis_range([60], PM25) == [0, 75]
    assert y_axis_range([100], PM25)[1] == 100 * 1.1
    assert y_axis_range([1, 2], None) == [0, None]


def test_pollutant_chart_filters_by_day(catalog):
    frame = records_to_frame(make_records())
    figure = build_pollutant_chart(frame, "pm2_5", catalog, day="2023-11-14")
    trace = figure.data[0]
    assert list(trace.y) == [12.0, 30.0]
    assert trace.line.color == LINE_COLORS["pm2_5"]
    assert tuple(figure.layout.yaxis.range) == (0, 50)


def test_chart_for_undefined_pollutant(catalog):
    figure = build_pollutant_chart(records_to_frame(make_records()), "no", catalog)
    assert figure.data[0].name == "NO"


def test_location_map_mentions_significant_pollutants(analyzer):
    record = AirQualityRecord(dt=1, aqi=4, components=PollutantReading(pm2_5=60.0))
    figure = build_location_map(Coordinates(51.5, -0.1), record, analyzer)
    assert "PM2.5" in figure.data[0].hovertext[0]
    assert "AQI 4 - Poor" in figure.data[0].hovertext[0]


def test_unclassified_nitric_oxide_is_chartable(catalog):
    assert "no" in CHART_POLLUTANTS
    assert pollutant_label("no", catalog) == "NO"
    assert pollutant_label("pm2_5", catalog) == "PM2.5"


def test_location_map_uses_tile_map_layout(analyzer):
    figure = build_location_map(Coordinates(51.5, -0.1), None, analyzer)
    assert figure.layout.map.style == "open-street-map"
    assert figure.data[0].type == "scattermap"
    assert figure.data[0].hovertext[0] == "No data"
