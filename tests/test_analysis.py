import pytest

from airexplorer.data.readings import PollutantReading
from airexplorer.errors import InvalidArgument
from airexplorer.services.analysis import HEALTH_MESSAGES, AnalysisResult
from airexplorer.services.pollutants import Band


def test_empty_reading_is_acceptable(analyzer):
    result = analyzer.analyze({})
    assert result == AnalysisResult([], [], HEALTH_MESSAGES[Band.GOOD], None)


def test_clean_air_reports_good(analyzer, catalog):
    reading = {key: definition.thresholds.good for key, definition in catalog.items()}
    result = analyzer.analyze(reading)
    assert result.significant_pollutants == []
    assert result.potential_sources == []
    assert result.health_implications == HEALTH_MESSAGES[Band.GOOD]


def test_poor_pm25_with_clean_ozone(analyzer, catalog):
    result = analyzer.analyze({"pm2_5": 60, "o3": 40})
    assert result.significant_pollutants == ["PM2.5"]
    assert result.potential_sources == list(catalog["pm2_5"].sources)
    assert result.health_implications == HEALTH_MESSAGES[Band.POOR]
    assert result.worst_band is Band.POOR


def test_fair_pollutants_are_not_significant(analyzer):
    result = analyzer.analyze({"pm2_5": 20, "no2": 70})
    assert result.significant_pollutants == []
    assert result.health_implications == HEALTH_MESSAGES[Band.GOOD]


def test_order_follows_input_and_sources_are_deduplicated(analyzer):
    result = analyzer.analyze({"no2": 160, "co": 13000, "pm2_5": 55})
    assert result.significant_pollutants == ["NO₂", "CO", "PM2.5"]
    assert result.potential_sources == [
        "Vehicle emissions",
        "Power plants",
        "Industrial processes",
        "Gas stoves and heaters",
        "Vehicle exhaust",
        "Coal and wood burning",
        "Gas furnaces and stoves",
        "Wood burning",
        "Wildfires",
    ]
    assert len(result.potential_sources) == len(set(result.potential_sources))


def test_worst_band_picks_the_message(analyzer):
    result = analyzer.analyze({"o3": 120, "so2": 400})
    assert result.significant_pollutants == ["O₃", "SO₂"]
    assert result.health_implications == HEALTH_MESSAGES[Band.VERY_POOR]


def test_unknown_and_unclassified_keys_are_ignored(analyzer):
    result = analyzer.analyze({"no": 500, "benzene": 3, "pm10": 150})
    assert result.significant_pollutants == ["PM10"]


def test_increasing_a_concentration_never_drops_it(analyzer, catalog):
    for key, definition in catalog.items():
        was_significant = False
        for value in [0, *definition.thresholds.boundaries, definition.thresholds.poor * 2]:
            significant = definition.name in analyzer.analyze({key: value}).significant_pollutants
            assert significant or not was_significant
            was_significant = significant


def test_analyze_is_idempotent(analyzer):
    reading = PollutantReading.from_mapping({"pm10": 120, "nh3": 500, "co": 200})
    assert analyzer.analyze(reading) == analyzer.analyze(reading)


def test_typed_reading_without_order_uses_field_order(analyzer):
    result = analyzer.analyze(PollutantReading(pm2_5=80, co=20000))
    assert result.significant_pollutants == ["CO", "PM2.5"]


@pytest.mark.parametrize("value", [-1, "12", float("nan"), True])
def test_invalid_concentrations_are_rejected(analyzer, value):
    with pytest.raises(InvalidArgument):
        analyzer.analyze({"pm2_5": value})
