"""Tests for zone normalization."""

import pytest
from agent_analytics.services.zones import NO_ZONE_DATA, ZoneNormalizer, normalize_zone
from agent_analytics.utils.errors import ConfigurationError


@pytest.mark.unit
@pytest.mark.parametrize("raw,expected", [
    ("North", "North Bangalore"),
    ("south", "South Bangalore"),
    ("east wing", "East Bangalore"),
    ("  WEST  ", "West Bangalore"),
    ("Central Bangalore", "Central Bangalore"),
    ("North East", "North Bangalore"),
    ("Southeast corridor", "South Bangalore"),
])
def test_normalize_zone_directional(raw, expected):
    """Test substring matches in rule order."""
    assert normalize_zone(raw) == expected


@pytest.mark.unit
@pytest.mark.parametrize("raw", ["", None, "   "])
def test_normalize_zone_empty(raw):
    """Test empty input has no zone data."""
    assert normalize_zone(raw) == NO_ZONE_DATA


@pytest.mark.unit
def test_normalize_zone_unrecognized_is_verbatim():
    """Test unrecognized zones are returned unchanged."""
    assert normalize_zone("Riverside") == "Riverside"
    assert normalize_zone(" Riverside ") == " Riverside "


@pytest.mark.unit
def test_custom_qualifier(normalizer):
    """Test the qualifier is applied to every label."""
    pune = ZoneNormalizer("Pune")

    assert pune.normalize("north") == "North Pune"
    assert pune.pan_label == "PAN Pune"
    assert pune.bucket_labels == [
        "North Pune", "South Pune", "East Pune", "West Pune", "Central Pune", "PAN Pune",
    ]
    assert normalizer.pan_label == "PAN Bangalore"


@pytest.mark.unit
def test_empty_qualifier_rejected():
    """Test a blank qualifier is a configuration error."""
    with pytest.raises(ConfigurationError):
        ZoneNormalizer("  ")


@pytest.mark.unit
def test_match_returns_none_for_unrecognized(normalizer):
    """Test match only yields directional labels."""
    assert normalizer.match("Riverside") is None
    assert normalizer.match(None) is None
    assert normalizer.match("central") == "Central Bangalore"


@pytest.mark.unit
@pytest.mark.parametrize("areas,expected", [
    (None, "PAN Bangalore"),
    ([], "PAN Bangalore"),
    (["PAN Something"], "PAN Bangalore"),
    (["pan bangalore"], "PAN Bangalore"),
    (["North Zone"], "North Bangalore"),
    (["North Zone", "South Zone"], "PAN Bangalore"),
    (["Riverside"], "PAN Bangalore"),
    (["Japan Nagar"], "PAN Bangalore"),
])
def test_primary_from_areas(normalizer, areas, expected):
    """Test area-of-operation fallback."""
    assert normalizer.primary_from_areas(areas) == expected
