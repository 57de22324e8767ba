"""Tests for the zone aggregator."""

import pytest
from agent_analytics.services.linker import LinkSource
from agent_analytics.services.snapshot_loader import snapshot_from_documents
from agent_analytics.services.zone_aggregator import (
    aggregate_agent_zones,
    build_zone_report,
    count_zones,
    filter_and_sort,
    zone_shares,
)
from agent_analytics.services.zones import NO_ZONE_DATA, ZoneNormalizer
from tests.utils.factories import create_random_snapshot_documents
from tests.utils.helpers import agent, linked


def _by_id(records):
    return {record.agent_id: record for record in records}


@pytest.mark.unit
def test_enquiry_zones_are_normalized(zone_snapshot, normalizer):
    record = _by_id(build_zone_report(zone_snapshot, normalizer))["FSM1"]

    assert record.enquiry_zones == {"South Bangalore": 2}
    assert record.inventory_zones == {}
    assert record.zones["South Bangalore"].count == 2
    assert record.zones["South Bangalore"].percentage == 100.0


@pytest.mark.unit
def test_unzoned_property_counts_as_no_zone_data(zone_snapshot):
    record = _by_id(build_zone_report(zone_snapshot))["FSM2"]

    assert list(record.zones) == [NO_ZONE_DATA]
    assert record.zones[NO_ZONE_DATA].count == 1


@pytest.mark.unit
def test_split_between_paths(zone_snapshot):
    record = _by_id(build_zone_report(zone_snapshot))["FSM4"]

    assert record.enquiry_zones == {"East Bangalore": 1}
    assert record.inventory_zones == {"West Bangalore": 1}
    assert record.zones["East Bangalore"].percentage == 50.0
    assert record.zones["West Bangalore"].percentage == 50.0


@pytest.mark.unit
def test_unrecognized_zone_kept_verbatim(zone_snapshot):
    record = _by_id(build_zone_report(zone_snapshot))["PLAIN"]

    assert list(record.zones) == ["South Bangalore", "Riverside"]


@pytest.mark.unit
def test_agent_without_properties():
    """Test agents with nothing linked get empty zone maps and default contact fields."""
    snapshot = snapshot_from_documents({"A": {"fsmToken": ["t"]}}, {}, {})
    record = build_zone_report(snapshot)[0]

    assert record.zones == {}
    assert record.name == "N/A"
    assert record.phone_number == "N/A"
    assert record.has_fsm_token is True


@pytest.mark.unit
def test_every_agent_is_reported(zone_snapshot):
    records = build_zone_report(zone_snapshot)

    assert [record.agent_id for record in records] == list(zone_snapshot.agents)


@pytest.mark.unit
def test_zone_shares_combines_histograms():
    shares = zone_shares({"A": 1, "B": 2}, {"B": 1})

    assert list(shares) == ["A", "B"]
    assert shares["B"].count == 3
    assert shares["A"].percentage == pytest.approx(25.0)


@pytest.mark.unit
def test_zone_shares_empty():
    assert zone_shares({}, {}) == {}


@pytest.mark.unit
def test_count_zones_handles_whitespace(normalizer):
    items = [
        linked("P1", {"listingType": "resale", "zone": "   "}),
        linked("P2", {"listingType": "resale", "zone": "North East"}),
    ]

    assert count_zones(items, normalizer) == {NO_ZONE_DATA: 1, "North Bangalore": 1}


@pytest.mark.unit
def test_custom_qualifier():
    items = [linked("P1", {"zone": "central"}, LinkSource.ENQUIRY)]

    record = aggregate_agent_zones("A", agent({"name": "Kiran"}), items, ZoneNormalizer("Pune"))

    assert list(record.zones) == ["Central Pune"]
    assert record.enquiry_zones == {"Central Pune": 1}


@pytest.mark.unit
def test_percentages_sum_to_one_hundred():
    """Test shares over generated snapshots sum to 100 whenever anything is linked."""
    records = build_zone_report(snapshot_from_documents(*create_random_snapshot_documents()))

    for record in records:
        total = sum(share.percentage for share in record.zones.values())
        if record.zones:
            assert total == pytest.approx(100.0)
        else:
            assert total == 0


@pytest.mark.unit
def test_filter_and_sort_default_is_by_enquiries(zone_snapshot):
    records = filter_and_sort(build_zone_report(zone_snapshot))

    enquiries = [record.total_enquiries for record in records]
    assert enquiries == sorted(enquiries, reverse=True)
    assert records[0].agent_id == "FSM1"


@pytest.mark.unit
def test_filter_and_sort_search_and_fsm_only(zone_snapshot):
    records = build_zone_report(zone_snapshot)

    assert [r.agent_id for r in filter_and_sort(records, search="RAO")] == ["FSM1"]
    assert [r.agent_id for r in filter_and_sort(records, search="plain")] == ["PLAIN"]
    assert filter_and_sort(records, search="plain", fsm_only=True) == []


@pytest.mark.unit
def test_filter_and_sort_by_name_and_inventories(zone_snapshot):
    records = build_zone_report(zone_snapshot)

    names = [r.name for r in filter_and_sort(records, sort_by="name")]
    assert names == sorted(names, key=str.lower)
    inventories = [r.total_inventories for r in filter_and_sort(records, sort_by="inventories")]
    assert inventories == sorted(inventories, reverse=True)
