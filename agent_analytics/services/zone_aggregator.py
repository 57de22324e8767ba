"""Zone aggregator - per-agent zone histograms with percentage shares."""

from typing import Iterable, Literal, Optional

from agent_analytics.models.agent import Agent
from agent_analytics.models.snapshot import Snapshot
from agent_analytics.models.zone_stats import AgentZoneData, ZoneShare
from agent_analytics.services.linker import LinkedProperty, LinkSource, ReferenceLinker
from agent_analytics.services.zones import ZoneNormalizer
from agent_analytics.utils.logging import get_structured_logger, log_timing

logger = get_structured_logger(__name__)

ZoneSortKey = Literal["enquiries", "name", "inventories"]

ZONE_SORT_KEYS = {
    "enquiries": lambda record: -record.total_enquiries,
    "name": lambda record: record.name.lower(),
    "inventories": lambda record: -record.total_inventories,
}


def count_zones(linked: Iterable[LinkedProperty], normalizer: ZoneNormalizer) -> dict[str, int]:
    """Histogram of normalized zones; a property without a zone counts as No Zone Data."""
    counts: dict[str, int] = {}
    for item in linked:
        zone = normalizer.normalize(item.record.zone)
        counts[zone] = counts.get(zone, 0) + 1
    return counts


def zone_shares(*histograms: dict[str, int]) -> dict[str, ZoneShare]:
    """
    Combine histograms and attach percentage shares.

    Categories keep first-seen order. With nothing observed the result is
    empty, so every share is defined.
    """
    combined: dict[str, int] = {}
    for histogram in histograms:
        for zone, count in histogram.items():
            combined[zone] = combined.get(zone, 0) + count
    total = sum(combined.values())
    return {
        zone: ZoneShare(count=count, percentage=(count / total * 100) if total > 0 else 0.0)
        for zone, count in combined.items()
    }


def aggregate_agent_zones(
    agent_id: str,
    agent: Agent,
    linked: list[LinkedProperty],
    normalizer: ZoneNormalizer,
) -> AgentZoneData:
    enquiry_zones = count_zones(
        (item for item in linked if item.source == LinkSource.ENQUIRY), normalizer
    )
    inventory_zones = count_zones(
        (item for item in linked if item.source == LinkSource.INVENTORY), normalizer
    )
    return AgentZoneData(
        agent_id=agent_id,
        name=agent.name or "N/A",
        phone_number=agent.phone_number or "N/A",
        has_fsm_token=agent.has_fsm_token,
        total_enquiries=len(agent.enquiry_did),
        total_inventories=len(agent.my_inventories),
        area_of_operation=list(agent.area_of_operation),
        zones=zone_shares(enquiry_zones, inventory_zones),
        enquiry_zones=enquiry_zones,
        inventory_zones=inventory_zones,
    )


def build_zone_report(snapshot: Snapshot, normalizer: Optional[ZoneNormalizer] = None) -> list[AgentZoneData]:
    """Zone records for every agent in snapshot order."""
    normalizer = normalizer or ZoneNormalizer()
    linker = ReferenceLinker(snapshot)
    records = []
    with log_timing("build_zone_report", logger=logger, agents=len(snapshot.agents)):
        for agent_id, agent in snapshot.agents.items():
            linked = linker.link(agent).properties
            records.append(aggregate_agent_zones(agent_id, agent, linked, normalizer))
    return records


def filter_and_sort(
    records: list[AgentZoneData],
    search: str = "",
    fsm_only: bool = False,
    sort_by: ZoneSortKey = "enquiries",
) -> list[AgentZoneData]:
    """Select zone records by name/ID substring and FSM token, then sort (stable)."""
    needle = search.lower()
    selected = [
        record for record in records
        if (not fsm_only or record.has_fsm_token)
        and (not needle or needle in record.name.lower() or needle in record.agent_id.lower())
    ]
    return sorted(selected, key=ZONE_SORT_KEYS[sort_by])
