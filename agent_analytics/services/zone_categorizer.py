"""Primary-zone categorizer - put every FSM agent into exactly one zone bucket."""

from typing import Iterable, Optional

from agent_analytics.models.agent import Agent
from agent_analytics.models.snapshot import Snapshot
from agent_analytics.models.zone_stats import (
    BucketShare,
    CategorizationSummary,
    CategorySource,
    ZoneAssignment,
    ZoneCategorization,
)
from agent_analytics.services.linker import LinkedProperty, LinkStats, ReferenceLinker
from agent_analytics.services.zones import ZoneNormalizer
from agent_analytics.utils.logging import get_structured_logger, log_timing

logger = get_structured_logger(__name__)


def directional_counts(linked: Iterable[LinkedProperty], normalizer: ZoneNormalizer) -> dict[str, int]:
    """Histogram of directional labels only; unrecognized and missing zones are ignored."""
    counts: dict[str, int] = {}
    for item in linked:
        label = normalizer.match(item.record.zone)
        if label is not None:
            counts[label] = counts.get(label, 0) + 1
    return counts


def pick_primary(counts: dict[str, int]) -> Optional[str]:
    """Label with the highest count; on a tie the label seen first wins."""
    primary = None
    best = 0
    for label, count in counts.items():
        if count > best:
            primary, best = label, count
    return primary


def assign_primary_zone(
    agent_id: str,
    agent: Agent,
    linked: list[LinkedProperty],
    normalizer: ZoneNormalizer,
) -> ZoneAssignment:
    counts = directional_counts(linked, normalizer)
    primary = pick_primary(counts)
    if primary is not None:
        return ZoneAssignment(
            agent_id=agent_id,
            zone=primary,
            source=CategorySource.PROPERTY_DATA,
            zone_counts=counts,
        )
    return ZoneAssignment(
        agent_id=agent_id,
        zone=normalizer.primary_from_areas(agent.area_of_operation),
        source=CategorySource.AREA_OF_OPERATION,
    )


def categorize_agents(snapshot: Snapshot, normalizer: Optional[ZoneNormalizer] = None) -> ZoneCategorization:
    """
    Categorize FSM-token holders by primary zone.

    Inventory references that miss are retried through the qcId index.
    Agents without an FSM token are not categorized.
    """
    normalizer = normalizer or ZoneNormalizer()
    linker = ReferenceLinker(snapshot, resolve_qc_ids=True)
    result = ZoneCategorization(buckets={label: [] for label in normalizer.bucket_labels})
    link_stats = LinkStats()

    with log_timing("categorize_agents", logger=logger, agents=len(snapshot.agents)):
        for agent_id, agent in snapshot.agents.items():
            if not agent.has_fsm_token:
                continue
            link = linker.link(agent)
            link_stats.merge(link.stats)
            assignment = assign_primary_zone(agent_id, agent, link.properties, normalizer)
            result.assignments.append(assignment)
            result.buckets[assignment.zone].append(agent_id)

    logger.info(
        "Agents categorized by primary zone",
        total_with_fsm_token=result.total_agents_with_fsm_token,
        missing_enquiries=link_stats.missing_enquiries,
        missing_inventory_properties=link_stats.missing_inventory_properties,
        resolved_by_qc_id=link_stats.resolved_by_qc_id,
    )
    return result


def format_percentage(count: int, total: int) -> str:
    """Two-decimal percentage with a trailing %; 0.00% when there is nothing to divide by."""
    if total <= 0:
        return "0.00%"
    return f"{count / total * 100:.2f}%"


def summarize_categorization(result: ZoneCategorization) -> CategorizationSummary:
    total = result.total_agents_with_fsm_token
    return CategorizationSummary(
        total_agents_with_fsm_token=total,
        categorized_using_enquiry_property_data=result.count_by_source(CategorySource.PROPERTY_DATA),
        categorized_using_area_of_operation=result.count_by_source(CategorySource.AREA_OF_OPERATION),
        breakdown={
            zone: BucketShare(count=len(agent_ids), percentage=format_percentage(len(agent_ids), total))
            for zone, agent_ids in result.buckets.items()
        },
    )
