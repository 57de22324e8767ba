"""Price aggregator - fold each agent's linked properties into price/rent statistics."""

from typing import Iterable, Literal, Optional

from agent_analytics.models.agent import Agent
from agent_analytics.models.price_stats import (
    AgentPriceData,
    OverallStats,
    PriceReport,
    PriceStats,
    PriceSummary,
)
from agent_analytics.models.property import ListingType
from agent_analytics.models.snapshot import Snapshot
from agent_analytics.services.linker import LinkedProperty, ReferenceLinker
from agent_analytics.services.pricing import valid_price
from agent_analytics.utils.logging import get_structured_logger, log_timing

logger = get_structured_logger(__name__)

ListingFilter = Literal["all", "resale", "rental"]
SortKey = Literal["avgPrice", "name", "enquiries"]


def price_stats(prices: list[float]) -> PriceStats:
    """Statistics over valid prices; every field is zero for an empty list."""
    count = len(prices)
    if count == 0:
        return PriceStats()
    total = sum(prices)
    return PriceStats(
        count=count,
        total_price=total,
        average_price=total / count,
        min_price=min(prices),
        max_price=max(prices),
    )


def overall_stats(resale: PriceStats, rental: PriceStats) -> OverallStats:
    count = resale.count + rental.count
    if count == 0:
        return OverallStats()
    return OverallStats(count=count, average_price=(resale.total_price + rental.total_price) / count)


def split_prices(linked: Iterable[LinkedProperty]) -> dict[ListingType, list[tuple[str, float]]]:
    """Valid (property_id, price) pairs per listing type, in link order."""
    split: dict[ListingType, list[tuple[str, float]]] = {
        ListingType.RESALE: [],
        ListingType.RENTAL: [],
    }
    for item in linked:
        listing = item.record.listing
        if listing is None:
            continue
        price = valid_price(item.record)
        if price is not None:
            split[listing].append((item.property_id, price))
    return split


def aggregate_agent_prices(agent_id: str, agent: Agent, linked: Iterable[LinkedProperty]) -> AgentPriceData:
    """Price record for one agent. Agents without any valid price get zero statistics."""
    return _price_record(agent_id, agent, split_prices(linked))


def _price_record(
    agent_id: str,
    agent: Agent,
    split: dict[ListingType, list[tuple[str, float]]],
) -> AgentPriceData:
    resale = price_stats([price for _, price in split[ListingType.RESALE]])
    rental = price_stats([price for _, price in split[ListingType.RENTAL]])
    return AgentPriceData(
        agent_id=agent_id,
        name=agent.name or agent_id,
        phone_number=agent.phone_number or "",
        has_fsm_token=agent.has_fsm_token,
        total_enquiries=len(agent.enquiry_did),
        total_inventories=len(agent.my_inventories),
        resale=resale,
        rental=rental,
        overall=overall_stats(resale, rental),
    )


def build_price_report(snapshot: Snapshot) -> PriceReport:
    """Price records for every agent in snapshot order."""
    linker = ReferenceLinker(snapshot)
    agents: list[AgentPriceData] = []
    unique_resale: dict[str, None] = {}
    unique_rental: dict[str, None] = {}

    with log_timing("build_price_report", logger=logger, agents=len(snapshot.agents)):
        for agent_id, agent in snapshot.agents.items():
            split = split_prices(linker.link(agent).properties)
            unique_resale.update((property_id, None) for property_id, _ in split[ListingType.RESALE])
            unique_rental.update((property_id, None) for property_id, _ in split[ListingType.RENTAL])
            agents.append(_price_record(agent_id, agent, split))

    logger.info(
        "Price report built",
        agents=len(agents),
        unique_resale=len(unique_resale),
        unique_rental=len(unique_rental),
    )
    return PriceReport(
        agents=agents,
        unique_resale_property_ids=list(unique_resale),
        unique_rental_property_ids=list(unique_rental),
    )


def summarize_prices(report: PriceReport, agents: Optional[list[AgentPriceData]] = None) -> PriceSummary:
    """
    Headline numbers for `agents` (default: all agents in the report).

    Unique property counts always come from the whole report.
    """
    selected = report.agents if agents is None else agents
    unique_resale = len(report.unique_resale_property_ids)
    unique_rental = len(report.unique_rental_property_ids)
    avg_overall = 0.0
    if selected:
        avg_overall = sum(agent.overall.average_price for agent in selected) / len(selected)
    return PriceSummary(
        total_agents=len(selected),
        total_unique_resale=unique_resale,
        total_unique_rental=unique_rental,
        total_unique_properties=unique_resale + unique_rental,
        total_resale_instances=sum(agent.resale.count for agent in selected),
        total_rental_instances=sum(agent.rental.count for agent in selected),
        avg_overall_price=avg_overall,
    )


def _listing_group(agent: AgentPriceData) -> int:
    if agent.resale.count > 0:
        return 0
    if agent.rental.count > 0:
        return 1
    return 2


def filter_and_sort(
    agents: list[AgentPriceData],
    search: str = "",
    fsm_only: bool = False,
    listing: ListingFilter = "all",
    sort_by: SortKey = "avgPrice",
) -> list[AgentPriceData]:
    """
    Select and order agent price records for display.

    Records are always grouped resale -> rental -> no price, then ordered by
    `sort_by` inside each group. Sorting is stable.
    """
    selected = list(agents)
    if search:
        needle = search.lower()
        selected = [
            agent for agent in selected
            if needle in agent.name.lower() or needle in agent.agent_id.lower()
        ]
    if fsm_only:
        selected = [agent for agent in selected if agent.has_fsm_token]
    if listing == "resale":
        selected = [agent for agent in selected if agent.resale.count > 0]
    elif listing == "rental":
        selected = [agent for agent in selected if agent.rental.count > 0]

    def average(agent: AgentPriceData) -> float:
        if listing == "resale":
            return agent.resale.average_price
        if listing == "rental":
            return agent.rental.average_price
        return agent.overall.average_price

    if sort_by == "name":
        key = lambda agent: (_listing_group(agent), agent.name.lower())
    elif sort_by == "enquiries":
        key = lambda agent: (_listing_group(agent), -agent.total_enquiries)
    else:
        key = lambda agent: (_listing_group(agent), -average(agent))
    return sorted(selected, key=key)
