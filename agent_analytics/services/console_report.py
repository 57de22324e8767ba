"""Plain-text console reports."""

from pathlib import Path
from typing import Optional

from agent_analytics.models.diagnostics import PropertyDiagnostics
from agent_analytics.models.price_stats import AgentPriceData, PriceSummary
from agent_analytics.models.zone_stats import AgentZoneData, CategorizationSummary, ZoneCategorization
from agent_analytics.services.report_writer import SUMMARY_FILE, bucket_file_name

RULE = "=" * 70
PREVIEW_SIZE = 5


def _banner(title: str) -> list[str]:
    return [RULE, title, RULE, ""]


def format_inr(amount: float) -> str:
    """Indian-style short form: Cr, L and K."""
    if amount >= 10_000_000:
        return f"₹{amount / 10_000_000:.2f} Cr"
    if amount >= 100_000:
        return f"₹{amount / 100_000:.2f} L"
    if amount >= 1_000:
        return f"₹{amount / 1_000:.2f} K"
    return f"₹{amount:.0f}"


def render_categorization(
    result: ZoneCategorization,
    summary: CategorizationSummary,
    output_dir: Optional[Path] = None,
    preview_size: int = PREVIEW_SIZE,
) -> str:
    lines = _banner("AGENT CATEGORIZATION BY PRIMARY ZONE (FSM Token Holders Only)")
    lines += [
        f"Total agents with FSM token: {summary.total_agents_with_fsm_token}",
        f"Categorized using enquiry/property data: {summary.categorized_using_enquiry_property_data}",
        f"Categorized using area of operation: {summary.categorized_using_area_of_operation}",
        "",
    ]
    for zone, share in summary.breakdown.items():
        lines.append(f"{zone}: {share.count} agents ({share.percentage})")
        if output_dir is not None:
            lines.append(f"  File: {bucket_file_name(zone)}")
    if output_dir is not None:
        lines += ["", f"Files created in: {output_dir}/", f"Summary saved to: {SUMMARY_FILE}"]
    lines.append("")

    lines += _banner(f"PREVIEW (First {preview_size} agents from each zone):")
    for zone, agent_ids in result.buckets.items():
        if not agent_ids:
            continue
        lines.append(f"{zone}:")
        lines += [f"  {agent_id}" for agent_id in agent_ids[:preview_size]]
        if len(agent_ids) > preview_size:
            lines.append(f"  ... and {len(agent_ids) - preview_size} more")
        lines.append("")
    return "\n".join(lines)


def render_price_report(summary: PriceSummary, agents: list[AgentPriceData], limit: int = 20) -> str:
    lines = _banner("AGENT PRICE ANALYTICS")
    lines += [
        f"Agents: {summary.total_agents}",
        f"Unique properties: {summary.total_unique_properties} "
        f"({summary.total_unique_resale} resale, {summary.total_unique_rental} rental)",
        f"Resale instances: {summary.total_resale_instances}",
        f"Rental instances: {summary.total_rental_instances}",
        f"Average overall price: {format_inr(summary.avg_overall_price)}",
        "",
    ]
    for agent in agents[:limit]:
        fsm = " [FSM]" if agent.has_fsm_token else ""
        lines.append(f"{agent.name} ({agent.agent_id}){fsm}")
        lines.append(
            f"  Resale: {agent.resale.count} @ avg {format_inr(agent.resale.average_price)}"
            f" (min {format_inr(agent.resale.min_price)}, max {format_inr(agent.resale.max_price)})"
        )
        lines.append(
            f"  Rental: {agent.rental.count} @ avg {format_inr(agent.rental.average_price)}"
            f" (min {format_inr(agent.rental.min_price)}, max {format_inr(agent.rental.max_price)})"
        )
        lines.append(f"  Overall: {agent.overall.count} @ avg {format_inr(agent.overall.average_price)}")
    if len(agents) > limit:
        lines.append(f"... and {len(agents) - limit} more agents")
    return "\n".join(lines)


def render_zone_report(records: list[AgentZoneData], limit: int = 20) -> str:
    totals: dict[str, int] = {}
    for record in records:
        for zone, share in record.zones.items():
            totals[zone] = totals.get(zone, 0) + share.count
    with_data = sum(1 for record in records if record.zones)

    lines = _banner("AGENT ZONE ANALYTICS")
    lines += [f"Agents: {len(records)}", f"Agents with linked properties: {with_data}", ""]
    lines.append("Linked properties by zone:")
    lines += [f"  {zone}: {count}" for zone, count in sorted(totals.items(), key=lambda item: -item[1])]
    lines.append("")
    for record in records[:limit]:
        shares = ", ".join(
            f"{zone} {share.count} ({share.percentage:.1f}%)" for zone, share in record.zones.items()
        )
        lines.append(f"{record.name} ({record.agent_id}): {shares or 'no linked properties'}")
    if len(records) > limit:
        lines.append(f"... and {len(records) - limit} more agents")
    return "\n".join(lines)


def render_property_counts(diagnostics: PropertyDiagnostics) -> str:
    lines = _banner("DETAILED PROPERTY ANALYSIS")
    lines.append("PROPERTIES IN DATABASE:")
    for listing, census in diagnostics.census.items():
        lines += [
            f"Total {listing.title()} Properties: {census.total}",
            f"  - With Price: {census.with_price}",
            f"  - Without Price: {census.without_price}",
        ]
    lines += ["", "PROPERTIES USED BY AGENTS (with valid prices):"]
    for listing, usage in diagnostics.usage.items():
        lines += [
            f"Total {listing.title()}: {usage.instances} (from {usage.unique_with_price} unique properties)",
            f"  - From Enquiries: {usage.instances_from_enquiries}",
            f"  - From Inventories: {usage.instances_from_inventories}",
        ]
    lines += ["", "Missing from agent data:"]
    for listing, usage in diagnostics.usage.items():
        lines.append(f"  {listing.title()}: {usage.unused_with_price} properties not used by any agent")
    links = diagnostics.links
    lines += [
        "",
        "UNRESOLVED REFERENCES:",
        f"  Enquiry IDs with no enquiry: {links.missing_enquiries}",
        f"  Enquiries without a property: {links.enquiries_without_property}",
        f"  Enquiry property IDs with no property: {links.dangling_enquiry_properties}",
        f"  Inventory IDs with no property: {links.missing_inventory_properties}",
    ]
    return "\n".join(lines)


def render_rental_analysis(diagnostics: PropertyDiagnostics) -> str:
    census = diagnostics.census["rental"]
    usage = diagnostics.usage["rental"]
    statuses = census.statuses
    lines = _banner("RENTAL PROPERTIES DEEP DIVE")
    lines += [
        "RENTAL PROPERTIES BREAKDOWN:",
        f"Total Rental Properties: {census.total}",
        f"  - With rent > 0: {statuses.get('valid', 0)}",
        f"  - With rentalIncome > 0: {statuses.get('fallback', 0)}",
        f"  - With rent = 0: {statuses.get('zero', 0)}",
        f"  - With null rent: {statuses.get('null', 0)}",
        f"  - With missing rent: {statuses.get('missing', 0)}",
        f"  - Other: {statuses.get('negative', 0) + statuses.get('non_numeric', 0)}",
        "",
        "EXAMPLES:",
    ]
    lines += [f"  {status}: {', '.join(ids)}" for status, ids in census.examples.items()]
    lines += [
        "",
        "RENTAL PROPERTIES LINKED TO AGENTS:",
        f"Total rental props in enquiries: {usage.linked_in_enquiries}",
        f"Total rental props in inventories: {usage.linked_in_inventories}",
        f"Total unique rental props (enquiries + inventories): {usage.linked_total}",
        f"Rental props with valid rent used by agents: {usage.unique_with_price}",
        "",
    ]
    lines += _banner("CONCLUSION:")
    lines += [
        f"Out of {census.total} rental properties in DB:",
        f"  - {statuses.get('valid', 0)} have rent > 0",
        f"  - {statuses.get('fallback', 0)} have rentalIncome > 0 (but rent is 0 or null)",
        f"  - {usage.linked_total} are linked to agent enquiries/inventories",
        f"  - Only {usage.unique_with_price} have valid rent AND are used by agents",
        "",
        f"Missing rental properties: {usage.unlinked} not linked to any agent",
        f"Rental props without price: {usage.linked_without_price} linked to agents but have no/zero rent",
    ]
    return "\n".join(lines)
