"""Diagnostics - price coverage census and agent property usage."""

from typing import Optional

from agent_analytics.models.diagnostics import (
    LinkDiagnostics,
    ListingCensus,
    ListingUsage,
    PropertyDiagnostics,
)
from agent_analytics.models.property import ListingType
from agent_analytics.models.snapshot import Snapshot
from agent_analytics.services.linker import LinkSource, LinkStats, ReferenceLinker
from agent_analytics.services.pricing import PriceStatus, resolve_price
from agent_analytics.utils.logging import get_structured_logger, log_timing

logger = get_structured_logger(__name__)

MAX_EXAMPLES = 3
FALLBACK = "fallback"


def property_census(snapshot: Snapshot) -> dict[ListingType, ListingCensus]:
    """
    Count resale and rental properties by price status.

    A valid price read from a fallback field is counted under "fallback"
    rather than "valid", so legacy-field usage stays visible.
    """
    census = {listing: ListingCensus(listing_type=listing.value) for listing in ListingType}
    for property_id, record in snapshot.properties.items():
        resolution = resolve_price(record)
        if resolution is None:
            continue
        entry = census[record.listing]
        entry.total += 1
        if resolution.is_valid:
            entry.with_price += 1
            if resolution.used_fallback:
                entry.with_fallback_price += 1
                status = FALLBACK
            else:
                status = PriceStatus.VALID.value
        else:
            entry.without_price += 1
            status = resolution.status.value
        entry.statuses[status] = entry.statuses.get(status, 0) + 1
        examples = entry.examples.setdefault(status, [])
        if len(examples) < MAX_EXAMPLES:
            examples.append(property_id)
    return census


def property_usage(
    snapshot: Snapshot,
    census: Optional[dict[ListingType, ListingCensus]] = None,
) -> tuple[dict[ListingType, ListingUsage], LinkStats]:
    """
    Count the properties agents reach through enquiries and inventories.

    Instances count every reference; the linked sets count distinct
    properties whether or not they carry a valid price.
    """
    linker = ReferenceLinker(snapshot)
    usage = {listing: ListingUsage(listing_type=listing.value) for listing in ListingType}
    priced: dict[ListingType, set[str]] = {listing: set() for listing in ListingType}
    in_enquiries: dict[ListingType, set[str]] = {listing: set() for listing in ListingType}
    in_inventories: dict[ListingType, set[str]] = {listing: set() for listing in ListingType}
    stats = LinkStats()

    for agent in snapshot.agents.values():
        link = linker.link(agent)
        stats.merge(link.stats)
        for item in link.properties:
            listing = item.record.listing
            if listing is None:
                continue
            linked_set = in_enquiries if item.source == LinkSource.ENQUIRY else in_inventories
            linked_set[listing].add(item.property_id)
            resolution = resolve_price(item.record)
            if not resolution.is_valid:
                continue
            entry = usage[listing]
            entry.instances += 1
            if item.source == LinkSource.ENQUIRY:
                entry.instances_from_enquiries += 1
            else:
                entry.instances_from_inventories += 1
            priced[listing].add(item.property_id)

    census = census or property_census(snapshot)
    for listing, entry in usage.items():
        linked = in_enquiries[listing] | in_inventories[listing]
        entry.unique_with_price = len(priced[listing])
        entry.linked_in_enquiries = len(in_enquiries[listing])
        entry.linked_in_inventories = len(in_inventories[listing])
        entry.linked_total = len(linked)
        entry.unused_with_price = census[listing].with_price - len(priced[listing])
        entry.unlinked = census[listing].total - len(linked)
        entry.linked_without_price = len(linked) - len(priced[listing])
    return usage, stats


def build_diagnostics(snapshot: Snapshot) -> PropertyDiagnostics:
    with log_timing("build_diagnostics", logger=logger, properties=len(snapshot.properties)):
        census = property_census(snapshot)
        usage, stats = property_usage(snapshot, census)
    return PropertyDiagnostics(
        census={listing.value: entry for listing, entry in census.items()},
        usage={listing.value: entry for listing, entry in usage.items()},
        links=LinkDiagnostics(
            missing_enquiries=stats.missing_enquiries,
            enquiries_without_property=stats.enquiries_without_property,
            dangling_enquiry_properties=stats.dangling_enquiry_properties,
            missing_inventory_properties=stats.missing_inventory_properties,
        ),
    )
