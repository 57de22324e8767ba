"""Diagnostic reports about price coverage and how agents use properties."""

from pydantic import Field

from agent_analytics.models.base import OutputModel


class ListingCensus(OutputModel):
    """Price coverage of every property of one listing type in the snapshot."""
    listing_type: str
    total: int = 0
    with_price: int = 0
    with_fallback_price: int = 0
    without_price: int = 0
    statuses: dict[str, int] = Field(default_factory=dict)
    examples: dict[str, list[str]] = Field(default_factory=dict)


class ListingUsage(OutputModel):
    """How agents reference properties of one listing type."""
    listing_type: str
    instances: int = 0
    instances_from_enquiries: int = 0
    instances_from_inventories: int = 0
    unique_with_price: int = 0
    linked_in_enquiries: int = 0
    linked_in_inventories: int = 0
    linked_total: int = 0
    unused_with_price: int = 0
    unlinked: int = 0
    linked_without_price: int = 0


class LinkDiagnostics(OutputModel):
    missing_enquiries: int = 0
    enquiries_without_property: int = 0
    dangling_enquiry_properties: int = 0
    missing_inventory_properties: int = 0


class PropertyDiagnostics(OutputModel):
    census: dict[str, ListingCensus] = Field(default_factory=dict)
    usage: dict[str, ListingUsage] = Field(default_factory=dict)
    links: LinkDiagnostics = Field(default_factory=LinkDiagnostics)
