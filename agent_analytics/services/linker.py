"""Reference linker - resolve an agent's enquiry and inventory references to properties."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

from agent_analytics.models.agent import Agent
from agent_analytics.models.property import Property
from agent_analytics.models.snapshot import Snapshot


class LinkSource(str, Enum):
    """Reference path a property was reached through."""
    ENQUIRY = "enquiry"
    INVENTORY = "inventory"


@dataclass(frozen=True)
class LinkedProperty:
    property_id: str
    record: Property
    source: LinkSource


@dataclass
class LinkStats:
    """Diagnostic counts for references that did not resolve. Never errors."""
    missing_enquiries: int = 0
    enquiries_without_property: int = 0
    dangling_enquiry_properties: int = 0
    missing_inventory_properties: int = 0
    resolved_by_qc_id: int = 0

    def merge(self, other: "LinkStats") -> None:
        self.missing_enquiries += other.missing_enquiries
        self.enquiries_without_property += other.enquiries_without_property
        self.dangling_enquiry_properties += other.dangling_enquiry_properties
        self.missing_inventory_properties += other.missing_inventory_properties
        self.resolved_by_qc_id += other.resolved_by_qc_id


@dataclass
class LinkResult:
    properties: list[LinkedProperty] = field(default_factory=list)
    stats: LinkStats = field(default_factory=LinkStats)

    def from_source(self, source: LinkSource) -> list[LinkedProperty]:
        return [linked for linked in self.properties if linked.source == source]


class ReferenceLinker:
    """
    Resolve the properties "used by" an agent.

    Enquiry path: enquiryDid -> enquiry -> propertyId -> property.
    Inventory path: myInventories -> property, optionally retried through the
    snapshot's qcId index when the direct lookup misses.

    Enquiry-path properties come first, then inventory-path ones, each in
    reference order. The same property may appear through both paths.
    """

    def __init__(self, snapshot: Snapshot, resolve_qc_ids: bool = False):
        self.snapshot = snapshot
        self.resolve_qc_ids = resolve_qc_ids

    def link(self, agent: Agent) -> LinkResult:
        result = LinkResult()
        result.properties.extend(self._via_enquiries(agent, result.stats))
        result.properties.extend(self._via_inventories(agent, result.stats))
        return result

    def _via_enquiries(self, agent: Agent, stats: LinkStats) -> Iterator[LinkedProperty]:
        for enquiry_id in agent.enquiry_did:
            enquiry = self.snapshot.enquiries.get(enquiry_id)
            if enquiry is None:
                stats.missing_enquiries += 1
                continue
            if not enquiry.property_id:
                stats.enquiries_without_property += 1
                continue
            record = self.snapshot.properties.get(enquiry.property_id)
            if record is None:
                stats.dangling_enquiry_properties += 1
                continue
            yield LinkedProperty(enquiry.property_id, record, LinkSource.ENQUIRY)

    def _via_inventories(self, agent: Agent, stats: LinkStats) -> Iterator[LinkedProperty]:
        for property_id in agent.my_inventories:
            record = self.snapshot.properties.get(property_id)
            if record is None and self.resolve_qc_ids:
                resolved_id = self.snapshot.property_id_for_qc_id(property_id)
                if resolved_id is not None:
                    stats.resolved_by_qc_id += 1
                    property_id = resolved_id
                    record = self.snapshot.properties[resolved_id]
            if record is None:
                stats.missing_inventory_properties += 1
                continue
            yield LinkedProperty(property_id, record, LinkSource.INVENTORY)
