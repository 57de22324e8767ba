"""Zone histograms and primary-zone categorization results."""

from enum import Enum
from typing import Optional

from pydantic import Field

from agent_analytics.models.base import OutputModel


class ZoneShare(OutputModel):
    count: int = 0
    percentage: float = 0


class AgentZoneData(OutputModel):
    """Zone distribution of the properties linked to one agent."""
    agent_id: str
    name: str
    phone_number: str = ""
    has_fsm_token: bool = False
    total_enquiries: int = 0
    total_inventories: int = 0
    area_of_operation: list[Optional[str]] = Field(default_factory=list)
    zones: dict[str, ZoneShare] = Field(default_factory=dict)
    enquiry_zones: dict[str, int] = Field(default_factory=dict)
    inventory_zones: dict[str, int] = Field(default_factory=dict)


class CategorySource(str, Enum):
    """Where a primary zone came from."""
    PROPERTY_DATA = "property_data"
    AREA_OF_OPERATION = "area_of_operation"


class ZoneAssignment(OutputModel):
    """Primary zone chosen for one FSM agent."""
    agent_id: str
    zone: str
    source: CategorySource
    zone_counts: dict[str, int] = Field(default_factory=dict)


class BucketShare(OutputModel):
    count: int = 0
    percentage: str = "0.00%"


class CategorizationSummary(OutputModel):
    """Shape of summary.json."""
    total_agents_with_fsm_token: int = 0
    categorized_using_enquiry_property_data: int = 0
    categorized_using_area_of_operation: int = 0
    breakdown: dict[str, BucketShare] = Field(default_factory=dict)


class ZoneCategorization(OutputModel):
    """Every FSM agent in exactly one bucket, buckets in canonical order."""
    buckets: dict[str, list[str]] = Field(default_factory=dict)
    assignments: list[ZoneAssignment] = Field(default_factory=list)

    @property
    def total_agents_with_fsm_token(self) -> int:
        return len(self.assignments)

    def count_by_source(self, source: CategorySource) -> int:
        return sum(1 for assignment in self.assignments if assignment.source == source)
