"""Per-agent price and rent statistics."""

from pydantic import Field

from agent_analytics.models.base import OutputModel


class PriceStats(OutputModel):
    """Statistics over the valid prices of one listing type; all zero when count is 0."""
    count: int = 0
    total_price: float = 0
    average_price: float = 0
    min_price: float = 0
    max_price: float = 0


class OverallStats(OutputModel):
    """Resale and rental combined."""
    count: int = 0
    average_price: float = 0


class AgentPriceData(OutputModel):
    """Price record for a single agent."""
    agent_id: str
    name: str
    phone_number: str = ""
    has_fsm_token: bool = False
    total_enquiries: int = 0
    total_inventories: int = 0
    resale: PriceStats = Field(default_factory=PriceStats)
    rental: PriceStats = Field(default_factory=PriceStats)
    overall: OverallStats = Field(default_factory=OverallStats)


class PriceSummary(OutputModel):
    """Headline numbers over a set of agent price records."""
    total_agents: int = 0
    total_unique_resale: int = 0
    total_unique_rental: int = 0
    total_unique_properties: int = 0
    total_resale_instances: int = 0
    total_rental_instances: int = 0
    avg_overall_price: float = 0


class PriceReport(OutputModel):
    """Price records for every agent plus the properties they used, deduplicated."""
    agents: list[AgentPriceData] = Field(default_factory=list)
    unique_resale_property_ids: list[str] = Field(default_factory=list)
    unique_rental_property_ids: list[str] = Field(default_factory=list)
