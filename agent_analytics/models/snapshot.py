"""Snapshot - the three lookup tables a run works over."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from agent_analytics.models.agent import Agent
from agent_analytics.models.enquiry import Enquiry
from agent_analytics.models.property import Property


class Snapshot(BaseModel):
    """Read-only agents, enquiries and properties keyed by ID."""
    model_config = ConfigDict(frozen=True)

    agents: dict[str, Agent] = Field(default_factory=dict)
    enquiries: dict[str, Enquiry] = Field(default_factory=dict)
    properties: dict[str, Property] = Field(default_factory=dict)

    _by_qc_id: dict[str, str] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context: Any) -> None:
        """Index property IDs by qcId; a later property with the same qcId replaces an earlier one."""
        for property_id, record in self.properties.items():
            if record.qc_id:
                self._by_qc_id[record.qc_id] = property_id

    def property_id_for_qc_id(self, qc_id: str) -> Optional[str]:
        return self._by_qc_id.get(qc_id)
