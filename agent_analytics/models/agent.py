"""Agent model - channel partners exported from the agents collection."""

from typing import Any, Optional

from pydantic import Field, field_validator

from agent_analytics.models.base import RecordModel, as_id_list, as_text_list


class Agent(RecordModel):
    """Agent record; the snapshot key is the authoritative id."""
    cp_id: Optional[str] = Field(None, description="Channel partner ID")
    name: Optional[str] = Field(None, description="Display name")
    phone_number: Optional[str] = Field(None, description="Phone number (display only)")
    enquiry_did: list[str] = Field(default_factory=list, description="Enquiry IDs raised by the agent")
    my_inventories: list[str] = Field(default_factory=list, description="Property IDs listed by the agent")
    fsm_token: Any = Field(None, description="Push tokens; a non-empty list marks the agent as FSM-eligible")
    area_of_operation: list[Optional[str]] = Field(
        default_factory=list,
        description="Declared operating areas; unusable entries are None so the count is kept"
    )

    @field_validator("enquiry_did", "my_inventories", mode="before")
    @classmethod
    def _coerce_references(cls, value: Any) -> list[str]:
        return as_id_list(value)

    @field_validator("area_of_operation", mode="before")
    @classmethod
    def _coerce_areas(cls, value: Any) -> list[Optional[str]]:
        return as_text_list(value)

    @field_validator("cp_id", "name", "phone_number", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Optional[str]:
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @property
    def has_fsm_token(self) -> bool:
        return isinstance(self.fsm_token, list) and len(self.fsm_token) > 0
