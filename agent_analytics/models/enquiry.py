"""Enquiry model."""

from typing import Any, Optional

from pydantic import Field, field_validator

from agent_analytics.models.base import RecordModel


class Enquiry(RecordModel):
    """Enquiry raised by an agent against a single property."""
    property_id: Optional[str] = Field(None, description="Referenced property ID, may dangle")

    @field_validator("property_id", mode="before")
    @classmethod
    def _coerce_property_id(cls, value: Any) -> Optional[str]:
        if isinstance(value, bool) or not isinstance(value, (str, int)):
            return None
        return str(value) or None
