"""Property models - resale and rental listings."""

from enum import Enum
from typing import Any, Optional

from pydantic import Field, field_validator

from agent_analytics.models.base import RecordModel


class ListingType(str, Enum):
    """Listing type values."""
    RESALE = "resale"
    RENTAL = "rental"


class Pricing(RecordModel):
    """Resale pricing block."""
    total_ask_price: Any = Field(None, description="Asking price for resale listings")


class RentalInfo(RecordModel):
    """Rental terms block."""
    rent: Any = Field(None, description="Monthly rent")
    rental_income: Any = Field(None, description="Legacy rent field used by older listings")


def _mapping_or_none(value: Any) -> Any:
    return value if isinstance(value, (dict, RecordModel)) else None


class Property(RecordModel):
    """Property record. Price fields are kept raw; see services.pricing for resolution."""
    listing_type: Optional[str] = Field(None, description="resale, rental or anything else")
    pricing: Optional[Pricing] = Field(None, description="Current pricing block")
    total_ask_price: Any = Field(None, description="Legacy top-level asking price")
    rental_info: Optional[RentalInfo] = Field(None, description="Rental terms")
    zone: Optional[str] = Field(None, description="Free-text zone label")
    qc_id: Optional[str] = Field(None, description="Alternate ID used by some inventory references")

    @field_validator("pricing", "rental_info", mode="before")
    @classmethod
    def _coerce_blocks(cls, value: Any) -> Any:
        return _mapping_or_none(value)

    @field_validator("listing_type", "zone", "qc_id", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Optional[str]:
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @property
    def listing(self) -> Optional[ListingType]:
        """Known listing type, or None for anything else."""
        try:
            return ListingType(self.listing_type)
        except ValueError:
            return None
