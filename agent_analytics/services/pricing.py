"""Price resolution - ordered fallback chains over polymorphic property records."""

from dataclasses import dataclass
from enum import Enum
from numbers import Real
from typing import Any, Optional

from pydantic import BaseModel

from agent_analytics.models.property import ListingType, Property


class PriceStatus(str, Enum):
    """Why a price is, or is not, usable."""
    VALID = "valid"
    ZERO = "zero"
    NEGATIVE = "negative"
    NULL = "null"
    MISSING = "missing"
    NON_NUMERIC = "non_numeric"


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


def lookup(record: BaseModel, path: tuple[str, ...]) -> Any:
    """
    Walk attribute names through nested records.

    Returns MISSING when a field along the path was never present in the
    source document, None when it was present but null.
    """
    current: Any = record
    for name in path:
        if current is None:
            return None
        if not isinstance(current, BaseModel) or name not in current.model_fields_set:
            return MISSING
        current = getattr(current, name)
    return current


def classify(value: Any) -> PriceStatus:
    """Blank strings count as null, so a fallback chain skips over them."""
    if value is MISSING:
        return PriceStatus.MISSING
    if value is None or (isinstance(value, str) and not value.strip()):
        return PriceStatus.NULL
    if isinstance(value, bool) or not isinstance(value, Real):
        return PriceStatus.NON_NUMERIC
    if value > 0:
        return PriceStatus.VALID
    if value == 0:
        return PriceStatus.ZERO
    return PriceStatus.NEGATIVE


@dataclass(frozen=True)
class PriceResolution:
    """
    Outcome of walking a fallback chain.

    `status` describes the primary field unless a later field supplied a
    valid value; `source` is the dotted path that supplied `value`.
    """
    value: Optional[float]
    status: PriceStatus
    source: Optional[str] = None
    primary_source: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.status == PriceStatus.VALID

    @property
    def used_fallback(self) -> bool:
        return self.source is not None and self.source != self.primary_source


class FallbackChain:
    """Ordered field paths; the first present, non-null, non-zero value is the price."""

    def __init__(self, *paths: tuple[str, ...]):
        if not paths:
            raise ValueError("A fallback chain needs at least one path")
        self.paths = paths

    @staticmethod
    def _dotted(path: tuple[str, ...]) -> str:
        return ".".join(path)

    def resolve(self, record: BaseModel) -> PriceResolution:
        primary = self._dotted(self.paths[0])
        primary_status = classify(lookup(record, self.paths[0]))
        for path in self.paths:
            value = lookup(record, path)
            status = classify(value)
            if status in (PriceStatus.MISSING, PriceStatus.NULL, PriceStatus.ZERO):
                continue
            if status == PriceStatus.VALID:
                return PriceResolution(value, status, self._dotted(path), primary)
            return PriceResolution(None, status, self._dotted(path), primary)
        return PriceResolution(None, primary_status, None, primary)


RESALE_PRICE_CHAIN = FallbackChain(("pricing", "total_ask_price"), ("total_ask_price",))
RENTAL_PRICE_CHAIN = FallbackChain(("rental_info", "rent"), ("rental_info", "rental_income"))

PRICE_CHAINS: dict[ListingType, FallbackChain] = {
    ListingType.RESALE: RESALE_PRICE_CHAIN,
    ListingType.RENTAL: RENTAL_PRICE_CHAIN,
}


def resolve_price(record: Property) -> Optional[PriceResolution]:
    """Resolve the price for the record's listing type; None for other listing types."""
    listing = record.listing
    if listing is None:
        return None
    return PRICE_CHAINS[listing].resolve(record)


def valid_price(record: Property) -> Optional[float]:
    """The valid (> 0) price of a resale or rental property, else None."""
    resolution = resolve_price(record)
    if resolution is None or not resolution.is_valid:
        return None
    return resolution.value
