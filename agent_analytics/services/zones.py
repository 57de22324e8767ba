"""Zone normalization - one ordered rule table shared by every zone consumer."""

from typing import Any, Iterable, Optional

from agent_analytics.config import DEFAULT_ZONE_QUALIFIER
from agent_analytics.utils.errors import ConfigurationError

NO_ZONE_DATA = "No Zone Data"

# Checked in order; the first token contained in the zone wins.
ZONE_TOKENS: tuple[tuple[str, str], ...] = (
    ("north", "North"),
    ("south", "South"),
    ("east", "East"),
    ("west", "West"),
    ("central", "Central"),
)

PAN_TOKEN = "pan"


class ZoneNormalizer:
    """
    Map free-text zones onto canonical labels such as 'North Bangalore'.

    The qualifier is the locale suffix the deployment uses.
    """

    def __init__(self, qualifier: str = DEFAULT_ZONE_QUALIFIER):
        qualifier = (qualifier or "").strip()
        if not qualifier:
            raise ConfigurationError("Zone qualifier must not be empty")
        self.qualifier = qualifier
        self.rules: tuple[tuple[str, str], ...] = tuple(
            (token, f"{direction} {qualifier}") for token, direction in ZONE_TOKENS
        )
        self.pan_label = f"PAN {qualifier}"

    @property
    def directional_labels(self) -> list[str]:
        return [label for _, label in self.rules]

    @property
    def bucket_labels(self) -> list[str]:
        """The six primary-zone buckets in report order."""
        return self.directional_labels + [self.pan_label]

    def match(self, zone: Any) -> Optional[str]:
        """Directional label for a zone, or None when empty or unrecognized."""
        text = _clean(zone)
        if not text:
            return None
        lowered = text.lower()
        for token, label in self.rules:
            if token in lowered:
                return label
        return None

    def normalize(self, zone: Any) -> str:
        """Directional label, NO_ZONE_DATA for empty input, else the zone verbatim."""
        if not _clean(zone):
            return NO_ZONE_DATA
        label = self.match(zone)
        if label is not None:
            return label
        return zone if isinstance(zone, str) else str(zone)

    def primary_from_areas(self, areas: Optional[Iterable[Optional[str]]]) -> str:
        """
        Primary zone from an agent's declared areaOfOperation.

        No areas, any PAN area or several entries (unusable ones included) all
        mean pan-regional; a single area maps to its directional label, falling
        back to pan-regional.
        """
        areas = list(areas or [])
        if not areas:
            return self.pan_label
        has_pan = any(area and PAN_TOKEN in area.lower() for area in areas)
        if has_pan or len(areas) > 1:
            return self.pan_label
        return self.match(areas[0]) or self.pan_label


def _clean(zone: Any) -> str:
    if zone is None:
        return ""
    return (zone if isinstance(zone, str) else str(zone)).strip()


_default_normalizer = ZoneNormalizer()


def normalize_zone(zone: Any) -> str:
    """normalize() with the default qualifier."""
    return _default_normalizer.normalize(zone)
