"""Analytics configuration built explicitly from the environment."""

import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from agent_analytics.utils.errors import ConfigurationError

DEFAULT_ZONE_QUALIFIER = "Bangalore"

AGENTS_FILE = "agents.json"
ENQUIRIES_FILE = "enquiries.json"
PROPERTIES_FILE = "properties.json"


class AnalyticsConfig(BaseModel):
    """Where snapshots are read from, where reports go, and how zones are labelled."""
    data_dir: Path = Field(default=Path("data"), description="Directory holding the JSON snapshots")
    output_dir: Path = Field(
        default=Path("zone-categorization"),
        description="Directory for zone bucket files and summary.json"
    )
    zone_qualifier: str = Field(
        default=DEFAULT_ZONE_QUALIFIER,
        description="Locale suffix for canonical zone labels, e.g. 'North Bangalore'"
    )

    @field_validator("zone_qualifier")
    @classmethod
    def _strip_qualifier(cls, value: str) -> str:
        return value.strip()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "AnalyticsConfig":
        """
        Build a config from ANALYTICS_* environment variables.

        Keyword overrides that are not None take precedence (used by the CLI).
        """
        env = os.environ if environ is None else environ
        values = {}
        if env.get("ANALYTICS_DATA_DIR"):
            values["data_dir"] = Path(env["ANALYTICS_DATA_DIR"])
        if env.get("ANALYTICS_OUTPUT_DIR"):
            values["output_dir"] = Path(env["ANALYTICS_OUTPUT_DIR"])
        if env.get("ANALYTICS_ZONE_QUALIFIER") is not None:
            values["zone_qualifier"] = env["ANALYTICS_ZONE_QUALIFIER"]
        values.update({key: value for key, value in overrides.items() if value is not None})

        config = cls(**values)
        if not config.zone_qualifier:
            raise ConfigurationError("Zone qualifier must not be empty")
        return config

    @property
    def agents_path(self) -> Path:
        return self.data_dir / AGENTS_FILE

    @property
    def enquiries_path(self) -> Path:
        return self.data_dir / ENQUIRIES_FILE

    @property
    def properties_path(self) -> Path:
        return self.data_dir / PROPERTIES_FILE
