"""Report writer - zone bucket files and summary.json."""

import json
from pathlib import Path

from agent_analytics.models.zone_stats import CategorizationSummary, ZoneCategorization
from agent_analytics.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

SUMMARY_FILE = "summary.json"


def bucket_file_name(zone: str) -> str:
    """'North Bangalore' -> 'north_bangalore.txt'."""
    return zone.replace(" ", "_").lower() + ".txt"


def render_summary_json(summary: CategorizationSummary) -> str:
    return json.dumps(summary.to_json_dict(), indent=2)


def write_categorization(
    result: ZoneCategorization,
    summary: CategorizationSummary,
    output_dir: Path,
) -> dict[str, Path]:
    """
    Write one file per bucket (one agent ID per line) and summary.json.

    Returns the written paths keyed by zone, plus the summary under SUMMARY_FILE.
    Reruns over the same snapshot produce identical bytes.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    written: dict[str, Path] = {}
    for zone, agent_ids in result.buckets.items():
        path = output_dir / bucket_file_name(zone)
        path.write_text("\n".join(agent_ids), encoding="utf-8")
        written[zone] = path

    summary_path = output_dir / SUMMARY_FILE
    summary_path.write_text(render_summary_json(summary), encoding="utf-8")
    written[SUMMARY_FILE] = summary_path

    logger.info("Zone categorization written", output_dir=str(output_dir), files=len(written))
    return written
