"""
Batch reports over the exported agents, enquiries and properties.

Usage:
    agent-analytics categorize-zones --data-dir data --output-dir zone-categorization
    agent-analytics price-report --fsm-only --listing resale
    agent-analytics zone-report
    agent-analytics property-counts
    agent-analytics rental-analysis
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

from agent_analytics.config import AnalyticsConfig
from agent_analytics.services.console_report import (
    render_categorization,
    render_price_report,
    render_property_counts,
    render_rental_analysis,
    render_zone_report,
)
from agent_analytics.services.diagnostics import build_diagnostics
from agent_analytics.services.price_aggregator import build_price_report, filter_and_sort, summarize_prices
from agent_analytics.services.report_writer import write_categorization
from agent_analytics.services.snapshot_loader import load_snapshot
from agent_analytics.services.zone_aggregator import build_zone_report, filter_and_sort as filter_zone_records
from agent_analytics.services.zone_categorizer import categorize_agents, summarize_categorization
from agent_analytics.services.zones import ZoneNormalizer
from agent_analytics.utils.errors import AgentAnalyticsError
from agent_analytics.utils.logging import get_structured_logger
from agent_analytics.utils.logging_config import LoggingConfig

logger = get_structured_logger(__name__)


def _categorize_zones(args: argparse.Namespace, config: AnalyticsConfig) -> str:
    snapshot = load_snapshot(config)
    result = categorize_agents(snapshot, ZoneNormalizer(config.zone_qualifier))
    summary = summarize_categorization(result)
    output_dir = None
    if not args.no_files:
        write_categorization(result, summary, config.output_dir)
        output_dir = config.output_dir
    return render_categorization(result, summary, output_dir)


def _price_report(args: argparse.Namespace, config: AnalyticsConfig) -> str:
    report = build_price_report(load_snapshot(config))
    agents = filter_and_sort(
        report.agents,
        search=args.search,
        fsm_only=args.fsm_only,
        listing=args.listing,
        sort_by=args.sort_by,
    )
    if args.json:
        return json.dumps([agent.to_json_dict() for agent in agents], indent=2)
    return render_price_report(summarize_prices(report, agents), agents, limit=args.limit)


def _zone_report(args: argparse.Namespace, config: AnalyticsConfig) -> str:
    records = build_zone_report(load_snapshot(config), ZoneNormalizer(config.zone_qualifier))
    records = filter_zone_records(records, search=args.search, fsm_only=args.fsm_only, sort_by=args.sort_by)
    if args.json:
        return json.dumps([record.to_json_dict() for record in records], indent=2)
    return render_zone_report(records, limit=args.limit)


def _property_counts(args: argparse.Namespace, config: AnalyticsConfig) -> str:
    return render_property_counts(build_diagnostics(load_snapshot(config)))


def _rental_analysis(args: argparse.Namespace, config: AnalyticsConfig) -> str:
    return render_rental_analysis(build_diagnostics(load_snapshot(config)))


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--data-dir", type=Path, help="Directory with agents/enquiries/properties JSON")
    common.add_argument("--output-dir", type=Path, help="Directory for zone bucket files")
    common.add_argument("--zone-qualifier", type=str, help="Locale suffix for zone labels (default: Bangalore)")
    common.add_argument("--log-level", type=str, help="Logging level (default: LOG_LEVEL or INFO)")

    parser = argparse.ArgumentParser(
        prog="agent-analytics",
        description="Aggregate agent, enquiry and property snapshots into reports",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    categorize = commands.add_parser(
        "categorize-zones", parents=[common], help="Bucket FSM agents by primary zone"
    )
    categorize.add_argument("--no-files", action="store_true", help="Print the summary without writing files")
    categorize.set_defaults(handler=_categorize_zones)

    prices = commands.add_parser("price-report", parents=[common], help="Per-agent price and rent statistics")
    prices.add_argument("--search", type=str, default="", help="Filter by agent name or ID")
    prices.add_argument("--fsm-only", action="store_true", help="Only agents with an FSM token")
    prices.add_argument("--listing", choices=["all", "resale", "rental"], default="all")
    prices.add_argument("--sort-by", choices=["avgPrice", "name", "enquiries"], default="avgPrice")
    prices.add_argument("--limit", type=int, default=20, help="Agents shown in the text report")
    prices.add_argument("--json", action="store_true", help="Emit agent records as JSON")
    prices.set_defaults(handler=_price_report)

    zones = commands.add_parser("zone-report", parents=[common], help="Per-agent zone distribution")
    zones.add_argument("--search", type=str, default="", help="Filter by agent name or ID")
    zones.add_argument("--fsm-only", action="store_true", help="Only agents with an FSM token")
    zones.add_argument("--sort-by", choices=["enquiries", "name", "inventories"], default="enquiries")
    zones.add_argument("--limit", type=int, default=20, help="Agents shown in the text report")
    zones.add_argument("--json", action="store_true", help="Emit agent records as JSON")
    zones.set_defaults(handler=_zone_report)

    counts = commands.add_parser("property-counts", parents=[common], help="Price coverage and agent usage")
    counts.set_defaults(handler=_property_counts)

    rentals = commands.add_parser("rental-analysis", parents=[common], help="Rental price coverage deep dive")
    rentals.set_defaults(handler=_rental_analysis)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    LoggingConfig.setup_logging(level=args.log_level)

    try:
        config = AnalyticsConfig.from_env(
            data_dir=args.data_dir,
            output_dir=args.output_dir,
            zone_qualifier=args.zone_qualifier,
        )
        output = args.handler(args, config)
    except AgentAnalyticsError as e:
        logger.error("Report failed", command=args.command, error=str(e), error_type=type(e).__name__)
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
