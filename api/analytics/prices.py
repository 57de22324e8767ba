"""Per-agent price analytics endpoint."""

from agent_analytics.config import AnalyticsConfig
from agent_analytics.services.price_aggregator import build_price_report, filter_and_sort, summarize_prices
from agent_analytics.services.snapshot_loader import load_snapshot
from agent_analytics.utils.logging import correlation_context, get_structured_logger
from agent_analytics.utils.responses import (
    error_response,
    json_response,
    query_choice,
    query_flag,
    query_params,
)

logger = get_structured_logger(__name__)


def handler(request):
    """
    Price statistics for every agent, filtered and sorted for display.

    Query: search, fsm_only, listing (all|resale|rental), sort_by (avgPrice|name|enquiries).
    """
    with correlation_context() as correlation_id:
        try:
            query = query_params(request)
            listing = query_choice(query, "listing", ("all", "resale", "rental"), "all")
            sort_by = query_choice(query, "sort_by", ("avgPrice", "name", "enquiries"), "avgPrice")

            report = build_price_report(load_snapshot(AnalyticsConfig.from_env()))
            agents = filter_and_sort(
                report.agents,
                search=query.get("search", ""),
                fsm_only=query_flag(query, "fsm_only"),
                listing=listing,
                sort_by=sort_by,
            )
            return json_response({
                "summary": summarize_prices(report, agents).to_json_dict(),
                "agents": [agent.to_json_dict() for agent in agents],
            })

        except Exception as e:
            logger.error("Error building price analytics", exc_info=True, error=str(e))
            return error_response(e, correlation_id)
