"""Per-agent zone analytics endpoint."""

from agent_analytics.config import AnalyticsConfig
from agent_analytics.services.snapshot_loader import load_snapshot
from agent_analytics.services.zone_aggregator import ZONE_SORT_KEYS, build_zone_report, filter_and_sort
from agent_analytics.services.zones import ZoneNormalizer
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
    Zone distribution for every agent.

    Query: search, fsm_only, sort_by (enquiries|name|inventories).
    """
    with correlation_context() as correlation_id:
        try:
            query = query_params(request)
            sort_by = query_choice(query, "sort_by", tuple(ZONE_SORT_KEYS), "enquiries")

            config = AnalyticsConfig.from_env()
            records = build_zone_report(load_snapshot(config), ZoneNormalizer(config.zone_qualifier))
            selected = filter_and_sort(
                records,
                search=query.get("search", ""),
                fsm_only=query_flag(query, "fsm_only"),
                sort_by=sort_by,
            )
            return json_response({
                "total": len(records),
                "agents": [record.to_json_dict() for record in selected],
            })

        except Exception as e:
            logger.error("Error building zone analytics", exc_info=True, error=str(e))
            return error_response(e, correlation_id)
