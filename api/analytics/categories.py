"""Primary-zone categorization endpoint (summary.json shape plus bucket members)."""

from agent_analytics.config import AnalyticsConfig
from agent_analytics.services.snapshot_loader import load_snapshot
from agent_analytics.services.zone_categorizer import categorize_agents, summarize_categorization
from agent_analytics.services.zones import ZoneNormalizer
from agent_analytics.utils.logging import correlation_context, get_structured_logger
from agent_analytics.utils.responses import error_response, json_response

logger = get_structured_logger(__name__)


def handler(request):
    with correlation_context() as correlation_id:
        try:
            config = AnalyticsConfig.from_env()
            result = categorize_agents(load_snapshot(config), ZoneNormalizer(config.zone_qualifier))
            return json_response({
                "summary": summarize_categorization(result).to_json_dict(),
                "buckets": result.buckets,
            })

        except Exception as e:
            logger.error("Error categorizing agents", exc_info=True, error=str(e))
            return error_response(e, correlation_id)
