"""Serverless handler responses and query parsing."""

import json
from typing import Any, Optional

from agent_analytics.utils.errors import (
    AgentAnalyticsError,
    ConfigurationError,
    MalformedInputError,
    SnapshotError,
    SnapshotNotFoundError,
)

JSON_HEADERS = {"Content-Type": "application/json"}


def json_response(payload: Any, status_code: int = 200) -> dict:
    return {
        "statusCode": status_code,
        "headers": dict(JSON_HEADERS),
        "body": json.dumps(payload),
    }


def error_response(error: Exception, correlation_id: Optional[str] = None) -> dict:
    """Structured error body; snapshot problems are not the caller's fault, bad queries are."""
    if isinstance(error, ValueError):
        status_code, code = 400, "invalid_request"
    elif isinstance(error, SnapshotNotFoundError):
        status_code, code = 503, "snapshot_not_found"
    elif isinstance(error, MalformedInputError):
        status_code, code = 500, "malformed_input"
    elif isinstance(error, SnapshotError):
        status_code, code = 500, "snapshot_unreadable"
    elif isinstance(error, ConfigurationError):
        status_code, code = 500, "configuration_error"
    elif isinstance(error, AgentAnalyticsError):
        status_code, code = 500, "analytics_error"
    else:
        status_code, code = 500, "internal_error"
    body = {"error": {"code": code, "message": str(error)}}
    if correlation_id:
        body["correlation_id"] = correlation_id
    return json_response(body, status_code)


def query_params(request: dict) -> dict:
    return request.get("query", {}) or {}


def query_flag(query: dict, name: str) -> bool:
    return str(query.get(name, "false")).lower() in ("1", "true", "yes")


def query_choice(query: dict, name: str, choices: tuple[str, ...], default: str) -> str:
    value = query.get(name, default)
    if value not in choices:
        raise ValueError(f"Query parameter '{name}' must be one of: {', '.join(choices)}")
    return value
