"""Test helper functions."""

from typing import Any, Dict, Optional

from agent_analytics.models.agent import Agent
from agent_analytics.models.property import Property
from agent_analytics.services.linker import LinkedProperty, LinkSource


def create_request(query: Optional[Dict[str, Any]] = None, method: str = "GET") -> Dict[str, Any]:
    """Create a serverless request object for testing."""
    return {
        "method": method,
        "headers": {"content-type": "application/json"},
        "body": "",
        "query": query or {},
    }


def linked(property_id: str, document: dict, source: LinkSource = LinkSource.INVENTORY) -> LinkedProperty:
    """A linked property built straight from a document."""
    return LinkedProperty(property_id, Property.model_validate(document), source)


def agent(document: Optional[dict] = None) -> Agent:
    return Agent.model_validate(document or {})
