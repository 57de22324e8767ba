"""Shared pytest fixtures and configuration."""

import json
import os
import pytest

# Set test environment variables before the logging config reads them
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("LOG_FORMAT", "text")

from agent_analytics.config import AnalyticsConfig
from agent_analytics.services.snapshot_loader import snapshot_from_documents
from agent_analytics.services.zones import ZoneNormalizer
from tests.fixtures.snapshots import (
    scenario_agents,
    scenario_enquiries,
    scenario_properties,
    zone_agents,
    zone_enquiries,
    zone_properties,
)


@pytest.fixture
def normalizer():
    """Zone normalizer with the default qualifier."""
    return ZoneNormalizer()


@pytest.fixture
def scenario_documents():
    """The single-agent resale + rental scenario as raw documents."""
    return scenario_agents(), scenario_enquiries(), scenario_properties()


@pytest.fixture
def scenario_snapshot(scenario_documents):
    return snapshot_from_documents(*scenario_documents)


@pytest.fixture
def zone_documents():
    """Several FSM and non-FSM agents with zoned properties."""
    return zone_agents(), zone_enquiries(), zone_properties()


@pytest.fixture
def zone_snapshot(zone_documents):
    return snapshot_from_documents(*zone_documents)


def write_snapshot_files(directory, agents, enquiries, properties):
    directory.mkdir(parents=True, exist_ok=True)
    for name, document in (("agents", agents), ("enquiries", enquiries), ("properties", properties)):
        (directory / f"{name}.json").write_text(json.dumps(document), encoding="utf-8")
    return directory


@pytest.fixture
def data_dir(tmp_path, zone_documents):
    """Snapshot files for the zone scenario on disk."""
    return write_snapshot_files(tmp_path / "data", *zone_documents)


@pytest.fixture
def analytics_config(tmp_path, data_dir):
    return AnalyticsConfig(data_dir=data_dir, output_dir=tmp_path / "out")


@pytest.fixture
def analytics_env(monkeypatch, analytics_config):
    """Point handlers that read the environment at the on-disk snapshot."""
    monkeypatch.setenv("ANALYTICS_DATA_DIR", str(analytics_config.data_dir))
    monkeypatch.setenv("ANALYTICS_OUTPUT_DIR", str(analytics_config.output_dir))
    monkeypatch.delenv("ANALYTICS_ZONE_QUALIFIER", raising=False)
    return analytics_config
