"""Tests for health check endpoint."""

import pytest
import json
from unittest.mock import Mock
from http.server import BaseHTTPRequestHandler
from io import BytesIO
import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))
from api.health import handler, snapshot_status


class MockSocket:
    def makefile(self, *args, **kwargs):
        return BytesIO(b"GET /api/health HTTP/1.1\r\n\r\n")

    def sendall(self, data):
        pass

    def close(self):
        pass


def _get():
    h = handler(MockSocket(), ("127.0.0.1", 8000), None)
    h.wfile = BytesIO()
    h.send_response = Mock()
    h.send_header = Mock()
    h.end_headers = Mock()

    h.do_GET()

    h.wfile.seek(0)
    return h.send_response.call_args[0][0], json.loads(h.wfile.read().decode('utf-8'))


@pytest.mark.unit
def test_health_handler_class():
    """Test that handler is a BaseHTTPRequestHandler subclass."""
    assert issubclass(handler, BaseHTTPRequestHandler)


@pytest.mark.unit
def test_health_with_snapshot(analytics_env):
    """Test GET request when every snapshot file exists."""
    status_code, response_data = _get()

    assert status_code == 200
    assert response_data["status"] == "ok"
    assert response_data["service"] == "agent-analytics"
    assert response_data["snapshot"] == {"agents": True, "enquiries": True, "properties": True}


@pytest.mark.unit
def test_health_without_snapshot(monkeypatch, tmp_path):
    """Test GET request when the data directory is empty."""
    monkeypatch.setenv("ANALYTICS_DATA_DIR", str(tmp_path))

    status_code, response_data = _get()

    assert status_code == 503
    assert response_data["status"] == "degraded"


@pytest.mark.unit
def test_snapshot_status_reports_each_file(analytics_config):
    analytics_config.properties_path.unlink()

    status = snapshot_status(analytics_config)

    assert status["status"] == "degraded"
    assert status["snapshot"]["properties"] is False
    assert status["snapshot"]["agents"] is True
