"""Health check endpoint - reports whether the snapshot files are in place."""

from http.server import BaseHTTPRequestHandler
import json

from agent_analytics.config import AnalyticsConfig


def snapshot_status(config: AnalyticsConfig) -> dict:
    files = {
        "agents": config.agents_path.is_file(),
        "enquiries": config.enquiries_path.is_file(),
        "properties": config.properties_path.is_file(),
    }
    return {
        "status": "ok" if all(files.values()) else "degraded",
        "service": "agent-analytics",
        "snapshot": files,
    }


class handler(BaseHTTPRequestHandler):
    """Health check handler for Vercel serverless function."""

    def do_GET(self):
        """Handle GET request; a missing snapshot answers 503."""
        body = snapshot_status(AnalyticsConfig.from_env())
        self.send_response(200 if body["status"] == "ok" else 503)
        self.send_header('Content-Type', 'application/json')
        self.end_headers()
        self.wfile.write(json.dumps(body).encode('utf-8'))
