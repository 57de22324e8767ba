"""Error handling utilities."""

from typing import Optional


class AgentAnalyticsError(Exception):
    """Base exception for agent analytics."""
    pass


class ConfigurationError(AgentAnalyticsError):
    """Invalid analytics configuration."""
    pass


class SnapshotError(AgentAnalyticsError):
    """Snapshot could not be loaded."""
    pass


class SnapshotNotFoundError(SnapshotError):
    """A snapshot file does not exist."""
    pass


class MalformedInputError(SnapshotError):
    """A snapshot file is not valid JSON or not an id -> record mapping."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path
