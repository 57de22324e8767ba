"""Structured logging: keyword fields, correlation IDs for runs and requests, timed sections."""

import logging
import time
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional

from agent_analytics.utils.logging_config import LoggingConfig, get_logger

_correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


def generate_correlation_id(prefix: str = "req") -> str:
    """Short random ID, e.g. req_3f9a0c1b2d4e."""
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def get_correlation_id() -> Optional[str]:
    return _correlation_id.get()


@contextmanager
def correlation_context(correlation_id: Optional[str] = None) -> Iterator[str]:
    """Tag every record logged inside the block; the previous ID is restored on exit."""
    token = _correlation_id.set(correlation_id or generate_correlation_id())
    try:
        yield _correlation_id.get()
    finally:
        _correlation_id.reset(token)


class StructuredLogger:
    """
    Thin wrapper over a stdlib logger.

    Keyword arguments become fields on the record (and keys in the JSON
    output), alongside a UTC timestamp and the active correlation ID.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def _fields(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        extra = {"timestamp": datetime.now(timezone.utc).isoformat()}
        correlation_id = get_correlation_id()
        if correlation_id:
            extra["correlation_id"] = correlation_id
        extra.update(fields)
        return extra

    def _log(self, level: int, message: str, exc_info: bool = False, **fields: Any) -> None:
        if self.logger.isEnabledFor(level):
            self.logger.log(level, message, exc_info=exc_info, extra=self._fields(fields))

    def debug(self, message: str, **fields: Any) -> None:
        self._log(logging.DEBUG, message, **fields)

    def info(self, message: str, **fields: Any) -> None:
        self._log(logging.INFO, message, **fields)

    def warning(self, message: str, **fields: Any) -> None:
        self._log(logging.WARNING, message, **fields)

    def error(self, message: str, exc_info: bool = False, **fields: Any) -> None:
        self._log(logging.ERROR, message, exc_info=exc_info, **fields)

    def exception(self, message: str, **fields: Any) -> None:
        self._log(logging.ERROR, message, exc_info=True, **fields)


def get_structured_logger(name: str) -> StructuredLogger:
    return StructuredLogger(get_logger(name))


@contextmanager
def log_timing(operation: str, logger: Optional[StructuredLogger] = None, **fields: Any) -> Iterator[None]:
    """
    Log how long a block took.

    Blocks slower than LOG_SLOW_OPERATION_THRESHOLD_MS also log a warning.
    """
    logger = logger or get_structured_logger(__name__)
    logger.debug(f"Starting {operation}", operation=operation, **fields)
    started = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
        logger.info(f"Completed {operation}", operation=operation, duration_ms=elapsed_ms, **fields)
        threshold = LoggingConfig.LOG_SLOW_OPERATION_THRESHOLD_MS
        if elapsed_ms > threshold:
            logger.warning(
                f"Slow operation: {operation}",
                operation=operation,
                duration_ms=elapsed_ms,
                threshold_ms=threshold,
                **fields,
            )
