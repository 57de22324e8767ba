"""Logging setup driven by LOG_* environment variables."""

import logging
import os
import sys
from typing import Optional

from pythonjsonlogger import jsonlogger

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
JSON_FIELDS = "%(timestamp)s %(levelname)s %(name)s %(message)s"


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def _formatter(format_name: str) -> logging.Formatter:
    if format_name == "json":
        return jsonlogger.JsonFormatter(JSON_FIELDS, timestamp=True)
    return logging.Formatter(TEXT_FORMAT)


class LoggingConfig:
    """Environment defaults; setup_logging() arguments take precedence."""

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
    LOG_FORMAT = os.environ.get("LOG_FORMAT", "json").lower()
    LOG_SLOW_OPERATION_THRESHOLD_MS = int(os.environ.get("LOG_SLOW_OPERATION_THRESHOLD_MS", "1000"))

    @classmethod
    def setup_logging(cls, level: Optional[str] = None, log_format: Optional[str] = None) -> None:
        """Install a single stderr handler on the root logger; stdout is reserved for reports."""
        log_level = _level(level or cls.LOG_LEVEL)

        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(log_level)
        handler.setFormatter(_formatter((log_format or cls.LOG_FORMAT).lower()))

        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.setLevel(log_level)
        root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
