"""
Structured logging configuration for dhf-timetravel.

Provides JSON or text logs with a trace_id field so reconstruction traces can
be correlated per document/commit.

Environment Variables:
    DHF_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR) - default: WARNING
    DHF_LOG_FORMAT: Log format (json, text) - default: text

Usage:
    from timetravel.logging_config import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__, trace_id="README.md@a1b2c3d")
    logger.debug("Segment projected", extra={"segment_index": 3})
"""

import logging
import os
import sys
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def setup_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """
    Configure root logger with structured logging.

    Explicit arguments win over the environment:
    - DHF_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: WARNING)
    - DHF_LOG_FORMAT: json, text (default: text)

    Logs go to stderr so command output on stdout stays machine-readable.
    """
    log_level = (level or os.getenv("DHF_LOG_LEVEL", "WARNING")).upper()
    fmt = (log_format or os.getenv("DHF_LOG_FORMAT", "text")).lower()

    lvl = LEVELS.get(log_level, logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(lvl)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(lvl)
    handler.addFilter(TraceIDFilter())

    if fmt == "json":
        formatter = JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s %(trace_id)s",
            rename_fields={
                "asctime": "timestamp",
                "name": "logger",
                "levelname": "level",
            },
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s [trace_id=%(trace_id)s]",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


def get_logger(name: str, trace_id: Optional[str] = None) -> logging.LoggerAdapter:
    """
    Get a logger with optional trace_id for correlation.

    Args:
        name: Logger name (typically __name__)
        trace_id: Trace ID for correlating logs (typically document@commit)

    Returns:
        LoggerAdapter with trace_id in extra fields
    """
    logger = logging.getLogger(name)
    return _TraceAdapter(logger, {"trace_id": trace_id or "N/A"})


class _TraceAdapter(logging.LoggerAdapter):
    """LoggerAdapter that merges per-call extra fields with the trace_id."""

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **(kwargs.get("extra") or {})}
        return msg, kwargs


class TraceIDFilter(logging.Filter):
    """
    Logging filter that adds trace_id to all log records.

    Ensures all logs have a trace_id field, even if not set via LoggerAdapter.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "trace_id"):
            record.trace_id = "N/A"  # type: ignore
        return True


def enable_trace_logging(logger_name: str = "timetravel.trace") -> None:
    """
    Let reconstruction trace records through without lowering other loggers.

    Sets ``logger_name`` to DEBUG and opens the root handlers to DEBUG; every
    other logger still filters at its own effective level.
    """
    logging.getLogger(logger_name).setLevel(logging.DEBUG)
    for handler in logging.getLogger().handlers:
        handler.setLevel(logging.DEBUG)
