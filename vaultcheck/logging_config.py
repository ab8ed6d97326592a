"""
Structured logging configuration for vaultcheck.

Provides JSON-formatted logs with snapshot_id support for correlating
the signature and chunk checks of one verification run.

Environment Variables:
    VAULTCHECK_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR) - default: WARNING
    VAULTCHECK_LOG_FORMAT: Log format (json, text) - default: text

Logs go to stderr so that --json output on stdout stays machine-readable.

Usage:
    from vaultcheck.logging_config import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__, snapshot_id="snap-12345")
    logger.info("Verifying snapshot", extra={"trust": "pinned"})
"""

import logging
import os
import sys
from typing import Optional

from pythonjsonlogger.json import JsonFormatter


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure root logger with structured logging.

    Reads configuration from environment variables:
    - VAULTCHECK_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: WARNING)
    - VAULTCHECK_LOG_FORMAT: json, text (default: text)

    Args:
        level: Explicit level, overrides VAULTCHECK_LOG_LEVEL
    """
    log_level = (level or os.getenv("VAULTCHECK_LOG_LEVEL", "WARNING")).upper()
    log_format = os.getenv("VAULTCHECK_LOG_FORMAT", "text").lower()

    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    resolved = level_map.get(log_level, logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(resolved)
    handler.addFilter(SnapshotIDFilter())

    if log_format == "json":
        formatter = JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s %(snapshot_id)s",
            rename_fields={
                "asctime": "timestamp",
                "name": "logger",
                "levelname": "level",
            },
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s [snapshot_id=%(snapshot_id)s]",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


class SnapshotLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that merges per-call extra fields with the bound snapshot_id."""

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **(kwargs.get("extra") or {})}
        return msg, kwargs


def get_logger(name: str, snapshot_id: Optional[str] = None) -> logging.LoggerAdapter:
    """
    Get a logger with optional snapshot_id for correlation.

    Args:
        name: Logger name (typically __name__)
        snapshot_id: Snapshot being verified

    Returns:
        LoggerAdapter with snapshot_id in extra fields

    Example:
        logger = get_logger(__name__, snapshot_id="snap-12345")
        logger.warning("Missing chunks", extra={"missing": 3})
        # Output (JSON): {"timestamp": "...", "level": "WARNING", "message": "Missing chunks", "snapshot_id": "snap-12345", "missing": 3}
    """
    logger = logging.getLogger(name)
    return SnapshotLoggerAdapter(logger, {"snapshot_id": snapshot_id or "N/A"})


class SnapshotIDFilter(logging.Filter):
    """
    Logging filter that adds snapshot_id to all log records.

    Ensures all logs have a snapshot_id field, even if not set via LoggerAdapter.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "snapshot_id"):
            record.snapshot_id = "N/A"  # type: ignore
        return True
