"""
Structured logging configuration for the oracle.

Provides JSON-formatted logs with case_id support, so every line emitted
while replaying a case can be correlated with its recorded case file.

Environment Variables:
    SSO_ORACLE_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR) - default: INFO
    SSO_ORACLE_LOG_FORMAT: Log format (json, text) - default: json

Usage:
    from oracle.logging_config import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__, case_id="3f2a9c01d4e5b6a7")
    logger.info("Replaying case", extra={"mode": "compact"})
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
    Configure the root logger.

    Arguments override SSO_ORACLE_LOG_LEVEL / SSO_ORACLE_LOG_FORMAT.
    Logs go to stderr so JSON command output on stdout stays parseable.
    """
    level_name = (level or os.getenv("SSO_ORACLE_LOG_LEVEL", "INFO")).upper()
    fmt = (log_format or os.getenv("SSO_ORACLE_LOG_FORMAT", "json")).lower()
    resolved = LEVELS.get(level_name, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(resolved)
    handler.addFilter(CaseIdFilter())

    if fmt == "json":
        formatter: logging.Formatter = JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s %(case_id)s",
            rename_fields={
                "asctime": "timestamp",
                "name": "logger",
                "levelname": "level",
            },
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s [case_id=%(case_id)s]",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # Hypothesis reports through its own channel
    logging.getLogger("hypothesis").setLevel(logging.WARNING)


class CaseLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that keeps call-site extra fields next to case_id."""

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(name: str, case_id: Optional[str] = None) -> CaseLoggerAdapter:
    """
    Get a logger with optional case_id for correlation.

    Example:
        logger = get_logger(__name__, case_id="3f2a9c01d4e5b6a7")
        logger.info("Case passed")
        # Output (JSON): {"timestamp": "...", "level": "INFO", "message": "Case passed", "case_id": "3f2a9c01d4e5b6a7"}
    """
    return CaseLoggerAdapter(logging.getLogger(name), {"case_id": case_id or "N/A"})


class CaseIdFilter(logging.Filter):
    """Ensures every record has a case_id field, even if not logged via get_logger()."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "case_id"):
            record.case_id = "N/A"  # type: ignore
        return True
