"""
Logging setup.

JSON lines (python-json-logger) when ``JSON_LOGS`` is on, one readable
line per record otherwise.
"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

# Third-party loggers and the level they are held at
QUIET_LOGGERS = {
    "sqlalchemy.engine": logging.WARNING,
    "passlib": logging.ERROR,
}

PLAIN_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


class JoblyJsonFormatter(jsonlogger.JsonFormatter):
    """Adds a UTC timestamp, level and source logger to every JSON record."""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name

        if record.levelno >= logging.WARNING:
            log_record["location"] = f"{record.pathname}:{record.lineno}"


def _formatter(json_logs: bool) -> logging.Formatter:
    if json_logs:
        return JoblyJsonFormatter("%(message)s")
    return logging.Formatter(PLAIN_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def setup_logging(log_level: str = "INFO", json_logs: bool = True) -> None:
    """
    Replace the root logger's handlers with a single stdout handler.

    Args:
        log_level: Name of the root level (DEBUG, INFO, ...)
        json_logs: JSON records instead of plain text
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_formatter(json_logs))

    root = logging.getLogger()
    for existing in root.handlers[:]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(log_level.upper())

    for name, level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)
