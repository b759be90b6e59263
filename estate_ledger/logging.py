"""Logging setup for estate-ledger.

Store and notification log calls attach the ids they act on through
``extra=``, e.g. ``logger.info("Approved payment %s", pid, extra={"payment_id": pid})``.
The JSON format lifts those ids into top-level keys so log lines can be
filtered by tenant, payment or property.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from estate_ledger.exceptions import ConfigurationError

CONTEXT_FIELDS = ("tenant_id", "payment_id", "property_id", "agent_id")

STANDARD_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(level: str = "INFO", format_type: str = "standard") -> None:
    """Route estate-ledger logs to stdout.

    Parameters
    ----------
    level : str
        Log level name. Unknown names fall back to INFO.
    format_type : str
        "standard" for pipe separated text or "json" for one object per line.
    """
    if format_type == "json":
        formatter: logging.Formatter = JsonFormatter()
    elif format_type == "standard":
        formatter = logging.Formatter(fmt=STANDARD_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    else:
        raise ConfigurationError(f"Unknown log format: {format_type}")

    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    # Faker logs every locale/provider lookup at DEBUG
    logging.getLogger("faker").setLevel(logging.WARNING)


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with ledger ids as top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_data[name] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def get_logger(name: str) -> logging.Logger:
    """Return the named logger."""
    return logging.getLogger(name)
