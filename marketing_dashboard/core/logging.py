"""Structured JSON logging."""

import json
import logging
import sys
from datetime import datetime, timezone

ROOT_LOGGER = "marketing_dashboard"


class JSONFormatter(logging.Formatter):
    """Produces one JSON object per log line."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[0] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)
        for key in ("source", "view", "row_count", "duration_ms", "status_code"):
            if hasattr(record, key):
                log_entry[key] = getattr(record, key)
        return json.dumps(log_entry, default=str)


def configure_logging(level: str = "INFO") -> None:
    """Attach the JSON handler to the package root logger."""
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
        root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under the package root."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
