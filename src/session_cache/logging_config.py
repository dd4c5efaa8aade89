"""
Log setup for hosts that do not configure logging themselves.

Two formats: human-readable text, or one JSON object per line.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone


def map_log_level(level_name: str) -> int:
    level = getattr(logging, (level_name or "INFO").upper(), None)
    return level if isinstance(level, int) else logging.INFO


class JSONFormatter(logging.Formatter):
    """Format records as JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        account = record.__dict__.get("account_name")
        if account is not None:
            log["account_name"] = account
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "text") -> logging.Handler:
    """Attach a stream handler to the `session_cache` logger and return it."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))

    logger = logging.getLogger("session_cache")
    logger.addHandler(handler)
    logger.setLevel(map_log_level(level))
    return handler
