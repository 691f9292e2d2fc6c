"""Logging setup shared by the CLI and the HTTP service."""

from __future__ import annotations

from datetime import datetime, timezone
import json
import logging
import sys

STRUCTURED_FIELDS = ("draw", "tickets", "duration_ms", "draw_count", "failed_count")


class JSONFormatter(logging.Formatter):
    """Render records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.module,
            "message": record.getMessage(),
        }
        for name in STRUCTURED_FIELDS:
            if hasattr(record, name):
                log_data[name] = getattr(record, name)
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data)


def configure_logging(level: int | str = logging.INFO, json_format: bool = False) -> None:
    """Install one stdout handler on the package logger.

    Calling this again replaces the handler instead of adding a second one.
    """

    logger = logging.getLogger("kerala_results")
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
