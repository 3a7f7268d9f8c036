"""Central logging configuration for Studio Catalog.

Call :func:`setup_logging` once at application start-up.
"""

from __future__ import annotations

import json
import logging
import logging.config
from typing import Any

from studio_catalog.config import Settings, get_settings

__all__ = ["JsonFormatter", "setup_logging"]

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Render records as one JSON object per line, including ``extra`` fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def setup_logging(settings: Settings | None = None) -> None:
    """Configure root logging from settings (level and json/text format)."""
    if settings is None:
        settings = get_settings()

    formatter = "json" if settings.log_format == "json" else "simple"
    level = settings.get_log_level()

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "simple": {
                    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                },
                "json": {
                    "()": JsonFormatter,
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": formatter,
                    "stream": "ext://sys.stderr",
                },
            },
            "root": {
                "level": level,
                "handlers": ["console"],
            },
            "loggers": {
                "sqlalchemy.engine": {
                    "level": "INFO" if settings.sql_echo else "WARNING",
                },
            },
        }
    )
    logging.getLogger(__name__).debug(
        "Logging initialised", extra={"log_format": formatter, "environment": settings.environment}
    )
