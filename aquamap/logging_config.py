"""Logging setup and map context for log records."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

# Record attributes carried into JSON output when a log call sets them
CONTEXT_FIELDS = ("location", "notification_id")

# Third-party loggers that only report at WARNING and above
QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


class JSONFormatter(logging.Formatter):
    """One JSON object per record, stamped with the record's own UTC time."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
        }
        log_data.update(
            (field, getattr(record, field))
            for field in CONTEXT_FIELDS
            if getattr(record, field, None) is not None
        )
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_logging(level: str = "INFO", json_format: bool = True) -> None:
    """
    Route every log record to stdout.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: JSON lines when True, plain text otherwise.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    handler = logging.StreamHandler(sys.stdout)
    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        )

    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(numeric_level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def location_label(latitude: float, longitude: float) -> str:
    """Format a point the way it appears in the location log field."""
    return f"{latitude:.4f},{longitude:.4f}"


class MapContextAdapter(logging.LoggerAdapter):
    """Adds the location or notification a message is about."""

    def process(
        self, msg: str, kwargs: dict[str, Any]
    ) -> tuple[str, dict[str, Any]]:
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(
    name: str,
    location: str | None = None,
    notification_id: str | None = None,
) -> MapContextAdapter:
    """
    Get a logger bound to a map location or a notification.

    Args:
        name: Logger name.
        location: Place name or "lat,lon" label.
        notification_id: Id of the feed entry being logged about.
    """
    context = {"location": location, "notification_id": notification_id}
    return MapContextAdapter(
        logging.getLogger(name),
        {key: value for key, value in context.items() if value is not None},
    )
