"""Logging configuration for URL shortener."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Optional

from .correlation import LogIdFilter, current_log_id


class JsonFormatter(logging.Formatter):
    """One JSON object per line, including the structured event fields."""

    EVENT_FIELDS = ("log_id", "route", "service", "meta")

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc) \
                            .isoformat(timespec="milliseconds") \
                            .replace("+00:00", "Z")
        log = {
            "timestamp": timestamp,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in self.EVENT_FIELDS:
            if hasattr(record, key):
                log[key] = getattr(record, key)
        if record.exc_info:
            log["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(log, default=str)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
) -> logging.Logger:
    """Setup logging configuration.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path
        json_format: Whether to use JSON format

    Returns:
        Configured logger
    """
    # Convert level string to logging constant
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    # Create logger
    logger = logging.getLogger("url_shortener")
    logger.setLevel(numeric_level)

    # Remove existing handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # Create formatter
    if json_format:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s [%(log_id)s] - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(LogIdFilter())
    logger.addHandler(console_handler)

    # File handler (if specified)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(LogIdFilter())
        logger.addHandler(file_handler)

    return logger


def log_event(
    logger: logging.Logger,
    route: str,
    level: str,
    message: str,
    service: str = "url-shortener",
    **meta: Any,
) -> str:
    """Emit a structured request event and return the LogId it was filed under.

    Args:
        logger: Logger to emit on
        route: Route label, e.g. "POST /shorten"
        level: Level name ("info", "error", ...)
        message: Human readable message
        service: Service name recorded with the event
        **meta: Extra context recorded with the event

    Returns:
        The correlation id bound to the current request
    """
    log_id = current_log_id()
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger.log(
        numeric_level,
        f"{route}: {message}",
        extra={"log_id": log_id, "route": route, "service": service, "meta": meta},
    )
    return log_id
