"""Common utilities for URL shortener."""

from .validators import is_valid_url, is_valid_short_code
from .logging_config import setup_logging, log_event
from .correlation import LogIdFilter, current_log_id, new_log_id

__all__ = [
    "is_valid_url",
    "is_valid_short_code",
    "setup_logging",
    "log_event",
    "LogIdFilter",
    "current_log_id",
    "new_log_id",
]
