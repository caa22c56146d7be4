"""Per-request correlation ids (LogId).

The id is opaque to the service: it is either taken from the incoming
request or generated, attached to every log record emitted while the request
is handled, and echoed back to the caller.
"""

import random
import string
import logging
from contextvars import ContextVar
from typing import Optional


LOG_ID_HEADER = "X-Log-Id"
LOG_ID_ALPHABET = string.digits + string.ascii_lowercase
LOG_ID_LENGTH = 8
MAX_INCOMING_LOG_ID_LENGTH = 128

_current_log_id: ContextVar[Optional[str]] = ContextVar("log_id", default=None)


def new_log_id() -> str:
    """Generate an 8 character base36 id."""
    return "".join(random.choices(LOG_ID_ALPHABET, k=LOG_ID_LENGTH))


def accept_log_id(candidate: Optional[str]) -> str:
    """Reuse a caller-supplied id when it is printable and short, else make one."""
    if candidate and len(candidate) <= MAX_INCOMING_LOG_ID_LENGTH and candidate.isprintable():
        return candidate
    return new_log_id()


def set_log_id(log_id: str):
    """Bind ``log_id`` to the current context; returns a reset token."""
    return _current_log_id.set(log_id)


def reset_log_id(token) -> None:
    _current_log_id.reset(token)


def current_log_id() -> str:
    """Return the bound id, binding a fresh one if there is none."""
    log_id = _current_log_id.get()
    if log_id is None:
        log_id = new_log_id()
        _current_log_id.set(log_id)
    return log_id


class LogIdFilter(logging.Filter):
    """Attach the current LogId to every record as ``record.log_id``."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "log_id"):
            record.log_id = _current_log_id.get() or "-"
        return True
