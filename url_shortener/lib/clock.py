"""Clock sources for URL shortener.

All timestamps in the service are epoch milliseconds.
"""

import time
from typing import Protocol


MILLIS_PER_MINUTE = 60_000


class Clock(Protocol):
    """Anything that can report the current time in epoch milliseconds."""

    def now_ms(self) -> int:
        ...


class SystemClock:
    """Wall-clock time."""

    def now_ms(self) -> int:
        return time.time_ns() // 1_000_000


class FixedClock:
    """Manually driven clock for tests and simulations."""

    def __init__(self, now_ms: int = 0):
        self._now_ms = now_ms

    def now_ms(self) -> int:
        return self._now_ms

    def set(self, now_ms: int) -> None:
        self._now_ms = now_ms

    def advance(self, millis: int = 0, seconds: float = 0, minutes: float = 0) -> int:
        """Move the clock forward and return the new time.

        Args:
            millis: Milliseconds to add
            seconds: Seconds to add
            minutes: Minutes to add

        Returns:
            The new current time in epoch milliseconds
        """
        self._now_ms += millis + int(seconds * 1000) + int(minutes * MILLIS_PER_MINUTE)
        return self._now_ms
