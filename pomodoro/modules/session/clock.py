"""Time source for session accounting."""

import time
from typing import Protocol


class Clock(Protocol):
    """Protocol for monotonic time sources."""

    def now(self) -> float:
        """Return monotonic time in seconds."""
        ...


class MonotonicClock:
    """Clock backed by time.monotonic()."""

    def now(self) -> float:
        return time.monotonic()
