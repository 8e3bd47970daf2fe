# notehub/core/quota.py
"""
Process-wide upload gate for the blob store quota.

When the blob store reports that its usage quota is exhausted, the gate is
closed for a fixed cool-down. Uploads arriving while it is closed fail fast
without calling the blob store. The gate only reopens when the cool-down
elapses or the process restarts; the external API remains the real
enforcement point.
"""
import math
import threading
import time
from typing import Callable


class QuotaGate:
    """
    Shared "blocked until" timestamp.

    Reads and writes go through a lock so the gate stays consistent even if
    handlers run on worker threads. Two uploads racing across the boundary
    may both pass the check; that is accepted.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._lock = threading.Lock()
        self._blocked_until = 0.0  # Unix seconds; 0 means never tripped

    @property
    def blocked_until(self) -> float:
        with self._lock:
            return self._blocked_until

    def remaining_seconds(self) -> float:
        """Seconds left before uploads are allowed again (0 when open)."""
        with self._lock:
            return max(0.0, self._blocked_until - self._clock())

    def is_open(self) -> bool:
        return self.remaining_seconds() <= 0

    def remaining_minutes(self) -> int:
        """Remaining wait rounded up to whole minutes."""
        return math.ceil(self.remaining_seconds() / 60)

    def trip(self, cooldown_seconds: float) -> None:
        """Close the gate for ``cooldown_seconds`` starting now."""
        with self._lock:
            self._blocked_until = self._clock() + cooldown_seconds

    def reset(self) -> None:
        with self._lock:
            self._blocked_until = 0.0


# Global gate instance (singleton pattern)
upload_gate = QuotaGate()
