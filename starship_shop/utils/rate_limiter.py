"""
Minimum-interval gate for UI intents
"""
import time
from typing import Callable, Optional
import logging

logger = logging.getLogger(__name__)


class MinIntervalGate:
    """
    Rejects an intent while a previous one is still in flight, or when the
    previous one completed less than ``min_interval_ms`` ago.

    Rejected intents are dropped, never queued.
    """

    def __init__(self, name: str, min_interval_ms: int, clock: Callable[[], float] = time.monotonic):
        """
        Initialize gate

        Args:
            name: Label used in log messages
            min_interval_ms: Minimum time between the completion of one intent
                and the start of the next
            clock: Monotonic clock in seconds (injectable for tests)
        """
        self.name = name
        self.min_interval_ms = min_interval_ms
        self._clock = clock
        self.in_flight = False
        self.last_completed_at: Optional[float] = None

    def allow(self) -> bool:
        """True when a new intent may start now."""
        if self.in_flight:
            logger.debug("Gate %s: intent ignored, previous still in flight", self.name)
            return False
        if self.last_completed_at is None or not self.min_interval_ms:
            return True
        elapsed_ms = (self._clock() - self.last_completed_at) * 1000.0
        if elapsed_ms < self.min_interval_ms:
            logger.debug("Gate %s: intent ignored, %.0f ms since last", self.name, elapsed_ms)
            return False
        return True

    def begin(self) -> bool:
        """Claim the gate. Returns False (and claims nothing) if not allowed."""
        if not self.allow():
            return False
        self.in_flight = True
        return True

    def complete(self) -> None:
        self.in_flight = False
        self.last_completed_at = self._clock()

    def reset(self) -> None:
        self.in_flight = False
        self.last_completed_at = None

    def get_stats(self) -> dict:
        return {
            'name': self.name,
            'in_flight': self.in_flight,
            'min_interval_ms': self.min_interval_ms,
            'last_completed_at': self.last_completed_at,
        }
