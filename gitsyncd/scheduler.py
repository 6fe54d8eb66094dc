"""
Fixed-interval ticker for the sync loop.

The ticker calls one callback per interval on the calling thread. A tick
that arrives while the previous callback is still running is skipped, and
deadlines missed during a long cycle are dropped rather than replayed.
"""

import threading
import time
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class Ticker:
    """Cancellable fixed-rate ticker."""

    def __init__(
        self,
        interval: float,
        callback: Callable[[], object],
        clock: Callable[[], float] = time.monotonic
    ):
        """
        Initialize Ticker.

        Args:
            interval: Seconds between ticks, must be positive
            callback: Called once per tick
            clock: Monotonic time source
        """
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.interval = interval
        self.callback = callback
        self.clock = clock
        self.ticks = 0
        self.skipped = 0
        self._running = threading.Lock()
        self._stopped = threading.Event()

    @property
    def stopped(self) -> bool:
        return self._stopped.is_set()

    def tick(self) -> bool:
        """
        Run the callback now unless a previous tick is still in flight.

        Returns:
            True if the callback ran, False if the tick was skipped
        """
        if not self._running.acquire(blocking=False):
            self.skipped += 1
            logger.warning("previous sync still running, skipping tick")
            return False
        try:
            self.ticks += 1
            self.callback()
        finally:
            self._running.release()
        return True

    def run(self, max_ticks: Optional[int] = None) -> None:
        """
        Tick every interval until stop() is called.

        The first tick fires one full interval after the call.

        Args:
            max_ticks: Return after this many ticks (default: run forever)
        """
        deadline = self.clock() + self.interval
        ran = 0

        while not self._stopped.is_set():
            remaining = deadline - self.clock()
            if remaining > 0 and self._stopped.wait(remaining):
                break

            self.tick()
            ran += 1
            if max_ticks is not None and ran >= max_ticks:
                break

            deadline += self.interval
            now = self.clock()
            if deadline <= now:
                missed = int((now - deadline) // self.interval) + 1
                logger.debug(f"sync overran the interval, dropping {missed} tick(s)")
                deadline += missed * self.interval

    def stop(self) -> None:
        """Make run() return after the current tick. A stopped ticker stays stopped."""
        self._stopped.set()
