"""Virtual-clock timer scheduler used by the page controllers."""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Timer:
    """A scheduled callback; repeating when interval_ms is set."""

    due_ms: int
    callback: Callable[[], None]
    interval_ms: Optional[int] = None
    sequence: int = 0
    cancelled: bool = False


class Scheduler:
    """
    Single-threaded timer queue driven by an explicit clock.

    Callbacks run one at a time, in due-time order, from advance(). Nothing
    runs concurrently, so controller state is only touched by one callback at
    a time.
    """

    def __init__(self):
        self.now_ms = 0
        self._timers: List[Timer] = []
        self._sequence = 0

    def _schedule(self, delay_ms: int, callback: Callable[[], None], interval_ms: Optional[int]) -> Timer:
        self._sequence += 1
        timer = Timer(
            due_ms=self.now_ms + delay_ms,
            callback=callback,
            interval_ms=interval_ms,
            sequence=self._sequence,
        )
        self._timers.append(timer)
        return timer

    def every(self, interval_ms: int, callback: Callable[[], None]) -> Timer:
        """Run callback every interval_ms until cancelled."""
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        return self._schedule(interval_ms, callback, interval_ms)

    def after(self, delay_ms: int, callback: Callable[[], None]) -> Timer:
        """Run callback once after delay_ms."""
        return self._schedule(delay_ms, callback, None)

    def cancel(self, timer: Optional[Timer]):
        if timer is None:
            return
        timer.cancelled = True
        if timer in self._timers:
            self._timers.remove(timer)

    def cancel_all(self):
        for timer in self._timers:
            timer.cancelled = True
        self._timers = []

    @property
    def pending(self) -> int:
        """Number of timers still scheduled."""
        return len(self._timers)

    def advance(self, ms: int):
        """
        Move the clock forward, firing every timer that falls due.

        Args:
            ms: Milliseconds to advance
        """
        target = self.now_ms + ms
        while True:
            due = [t for t in self._timers if t.due_ms <= target]
            if not due:
                break
            timer = min(due, key=lambda t: (t.due_ms, t.sequence))
            self.now_ms = timer.due_ms
            if timer.interval_ms is None:
                self._timers.remove(timer)
            else:
                timer.due_ms += timer.interval_ms
            timer.callback()
        self.now_ms = target

    def run_until_idle(self, limit_ms: int = 60000):
        """Advance until no timers remain or limit_ms has elapsed."""
        deadline = self.now_ms + limit_ms
        while self._timers and self.now_ms < deadline:
            next_due = min(t.due_ms for t in self._timers)
            self.advance(max(min(next_due, deadline) - self.now_ms, 0))
        if self._timers:
            logger.warning(f"{len(self._timers)} timers still pending after {limit_ms}ms")
