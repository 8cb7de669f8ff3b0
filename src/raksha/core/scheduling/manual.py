"""Virtual-clock scheduler for deterministic tests and simulations."""

from __future__ import annotations

import heapq
import itertools
import logging

from raksha.core.scheduling.scheduler import Callback

logger = logging.getLogger(__name__)


class _ManualHandle:
    def __init__(self, interval: float | None) -> None:
        self.interval = interval
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ManualScheduler:
    """Scheduler whose clock only moves when :meth:`advance` is called.

    Usage::

        scheduler = ManualScheduler()
        scheduler.call_later(3, on_done)
        scheduler.advance(3)   # on_done runs here
    """

    def __init__(self) -> None:
        self._now = 0.0
        self._queue: list[tuple[float, int, _ManualHandle, Callback]] = []
        self._seq = itertools.count()

    @property
    def now(self) -> float:
        """Seconds elapsed on the virtual clock."""
        return self._now

    def call_later(self, delay: float, callback: Callback) -> _ManualHandle:
        handle = _ManualHandle(interval=None)
        self._push(self._now + delay, handle, callback)
        return handle

    def call_repeating(self, interval: float, callback: Callback) -> _ManualHandle:
        if interval <= 0:
            raise ValueError("interval must be positive")
        handle = _ManualHandle(interval=interval)
        self._push(self._now + interval, handle, callback)
        return handle

    def pending(self) -> int:
        """Number of scheduled tasks that have not been cancelled."""
        return sum(1 for _, _, handle, _ in self._queue if not handle.cancelled)

    def advance(self, seconds: float) -> None:
        """Move the clock forward, running every task that falls due in order."""
        target = self._now + seconds
        while self._queue and self._queue[0][0] <= target:
            due, _, handle, callback = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self._now = due
            if handle.interval is not None:
                self._push(due + handle.interval, handle, callback)
            try:
                callback()
            except Exception:
                logger.exception("Scheduled callback %r failed", callback)
        self._now = target

    def _push(self, due: float, handle: _ManualHandle, callback: Callback) -> None:
        heapq.heappush(self._queue, (due, next(self._seq), handle, callback))
