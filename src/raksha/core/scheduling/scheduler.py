"""Cancellable scheduled tasks.

Components that need delayed or periodic work (the SOS countdown tick,
cooldown, status-text resets) receive a ``Scheduler`` and keep the
``ScheduledHandle`` it returns. Cancelling a handle guarantees its
callback will not run afterwards.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


@runtime_checkable
class ScheduledHandle(Protocol):
    """Handle for a pending one-shot or repeating task."""

    def cancel(self) -> None:
        """Stop the task. Idempotent."""
        ...

    @property
    def cancelled(self) -> bool:
        ...


@runtime_checkable
class Scheduler(Protocol):
    """Schedules callbacks on the owner's single thread of control."""

    def call_later(self, delay: float, callback: Callback) -> ScheduledHandle:
        """Run ``callback`` once after ``delay`` seconds."""
        ...

    def call_repeating(self, interval: float, callback: Callback) -> ScheduledHandle:
        """Run ``callback`` every ``interval`` seconds until cancelled."""
        ...


class _AsyncioHandle:
    """Wraps the current ``asyncio.TimerHandle`` of a (possibly repeating) task."""

    def __init__(self) -> None:
        self._timer: asyncio.TimerHandle | None = None
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class AsyncioScheduler:
    """Scheduler running callbacks on an asyncio event loop.

    All callbacks execute on the loop thread, so every state change the
    callbacks make is serialized with the tool handlers running on the
    same loop.

    Args:
        loop: Event loop to schedule on. When omitted, the running loop at
            call time is used.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None:
            return self._loop
        return asyncio.get_running_loop()

    def call_later(self, delay: float, callback: Callback) -> ScheduledHandle:
        handle = _AsyncioHandle()

        def _fire() -> None:
            if handle.cancelled:
                return
            handle._timer = None
            _safe_call(callback)

        handle._timer = self._get_loop().call_later(delay, _fire)
        return handle

    def call_repeating(self, interval: float, callback: Callback) -> ScheduledHandle:
        if interval <= 0:
            raise ValueError("interval must be positive")
        loop = self._get_loop()
        handle = _AsyncioHandle()

        def _tick() -> None:
            if handle.cancelled:
                return
            # Re-arm before running so the callback may cancel its own handle.
            handle._timer = loop.call_later(interval, _tick)
            _safe_call(callback)

        handle._timer = loop.call_later(interval, _tick)
        return handle


def _safe_call(callback: Callback) -> None:
    try:
        callback()
    except Exception:
        logger.exception("Scheduled callback %r failed", callback)
