"""
Timer adapters (TimerPort implementations).

ThreadingIntervalTimer runs each recurring callback on its own daemon
thread, waiting on a threading.Event between calls so cancellation wakes the
thread immediately. ManualTimer fires only when told to, which keeps tests
deterministic.

Key behaviors:
- First call happens one interval after scheduling
- A failing callback is logged and the schedule keeps running
- unsubscribe() never joins, so it is safe to call from inside the callback
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

logger = logging.getLogger(__name__)


class IntervalHandle:
    """Subscription for one ThreadingIntervalTimer schedule."""

    def __init__(self, interval_seconds: float, callback: Callable[[], None]) -> None:
        self._interval = interval_seconds
        self._callback = callback
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run, name="session-tracker-heartbeat", daemon=True
        )

    def start(self) -> IntervalHandle:
        self._thread.start()
        return self

    @property
    def active(self) -> bool:
        return not self._stop_event.is_set()

    def unsubscribe(self) -> None:
        self._stop_event.set()

    def join(self, timeout: float | None = None) -> None:
        """Wait for the worker thread to exit (tests and shutdown only)."""
        if threading.current_thread() is not self._thread:
            self._thread.join(timeout=timeout)

    def _run(self) -> None:
        while not self._stop_event.wait(timeout=self._interval):
            try:
                self._callback()
            except Exception:
                logger.exception("Error in interval callback")


class ThreadingIntervalTimer:
    def call_every(self, interval_seconds: float, callback: Callable[[], None]) -> IntervalHandle:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        return IntervalHandle(interval_seconds, callback).start()


class ManualHandle:
    def __init__(self, interval_seconds: float, callback: Callable[[], None]) -> None:
        self.interval_seconds = interval_seconds
        self.callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def unsubscribe(self) -> None:
        self._active = False


class ManualTimer:
    """Timer that fires only when fire() is called."""

    def __init__(self) -> None:
        self.handles: list[ManualHandle] = []

    def call_every(self, interval_seconds: float, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(interval_seconds, callback)
        self.handles.append(handle)
        return handle

    @property
    def active_handles(self) -> list[ManualHandle]:
        return [h for h in self.handles if h.active]

    def fire(self) -> int:
        """Run every active callback once. Returns how many ran."""
        fired = 0
        for handle in self.active_handles:
            handle.callback()
            fired += 1
        return fired
