"""
Timer source port.

Recurring callbacks are the only scheduling primitive the tracker needs.
"""

from collections.abc import Callable
from typing import Protocol

from session_tracker.ports.subscription import Subscription


class TimerPort(Protocol):
    def call_every(self, interval_seconds: float, callback: Callable[[], None]) -> Subscription:
        """
        Invoke callback every interval_seconds until the handle is unsubscribed.

        The first call happens one interval after scheduling, never immediately.
        """
        ...
