"""
Heartbeat scheduler port definitions.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from session_tracker.domain.entities import VisibilityState
from session_tracker.ports.subscription import Subscription
from session_tracker.ports.timer import TimerPort


class LifecycleSignalsPort(Protocol):
    """'Page is about to disappear' signals from the host."""

    def on_visibility_change(
        self, callback: Callable[[VisibilityState], None]
    ) -> Subscription:
        ...

    def on_unload(self, callback: Callable[[], None]) -> Subscription:
        ...


class HeartbeatRulesPort(Protocol):
    def get_interval_seconds(self) -> float:
        """Seconds between interval heartbeats (default 30)."""
        ...


__all__ = ["HeartbeatRulesPort", "LifecycleSignalsPort", "TimerPort"]
