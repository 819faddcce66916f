"""
Session lifecycle port definitions.

The tracker depends on the shared ports (clock, timer, dispatcher, store,
host) plus its own rules port.
"""

from __future__ import annotations

from typing import Protocol

from session_tracker.components.heartbeat.ports import HeartbeatRulesPort
from session_tracker.components.page_views.ports import PageViewRulesPort
from session_tracker.ports.clock import ClockPort
from session_tracker.ports.dispatch import DispatcherPort
from session_tracker.ports.host import HostEnvironmentPort
from session_tracker.ports.store import SessionStorePort
from session_tracker.ports.timer import TimerPort


class TrackerRulesPort(HeartbeatRulesPort, PageViewRulesPort, Protocol):
    """Configuration the tracker and the components it owns read."""

    def is_enabled(self) -> bool:
        """False turns every public operation into a no-op."""
        ...

    def get_internal_email_prefixes(self) -> tuple[str, ...]:
        ...

    def get_internal_email_suffixes(self) -> tuple[str, ...]:
        ...

    def get_internal_hostnames(self) -> tuple[str, ...]:
        ...


__all__ = [
    "ClockPort",
    "DispatcherPort",
    "HostEnvironmentPort",
    "SessionStorePort",
    "TimerPort",
    "TrackerRulesPort",
]
