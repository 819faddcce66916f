"""
Event sink port definitions.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol

from session_tracker.ports.dispatch import DispatcherPort


class EventStorePort(Protocol):
    """Append-only half of the session store."""

    def append_event(
        self,
        user_id: str,
        session_id: str,
        event_name: str,
        properties: dict[str, Any],
        timestamp: datetime,
    ) -> None:
        ...


class ClockPort(Protocol):
    def now_utc(self) -> datetime:
        ...


__all__ = ["ClockPort", "DispatcherPort", "EventStorePort"]
