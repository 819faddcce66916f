"""
Page view aggregator port definitions.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from session_tracker.components.scroll_depth.ports import ScrollTarget


class ClockPort(Protocol):
    def now_utc(self) -> datetime:
        ...


class ScrollMonitorPort(Protocol):
    """The part of the scroll depth monitor the aggregator drives."""

    def attach(self, target: ScrollTarget) -> None:
        ...

    def detach(self) -> None:
        ...


class PageViewRulesPort(Protocol):
    def get_min_duration_seconds(self) -> int:
        """Shortest page-view worth keeping (default 1)."""
        ...
