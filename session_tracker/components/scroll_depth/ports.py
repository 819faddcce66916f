"""
Scroll depth monitor port definitions.
"""

from __future__ import annotations

from typing import Protocol

from session_tracker.ports.host import ScrollCallback
from session_tracker.ports.subscription import Subscription


class ScrollSourcePort(Protocol):
    """Anything that can deliver scroll ticks (usually the host environment)."""

    def on_scroll(self, callback: ScrollCallback) -> Subscription:
        ...


class ScrollTarget(Protocol):
    """The record whose depth the monitor raises. Only the current page-view qualifies."""

    scroll_depth_percent: int
