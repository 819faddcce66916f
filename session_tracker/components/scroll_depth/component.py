"""
Scroll depth monitor - running maximum scroll percentage for one page-view.

Invariants:
- Depth is an integer within [0, 100]
- Depth never decreases while the same target is attached
- At most one scroll subscription exists at a time; attaching replaces it
"""

from __future__ import annotations

import logging
import threading

from session_tracker.domain.timing import clamp, round_half_up
from session_tracker.ports.subscription import Subscription

from .models import ScrollPosition
from .ports import ScrollSourcePort, ScrollTarget

logger = logging.getLogger(__name__)


# --- Pure Functions (Functional Core) ---


def compute_scroll_percent(position: ScrollPosition) -> int:
    """
    Convert a scroll tick into a whole percentage of the scrollable height.

    Args:
        position: Scroll offset, total content height and viewport height

    Returns:
        Percentage clamped to 0-100
    """
    raw = position.scroll_top / position.scrollable_height * 100
    return clamp(round_half_up(raw), 0, 100)


def advance_depth(previous: int, position: ScrollPosition) -> int:
    """Return the new running maximum after one tick."""
    return max(previous, compute_scroll_percent(position))


# --- Monitor ---


class ScrollDepthMonitor:
    """
    Keeps the attached target's scroll_depth_percent at the deepest point seen.

    The monitor holds a back-reference only; it never decides which record is
    current. The page-view aggregator attaches and detaches it on every
    transition so that a finalized record is never written to.
    """

    def __init__(
        self,
        source: ScrollSourcePort,
        lock: threading.RLock | None = None,
    ) -> None:
        self._source = source
        self._lock = lock or threading.RLock()
        self._target: ScrollTarget | None = None
        self._subscription: Subscription | None = None

    @property
    def is_attached(self) -> bool:
        return self._subscription is not None

    @property
    def target(self) -> ScrollTarget | None:
        return self._target

    def attach(self, target: ScrollTarget) -> None:
        """Start tracking target, dropping any previous subscription first."""
        with self._lock:
            self.detach()
            self._target = target
            try:
                self._subscription = self._source.on_scroll(self._on_scroll)
            except Exception:
                # Dwell time is still measured; depth stays where it is.
                logger.exception("Could not subscribe to scroll events")

    def detach(self) -> None:
        with self._lock:
            if self._subscription is not None:
                self._subscription.unsubscribe()
            self._subscription = None
            self._target = None

    def _on_scroll(self, scroll_top: float, scroll_height: float, viewport_height: float) -> None:
        with self._lock:
            target = self._target
            if target is None:
                # Tick delivered after detach; nothing is current any more.
                return
            position = ScrollPosition(scroll_top, scroll_height, viewport_height)
            target.scroll_depth_percent = advance_depth(target.scroll_depth_percent, position)
