"""
Page view aggregator - current page-view slot plus finalized history.

Invariants:
- At most one current page-view
- Finalized list is append-only and ordered by finalization
- Views shorter than the minimum duration never enter the list
- Scroll monitor is detached before a view's record is computed
- capture_snapshot never changes the current view or the finalized list
"""

from __future__ import annotations

from datetime import datetime

from session_tracker.domain.entities import PageViewRecord
from session_tracker.domain.timing import elapsed_seconds, round_half_up

from .models import PageView
from .ports import ClockPort, PageViewRulesPort, ScrollMonitorPort

DEFAULT_MIN_DURATION_SECONDS = 1


# --- Pure Functions (Functional Core) ---


def compute_duration_seconds(entered_at: datetime, now: datetime) -> int:
    """Whole seconds spent on a view, never negative."""
    return max(0, round_half_up(elapsed_seconds(entered_at, now)))


def to_record(
    view: PageView,
    now: datetime,
    min_duration_seconds: int = DEFAULT_MIN_DURATION_SECONDS,
) -> PageViewRecord | None:
    """
    Build the persisted form of a view, or None if it is too short to keep.

    Args:
        view: The page-view to measure
        now: End instant
        min_duration_seconds: Threshold below which the view is noise

    Returns:
        PageViewRecord or None
    """
    duration = compute_duration_seconds(view.entered_at, now)
    if duration < min_duration_seconds:
        return None
    return PageViewRecord(
        page=view.page,
        duration_seconds=duration,
        scroll_depth_percent=view.scroll_depth_percent,
    )


# --- Aggregator ---


class PageViewAggregator:
    """Owns the current page-view pointer and the finalized page-view list."""

    def __init__(
        self,
        clock: ClockPort,
        monitor: ScrollMonitorPort,
        rules: PageViewRulesPort | None = None,
    ) -> None:
        self._clock = clock
        self._monitor = monitor
        self._min_duration = (
            rules.get_min_duration_seconds() if rules is not None else DEFAULT_MIN_DURATION_SECONDS
        )
        self._current: PageView | None = None
        self._finalized: list[PageViewRecord] = []

    @property
    def current(self) -> PageView | None:
        return self._current

    @property
    def finalized(self) -> tuple[PageViewRecord, ...]:
        return tuple(self._finalized)

    @property
    def min_duration_seconds(self) -> int:
        return self._min_duration

    def open(self, page: str, now: datetime | None = None) -> PageView:
        """Finalize whatever is current, then make page the current view."""
        now = now or self._clock.now_utc()
        self.finalize_current(now)
        view = PageView(page=page, entered_at=now)
        self._current = view
        self._monitor.attach(view)
        return view

    def finalize_current(self, now: datetime | None = None) -> PageViewRecord | None:
        """
        Close the current view.

        Returns the record appended to the finalized list, or None when there
        was no current view or it was discarded for being too short.
        """
        view = self._current
        if view is None:
            return None

        self._monitor.detach()
        self._current = None

        record = to_record(view, now or self._clock.now_utc(), self._min_duration)
        if record is not None:
            self._finalized.append(record)
        return record

    def capture_snapshot(self, now: datetime | None = None) -> tuple[PageViewRecord, ...]:
        """Finalized list plus a synthetic entry for the current view, if long enough."""
        snapshot = list(self._finalized)
        if self._current is not None:
            live = to_record(self._current, now or self._clock.now_utc(), self._min_duration)
            if live is not None:
                snapshot.append(live)
        return tuple(snapshot)

    def reset(self) -> None:
        """Forget everything without producing records."""
        self._monitor.detach()
        self._current = None
        self._finalized.clear()
