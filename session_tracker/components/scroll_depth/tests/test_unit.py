"""
Unit tests for the Scroll Depth component.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import pytest

from ..component import ScrollDepthMonitor, advance_depth, compute_scroll_percent
from ..models import ScrollPosition

# --- Test Fixtures ---


class FakeSubscription:
    def __init__(self) -> None:
        self.active = True

    def unsubscribe(self) -> None:
        self.active = False


class FakeScrollSource:
    """Records every scroll callback handed out."""

    def __init__(self) -> None:
        self.callbacks: list[Callable[[float, float, float], None]] = []
        self.subscriptions: list[FakeSubscription] = []

    def on_scroll(self, callback: Callable[[float, float, float], None]) -> FakeSubscription:
        sub = FakeSubscription()
        self.callbacks.append(callback)
        self.subscriptions.append(sub)
        return sub

    def tick(self, scroll_top: float, scroll_height: float, viewport_height: float) -> None:
        for callback, sub in zip(self.callbacks, self.subscriptions, strict=True):
            if sub.active:
                callback(scroll_top, scroll_height, viewport_height)


@dataclass
class Target:
    scroll_depth_percent: int = 0


@pytest.fixture
def source() -> FakeScrollSource:
    return FakeScrollSource()


@pytest.fixture
def monitor(source: FakeScrollSource) -> ScrollDepthMonitor:
    return ScrollDepthMonitor(source)


# --- Pure Function Tests ---


class TestComputeScrollPercent:
    def test_halfway(self) -> None:
        assert compute_scroll_percent(ScrollPosition(600, 2000, 800)) == 50

    def test_bottom_is_100(self) -> None:
        assert compute_scroll_percent(ScrollPosition(1200, 2000, 800)) == 100

    def test_overscroll_is_clamped_to_100(self) -> None:
        assert compute_scroll_percent(ScrollPosition(1500, 2000, 800)) == 100

    def test_negative_offset_is_clamped_to_0(self) -> None:
        assert compute_scroll_percent(ScrollPosition(-40, 2000, 800)) == 0

    def test_page_shorter_than_viewport_uses_denominator_of_one(self) -> None:
        assert compute_scroll_percent(ScrollPosition(0, 500, 800)) == 0
        assert compute_scroll_percent(ScrollPosition(3, 500, 800)) == 100

    def test_half_rounds_up(self) -> None:
        # 1 / 200 * 100 = 0.5
        assert compute_scroll_percent(ScrollPosition(1, 1000, 800)) == 1

    def test_advance_depth_never_decreases(self) -> None:
        assert advance_depth(70, ScrollPosition(100, 2000, 800)) == 70
        assert advance_depth(10, ScrollPosition(900, 2000, 800)) == 75


# --- Monitor Tests ---


class TestScrollDepthMonitor:
    def test_attach_subscribes_once(self, monitor, source) -> None:
        monitor.attach(Target())

        assert monitor.is_attached
        assert len(source.subscriptions) == 1

    def test_running_maximum(self, monitor, source) -> None:
        target = Target()
        monitor.attach(target)

        source.tick(600, 2000, 800)  # 50
        source.tick(240, 2000, 800)  # 20
        source.tick(960, 2000, 800)  # 80
        source.tick(0, 2000, 800)

        assert target.scroll_depth_percent == 80

    def test_detach_stops_writes(self, monitor, source) -> None:
        target = Target()
        monitor.attach(target)
        source.tick(600, 2000, 800)

        monitor.detach()
        # Deliver straight to the old callback, as a late host event would.
        source.callbacks[0](1200, 2000, 800)

        assert target.scroll_depth_percent == 50
        assert not monitor.is_attached
        assert monitor.target is None
        assert not source.subscriptions[0].active

    def test_reattach_moves_to_new_target(self, monitor, source) -> None:
        first = Target()
        second = Target()
        monitor.attach(first)
        source.tick(600, 2000, 800)

        monitor.attach(second)
        source.tick(300, 2000, 800)

        assert first.scroll_depth_percent == 50
        assert second.scroll_depth_percent == 25
        assert not source.subscriptions[0].active
        assert source.subscriptions[1].active

    def test_detach_without_attach_is_harmless(self, monitor) -> None:
        monitor.detach()
        assert not monitor.is_attached

    def test_depth_stays_in_bounds(self, monitor, source) -> None:
        target = Target()
        monitor.attach(target)

        for top in (-100, 50, 5000, 20, 1199):
            source.tick(top, 2000, 800)
            assert 0 <= target.scroll_depth_percent <= 100

        assert target.scroll_depth_percent == 100

    def test_failing_scroll_source_leaves_target_untouched(self, caplog) -> None:
        class BrokenScrollSource:
            def on_scroll(self, callback):
                raise RuntimeError("no scroll events on this host")

        monitor = ScrollDepthMonitor(BrokenScrollSource())
        target = Target(scroll_depth_percent=30)

        monitor.attach(target)

        assert not monitor.is_attached
        assert monitor.target is target
        assert target.scroll_depth_percent == 30
        assert "Could not subscribe to scroll events" in caplog.text

        monitor.detach()
        assert monitor.target is None
