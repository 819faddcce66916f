"""
Unit tests for the Events component.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import pytest

from session_tracker.adapters.dispatch import InlineDispatcher

from ..component import EventSink

# --- Test Fixtures ---


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime(2026, 1, 14, 12, 0, 0, tzinfo=UTC)

    def now_utc(self) -> datetime:
        return self.now


class FakeEventStore:
    def __init__(self) -> None:
        self.events: list[dict[str, Any]] = []

    def append_event(
        self,
        user_id: str,
        session_id: str,
        event_name: str,
        properties: dict[str, Any],
        timestamp: datetime,
    ) -> None:
        self.events.append(
            {
                "user_id": user_id,
                "session_id": session_id,
                "event_name": event_name,
                "properties": properties,
                "timestamp": timestamp,
            }
        )


class FailingEventStore:
    def append_event(self, *args: Any) -> None:
        raise ConnectionError("backend unavailable")


class DeferredDispatcher:
    """Holds submitted calls until run_all(), like a background executor."""

    def __init__(self) -> None:
        self.pending: list[tuple[Callable[..., Any], tuple[Any, ...]]] = []

    def submit(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        self.pending.append((fn, args))

    def run_all(self) -> None:
        for fn, args in self.pending:
            fn(*args)
        self.pending.clear()

    def shutdown(self) -> None:
        pass


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> FakeEventStore:
    return FakeEventStore()


# --- Tests ---


def test_emit_appends_one_event(store, clock) -> None:
    sink = EventSink(store, InlineDispatcher(), clock)

    event = sink.emit("sess-1", "user-1", "click", {"target": "hero"})

    assert event is not None
    assert store.events == [
        {
            "user_id": "user-1",
            "session_id": "sess-1",
            "event_name": "click",
            "properties": {"target": "hero"},
            "timestamp": clock.now,
        }
    ]


def test_missing_properties_become_empty_dict(store, clock) -> None:
    sink = EventSink(store, InlineDispatcher(), clock)
    sink.emit("sess-1", "user-1", "open")

    assert store.events[0]["properties"] == {}


def test_emit_is_fire_and_forget(store, clock) -> None:
    dispatcher = DeferredDispatcher()
    sink = EventSink(store, dispatcher, clock)

    sink.emit("sess-1", "user-1", "click")

    assert store.events == []
    dispatcher.run_all()
    assert len(store.events) == 1


def test_properties_are_copied(store, clock) -> None:
    dispatcher = DeferredDispatcher()
    sink = EventSink(store, dispatcher, clock)
    props = {"count": 1}

    sink.emit("sess-1", "user-1", "click", props)
    props["count"] = 99
    dispatcher.run_all()

    assert store.events[0]["properties"] == {"count": 1}


def test_store_failure_never_reaches_caller(clock, caplog) -> None:
    sink = EventSink(FailingEventStore(), InlineDispatcher(), clock)

    event = sink.emit("sess-1", "user-1", "click")

    assert event is not None
    assert "failed" in caplog.text


def test_malformed_properties_are_dropped(store, clock) -> None:
    dispatcher = DeferredDispatcher()
    sink = EventSink(store, dispatcher, clock)

    event = sink.emit("sess-1", "user-1", "click", [1, 2, 3])  # type: ignore[arg-type]

    assert event is None
    assert dispatcher.pending == []


def test_nested_properties_are_copied(store, clock) -> None:
    dispatcher = DeferredDispatcher()
    sink = EventSink(store, dispatcher, clock)
    props = {"cart": {"items": ["a"]}}

    sink.emit("sess-1", "user-1", "checkout", props)
    props["cart"]["items"].append("b")
    dispatcher.run_all()

    assert store.events[0]["properties"] == {"cart": {"items": ["a"]}}


def test_empty_event_name_is_dropped(store, clock, caplog) -> None:
    sink = EventSink(store, InlineDispatcher(), clock)

    event = sink.emit("sess-1", "user-1", "")

    assert event is None
    assert store.events == []
    assert "Dropping malformed event" in caplog.text
