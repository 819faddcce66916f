"""
End-to-end visits through TrackerContext with the real SQLite store.
"""

import pytest

from session_tracker.adapters.dispatch import ThreadPoolDispatcher
from session_tracker.app_shell.context import TrackerContext, build_dispatcher


@pytest.fixture
def ctx(rules, host, clock, timer, tmp_path):
    rules = rules.model_copy(
        update={"storage": rules.storage.model_copy(update={"db_path": str(tmp_path / "t.db")})}
    )
    context = TrackerContext.create(rules, host, clock=clock, timer=timer)
    yield context
    context.shutdown()


def test_full_visit_is_persisted(ctx, host, clock, timer):
    tracker = ctx.tracker
    host.set_route("/feed")

    tracker.start_session("user-1", email="reader@gmail.com")
    session_id = tracker.state.session_id
    clock.advance(12)
    host.emit_scroll(600, 2000, 800)
    tracker.track_event("open_item", {"item": 42})
    tracker.track_page_view("/items/42")
    clock.advance(20)

    timer.fire()
    ctx.dispatcher.shutdown()

    stored = ctx.store.get_session(session_id)
    assert stored.last_heartbeat_at == clock.now_utc()
    assert stored.ended_at is None
    assert [(pv.page, pv.duration_seconds, pv.scroll_depth_percent) for pv in stored.page_views] == [
        ("/feed", 12, 50),
        ("/items/42", 20, 0),
    ]
    assert stored.client_metadata.is_internal is False
    assert [e.event_name for e in ctx.store.list_events(session_id)] == ["open_item"]


def test_shutdown_ends_session(ctx, host, clock):
    tracker = ctx.tracker
    tracker.start_session("user-1")
    session_id = tracker.state.session_id
    tracker.track_page_view("/a")
    clock.advance(5)

    ctx.shutdown()

    stored = ctx.store.get_session(session_id)
    assert stored.ended_at == clock.now_utc()
    assert [pv.page for pv in stored.page_views] == ["/a"]
    assert not tracker.is_session_active()


def test_hidden_tab_flushes(ctx, host, clock):
    tracker = ctx.tracker
    tracker.start_session("user-1")
    session_id = tracker.state.session_id
    tracker.track_page_view("/a")
    clock.advance(7)

    host.emit_visibility("hidden")
    ctx.dispatcher.shutdown()

    stored = ctx.store.get_session(session_id)
    assert stored.last_heartbeat_at == clock.now_utc()
    assert stored.page_views[0].duration_seconds == 7


def test_build_dispatcher_follows_rules(rules):
    assert isinstance(build_dispatcher(rules), ThreadPoolDispatcher)

    inline = rules.model_copy(
        update={"dispatch": rules.dispatch.model_copy(update={"mode": "inline"})}
    )
    assert not isinstance(build_dispatcher(inline), ThreadPoolDispatcher)
