"""
Session lifecycle component - the tracker the host application talks to.

Owns the session state, the page-view aggregator, the scroll depth monitor,
the heartbeat scheduler and the event sink.

State machine:
- NoSession + start_session(u)        -> ActiveSession(u)
- ActiveSession(u) + start_session(u) -> unchanged
- ActiveSession(u) + start_session(v) -> end_session, then ActiveSession(v)
- ActiveSession + end_session         -> NoSession

Invariants:
- At most one active session per tracker
- Every heartbeat sends the full page-view history to date
- end_session cancels the timer and all listeners before its final flush
- Nothing raised by persistence reaches the caller
- Every entry point and callback runs under one lock, so callbacks never
  interleave with each other or with host calls
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from datetime import datetime
from functools import partial
from typing import Any
from uuid import uuid4

from session_tracker.components.events import EventSink
from session_tracker.components.heartbeat import HeartbeatScheduler, HeartbeatTrigger
from session_tracker.components.page_views import PageViewAggregator
from session_tracker.components.scroll_depth import ScrollDepthMonitor
from session_tracker.domain.entities import (
    ClientMetadata,
    PageViewRecord,
    Session,
    SessionUpdate,
)

from .models import NO_SESSION, ActiveSession, SessionState
from .ports import (
    ClockPort,
    DispatcherPort,
    HostEnvironmentPort,
    SessionStorePort,
    TimerPort,
    TrackerRulesPort,
)

logger = logging.getLogger(__name__)

LOCAL_HOSTNAMES: tuple[str, ...] = ("localhost",)


# --- Pure Functions (Functional Core) ---


def classify_internal(
    email: str | None,
    hostname: str | None,
    *,
    email_prefixes: tuple[str, ...] = (),
    email_suffixes: tuple[str, ...] = (),
    hostnames: tuple[str, ...] = LOCAL_HOSTNAMES,
) -> bool:
    """
    Decide whether a session belongs to the team rather than a real user.

    A session is internal if the email starts with one of the prefixes, ends
    with one of the suffixes, or the host name contains one of the hostnames.
    """
    if email:
        lowered = email.lower()
        if any(lowered.startswith(p.lower()) for p in email_prefixes):
            return True
        if any(lowered.endswith(s.lower()) for s in email_suffixes):
            return True
    if hostname:
        host = hostname.lower()
        return any(h.lower() in host for h in hostnames)
    return False


def _new_session_id() -> str:
    return str(uuid4())


# --- Tracker ---


class SessionTracker:
    """
    Client-side session and engagement tracker.

    Construct one per application (see TrackerContext.create) and pass it to
    whatever needs to report activity.
    """

    def __init__(
        self,
        *,
        store: SessionStorePort,
        host: HostEnvironmentPort,
        clock: ClockPort,
        timer: TimerPort,
        dispatcher: DispatcherPort,
        rules: TrackerRulesPort | None = None,
        id_factory: Callable[[], str] = _new_session_id,
    ) -> None:
        self._store = store
        self._host = host
        self._clock = clock
        self._dispatcher = dispatcher
        self._rules = rules
        self._id_factory = id_factory

        self._lock = threading.RLock()
        self._state: SessionState = NO_SESSION

        self._scroll = ScrollDepthMonitor(host, lock=self._lock)
        self._page_views = PageViewAggregator(clock, self._scroll, rules=rules)
        self._heartbeat = HeartbeatScheduler(timer, host, rules=rules)
        self._events = EventSink(store, dispatcher, clock)

    # --- Queries ---

    @property
    def enabled(self) -> bool:
        return self._rules is None or self._rules.is_enabled()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def heartbeat(self) -> HeartbeatScheduler:
        return self._heartbeat

    @property
    def page_views(self) -> PageViewAggregator:
        return self._page_views

    def is_session_active(self) -> bool:
        return isinstance(self._state, ActiveSession)

    @property
    def session(self) -> Session | None:
        """Snapshot of the active session, including the live page-view."""
        with self._lock:
            state = self._state
            if not isinstance(state, ActiveSession):
                return None
            return Session(
                session_id=state.session_id,
                user_id=state.user_id,
                started_at=state.started_at,
                last_heartbeat_at=state.last_heartbeat_at,
                client_metadata=state.client_metadata,
                page_views=list(self._page_views.capture_snapshot()),
            )

    # --- Host entry points ---

    def start_session(self, user_id: str, *, email: str | None = None) -> None:
        """
        Begin a session for user_id.

        Same user already active: no-op. Different user active: that session
        is ended first. Persistence failures are logged; the session stays
        active locally so later heartbeats can still write it.
        """
        with self._lock:
            if not self.enabled:
                logger.debug("Tracking disabled; ignoring start_session")
                return

            state = self._state
            if isinstance(state, ActiveSession):
                if state.user_id == user_id:
                    return
                self._end(state)

            self._begin(user_id, email)

    def end_session(self) -> None:
        """Finalize, flush and forget the active session. No-op when inactive."""
        with self._lock:
            state = self._state
            if not isinstance(state, ActiveSession):
                return
            self._end(state)

    def track_page_view(self, path: str) -> None:
        """Record a navigation: close the current view and open one for path."""
        with self._lock:
            if not isinstance(self._state, ActiveSession):
                logger.debug("No active session; ignoring page view %s", path)
                return
            self._page_views.open(path)

    def track_event(self, event_name: str, properties: Mapping[str, Any] | None = None) -> None:
        """Report a named event for the active session. Never raises."""
        with self._lock:
            state = self._state
            if not isinstance(state, ActiveSession):
                logger.debug("No active session; ignoring event %s", event_name)
                return
            self._events.emit(state.session_id, state.user_id, event_name, properties)

    # --- Transitions ---

    def _begin(self, user_id: str, email: str | None) -> None:
        now = self._clock.now_utc()
        session_id = self._id_factory()
        metadata = self._capture_metadata(email)

        self._state = ActiveSession(
            session_id=session_id,
            user_id=user_id,
            started_at=now,
            client_metadata=metadata,
        )

        self._dispatcher.submit(
            self._store.create_session, session_id, user_id, now, metadata
        )
        try:
            self._heartbeat.start(partial(self._on_heartbeat, session_id))
        except Exception:
            logger.exception("Heartbeat could not start for %s", session_id)

        route = self._current_route()
        if route:
            self._page_views.open(route, now)

        logger.info("Session started: %s (user %s)", session_id, user_id)

    def _end(self, state: ActiveSession) -> None:
        # Teardown first: no timer tick or listener may fire past this point.
        self._heartbeat.stop()
        self._scroll.detach()

        now = self._clock.now_utc()
        self._page_views.finalize_current(now)
        page_views = self._page_views.finalized

        self._dispatcher.submit(
            self._store.update_session,
            state.session_id,
            state.user_id,
            SessionUpdate(ended_at=now, page_views=page_views),
        )

        self._page_views.reset()
        self._state = NO_SESSION
        logger.info("Session ended: %s (%d page views)", state.session_id, len(page_views))

    # --- Heartbeat ---

    def _on_heartbeat(self, session_id: str, trigger: HeartbeatTrigger) -> None:
        with self._lock:
            state = self._state
            if not isinstance(state, ActiveSession) or state.session_id != session_id:
                # A tick that raced teardown; the session it belonged to is gone.
                logger.debug("Dropping %s heartbeat for ended session %s", trigger.value, session_id)
                return
            self._flush(state, self._clock.now_utc(), trigger)

    def _flush(self, state: ActiveSession, now: datetime, trigger: HeartbeatTrigger) -> None:
        snapshot: tuple[PageViewRecord, ...] = self._page_views.capture_snapshot(now)
        state.last_heartbeat_at = now
        self._dispatcher.submit(
            self._store.update_session,
            state.session_id,
            state.user_id,
            SessionUpdate(last_heartbeat_at=now, page_views=snapshot),
        )
        logger.debug(
            "Heartbeat (%s) for %s: %d page views", trigger.value, state.session_id, len(snapshot)
        )

    # --- Helpers ---

    def _current_route(self) -> str | None:
        try:
            return self._host.current_route()
        except Exception:
            logger.exception("Could not read current route")
            return None

    def _capture_metadata(self, email: str | None) -> ClientMetadata:
        try:
            metadata = self._host.client_metadata()
        except Exception:
            logger.exception("Could not read client metadata")
            metadata = ClientMetadata()
        if self._rules is None:
            is_internal = classify_internal(email, metadata.hostname)
        else:
            is_internal = classify_internal(
                email,
                metadata.hostname,
                email_prefixes=self._rules.get_internal_email_prefixes(),
                email_suffixes=self._rules.get_internal_email_suffixes(),
                hostnames=self._rules.get_internal_hostnames(),
            )
        return metadata.model_copy(update={"is_internal": is_internal})
