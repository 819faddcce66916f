"""In-memory session store adapter.

Implements SessionStorePort with plain dicts. Records every call in order,
which is what tests and the demo CLI inspect.
"""

import threading
from datetime import datetime
from typing import Any

from session_tracker.domain.entities import (
    ClientMetadata,
    Session,
    SessionUpdate,
    TrackedEvent,
)


class InMemorySessionStore:
    """In-memory store - suitable for single-process use and tests."""

    def __init__(self) -> None:
        self._sessions: dict[tuple[str, str], Session] = {}
        self._events: list[TrackedEvent] = []
        self._lock = threading.Lock()
        self.calls: list[tuple[str, str, Any]] = []

    # --- SessionStorePort ---

    def create_session(
        self,
        session_id: str,
        user_id: str,
        started_at: datetime,
        client_metadata: ClientMetadata,
    ) -> None:
        """Create a session. Raises ValueError if (session_id, user_id) exists."""
        key = (session_id, user_id)
        with self._lock:
            if key in self._sessions:
                raise ValueError(f"Session {session_id} already exists")
            self._sessions[key] = Session(
                session_id=session_id,
                user_id=user_id,
                started_at=started_at,
                client_metadata=client_metadata,
            )
            self.calls.append(("create_session", session_id, client_metadata))

    def update_session(self, session_id: str, user_id: str, update: SessionUpdate) -> None:
        """Upsert. A missing record is created from the update's earliest timestamp."""
        key = (session_id, user_id)
        with self._lock:
            session = self._sessions.get(key)
            if session is None:
                started = update.last_heartbeat_at or update.ended_at
                if started is None:
                    raise ValueError("Cannot create a session without a timestamp")
                session = Session(session_id=session_id, user_id=user_id, started_at=started)

            changes: dict[str, Any] = {}
            if update.last_heartbeat_at is not None:
                changes["last_heartbeat_at"] = update.last_heartbeat_at
            if update.ended_at is not None:
                changes["ended_at"] = update.ended_at
            if update.page_views is not None:
                changes["page_views"] = list(update.page_views)

            self._sessions[key] = session.model_copy(update=changes)
            self.calls.append(("update_session", session_id, update))

    def append_event(
        self,
        user_id: str,
        session_id: str,
        event_name: str,
        properties: dict[str, Any],
        timestamp: datetime,
    ) -> None:
        event = TrackedEvent(
            event_name=event_name,
            properties=properties,
            timestamp=timestamp,
            session_id=session_id,
            user_id=user_id,
        )
        with self._lock:
            self._events.append(event)
            self.calls.append(("append_event", session_id, event))

    # --- Inspection ---

    def get(self, session_id: str, user_id: str) -> Session | None:
        return self._sessions.get((session_id, user_id))

    def sessions(self) -> list[Session]:
        return sorted(self._sessions.values(), key=lambda s: s.started_at)

    def events(self, session_id: str | None = None) -> list[TrackedEvent]:
        if session_id is None:
            return list(self._events)
        return [e for e in self._events if e.session_id == session_id]

    def updates(self, session_id: str | None = None) -> list[SessionUpdate]:
        """Every SessionUpdate received, in arrival order."""
        return [
            payload
            for name, sid, payload in self.calls
            if name == "update_session" and (session_id is None or sid == session_id)
        ]

    def clear(self) -> None:
        """Clear everything - useful for testing."""
        with self._lock:
            self._sessions.clear()
            self._events.clear()
            self.calls.clear()
