"""
Persistence collaborator port.

The tracker never reads back what it writes; it only needs create, update
and append semantics keyed by session id and user id.
"""

from datetime import datetime
from typing import Any, Protocol

from session_tracker.domain.entities import ClientMetadata, SessionUpdate


class SessionStorePort(Protocol):
    def create_session(
        self,
        session_id: str,
        user_id: str,
        started_at: datetime,
        client_metadata: ClientMetadata,
    ) -> None:
        """Create the session record. Raises on failure."""
        ...

    def update_session(self, session_id: str, user_id: str, update: SessionUpdate) -> None:
        """
        Upsert the session record keyed by (session_id, user_id).

        Only the fields set on update are written. Payloads are cumulative, so
        last-write-wins is an acceptable conflict policy.
        """
        ...

    def append_event(
        self,
        user_id: str,
        session_id: str,
        event_name: str,
        properties: dict[str, Any],
        timestamp: datetime,
    ) -> None:
        """Insert one event record."""
        ...
