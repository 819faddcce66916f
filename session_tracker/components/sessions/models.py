"""
Session lifecycle models.

Session state is an explicit tagged value: either NoSession or an
ActiveSession carrying everything that only exists while a session runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from session_tracker.domain.entities import ClientMetadata


@dataclass(frozen=True)
class NoSession:
    """Inactive tracker."""


@dataclass
class ActiveSession:
    session_id: str
    user_id: str
    started_at: datetime
    client_metadata: ClientMetadata
    last_heartbeat_at: datetime | None = None


SessionState = NoSession | ActiveSession

NO_SESSION = NoSession()
