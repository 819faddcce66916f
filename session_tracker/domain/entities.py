from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

# --- Enums / Literals ---
VisibilityState = Literal["visible", "hidden"]

# --- Client ---

class ClientMetadata(BaseModel):
    """Static snapshot of the host environment, captured once per session."""

    model_config = ConfigDict(frozen=True)

    user_agent: str | None = None
    platform: str | None = None
    screen_width: int | None = None
    screen_height: int | None = None
    hostname: str | None = None
    is_internal: bool = False

# --- Page Views ---

class PageViewRecord(BaseModel):
    """A page-view as it is persisted (finalized or heartbeat snapshot)."""

    model_config = ConfigDict(frozen=True)

    page: str
    duration_seconds: int = Field(ge=0)
    scroll_depth_percent: int = Field(default=0, ge=0, le=100)

# --- Sessions ---

class SessionUpdate(BaseModel):
    """Partial update sent to the store; unset fields are left untouched."""

    model_config = ConfigDict(frozen=True)

    last_heartbeat_at: datetime | None = None
    ended_at: datetime | None = None
    page_views: tuple[PageViewRecord, ...] | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class Session(BaseModel):
    session_id: str
    user_id: str
    started_at: datetime
    ended_at: datetime | None = None
    last_heartbeat_at: datetime | None = None
    client_metadata: ClientMetadata = Field(default_factory=ClientMetadata)
    page_views: list[PageViewRecord] = Field(default_factory=list)

# --- Events ---

class TrackedEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    event_name: str = Field(min_length=1)
    properties: dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime
    session_id: str
    user_id: str
