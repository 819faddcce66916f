"""
Event sink - ad hoc named events, dispatched immediately.

Best effort by contract: nothing is buffered, nothing is retried, and no
failure ever reaches the caller.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from session_tracker.domain.entities import TrackedEvent

from .ports import ClockPort, DispatcherPort, EventStorePort

logger = logging.getLogger(__name__)


class EventSink:
    def __init__(
        self,
        store: EventStorePort,
        dispatcher: DispatcherPort,
        clock: ClockPort,
    ) -> None:
        self._store = store
        self._dispatcher = dispatcher
        self._clock = clock

    def emit(
        self,
        session_id: str,
        user_id: str,
        event_name: str,
        properties: Mapping[str, Any] | None = None,
    ) -> TrackedEvent | None:
        """
        Build one event and hand it to the dispatcher.

        Properties are deep-copied so later mutation by the caller, nested
        values included, does not leak into the record. Returns the event,
        or None if it could not be built (empty name, uncopyable properties).
        """
        try:
            event = TrackedEvent(
                event_name=event_name,
                properties=copy.deepcopy(dict(properties or {})),
                timestamp=self._clock.now_utc(),
                session_id=session_id,
                user_id=user_id,
            )
        except (ValidationError, TypeError, ValueError, copy.Error):
            logger.warning("Dropping malformed event %r", event_name, exc_info=True)
            return None

        self._dispatcher.submit(
            self._store.append_event,
            event.user_id,
            event.session_id,
            event.event_name,
            event.properties,
            event.timestamp,
        )
        return event
