from __future__ import annotations

import logging
from dataclasses import dataclass

from session_tracker.adapters.clock import SystemClock
from session_tracker.adapters.dispatch import InlineDispatcher, ThreadPoolDispatcher
from session_tracker.adapters.sqlite.migrator import SQLiteMigrator
from session_tracker.adapters.sqlite.store import SQLiteSessionStore
from session_tracker.adapters.timers import ThreadingIntervalTimer
from session_tracker.components.sessions import SessionTracker
from session_tracker.ports.clock import ClockPort
from session_tracker.ports.dispatch import DispatcherPort
from session_tracker.ports.host import HostEnvironmentPort
from session_tracker.ports.store import SessionStorePort
from session_tracker.ports.timer import TimerPort
from session_tracker.rules.adapter import RulesAdapter
from session_tracker.rules.models import TrackerRules

logger = logging.getLogger(__name__)


def build_dispatcher(rules: TrackerRules) -> DispatcherPort:
    if rules.dispatch.mode == "inline":
        return InlineDispatcher()
    return ThreadPoolDispatcher(max_workers=rules.dispatch.max_workers)


@dataclass
class TrackerContext:
    tracker: SessionTracker
    store: SessionStorePort
    host: HostEnvironmentPort
    dispatcher: DispatcherPort
    rules: TrackerRules

    @classmethod
    def create(
        cls,
        rules: TrackerRules,
        host: HostEnvironmentPort,
        store: SessionStorePort | None = None,
        clock: ClockPort | None = None,
        timer: TimerPort | None = None,
        dispatcher: DispatcherPort | None = None,
    ) -> TrackerContext:
        """
        Wire a tracker from rules. Anything passed in replaces the default
        adapter (tests inject ManualTimer, InlineDispatcher, in-memory store).
        """
        if store is None:
            SQLiteMigrator(rules.storage.db_path).run_migrations()
            store = SQLiteSessionStore(rules.storage.db_path)

        dispatcher = dispatcher or build_dispatcher(rules)

        tracker = SessionTracker(
            store=store,
            host=host,
            clock=clock or SystemClock(),
            timer=timer or ThreadingIntervalTimer(),
            dispatcher=dispatcher,
            rules=RulesAdapter(rules),
        )
        return cls(
            tracker=tracker,
            store=store,
            host=host,
            dispatcher=dispatcher,
            rules=rules,
        )

    def shutdown(self) -> None:
        """End any active session and drain pending writes."""
        self.tracker.end_session()
        self.dispatcher.shutdown()
        logger.info("Tracker shut down")
