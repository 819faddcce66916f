from itertools import count
from pathlib import Path

import pytest

from session_tracker.adapters.clock import FrozenClock
from session_tracker.adapters.dispatch import InlineDispatcher
from session_tracker.adapters.host import ManualHost
from session_tracker.adapters.memory_store import InMemorySessionStore
from session_tracker.adapters.sqlite.migrator import SQLiteMigrator
from session_tracker.adapters.sqlite.store import SQLiteSessionStore
from session_tracker.adapters.timers import ManualTimer
from session_tracker.components.sessions import SessionTracker
from session_tracker.domain.entities import ClientMetadata
from session_tracker.rules.adapter import RulesAdapter
from session_tracker.rules.loader import load_rules

PROJECT_ROOT = Path(__file__).parent.parent


@pytest.fixture
def rules():
    """The real tracker.yaml from the project root."""
    rules_path = PROJECT_ROOT / "tracker.yaml"
    if not rules_path.exists():
        raise FileNotFoundError(f"Rules not found at {rules_path}")
    return load_rules(rules_path)


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def timer():
    return ManualTimer()


@pytest.fixture
def host():
    return ManualHost(
        metadata=ClientMetadata(
            user_agent="Mozilla/5.0 (pytest)",
            platform="linux",
            screen_width=1440,
            screen_height=900,
            hostname="app.example.org",
        )
    )


@pytest.fixture
def memory_store():
    return InMemorySessionStore()


@pytest.fixture
def db_path(tmp_path):
    path = str(tmp_path / "tracker.db")
    SQLiteMigrator(path).run_migrations()
    return path


@pytest.fixture
def sqlite_store(db_path):
    return SQLiteSessionStore(db_path)


@pytest.fixture
def make_tracker(clock, timer, host, rules):
    """
    Factory for a fully deterministic tracker: frozen clock, manual timer,
    inline dispatch and sequential session ids (sess-1, sess-2, ...).
    """

    def _make(store, **overrides):
        ids = count(1)
        kwargs = {
            "store": store,
            "host": host,
            "clock": clock,
            "timer": timer,
            "dispatcher": InlineDispatcher(),
            "rules": RulesAdapter(rules),
            "id_factory": lambda: f"sess-{next(ids)}",
        }
        kwargs.update(overrides)
        return SessionTracker(**kwargs)

    return _make


@pytest.fixture
def tracker(make_tracker, memory_store):
    return make_tracker(memory_store)
