import argparse
import logging
import os
import sys
from pathlib import Path

from session_tracker.adapters.clock import FrozenClock
from session_tracker.adapters.dispatch import InlineDispatcher
from session_tracker.adapters.host import ManualHost
from session_tracker.adapters.sqlite.migrator import SQLiteMigrator
from session_tracker.adapters.sqlite.store import SQLiteSessionStore
from session_tracker.adapters.timers import ManualTimer
from session_tracker.app_shell.context import TrackerContext
from session_tracker.domain.entities import ClientMetadata, Session
from session_tracker.rules.loader import load_rules
from session_tracker.rules.models import TrackerRules

logger = logging.getLogger("cli")

RULES_PATH = os.environ.get("TRACKER_RULES_PATH", "tracker.yaml")


def get_rules() -> TrackerRules:
    path = Path(RULES_PATH)
    if not path.exists():
        logger.error("Rules file %s not found.", path)
        sys.exit(1)

    rules = load_rules(path)
    db_override = os.environ.get("TRACKER_DB_PATH")
    if db_override:
        rules = rules.model_copy(
            update={"storage": rules.storage.model_copy(update={"db_path": db_override})}
        )
    return rules


def configure_logging(rules: TrackerRules) -> None:
    logging.basicConfig(
        level=getattr(logging, rules.logging.level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def format_session(session: Session) -> str:
    ended = session.ended_at.isoformat() if session.ended_at else "active"
    return (
        f"{session.session_id}  user={session.user_id}  "
        f"started={session.started_at.isoformat()}  ended={ended}  "
        f"page_views={len(session.page_views)}"
    )


def handle_migrate(rules: TrackerRules) -> None:
    applied = SQLiteMigrator(rules.storage.db_path).run_migrations()
    print(f"Applied {len(applied)} migrations to {rules.storage.db_path}.")


def handle_sessions(rules: TrackerRules, args: argparse.Namespace) -> None:
    store = SQLiteSessionStore(rules.storage.db_path)
    sessions = store.list_sessions(user_id=args.user, limit=args.limit)
    if not sessions:
        print("No sessions recorded.")
        return
    for session in sessions:
        print(format_session(session))


def handle_show(rules: TrackerRules, args: argparse.Namespace) -> None:
    store = SQLiteSessionStore(rules.storage.db_path)
    session = store.get_session(args.session_id)
    if session is None:
        logger.error("Session %s not found.", args.session_id)
        sys.exit(1)

    print(format_session(session))
    print(f"Client: {session.client_metadata.model_dump_json()}")
    if session.last_heartbeat_at:
        print(f"Last heartbeat: {session.last_heartbeat_at.isoformat()}")
    print("Page views:")
    for pv in session.page_views:
        print(f" - {pv.page}  {pv.duration_seconds}s  scroll={pv.scroll_depth_percent}%")
    print("Events:")
    for event in store.list_events(session.session_id):
        print(f" - {event.timestamp.isoformat()}  {event.event_name}  {event.properties}")


def handle_demo(rules: TrackerRules, args: argparse.Namespace) -> None:
    """Replay a short scripted visit against the configured database."""
    SQLiteMigrator(rules.storage.db_path).run_migrations()
    clock = FrozenClock()
    timer = ManualTimer()
    host = ManualHost(
        metadata=ClientMetadata(user_agent="session-tracker-demo", platform="cli"),
        route="/feed",
    )
    ctx = TrackerContext.create(
        rules,
        host,
        clock=clock,
        timer=timer,
        dispatcher=InlineDispatcher(),
    )
    tracker = ctx.tracker

    tracker.start_session(args.user)
    clock.advance(4)
    host.emit_scroll(600, 2000, 800)
    clock.advance(2)
    tracker.track_event("demo_click", {"target": "hero"})
    tracker.track_page_view("/lists")
    clock.advance(3)
    timer.fire()
    session = tracker.session
    clock.advance(2)
    ctx.shutdown()

    if session is not None:
        print(f"Demo session recorded: {session.session_id}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Session tracker CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # migrate
    subparsers.add_parser("migrate", help="Apply the SQLite schema")

    # sessions
    sessions_parser = subparsers.add_parser("sessions", help="List recorded sessions")
    sessions_parser.add_argument("--user", help="Only sessions for this user id")
    sessions_parser.add_argument("--limit", type=int, default=50, help="Maximum rows")

    # show
    show_parser = subparsers.add_parser("show", help="Show one session with page views and events")
    show_parser.add_argument("session_id")

    # demo
    demo_parser = subparsers.add_parser("demo", help="Record a scripted demo session")
    demo_parser.add_argument("--user", default="demo-user", help="User id for the demo session")

    args = parser.parse_args()

    rules = get_rules()
    configure_logging(rules)

    if args.command == "migrate":
        handle_migrate(rules)
    elif args.command == "sessions":
        handle_sessions(rules, args)
    elif args.command == "show":
        handle_show(rules, args)
    elif args.command == "demo":
        handle_demo(rules, args)


if __name__ == "__main__":
    main()
