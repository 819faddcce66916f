import json
import sqlite3
from datetime import datetime
from typing import Any

from session_tracker.domain.entities import (
    ClientMetadata,
    PageViewRecord,
    Session,
    SessionUpdate,
    TrackedEvent,
)


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


def _iso(dt: datetime | None) -> str | None:
    return dt.isoformat() if dt else None


def _parse_dt(s: str | None) -> datetime | None:
    return datetime.fromisoformat(s) if s else None


def _page_views_json(page_views: tuple[PageViewRecord, ...] | None) -> str | None:
    if page_views is None:
        return None
    return json.dumps([pv.model_dump(mode="json") for pv in page_views])


class SQLiteSessionStore:
    """
    SessionStorePort backed by the user_sessions / user_events tables.

    Schema comes from SQLiteMigrator. One connection per call, as the rest of
    the SQLite adapters do, so the store is safe to use from the dispatcher's
    worker thread.
    """

    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = dict_factory
        return conn

    # --- SessionStorePort ---

    def create_session(
        self,
        session_id: str,
        user_id: str,
        started_at: datetime,
        client_metadata: ClientMetadata,
    ) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO user_sessions (session_id, user_id, started_at, client_metadata)
                VALUES (?, ?, ?, ?)
            """,
                (
                    session_id,
                    user_id,
                    started_at.isoformat(),
                    client_metadata.model_dump_json(),
                ),
            )
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def update_session(self, session_id: str, user_id: str, update: SessionUpdate) -> None:
        started = update.last_heartbeat_at or update.ended_at
        if started is None and update.page_views is None:
            return

        page_views = _page_views_json(update.page_views)
        conn = self._get_conn()
        try:
            # Upsert: a heartbeat may arrive for a session whose create failed.
            conn.execute(
                """
                INSERT INTO user_sessions (
                    session_id, user_id, started_at, ended_at, last_heartbeat, page_views
                ) VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(session_id, user_id) DO UPDATE SET
                    ended_at=COALESCE(excluded.ended_at, user_sessions.ended_at),
                    last_heartbeat=COALESCE(excluded.last_heartbeat, user_sessions.last_heartbeat),
                    page_views=COALESCE(?, user_sessions.page_views)
            """,
                (
                    session_id,
                    user_id,
                    _iso(started) or datetime.min.isoformat(),
                    _iso(update.ended_at),
                    _iso(update.last_heartbeat_at),
                    page_views or "[]",
                    page_views,
                ),
            )
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def append_event(
        self,
        user_id: str,
        session_id: str,
        event_name: str,
        properties: dict[str, Any],
        timestamp: datetime,
    ) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO user_events (user_id, session_id, event_name, properties, created_at)
                VALUES (?, ?, ?, ?, ?)
            """,
                (user_id, session_id, event_name, json.dumps(properties, default=str), timestamp.isoformat()),
            )
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    # --- Reads (CLI and tests) ---

    def _row_to_session(self, row: dict[str, Any]) -> Session:
        return Session(
            session_id=row["session_id"],
            user_id=row["user_id"],
            started_at=_parse_dt(row["started_at"]) or datetime.min,
            ended_at=_parse_dt(row["ended_at"]),
            last_heartbeat_at=_parse_dt(row["last_heartbeat"]),
            client_metadata=ClientMetadata.model_validate_json(row["client_metadata"]),
            page_views=[PageViewRecord(**pv) for pv in json.loads(row["page_views"])],
        )

    def get_session(self, session_id: str) -> Session | None:
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT * FROM user_sessions WHERE session_id = ?", (session_id,)
            ).fetchone()
            return self._row_to_session(row) if row else None
        finally:
            conn.close()

    def list_sessions(self, user_id: str | None = None, limit: int = 50) -> list[Session]:
        conn = self._get_conn()
        try:
            if user_id:
                rows = conn.execute(
                    "SELECT * FROM user_sessions WHERE user_id = ? "
                    "ORDER BY started_at DESC LIMIT ?",
                    (user_id, limit),
                ).fetchall()
            else:
                rows = conn.execute(
                    "SELECT * FROM user_sessions ORDER BY started_at DESC LIMIT ?", (limit,)
                ).fetchall()
            return [self._row_to_session(r) for r in rows]
        finally:
            conn.close()

    def list_events(self, session_id: str) -> list[TrackedEvent]:
        conn = self._get_conn()
        try:
            rows = conn.execute(
                "SELECT * FROM user_events WHERE session_id = ? ORDER BY id ASC", (session_id,)
            ).fetchall()
            return [
                TrackedEvent(
                    event_name=r["event_name"],
                    properties=json.loads(r["properties"]),
                    timestamp=datetime.fromisoformat(r["created_at"]),
                    session_id=r["session_id"],
                    user_id=r["user_id"],
                )
                for r in rows
            ]
        finally:
            conn.close()
