"""
Schema migrations for the tracker database.

Each migration is a .sql file applied once, in filename order. A file may
carry a rollback section after a "-- Down" marker; only the part before it
is executed here.
"""

import logging
import sqlite3
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_MIGRATIONS_DIR = Path(__file__).parent / "migrations"

DOWN_MARKER = "-- Down"

BOOKKEEPING_DDL = """
    CREATE TABLE IF NOT EXISTS _migrations (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        filename TEXT UNIQUE NOT NULL,
        applied_at DATETIME DEFAULT CURRENT_TIMESTAMP
    );
"""


@dataclass(frozen=True)
class Migration:
    filename: str
    up_sql: str


def up_section(content: str) -> str:
    """Text before the Down marker, or everything when there is none."""
    return content.split(DOWN_MARKER, 1)[0]


def discover_migrations(directory: Path) -> list[Migration]:
    return [
        Migration(filename=path.name, up_sql=up_section(path.read_text()))
        for path in sorted(directory.glob("*.sql"))
    ]


class SQLiteMigrator:
    def __init__(self, db_path: str, migrations_dir: str | Path = DEFAULT_MIGRATIONS_DIR):
        self.db_path = db_path
        self.migrations_dir = Path(migrations_dir)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.execute(BOOKKEEPING_DDL)
        return conn

    def applied(self) -> set[str]:
        conn = self._connect()
        try:
            return {row[0] for row in conn.execute("SELECT filename FROM _migrations")}
        finally:
            conn.close()

    def pending(self) -> list[Migration]:
        done = self.applied()
        return [m for m in discover_migrations(self.migrations_dir) if m.filename not in done]

    def run_migrations(self) -> list[str]:
        """Apply all pending migrations. Returns the filenames applied."""
        todo = self.pending()
        if not todo:
            return []

        conn = self._connect()
        try:
            for migration in todo:
                logger.info("Applying migration: %s", migration.filename)
                self._apply(conn, migration)
        finally:
            conn.close()
        return [m.filename for m in todo]

    def _apply(self, conn: sqlite3.Connection, migration: Migration) -> None:
        try:
            conn.executescript(migration.up_sql)
            conn.execute("INSERT INTO _migrations (filename) VALUES (?)", (migration.filename,))
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise RuntimeError(f"Migration {migration.filename} failed: {e}") from e
