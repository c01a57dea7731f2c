"""SQLite connection management and schema."""

import logging
import sqlite3
import threading
from pathlib import Path
from typing import Dict, Optional, Union

CURRENT_SCHEMA_VERSION = 1

# One writer lock per database file, shared by every connection in the process
_WRITE_LOCKS: Dict[str, threading.Lock] = {}
_WRITE_LOCKS_GUARD = threading.Lock()


def init_schema(conn: sqlite3.Connection) -> None:
    """Create the library tables.

    Idempotent: safe to run on every startup.
    """
    conn.execute("""
        CREATE TABLE IF NOT EXISTS schema_version (
            version INTEGER PRIMARY KEY
        );
    """)
    if conn.execute("SELECT version FROM schema_version").fetchone() is None:
        conn.execute(
            "INSERT INTO schema_version (version) VALUES (?)", (CURRENT_SCHEMA_VERSION,)
        )

    conn.execute("""
        CREATE TABLE IF NOT EXISTS movies (
            movie_id        INTEGER PRIMARY KEY,
            title           TEXT NOT NULL DEFAULT '',
            plot            TEXT NOT NULL DEFAULT '',
            imdb_id         TEXT NOT NULL DEFAULT '',
            rating          TEXT NOT NULL DEFAULT '0.0',
            tagline         TEXT NOT NULL DEFAULT '',
            release_date    TEXT NOT NULL DEFAULT '',
            certification   TEXT NOT NULL DEFAULT '',
            runtime         TEXT NOT NULL DEFAULT '0',
            trailer         TEXT NOT NULL DEFAULT '',
            genres          TEXT NOT NULL DEFAULT '',
            favourite       TEXT NOT NULL DEFAULT '0',
            actors          TEXT NOT NULL DEFAULT '',
            collection      TEXT NOT NULL DEFAULT '',
            collection_id   TEXT NOT NULL DEFAULT '',
            to_watch        TEXT NOT NULL DEFAULT '0',
            has_watched     TEXT NOT NULL DEFAULT '0',
            date_added      TEXT NOT NULL DEFAULT ''
        );
    """)

    # A mapping may be written before its movie row inside one transaction,
    # so the reference is only checked at commit.
    conn.execute("""
        CREATE TABLE IF NOT EXISTS filepath_mappings (
            filepath        TEXT PRIMARY KEY,
            movie_id        INTEGER NOT NULL
                REFERENCES movies (movie_id)
                ON DELETE CASCADE
                DEFERRABLE INITIALLY DEFERRED
        );
    """)
    conn.execute(
        "CREATE INDEX IF NOT EXISTS idx_mappings_movie_id ON filepath_mappings (movie_id);"
    )


class DBManager:
    """Owns the SQLite connection for one library database."""

    def __init__(self, db_path: Union[str, Path]):
        self.db_path = Path(db_path)
        self._conn: Optional[sqlite3.Connection] = None
        key = str(self.db_path.expanduser().resolve())
        with _WRITE_LOCKS_GUARD:
            self._write_lock = _WRITE_LOCKS.setdefault(key, threading.Lock())

    def connect(self) -> sqlite3.Connection:
        """Connect to the database, configuring pragmas and the schema."""
        if self._conn:
            return self._conn

        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        logging.info(f"Connecting to database: {self.db_path}")

        # Autocommit mode; transactions are opened explicitly by the store
        self._conn = sqlite3.connect(
            self.db_path, isolation_level=None, check_same_thread=False, timeout=30
        )
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA journal_mode=WAL;")
        self._conn.execute("PRAGMA synchronous=NORMAL;")
        self._conn.execute("PRAGMA foreign_keys=ON;")

        init_schema(self._conn)
        return self._conn

    def close(self) -> None:
        if self._conn:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> sqlite3.Connection:
        return self.connect()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def write_lock(self) -> threading.Lock:
        """Returns the write lock shared by all connections to this database."""
        return self._write_lock
