"""SQLite implementation of the library store."""

import sqlite3
from contextlib import contextmanager
from typing import Any, Iterator, Optional, Sequence, Set

from ..config.models import Config
from ..core.interfaces import IMovieStore
from ..core.models import PersistedMovie
from ..infrastructure.logging import LoggerMixin
from ..utils import StoreError
from .database import DBManager

_MOVIE_COLUMNS = list(PersistedMovie.model_fields)


class SQLiteMovieStore(IMovieStore, LoggerMixin):
    """Filepath mappings and movies kept in one SQLite database."""

    def __init__(self, config: Config) -> None:
        """Initialize the store.

        Args:
            config: Application configuration.
        """
        self._db = DBManager(config.storage.database_path)
        self._in_transaction = False

    @property
    def _conn(self) -> sqlite3.Connection:
        return self._db.connect()

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Open an exclusive write transaction.

        Raises:
            StoreError: If the transaction cannot be opened or committed.
        """
        with self._db.write_lock:
            try:
                self._conn.execute("BEGIN IMMEDIATE")
            except sqlite3.Error as e:
                raise StoreError(f"Failed to open transaction: {e}") from e

            self._in_transaction = True
            try:
                yield
                self._conn.execute("COMMIT")
            except BaseException as e:
                if self._conn.in_transaction:
                    self._conn.execute("ROLLBACK")
                if isinstance(e, sqlite3.Error):
                    raise StoreError(f"Transaction rolled back: {e}") from e
                raise
            finally:
                self._in_transaction = False

    def get_filepath_mapping(self, filepath: str) -> Optional[int]:
        row = self._execute(
            "SELECT movie_id FROM filepath_mappings WHERE filepath = ?", (filepath,)
        ).fetchone()
        return int(row["movie_id"]) if row else None

    def get_paths_for_id(self, movie_id: int) -> Set[str]:
        rows = self._execute(
            "SELECT filepath FROM filepath_mappings WHERE movie_id = ?", (movie_id,)
        ).fetchall()
        return {row["filepath"] for row in rows}

    def create_or_update_mapping(self, filepath: str, movie_id: int) -> None:
        self._execute(
            """
            INSERT INTO filepath_mappings (filepath, movie_id) VALUES (?, ?)
            ON CONFLICT (filepath) DO UPDATE SET movie_id = excluded.movie_id
            """,
            (filepath, movie_id),
        )

    def create_mapping_if_absent(self, filepath: str, movie_id: int) -> bool:
        cursor = self._execute(
            "INSERT OR IGNORE INTO filepath_mappings (filepath, movie_id) VALUES (?, ?)",
            (filepath, movie_id),
        )
        return cursor.rowcount > 0

    def update_mapping_id(self, filepath: str, old_id: int, new_id: int) -> bool:
        cursor = self._execute(
            "UPDATE filepath_mappings SET movie_id = ? WHERE filepath = ? AND movie_id = ?",
            (new_id, filepath, old_id),
        )
        return cursor.rowcount > 0

    def delete_movie(self, movie_id: int) -> None:
        # Mappings are removed through ON DELETE CASCADE
        self._execute("DELETE FROM movies WHERE movie_id = ?", (movie_id,))
        self.logger.info(f"Deleted movie {movie_id} and its filepath mappings")

    def upsert_movie(self, movie: PersistedMovie) -> None:
        placeholders = ", ".join("?" for _ in _MOVIE_COLUMNS)
        updates = ", ".join(f"{col} = excluded.{col}" for col in _MOVIE_COLUMNS[1:])
        values = [getattr(movie, col) for col in _MOVIE_COLUMNS]
        self._execute(
            f"""
            INSERT INTO movies ({", ".join(_MOVIE_COLUMNS)}) VALUES ({placeholders})
            ON CONFLICT (movie_id) DO UPDATE SET {updates}
            """,
            values,
        )

    def get_movie(self, movie_id: int) -> Optional[PersistedMovie]:
        row = self._execute("SELECT * FROM movies WHERE movie_id = ?", (movie_id,)).fetchone()
        if row is None:
            return None
        return PersistedMovie(**{col: row[col] for col in _MOVIE_COLUMNS})

    def count_mappings(self) -> int:
        return int(self._execute("SELECT COUNT(*) FROM filepath_mappings").fetchone()[0])

    def count_movies(self) -> int:
        return int(self._execute("SELECT COUNT(*) FROM movies").fetchone()[0])

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()

    def _execute(self, sql: str, params: Sequence[Any] = ()) -> sqlite3.Cursor:
        """Run a statement, translating driver errors.

        Inside a transaction, driver errors propagate unchanged so the
        transaction can roll back and wrap them.
        """
        try:
            return self._conn.execute(sql, params)
        except sqlite3.Error as e:
            if self._in_transaction:
                raise
            raise StoreError(f"Database error: {e}") from e
