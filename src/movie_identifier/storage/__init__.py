"""Persistent library storage."""

from .database import DBManager, init_schema
from .movie_store import SQLiteMovieStore

__all__ = [
    "DBManager",
    "SQLiteMovieStore",
    "init_schema",
]
