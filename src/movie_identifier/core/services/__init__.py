"""Core service implementations."""

from .artifact_cache import FileArtifactCache
from .candidate_resolver import CandidateResolver, SearchStrategy
from .file_scanner import FileScanner
from .library_events import LibraryEvents
from .movie_identification import MovieIdentification
from .preference_store import ConfigPreferenceStore
from .reconciliation_engine import ReconciliationEngine
from .tmdb_client import TMDbLookupClient

__all__ = [
    "CandidateResolver",
    "ConfigPreferenceStore",
    "FileArtifactCache",
    "FileScanner",
    "LibraryEvents",
    "MovieIdentification",
    "ReconciliationEngine",
    "SearchStrategy",
    "TMDbLookupClient",
]
