"""Core interfaces for dependency injection."""

from .artifact_cache import ArtifactKind, IArtifactCache
from .candidate_resolver import ICandidateResolver
from .file_scanner import IFileScanner
from .listeners import ILibraryListener, IProgressCallback
from .lookup_client import ILookupClient
from .movie_store import IMovieStore
from .preference_store import LANGUAGE_PREFERENCE, IPreferenceStore
from .reconciliation_engine import IReconciliationEngine

__all__ = [
    "ArtifactKind",
    "LANGUAGE_PREFERENCE",
    "IArtifactCache",
    "ICandidateResolver",
    "IFileScanner",
    "ILibraryListener",
    "ILookupClient",
    "IMovieStore",
    "IPreferenceStore",
    "IProgressCallback",
    "IReconciliationEngine",
]
