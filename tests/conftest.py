"""Pytest configuration and fixtures."""

from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple

import pytest

from movie_identifier.config import Config, ConfigManager
from movie_identifier.core.interfaces import (
    ArtifactKind,
    IArtifactCache,
    ILookupClient,
    IProgressCallback,
)
from movie_identifier.core.models import (
    CandidateRecord,
    CollectionInfo,
    FileDescriptor,
    LookupResult,
    MetadataRecord,
)
from movie_identifier.core.services import (
    CandidateResolver,
    ConfigPreferenceStore,
    LibraryEvents,
    ReconciliationEngine,
)
from movie_identifier.infrastructure import Container
from movie_identifier.storage import SQLiteMovieStore


class FakeLookupClient(ILookupClient):
    """In-memory metadata provider that records every call."""

    def __init__(self) -> None:
        self.imdb: Dict[str, List[CandidateRecord]] = {}
        self.searches: Dict[Tuple[str, Optional[int]], List[CandidateRecord]] = {}
        self.movies: Dict[int, MetadataRecord] = {}
        self.failing_searches: Set[Tuple[str, Optional[int]]] = set()
        self.failing_fetches: Set[int] = set()
        self.calls: List[tuple] = []

    def add_movie(self, movie_id: int, title: str, **fields) -> MetadataRecord:
        record = MetadataRecord(movie_id=movie_id, title=title, **fields)
        self.movies[movie_id] = record
        return record

    def add_search(self, text: str, year: Optional[int], *movie_ids: int) -> None:
        self.searches[(text.lower(), year)] = [
            CandidateRecord(movie_id=movie_id, title=self._title(movie_id))
            for movie_id in movie_ids
        ]

    def add_imdb(self, imdb_id: str, movie_id: int) -> None:
        self.imdb[imdb_id] = [CandidateRecord(movie_id=movie_id, title=self._title(movie_id))]

    async def find_by_external_id(self, imdb_id: str) -> LookupResult:
        self.calls.append(("find", imdb_id))
        return LookupResult.from_candidates(self.imdb.get(imdb_id, []))

    async def search_by_text(self, text: str, year: Optional[int] = None) -> LookupResult:
        self.calls.append(("search", text, year))
        key = (text.lower(), year)
        if key in self.failing_searches:
            return LookupResult.failed(f"search for {text} timed out")
        return LookupResult.from_candidates(self.searches.get(key, []))

    async def fetch_full(self, movie_id: int, locale: str) -> LookupResult:
        self.calls.append(("fetch", movie_id, locale))
        if movie_id in self.failing_fetches:
            return LookupResult.failed(f"fetch of {movie_id} failed")
        record = self.movies.get(movie_id)
        return LookupResult.from_record(record) if record else LookupResult.empty()

    def calls_of(self, kind: str) -> List[tuple]:
        return [call for call in self.calls if call[0] == kind]

    def _title(self, movie_id: int) -> str:
        record = self.movies.get(movie_id)
        return record.title if record else f"Movie {movie_id}"


class FakeArtifactCache(IArtifactCache):
    """Artifact cache that remembers what it was asked to do."""

    def __init__(self) -> None:
        self.stored: Set[Tuple[ArtifactKind, int]] = set()
        self.downloads: List[Tuple[str, ArtifactKind, int]] = []
        self.purged: List[int] = []

    def exists(self, kind: ArtifactKind, item_id: int) -> bool:
        return (kind, item_id) in self.stored

    async def download_and_store(self, url: str, kind: ArtifactKind, item_id: int) -> bool:
        self.downloads.append((url, kind, item_id))
        self.stored.add((kind, item_id))
        return True

    def purge(self, movie_id: int) -> None:
        self.purged.append(movie_id)
        self.stored.discard((ArtifactKind.POSTER, movie_id))
        self.stored.discard((ArtifactKind.BACKDROP, movie_id))


class RecordingCallback(IProgressCallback):
    """Progress callback collecting every notification."""

    def __init__(self) -> None:
        self.events: List[Tuple[str, int, int, Optional[str]]] = []

    def on_movie_added(
        self, title: str, movie_id: int, count: int, error: Optional[str] = None
    ) -> None:
        self.events.append((title, movie_id, count, error))


@pytest.fixture
def temp_config_file(tmp_path):
    """Create a temporary configuration file."""
    config_content = f"""
tmdb:
  api_key: "test-tmdb-key"

storage:
  database_path: "{tmp_path / 'library.db'}"
  artifact_dir: "{tmp_path / 'artifacts'}"

artifacts:
  retry_attempts: 2
  retry_wait_seconds: 0

files:
  min_file_size_mb: 0  # Allow small test files

preferences:
  language_preference: "en"
"""
    config_file = tmp_path / "config.yaml"
    config_file.write_text(config_content)
    return config_file


@pytest.fixture
def config_manager(temp_config_file):
    """Create a configuration manager with test config."""
    return ConfigManager(temp_config_file)


@pytest.fixture
def config(config_manager) -> Config:
    """Load test configuration."""
    return config_manager.load_config()


@pytest.fixture
def container(config_manager):
    """Create a test container."""
    return Container(config_manager)


@pytest.fixture
def store(config):
    """SQLite library store in a temporary directory."""
    movie_store = SQLiteMovieStore(config)
    yield movie_store
    movie_store.close()


@pytest.fixture
def lookup_client():
    """Fake metadata provider."""
    return FakeLookupClient()


@pytest.fixture
def artifact_cache():
    """Fake artifact cache."""
    return FakeArtifactCache()


@pytest.fixture
def library_events():
    """Library change notifier."""
    return LibraryEvents()


@pytest.fixture
def resolver(lookup_client):
    """Candidate resolver backed by the fake provider."""
    return CandidateResolver(lookup_client)


@pytest.fixture
def engine(store, artifact_cache, library_events):
    """Reconciliation engine backed by the temporary store."""
    return ReconciliationEngine(store, artifact_cache, library_events)


@pytest.fixture
def preference_store(config):
    """Preference store reading the test configuration."""
    return ConfigPreferenceStore(config)


@pytest.fixture
def callback():
    """Recording progress callback."""
    return RecordingCallback()


@pytest.fixture
def make_record():
    """Build metadata records with image URLs."""

    def _make(movie_id: int, title: str = "", collection_id: Optional[int] = None):
        collection = None
        if collection_id is not None:
            collection = CollectionInfo(
                collection_id=collection_id,
                name=f"{title} Collection",
                poster_url=f"https://img.test/w342/c{collection_id}.jpg",
            )
        return MetadataRecord(
            movie_id=movie_id,
            title=title or f"Movie {movie_id}",
            release_date="2010-07-15",
            vote_average=8.4,
            runtime=148,
            poster_url=f"https://img.test/w342/p{movie_id}.jpg",
            backdrop_url=f"https://img.test/w1280/b{movie_id}.jpg",
            collection=collection,
        )

    return _make


@pytest.fixture
def descriptor_for():
    """Build descriptors from a path string."""

    def _make(path: str) -> FileDescriptor:
        return FileDescriptor.from_path(Path(path))

    return _make


@pytest.fixture
def sample_movie_files(tmp_path):
    """Create sample movie files for testing."""
    movie_dir = tmp_path / "movies" / "Inception (2010)"
    movie_dir.mkdir(parents=True)

    video_file = movie_dir / "Inception.2010.1080p.BluRay.x264-GROUP.mkv"
    video_file.write_bytes(b"fake video content" * 1000)

    subtitle_file = movie_dir / "Inception.2010.1080p.BluRay.x264-GROUP.srt"
    subtitle_file.write_text("1\n00:00:01,000 --> 00:00:03,000\nTest subtitle")

    sample_file = movie_dir / "sample.mkv"
    sample_file.write_bytes(b"sample")

    return tmp_path / "movies"
