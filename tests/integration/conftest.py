"""Integration test fixtures and configuration."""

import pytest

from movie_identifier.core.interfaces import IArtifactCache, ILookupClient, IMovieStore
from movie_identifier.infrastructure import Container


@pytest.fixture
def integration_container(config_manager, lookup_client, artifact_cache):
    """Container with real store and services, fake provider and image cache."""
    container = Container(config_manager)
    container.configure_default_services()
    container.register_instance(ILookupClient, lookup_client)
    container.register_instance(IArtifactCache, artifact_cache)
    yield container
    container.get(IMovieStore).close()


@pytest.fixture
def library(integration_container):
    """The real SQLite store used by the integration container."""
    return integration_container.get(IMovieStore)


@pytest.fixture
def movie_dir(tmp_path):
    """Create an empty movie library directory."""
    path = tmp_path / "library"
    path.mkdir()
    return path


@pytest.fixture
def add_video(movie_dir):
    """Create a fake video file below the library directory."""

    def _add(relative: str):
        path = movie_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"fake video content")
        return path

    return _add
