"""Test the filesystem artifact cache."""

from pathlib import Path
from unittest.mock import AsyncMock, patch

import aiohttp
import pytest

from movie_identifier.core.interfaces import ArtifactKind
from movie_identifier.core.services import FileArtifactCache


@pytest.fixture
def cache(config):
    """Artifact cache writing below tmp_path."""
    return FileArtifactCache(config)


def _touch(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"\xff\xd8\xff")


@pytest.mark.unit
def test_layout_and_exists(cache, tmp_path):
    """Test the on-disk layout of cached images."""
    poster = cache.path_for(ArtifactKind.POSTER, 27205)

    assert poster == tmp_path / "artifacts" / "poster" / "27205.jpg"
    assert not cache.exists(ArtifactKind.POSTER, 27205)

    _touch(poster)

    assert cache.exists(ArtifactKind.POSTER, 27205)
    assert not cache.exists(ArtifactKind.BACKDROP, 27205)


@pytest.mark.unit
def test_purge_keeps_collection_posters(cache):
    """Test that purging a movie leaves shared collection art alone."""
    for kind in ArtifactKind:
        _touch(cache.path_for(kind, 42))

    cache.purge(42)
    cache.purge(42)

    assert not cache.exists(ArtifactKind.POSTER, 42)
    assert not cache.exists(ArtifactKind.BACKDROP, 42)
    assert cache.exists(ArtifactKind.COLLECTION, 42)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_download_and_store(cache):
    """Test a successful download."""
    fake = AsyncMock()
    with patch.object(cache, "_download", fake):
        stored = await cache.download_and_store("https://img.test/p.jpg", ArtifactKind.POSTER, 1)

    assert stored
    fake.assert_awaited_once_with("https://img.test/p.jpg", cache.path_for(ArtifactKind.POSTER, 1))


@pytest.mark.unit
@pytest.mark.asyncio
async def test_download_retried_once(cache):
    """Test that a transient failure is retried."""
    fake = AsyncMock(side_effect=[aiohttp.ClientConnectionError("reset"), None])
    with patch.object(cache, "_download", fake):
        stored = await cache.download_and_store("https://img.test/p.jpg", ArtifactKind.POSTER, 1)

    assert stored
    assert fake.await_count == 2


@pytest.mark.unit
@pytest.mark.asyncio
async def test_download_failure_returns_false(cache):
    """Test that exhausted retries are reported, not raised."""
    fake = AsyncMock(side_effect=aiohttp.ClientConnectionError("unreachable"))
    with patch.object(cache, "_download", fake):
        stored = await cache.download_and_store("https://img.test/p.jpg", ArtifactKind.BACKDROP, 1)

    assert not stored
    assert fake.await_count == 2
    assert not cache.exists(ArtifactKind.BACKDROP, 1)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_close_without_session(cache):
    """Test closing a cache that never downloaded anything."""
    await cache.close()
