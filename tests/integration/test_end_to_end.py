"""End-to-end integration tests."""

import pytest

from movie_identifier.core.interfaces import ArtifactKind, IFileScanner, ILibraryListener
from movie_identifier.core.models import UNIDENTIFIED_ID, FileDescriptor, ItemStatus, MappingAction

INCEPTION = 27205
INTERSTELLAR = 157336


async def _identify(container, descriptors, callback=None, override_id=None, previous_id=None):
    identification = container.create_identification(descriptors, callback=callback)
    if override_id is not None:
        identification.set_movie_id(override_id)
    if previous_id is not None:
        identification.set_current_movie_id(previous_id)
    return await identification.start()


@pytest.fixture
def provider(lookup_client):
    """Fake provider knowing Inception and Interstellar."""
    lookup_client.add_movie(
        INCEPTION,
        "Inception",
        imdb_id="tt1375666",
        release_date="2010-07-15",
        poster_url="https://img.test/w342/inception.jpg",
        backdrop_url="https://img.test/w1280/inception.jpg",
    )
    lookup_client.add_movie(INTERSTELLAR, "Interstellar", imdb_id="tt0816692")
    lookup_client.add_search("Inception", 2010, INCEPTION)
    return lookup_client


@pytest.mark.integration
@pytest.mark.asyncio
async def test_inception_scenario(integration_container, library, provider, callback):
    """Test title and year identification of a single file."""
    descriptor = FileDescriptor(
        filepath="/m/Inception.2010.mkv", title="Inception", release_year=2010
    )

    summary = await _identify(integration_container, [descriptor], callback)

    assert summary.identified == 1
    assert library.get_filepath_mapping("/m/Inception.2010.mkv") == INCEPTION
    assert library.count_mappings() == 1
    assert library.count_movies() == 1
    assert library.get_movie(INCEPTION).imdb_id == "tt1375666"
    assert provider.calls == [
        ("search", "Inception", 2010),
        ("fetch", INCEPTION, "en"),
    ]
    assert callback.events == [("Inception", INCEPTION, 1, None)]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_scanned_directory_is_identified(
    integration_container, library, provider, artifact_cache, movie_dir, add_video
):
    """Test scanning a directory and identifying what it contains."""
    video = add_video("Inception (2010)/Inception.2010.1080p.BluRay.x264-GROUP.mkv")
    scanner = integration_container.get(IFileScanner)

    descriptors = await scanner.scan_descriptors(movie_dir)
    summary = await _identify(integration_container, descriptors)

    assert summary.identified == 1
    assert summary.results[0].strategy == "title_year"
    assert library.get_filepath_mapping(str(video)) == INCEPTION
    assert (ArtifactKind.POSTER, INCEPTION) in artifact_cache.stored
    assert (ArtifactKind.BACKDROP, INCEPTION) in artifact_cache.stored


@pytest.mark.integration
@pytest.mark.asyncio
async def test_unresolvable_scenario(integration_container, library, provider, callback):
    """Test a file no lookup can match."""
    descriptor = FileDescriptor(
        filepath="/m/Home Videos 2003/clip.mkv",
        title="clip",
        release_year=2003,
        parent_folder_name="Home Videos",
    )

    summary = await _identify(integration_container, [descriptor], callback)

    assert summary.unidentified == 1
    assert library.get_filepath_mapping("/m/Home Videos 2003/clip.mkv") == UNIDENTIFIED_ID
    assert callback.events == [("", UNIDENTIFIED_ID, 1, None)]
    assert provider.calls_of("search") == [
        ("search", "clip", 2003),
        ("search", "clip", None),
        ("search", "Home Videos", 2003),
        ("search", "Home Videos", None),
    ]
    assert provider.calls_of("fetch") == []


@pytest.mark.integration
@pytest.mark.asyncio
async def test_unidentified_file_is_upgraded_later(integration_container, library, provider):
    """Test that a file left unidentified is matched by a later run."""
    descriptor = FileDescriptor(filepath="/m/incep.mkv", title="Incep")
    await _identify(integration_container, [descriptor])

    provider.add_search("Incep", None, INCEPTION)
    summary = await _identify(integration_container, [descriptor])

    assert summary.results[0].action == MappingAction.UPGRADED
    assert library.get_filepath_mapping("/m/incep.mkv") == INCEPTION
    assert library.get_movie(UNIDENTIFIED_ID) is None


@pytest.mark.integration
@pytest.mark.asyncio
async def test_round_trip_override_is_noop(integration_container, library, provider):
    """Test re-identifying a file as the movie it already maps to."""
    descriptor = FileDescriptor(
        filepath="/m/Inception.2010.mkv", title="Inception", release_year=2010
    )
    await _identify(integration_container, [descriptor])
    mappings_before = library.count_mappings()

    summary = await _identify(
        integration_container, [descriptor], override_id=INCEPTION, previous_id=INCEPTION
    )

    assert summary.results[0].action == MappingAction.UNCHANGED
    assert library.count_mappings() == mappings_before
    assert library.get_filepath_mapping("/m/Inception.2010.mkv") == INCEPTION


@pytest.mark.integration
@pytest.mark.asyncio
async def test_override_with_shared_movie(integration_container, library, provider):
    """Test overriding one part of a movie that spans several files."""
    parts = [
        FileDescriptor(
            filepath=f"/m/Inception (2010)/{name}.mkv",
            title=name,
            release_year=2010,
            parent_folder_name="Inception",
        )
        for name in ("cd1", "cd2")
    ]
    await _identify(integration_container, parts)
    assert library.get_paths_for_id(INCEPTION) == {p.filepath for p in parts}

    summary = await _identify(
        integration_container, parts[:1], override_id=INTERSTELLAR, previous_id=INCEPTION
    )

    assert summary.results[0].status == ItemStatus.IDENTIFIED
    assert summary.results[0].action == MappingAction.REPOINTED
    assert library.get_filepath_mapping(parts[0].filepath) == INTERSTELLAR
    assert library.get_filepath_mapping(parts[1].filepath) == INCEPTION
    assert library.get_movie(INCEPTION) is not None
    assert library.get_movie(INTERSTELLAR).title == "Interstellar"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_override_with_single_file_movie(
    integration_container, library, provider, artifact_cache
):
    """Test overriding the only file of a movie."""
    descriptor = FileDescriptor(
        filepath="/m/Inception.2010.mkv", title="Inception", release_year=2010
    )
    await _identify(integration_container, [descriptor])

    summary = await _identify(
        integration_container, [descriptor], override_id=INTERSTELLAR, previous_id=INCEPTION
    )

    assert summary.results[0].action == MappingAction.REPLACED
    assert library.get_movie(INCEPTION) is None
    assert library.get_paths_for_id(INCEPTION) == set()
    assert library.get_filepath_mapping("/m/Inception.2010.mkv") == INTERSTELLAR
    assert artifact_cache.purged == [INCEPTION]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_library_listener_notified_per_file(integration_container, provider):
    """Test that every committed change notifies library observers."""
    events = integration_container.get(ILibraryListener)
    seen = []
    events.subscribe(lambda: seen.append(True))
    descriptors = [
        FileDescriptor(filepath=f"/m/{name}.mkv", title=name) for name in ("a", "b", "c")
    ]

    await _identify(integration_container, descriptors)

    assert len(seen) == 3
