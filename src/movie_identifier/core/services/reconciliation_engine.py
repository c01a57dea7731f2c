"""Reconciliation engine service implementation."""

import time
from typing import List, Optional

from ...infrastructure.logging import LoggerMixin
from ..interfaces import (
    ArtifactKind,
    IArtifactCache,
    ILibraryListener,
    IMovieStore,
    IReconciliationEngine,
)
from ..models import (
    UNIDENTIFIED_ID,
    FileDescriptor,
    MappingAction,
    MetadataRecord,
    PersistedMovie,
    ReconciliationOutcome,
)


class ReconciliationEngine(IReconciliationEngine, LoggerMixin):
    """Merges resolved records into the library store.

    Invariants kept by every code path:
    - a path maps to exactly one movie id;
    - a movie row exists iff at least one path maps to it.

    All writes for one file happen in a single store transaction. Image
    downloads and cache purges run after the commit and never fail the file.
    """

    def __init__(
        self,
        store: IMovieStore,
        artifact_cache: IArtifactCache,
        library_listener: ILibraryListener,
    ):
        """Initialize reconciliation engine.

        Args:
            store: Library store.
            artifact_cache: Image cache used for posters and backdrops.
            library_listener: Notified after every committed change.
        """
        self._store = store
        self._artifact_cache = artifact_cache
        self._library_listener = library_listener

    async def reconcile(
        self,
        descriptor: FileDescriptor,
        record: MetadataRecord,
        override_id: Optional[int] = None,
        previous_id: Optional[int] = None,
    ) -> ReconciliationOutcome:
        path = descriptor.filepath
        manual = override_id is not None and override_id > 0

        if manual and not record.is_identified:
            # The override could not be fetched; keep whatever is stored
            current = self._store.get_filepath_mapping(path)
            self.logger.warning(
                f"Manual identification of {descriptor.filename} as {override_id} failed, "
                f"store left untouched"
            )
            return ReconciliationOutcome(
                action=MappingAction.SKIPPED,
                movie_id=current if current is not None else UNIDENTIFIED_ID,
            )

        with self._store.transaction():
            if manual:
                outcome = self._reconcile_manual(path, record.movie_id, previous_id)
            else:
                outcome = self._reconcile_automatic(path, record.movie_id)

            if outcome.movie_id == record.movie_id:
                self._store.upsert_movie(
                    PersistedMovie.from_record(record, int(time.time() * 1000))
                )
                outcome.movie_persisted = True

        self.logger.info(f"{descriptor.filename} -> {outcome.movie_id} ({outcome.action.value})")

        for movie_id in outcome.deleted_movie_ids:
            if movie_id == UNIDENTIFIED_ID:
                continue
            try:
                self._artifact_cache.purge(movie_id)
            except Exception as e:
                self.logger.warning(f"Failed to purge images of movie {movie_id}: {e}")

        if outcome.movie_persisted and record.is_identified:
            await self._download_artifacts(record)

        self._library_listener.on_library_changed()
        return outcome

    def _reconcile_automatic(self, path: str, new_id: int) -> ReconciliationOutcome:
        """Create the mapping if the path has none.

        Existing mappings to real movies are never repointed by an automatic
        run; a mapping to the UNIDENTIFIED sentinel is upgraded when a real
        match turns up.
        """
        if self._store.create_mapping_if_absent(path, new_id):
            return ReconciliationOutcome(action=MappingAction.CREATED, movie_id=new_id)

        current = self._store.get_filepath_mapping(path)
        if current == new_id:
            return ReconciliationOutcome(action=MappingAction.UNCHANGED, movie_id=new_id)

        if current == UNIDENTIFIED_ID and new_id != UNIDENTIFIED_ID:
            self._store.update_mapping_id(path, UNIDENTIFIED_ID, new_id)
            return ReconciliationOutcome(
                action=MappingAction.UPGRADED,
                movie_id=new_id,
                deleted_movie_ids=self._prune_orphans([UNIDENTIFIED_ID]),
            )

        self.logger.info(
            f"Keeping existing mapping {path} -> {current}, provider now suggests {new_id}"
        )
        return ReconciliationOutcome(
            action=MappingAction.SKIPPED,
            movie_id=current if current is not None else UNIDENTIFIED_ID,
        )

    def _reconcile_manual(
        self, path: str, new_id: int, previous_id: Optional[int]
    ) -> ReconciliationOutcome:
        """Repoint a path to a manually chosen movie.

        Args:
            path: File path being re-identified.
            new_id: Movie id chosen by the user.
            previous_id: Movie id the path was mapped to; defaults to the stored mapping.
        """
        current = self._store.get_filepath_mapping(path)
        if previous_id is None:
            previous_id = current if current is not None else UNIDENTIFIED_ID

        if previous_id == new_id:
            if current == new_id:
                return ReconciliationOutcome(action=MappingAction.UNCHANGED, movie_id=new_id)
            self._store.create_or_update_mapping(path, new_id)
            return ReconciliationOutcome(
                action=MappingAction.REPOINTED,
                movie_id=new_id,
                deleted_movie_ids=self._prune_orphans([current]),
            )

        current_count = len(self._store.get_paths_for_id(previous_id))

        if current_count > 1:
            # Other files still use the previous movie; only this path moves
            if not self._store.update_mapping_id(path, previous_id, new_id):
                self._store.create_or_update_mapping(path, new_id)
            return ReconciliationOutcome(
                action=MappingAction.REPOINTED,
                movie_id=new_id,
                deleted_movie_ids=self._prune_orphans([current]),
            )

        if previous_id == UNIDENTIFIED_ID:
            self._store.create_or_update_mapping(path, new_id)
            return ReconciliationOutcome(
                action=MappingAction.REPOINTED,
                movie_id=new_id,
                deleted_movie_ids=self._prune_orphans([UNIDENTIFIED_ID, current]),
            )

        # This path was the only one using the previous movie: drop the movie
        # and its mappings, then map the path to the new movie
        self._store.delete_movie(previous_id)
        self._store.create_or_update_mapping(path, new_id)
        deleted = [previous_id]
        if current != previous_id:
            deleted += self._prune_orphans([current])
        return ReconciliationOutcome(
            action=MappingAction.REPLACED, movie_id=new_id, deleted_movie_ids=deleted
        )

    def _prune_orphans(self, movie_ids: List[Optional[int]]) -> List[int]:
        """Delete movies that no path maps to anymore.

        Returns:
            Ids of the deleted movies.
        """
        deleted: List[int] = []
        for movie_id in movie_ids:
            if movie_id is None or movie_id in deleted:
                continue
            if not self._store.get_paths_for_id(movie_id):
                self._store.delete_movie(movie_id)
                deleted.append(movie_id)
        return deleted

    async def _download_artifacts(self, record: MetadataRecord) -> None:
        """Download missing images for a movie and its collection."""
        downloads = [
            (record.poster_url, ArtifactKind.POSTER, record.movie_id),
            (record.backdrop_url, ArtifactKind.BACKDROP, record.movie_id),
        ]
        if record.collection is not None:
            downloads.append(
                (
                    record.collection.poster_url,
                    ArtifactKind.COLLECTION,
                    record.collection.collection_id,
                )
            )

        for url, kind, item_id in downloads:
            if not url or self._artifact_cache.exists(kind, item_id):
                continue
            try:
                await self._artifact_cache.download_and_store(url, kind, item_id)
            except Exception as e:
                self.logger.warning(f"Failed to cache {kind.value} {item_id}: {e}")
