"""Artifact cache interface."""

from abc import ABC, abstractmethod
from enum import Enum


class ArtifactKind(str, Enum):
    """Kinds of cached images."""

    POSTER = "poster"
    BACKDROP = "backdrop"
    COLLECTION = "collection"


class IArtifactCache(ABC):
    """Interface for the downloaded image cache."""

    @abstractmethod
    def exists(self, kind: ArtifactKind, item_id: int) -> bool:
        """Check if an artifact is already cached."""
        pass

    @abstractmethod
    async def download_and_store(self, url: str, kind: ArtifactKind, item_id: int) -> bool:
        """Download an artifact into the cache.

        Best-effort: failures are logged and reported as False, never raised.

        Returns:
            True if the artifact was stored.
        """
        pass

    @abstractmethod
    def purge(self, movie_id: int) -> None:
        """Remove every cached artifact belonging to a movie."""
        pass
