"""Library store interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Optional, Set

from ..models import PersistedMovie


class IMovieStore(ABC):
    """Interface for the persistent filepath mapping and movie store."""

    @abstractmethod
    def transaction(self) -> AbstractContextManager:
        """Open an exclusive write transaction.

        Writes made inside the block are committed together, or rolled back
        when the block raises.
        """
        pass

    @abstractmethod
    def get_filepath_mapping(self, filepath: str) -> Optional[int]:
        """Get the movie id a path is mapped to, or None."""
        pass

    @abstractmethod
    def get_paths_for_id(self, movie_id: int) -> Set[str]:
        """Get every path mapped to a movie id."""
        pass

    @abstractmethod
    def create_or_update_mapping(self, filepath: str, movie_id: int) -> None:
        """Map a path to a movie id, replacing any existing mapping."""
        pass

    @abstractmethod
    def create_mapping_if_absent(self, filepath: str, movie_id: int) -> bool:
        """Map a path to a movie id unless the path is already mapped.

        Returns:
            True if a mapping was created.
        """
        pass

    @abstractmethod
    def update_mapping_id(self, filepath: str, old_id: int, new_id: int) -> bool:
        """Repoint a path's mapping from one movie id to another.

        Returns:
            True if a mapping with ``old_id`` existed and was updated.
        """
        pass

    @abstractmethod
    def delete_movie(self, movie_id: int) -> None:
        """Delete a movie together with every mapping that references it."""
        pass

    @abstractmethod
    def upsert_movie(self, movie: PersistedMovie) -> None:
        """Insert or replace a movie row."""
        pass

    @abstractmethod
    def get_movie(self, movie_id: int) -> Optional[PersistedMovie]:
        """Get a stored movie by id."""
        pass

    @abstractmethod
    def count_mappings(self) -> int:
        """Count filepath mappings."""
        pass

    @abstractmethod
    def count_movies(self) -> int:
        """Count stored movies."""
        pass
