"""Observer interfaces for identification progress and library changes."""

from abc import ABC, abstractmethod
from typing import Optional


class IProgressCallback(ABC):
    """Receives one call per processed file, in processing order."""

    @abstractmethod
    def on_movie_added(
        self, title: str, movie_id: int, count: int, error: Optional[str] = None
    ) -> None:
        """Report a processed file.

        Args:
            title: Resolved title (empty when unidentified).
            movie_id: Resolved movie id.
            count: Files processed so far in this batch.
            error: Error message when the file could not be persisted.
        """
        pass


class ILibraryListener(ABC):
    """Notified after the library content changed."""

    @abstractmethod
    def on_library_changed(self) -> None:
        """Handle a library change."""
        pass
