"""Metadata lookup client interface."""

from abc import ABC, abstractmethod
from typing import Optional

from ..models import LookupResult


class ILookupClient(ABC):
    """Interface for metadata provider clients.

    Implementations never raise for ordinary not-found or transport failures;
    they return an EMPTY or ERROR ``LookupResult`` instead.
    """

    @abstractmethod
    async def find_by_external_id(self, imdb_id: str) -> LookupResult:
        """Find movies by an external IMDb id.

        Args:
            imdb_id: IMDb id, e.g. ``tt1375666``.

        Returns:
            Lookup result carrying candidates.
        """
        pass

    @abstractmethod
    async def search_by_text(self, text: str, year: Optional[int] = None) -> LookupResult:
        """Search movies by free text, optionally filtered by release year.

        Args:
            text: Search query.
            year: Optional release year filter.

        Returns:
            Lookup result carrying candidates in provider rank order.
        """
        pass

    @abstractmethod
    async def fetch_full(self, movie_id: int, locale: str) -> LookupResult:
        """Fetch the full record for a movie id.

        Args:
            movie_id: Provider movie id.
            locale: ISO 639-1 language code.

        Returns:
            Lookup result carrying a hydrated record.
        """
        pass
