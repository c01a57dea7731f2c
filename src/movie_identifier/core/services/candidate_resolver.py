"""Candidate resolver service implementation."""

from typing import Awaitable, Callable, List, NamedTuple, Optional

from ...infrastructure.logging import LoggerMixin
from ..interfaces import ICandidateResolver, ILookupClient
from ..models import FileDescriptor, LookupResult, LookupStatus, MetadataRecord, Resolution


class SearchStrategy(NamedTuple):
    """One step of the fallback chain."""

    name: str
    lookup: Callable[[], Awaitable[LookupResult]]


class CandidateResolver(ICandidateResolver, LoggerMixin):
    """Resolves a file to a movie through an ordered, short-circuiting chain.

    The chain, each step running only while nothing has been found:
        1. IMDb id embedded in the filename
        2. title + year
        3. title
        4. parent folder name + year
        5. parent folder name

    Year-filtered steps are left out when the year is unknown or negative.
    The top-ranked candidate of the first non-empty step is hydrated into a
    full record. A manual override id bypasses the chain.
    """

    def __init__(self, lookup_client: ILookupClient):
        """Initialize candidate resolver.

        Args:
            lookup_client: Metadata provider client.
        """
        self._lookup_client = lookup_client

    async def resolve(
        self, descriptor: FileDescriptor, locale: str, override_id: Optional[int] = None
    ) -> Resolution:
        if override_id is not None and override_id > 0:
            self.logger.info(f"Manual identification of {descriptor.filename} as {override_id}")
            record = await self._hydrate(override_id, locale)
            return Resolution(
                record=record or MetadataRecord.unidentified(),
                strategy="override" if record else None,
                attempted=["override"],
            )

        attempted: List[str] = []
        for strategy in self.build_strategies(descriptor):
            attempted.append(strategy.name)
            result = await strategy.lookup()

            if result.status == LookupStatus.ERROR:
                self.logger.warning(
                    f"{strategy.name} lookup failed for {descriptor.filename}, "
                    f"continuing: {result.error}"
                )
                continue

            best = result.best
            if best is None:
                continue

            self.logger.info(
                f"{descriptor.filename}: {strategy.name} matched '{best.title}' ({best.movie_id})"
            )
            record = await self._hydrate(best.movie_id, locale)
            return Resolution(
                record=record or MetadataRecord.unidentified(),
                strategy=strategy.name,
                attempted=attempted,
            )

        self.logger.info(f"No match for {descriptor.filename} after {len(attempted)} lookup(s)")
        return Resolution(record=MetadataRecord.unidentified(), attempted=attempted)

    def build_strategies(self, descriptor: FileDescriptor) -> List[SearchStrategy]:
        """Build the applicable fallback steps for a descriptor, in order.

        Args:
            descriptor: File to identify.

        Returns:
            Steps whose inputs are present.
        """
        client = self._lookup_client
        strategies: List[SearchStrategy] = []

        if descriptor.has_imdb_id:
            imdb_id = descriptor.imdb_id or ""
            strategies.append(
                SearchStrategy("imdb_id", lambda: client.find_by_external_id(imdb_id))
            )

        for label, text in (("title", descriptor.title), ("folder", descriptor.parent_folder_name)):
            if not text:
                continue
            if descriptor.has_year:
                strategies.append(
                    SearchStrategy(
                        f"{label}_year",
                        self._search(text, descriptor.release_year),
                    )
                )
            strategies.append(SearchStrategy(label, self._search(text, None)))

        return strategies

    def _search(self, text: str, year: Optional[int]) -> Callable[[], Awaitable[LookupResult]]:
        return lambda: self._lookup_client.search_by_text(text, year)

    async def _hydrate(self, movie_id: int, locale: str) -> Optional[MetadataRecord]:
        """Fetch the full record, or None when the provider has nothing usable."""
        result = await self._lookup_client.fetch_full(movie_id, locale)
        if result.is_found and result.record is not None:
            return result.record

        if result.status == LookupStatus.ERROR:
            self.logger.warning(f"Could not fetch movie {movie_id}: {result.error}")
        else:
            self.logger.warning(f"Movie {movie_id} not found at the provider")
        return None
