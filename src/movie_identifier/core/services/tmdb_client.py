"""TMDb lookup client implementation."""

import asyncio
from typing import Any, Dict, List, Optional

import aiohttp

from ...config.models import Config
from ...infrastructure.logging import LoggerMixin
from ...utils import LookupClientError
from ..interfaces import ILookupClient
from ..models import CandidateRecord, CollectionInfo, LookupResult, MetadataRecord

# Failures that turn into an ERROR result instead of aborting the batch
_LOOKUP_ERRORS = (
    aiohttp.ClientError,
    asyncio.TimeoutError,
    LookupClientError,
    ValueError,
    KeyError,
    TypeError,
)


class TMDbLookupClient(ILookupClient, LoggerMixin):
    """Lookup client backed by the TMDb v3 REST API."""

    def __init__(self, config: Config) -> None:
        """Initialize TMDb client.

        Args:
            config: Application configuration.
        """
        self._tmdb_config = config.tmdb
        self._session: Optional[aiohttp.ClientSession] = None
        self._image_base_url: Optional[str] = None

    async def find_by_external_id(self, imdb_id: str) -> LookupResult:
        """Find movies by IMDb id through ``/find``."""
        try:
            data = await self._get_json(f"/find/{imdb_id}", {"external_source": "imdb_id"})
            candidates = self._parse_candidates((data or {}).get("movie_results"))
        except _LOOKUP_ERRORS as e:
            return self._failed(f"IMDb lookup for {imdb_id} failed: {e}")

        self.logger.debug(f"IMDb lookup {imdb_id}: {len(candidates)} candidate(s)")
        return LookupResult.from_candidates(candidates)

    async def search_by_text(self, text: str, year: Optional[int] = None) -> LookupResult:
        """Search movies by title through ``/search/movie``."""
        params = {"query": text, "include_adult": "false"}
        if year is not None:
            params["year"] = str(year)

        try:
            data = await self._get_json("/search/movie", params)
            candidates = self._parse_candidates((data or {}).get("results"))
        except _LOOKUP_ERRORS as e:
            return self._failed(f"Search for '{text}' (year={year}) failed: {e}")

        self.logger.debug(f"Search '{text}' (year={year}): {len(candidates)} candidate(s)")
        return LookupResult.from_candidates(candidates)

    async def fetch_full(self, movie_id: int, locale: str) -> LookupResult:
        """Fetch the full movie record through ``/movie/{id}``."""
        try:
            data = await self._get_json(f"/movie/{movie_id}", {"language": locale})
            if data is None:
                self.logger.info(f"TMDb has no movie with id {movie_id}")
                return LookupResult.empty()
            image_base_url = await self._get_image_base_url()
            record = self._parse_movie(data, image_base_url)
        except _LOOKUP_ERRORS as e:
            return self._failed(f"Fetching movie {movie_id} failed: {e}")

        return LookupResult.from_record(record)

    async def _get_image_base_url(self) -> str:
        """Get the image base URL from ``/configuration``, cached per client.

        Falls back to the configured base URL when the call fails.
        """
        if self._image_base_url is None:
            try:
                data = await self._get_json("/configuration", {})
                self._image_base_url = str(data["images"]["secure_base_url"]).rstrip("/")
            except _LOOKUP_ERRORS as e:
                self.logger.warning(f"Using default image base URL, /configuration failed: {e}")
                self._image_base_url = self._tmdb_config.image_base_url
        return self._image_base_url

    async def _get_json(self, path: str, params: Dict[str, str]) -> Any:
        """Perform a GET request against the API.

        Returns:
            Decoded JSON payload, or None for 404 responses.

        Raises:
            LookupClientError: If the payload is not a JSON object.
            aiohttp.ClientError: If the request fails.
        """
        url = f"{self._tmdb_config.base_url}{path}"
        query = {"api_key": self._tmdb_config.api_key, **params}

        async with self._get_session().get(url, params=query) as response:
            if response.status == 404:
                return None
            response.raise_for_status()
            data = await response.json()

        if not isinstance(data, dict):
            raise LookupClientError(f"Unexpected payload from {path}: {type(data).__name__}")
        return data

    def _parse_candidates(self, results: Any) -> List[CandidateRecord]:
        """Parse search hits, keeping provider order."""
        if not isinstance(results, list):
            return []

        return [
            CandidateRecord(
                movie_id=item["id"],
                title=item.get("title") or "",
                original_title=item.get("original_title"),
                release_date=item.get("release_date") or None,
                popularity=item.get("popularity"),
            )
            for item in results
            if isinstance(item, dict) and item.get("id") is not None
        ]

    def _parse_movie(self, data: Dict[str, Any], image_base_url: str) -> MetadataRecord:
        """Parse a ``/movie/{id}`` payload into a metadata record."""
        poster_path = data.get("poster_path")
        backdrop_path = data.get("backdrop_path")

        collection = None
        collection_data = data.get("belongs_to_collection")
        if isinstance(collection_data, dict) and collection_data.get("id") is not None:
            collection_poster = collection_data.get("poster_path")
            collection = CollectionInfo(
                collection_id=collection_data["id"],
                name=collection_data.get("name") or "",
                poster_path=collection_poster,
                poster_url=self._image_url(
                    image_base_url, self._tmdb_config.poster_size, collection_poster
                ),
            )

        return MetadataRecord(
            movie_id=data["id"],
            title=data.get("title") or "",
            overview=data.get("overview") or "",
            imdb_id=data.get("imdb_id") or "",
            vote_average=data.get("vote_average") or 0.0,
            tagline=data.get("tagline") or "",
            release_date=data.get("release_date") or "",
            runtime=data.get("runtime") or 0,
            poster_path=poster_path,
            poster_url=self._image_url(image_base_url, self._tmdb_config.poster_size, poster_path),
            backdrop_path=backdrop_path,
            backdrop_url=self._image_url(
                image_base_url, self._tmdb_config.backdrop_size, backdrop_path
            ),
            collection=collection,
        )

    @staticmethod
    def _image_url(base_url: str, size: str, path: Optional[str]) -> Optional[str]:
        if not path:
            return None
        return f"{base_url}/{size}{path}"

    def _failed(self, message: str) -> LookupResult:
        self.logger.error(message)
        return LookupResult.failed(message)

    def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session.

        Returns:
            HTTP session.
        """
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self._tmdb_config.timeout)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "TMDbLookupClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
