"""Filesystem-backed image cache."""

import asyncio
from pathlib import Path
from typing import Any, Optional

import aiofiles
import aiohttp
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_fixed

from ...config.models import Config
from ...infrastructure.logging import LoggerMixin
from ...utils import ArtifactCacheError
from ..interfaces import ArtifactKind, IArtifactCache

_DOWNLOAD_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, ArtifactCacheError, OSError)


class FileArtifactCache(IArtifactCache, LoggerMixin):
    """Stores downloaded images as ``<artifact_dir>/<kind>/<id>.jpg``."""

    def __init__(self, config: Config) -> None:
        """Initialize artifact cache.

        Args:
            config: Application configuration.
        """
        self._root = Path(config.storage.artifact_dir)
        self._artifacts_config = config.artifacts
        self._session: Optional[aiohttp.ClientSession] = None

    def path_for(self, kind: ArtifactKind, item_id: int) -> Path:
        """Get the cache location of an artifact."""
        return self._root / kind.value / f"{item_id}.jpg"

    def exists(self, kind: ArtifactKind, item_id: int) -> bool:
        return self.path_for(kind, item_id).is_file()

    async def download_and_store(self, url: str, kind: ArtifactKind, item_id: int) -> bool:
        target = self.path_for(kind, item_id)

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self._artifacts_config.retry_attempts),
                wait=wait_fixed(self._artifacts_config.retry_wait_seconds),
                retry=retry_if_exception_type(_DOWNLOAD_ERRORS),
                reraise=True,
            ):
                with attempt:
                    await self._download(url, target)
        except _DOWNLOAD_ERRORS as e:
            self.logger.warning(f"Failed to download {kind.value} for {item_id} from {url}: {e}")
            return False

        self.logger.debug(f"Stored {kind.value} for {item_id} at {target}")
        return True

    def purge(self, movie_id: int) -> None:
        # Collection posters are shared between movies and stay cached
        for kind in (ArtifactKind.POSTER, ArtifactKind.BACKDROP):
            path = self.path_for(kind, movie_id)
            try:
                path.unlink()
                self.logger.debug(f"Removed cached {kind.value} for {movie_id}")
            except FileNotFoundError:
                continue
            except OSError as e:
                self.logger.warning(f"Could not remove {path}: {e}")

    async def _download(self, url: str, target: Path) -> None:
        """Download to a temporary file and move it into place.

        Raises:
            ArtifactCacheError: If the response is empty.
            aiohttp.ClientError: If the request fails.
        """
        target.parent.mkdir(parents=True, exist_ok=True)
        partial = target.with_suffix(".part")

        async with self._get_session().get(url) as response:
            response.raise_for_status()
            content = await response.read()

        if not content:
            raise ArtifactCacheError(f"Empty response from {url}")

        async with aiofiles.open(partial, "wb") as f:
            await f.write(content)
        partial.replace(target)

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self._artifacts_config.download_timeout)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "FileArtifactCache":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
