"""File scanner service implementation."""

from pathlib import Path
from typing import List

from ...config.models import Config
from ...infrastructure.logging import LoggerMixin
from ...utils import FileScannerError
from ..interfaces import IFileScanner
from ..models import FileDescriptor


class FileScanner(IFileScanner, LoggerMixin):
    """Finds video files below a directory and builds descriptors for them."""

    def __init__(self, config: Config):
        """Initialize file scanner.

        Args:
            config: Application configuration.
        """
        self._video_extensions = {ext.lower() for ext in config.files.extensions}
        self._ignore_patterns = [pattern.lower() for pattern in config.files.ignore_patterns]
        self._min_size_bytes = config.files.min_file_size_mb * 1024 * 1024
        self._max_depth = config.files.scan_depth

    async def list_movie_files(self, path: Path) -> List[Path]:
        if not path.exists():
            raise FileScannerError(f"Path does not exist: {path}")
        if not path.is_dir():
            raise FileScannerError(f"Path is not a directory: {path}")

        self.logger.info(f"Scanning directory: {path}")
        found: List[Path] = []
        self._scan_recursive(path, found, depth=0)
        found.sort()

        self.logger.info(f"Scan completed: {len(found)} movie file(s)")
        return found

    async def scan_descriptors(self, path: Path) -> List[FileDescriptor]:
        files = await self.list_movie_files(path)
        return [FileDescriptor.from_path(file_path) for file_path in files]

    def is_video_file(self, path: Path) -> bool:
        return path.suffix.lower() in self._video_extensions

    def should_ignore_file(self, path: Path) -> bool:
        filename_lower = path.name.lower()

        if path.name.startswith("."):
            return True

        for pattern in self._ignore_patterns:
            if pattern in filename_lower:
                return True

        try:
            size = path.stat().st_size
        except OSError:
            self.logger.warning(f"Cannot get size for file: {path}")
            return True

        if size < self._min_size_bytes:
            self.logger.debug(f"Ignoring small video file: {path} ({size} bytes)")
            return True

        return False

    def _scan_recursive(self, current_path: Path, found: List[Path], depth: int) -> None:
        if depth > self._max_depth:
            return

        try:
            for item in current_path.iterdir():
                if item.is_file():
                    if self.is_video_file(item) and not self.should_ignore_file(item):
                        found.append(item)
                elif item.is_dir() and not item.name.startswith("."):
                    self._scan_recursive(item, found, depth + 1)
        except PermissionError:
            self.logger.warning(f"Permission denied accessing: {current_path}")
        except OSError as e:
            self.logger.warning(f"Error accessing {current_path}: {e}")
