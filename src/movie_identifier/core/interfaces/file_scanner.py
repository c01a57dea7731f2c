"""File scanner interface."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List

from ..models import FileDescriptor


class IFileScanner(ABC):
    """Interface for discovering movie files and describing them."""

    @abstractmethod
    async def list_movie_files(self, path: Path) -> List[Path]:
        """List all movie files recursively in a directory (flat list).

        Args:
            path: Directory path to scan.

        Returns:
            Sorted list of movie file paths.

        Raises:
            FileScannerError: If the directory cannot be scanned.
        """
        pass

    @abstractmethod
    async def scan_descriptors(self, path: Path) -> List[FileDescriptor]:
        """Build file descriptors for every movie file in a directory.

        Args:
            path: Directory path to scan.

        Returns:
            Descriptors in scan order.

        Raises:
            FileScannerError: If the directory cannot be scanned.
        """
        pass

    @abstractmethod
    def is_video_file(self, path: Path) -> bool:
        """Check if file is a video file."""
        pass

    @abstractmethod
    def should_ignore_file(self, path: Path) -> bool:
        """Check if file should be ignored."""
        pass
