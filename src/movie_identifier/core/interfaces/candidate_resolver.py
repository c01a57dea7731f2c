"""Candidate resolver interface."""

from abc import ABC, abstractmethod
from typing import Optional

from ..models import FileDescriptor, Resolution


class ICandidateResolver(ABC):
    """Interface for resolving a file descriptor to a metadata record."""

    @abstractmethod
    async def resolve(
        self, descriptor: FileDescriptor, locale: str, override_id: Optional[int] = None
    ) -> Resolution:
        """Resolve one descriptor.

        Args:
            descriptor: File to identify.
            locale: ISO 639-1 language code for the full record.
            override_id: Manual movie id; bypasses searching when set.

        Returns:
            Resolution whose record is the UNIDENTIFIED sentinel when nothing matched.
        """
        pass
