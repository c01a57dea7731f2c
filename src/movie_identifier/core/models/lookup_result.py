"""Lookup result data models."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from .movie import CandidateRecord, MetadataRecord


class LookupStatus(str, Enum):
    """Outcome of a single metadata provider call."""

    FOUND = "found"
    EMPTY = "empty"
    ERROR = "error"


class LookupResult(BaseModel):
    """Result of one metadata provider call.

    Transport failures are carried as ``ERROR`` instead of being raised, so
    callers decide explicitly whether to continue.
    """

    status: LookupStatus = Field(..., description="Call outcome")
    candidates: List[CandidateRecord] = Field(
        default_factory=list, description="Search hits in provider rank order"
    )
    record: Optional[MetadataRecord] = Field(None, description="Hydrated record")
    error: Optional[str] = Field(None, description="Error message for ERROR results")

    @property
    def is_found(self) -> bool:
        """Check if the call produced something usable."""
        return self.status == LookupStatus.FOUND

    @property
    def best(self) -> Optional[CandidateRecord]:
        """Get the top-ranked candidate."""
        return self.candidates[0] if self.candidates else None

    @classmethod
    def from_candidates(cls, candidates: List[CandidateRecord]) -> "LookupResult":
        """Build a search result, EMPTY when there are no candidates."""
        status = LookupStatus.FOUND if candidates else LookupStatus.EMPTY
        return cls(status=status, candidates=candidates)

    @classmethod
    def from_record(cls, record: MetadataRecord) -> "LookupResult":
        """Build a FOUND result for a hydrated record."""
        return cls(status=LookupStatus.FOUND, record=record)

    @classmethod
    def empty(cls) -> "LookupResult":
        """Build an EMPTY result."""
        return cls(status=LookupStatus.EMPTY)

    @classmethod
    def failed(cls, error: str) -> "LookupResult":
        """Build an ERROR result."""
        return cls(status=LookupStatus.ERROR, error=error)
