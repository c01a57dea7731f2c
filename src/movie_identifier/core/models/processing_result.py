"""Processing result data models."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from .movie import UNIDENTIFIED_ID, MetadataRecord


class MappingAction(str, Enum):
    """What reconciliation did to a file's mapping."""

    CREATED = "created"
    UNCHANGED = "unchanged"
    UPGRADED = "upgraded"
    REPOINTED = "repointed"
    REPLACED = "replaced"
    SKIPPED = "skipped"


class ItemStatus(str, Enum):
    """Final status of one descriptor."""

    IDENTIFIED = "identified"
    UNIDENTIFIED = "unidentified"
    FAILED = "failed"


class Resolution(BaseModel):
    """Result of running the fallback chain for one descriptor."""

    record: MetadataRecord = Field(..., description="Resolved record or the sentinel")
    strategy: Optional[str] = Field(None, description="Strategy that produced the match")
    attempted: List[str] = Field(default_factory=list, description="Strategies that ran")


class ReconciliationOutcome(BaseModel):
    """Result of merging one record into the store."""

    action: MappingAction = Field(..., description="Mapping change performed")
    movie_id: int = Field(..., description="Movie id the path is mapped to afterwards")
    movie_persisted: bool = Field(default=False, description="Whether the movie was upserted")
    deleted_movie_ids: List[int] = Field(
        default_factory=list, description="Movies deleted because nothing maps to them anymore"
    )


class IdentificationOutcome(BaseModel):
    """Result of identifying a single file."""

    filepath: str = Field(..., description="Path of the descriptor")
    status: ItemStatus = Field(..., description="Final status")
    movie_id: int = Field(default=UNIDENTIFIED_ID, description="Resolved movie id")
    title: str = Field(default="", description="Resolved title")
    strategy: Optional[str] = Field(None, description="Strategy that produced the match")
    action: Optional[MappingAction] = Field(None, description="Mapping change performed")
    error_message: Optional[str] = Field(None, description="Error message if the item failed")


class BatchSummary(BaseModel):
    """Summary of an entire identification batch."""

    total_processed: int = Field(default=0, description="Descriptors processed")
    identified: int = Field(default=0, description="Descriptors matched to a movie")
    unidentified: int = Field(default=0, description="Descriptors left unidentified")
    failed: int = Field(default=0, description="Descriptors that failed")
    cancelled: bool = Field(default=False, description="Whether the batch was cancelled")
    total_processing_time_seconds: float = Field(default=0.0, description="Wall time")
    results: List[IdentificationOutcome] = Field(
        default_factory=list, description="Individual results"
    )

    @property
    def success_rate(self) -> float:
        """Calculate the identified share of processed descriptors."""
        if self.total_processed == 0:
            return 0.0
        return self.identified / self.total_processed

    def add_result(self, result: IdentificationOutcome) -> None:
        """Add a per-file result to the summary."""
        self.results.append(result)
        self.total_processed += 1

        if result.status == ItemStatus.IDENTIFIED:
            self.identified += 1
        elif result.status == ItemStatus.UNIDENTIFIED:
            self.unidentified += 1
        else:
            self.failed += 1
