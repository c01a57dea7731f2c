"""Core data models."""

from .file_descriptor import FileDescriptor
from .lookup_result import LookupResult, LookupStatus
from .movie import (
    UNIDENTIFIED_ID,
    CandidateRecord,
    CollectionInfo,
    MetadataRecord,
    PersistedMovie,
)
from .processing_result import (
    BatchSummary,
    IdentificationOutcome,
    ItemStatus,
    MappingAction,
    ReconciliationOutcome,
    Resolution,
)
from .session import IdentificationSession, SessionState

__all__ = [
    "UNIDENTIFIED_ID",
    "FileDescriptor",
    "CandidateRecord",
    "CollectionInfo",
    "MetadataRecord",
    "PersistedMovie",
    "LookupResult",
    "LookupStatus",
    "Resolution",
    "ReconciliationOutcome",
    "MappingAction",
    "ItemStatus",
    "IdentificationOutcome",
    "BatchSummary",
    "IdentificationSession",
    "SessionState",
]
