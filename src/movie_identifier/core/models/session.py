"""Identification session state."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from .file_descriptor import FileDescriptor


class SessionState(str, Enum):
    """Lifecycle of one identification batch."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class IdentificationSession(BaseModel):
    """Process-scoped state for one batch run."""

    descriptors: List[FileDescriptor] = Field(
        default_factory=list, description="Files to identify, in processing order"
    )
    override_id: Optional[int] = Field(
        None, description="Manual movie id; disables searching when set"
    )
    previous_id: Optional[int] = Field(
        None, description="Movie id the files were mapped to before re-identification"
    )
    locale: str = Field(default="en", description="ISO 639-1 language code")
    cancel_requested: bool = Field(default=False, description="Cooperative cancel flag")
    count: int = Field(default=0, description="Descriptors processed so far")
    state: SessionState = Field(default=SessionState.IDLE, description="Lifecycle state")

    @property
    def is_override(self) -> bool:
        """Check if this session identifies manually against a fixed id."""
        return self.override_id is not None and self.override_id > 0
