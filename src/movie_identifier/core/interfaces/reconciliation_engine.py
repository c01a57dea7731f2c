"""Reconciliation engine interface."""

from abc import ABC, abstractmethod
from typing import Optional

from ..models import FileDescriptor, MetadataRecord, ReconciliationOutcome


class IReconciliationEngine(ABC):
    """Interface for merging resolved records into the library store."""

    @abstractmethod
    async def reconcile(
        self,
        descriptor: FileDescriptor,
        record: MetadataRecord,
        override_id: Optional[int] = None,
        previous_id: Optional[int] = None,
    ) -> ReconciliationOutcome:
        """Persist the outcome of identifying one file.

        Args:
            descriptor: File that was identified.
            record: Resolved record or the UNIDENTIFIED sentinel.
            override_id: Manual movie id when identifying manually.
            previous_id: Movie id the file was mapped to before; defaults to the
                stored mapping.

        Returns:
            Description of what changed.

        Raises:
            StoreError: If the store write fails. Nothing is committed in that case.
        """
        pass
