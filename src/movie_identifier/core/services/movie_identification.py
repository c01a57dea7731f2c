"""Batch identification driver."""

import asyncio
import time
from typing import Iterable, Optional

from ...infrastructure.logging import LoggerMixin
from ...utils import IdentificationError, StoreError
from ..interfaces import (
    LANGUAGE_PREFERENCE,
    ICandidateResolver,
    IPreferenceStore,
    IProgressCallback,
    IReconciliationEngine,
)
from ..models import (
    UNIDENTIFIED_ID,
    BatchSummary,
    FileDescriptor,
    IdentificationOutcome,
    IdentificationSession,
    ItemStatus,
    MappingAction,
    SessionState,
)


class MovieIdentification(LoggerMixin):
    """Identifies a batch of files one after the other.

    Lifecycle: IDLE -> RUNNING -> COMPLETED or CANCELLED. Cancellation is
    cooperative and checked before each file; a lookup already in flight
    finishes first. Failures of a single file are logged and reported
    through the progress callback; ``start`` never raises for them.
    """

    def __init__(
        self,
        descriptors: Iterable[FileDescriptor],
        resolver: ICandidateResolver,
        engine: IReconciliationEngine,
        preference_store: IPreferenceStore,
        callback: Optional[IProgressCallback] = None,
    ):
        """Initialize a batch.

        Args:
            descriptors: Files to identify, in processing order.
            resolver: Candidate resolver.
            engine: Reconciliation engine.
            preference_store: Source of the default language.
            callback: Receives one call per processed file.
        """
        self._resolver = resolver
        self._engine = engine
        self._callback = callback
        self._session = IdentificationSession(
            descriptors=list(descriptors),
            locale=preference_store.get_string(LANGUAGE_PREFERENCE, "en"),
        )
        self._summary = BatchSummary()

    @property
    def session(self) -> IdentificationSession:
        return self._session

    @property
    def state(self) -> SessionState:
        return self._session.state

    @property
    def summary(self) -> BatchSummary:
        return self._summary

    def set_movie_id(self, movie_id: int) -> None:
        """Disable searching and identify every file as this movie id.

        Ids of zero or below leave automatic identification on.
        """
        self._require_idle()
        self._session.override_id = movie_id

    def set_current_movie_id(self, old_movie_id: int) -> None:
        """Set the movie id the files were mapped to before re-identification."""
        self._require_idle()
        self._session.previous_id = old_movie_id

    set_override_id = set_movie_id
    set_previous_id = set_current_movie_id

    def set_language(self, language: str) -> None:
        """Set the language of fetched records.

        Accepts two-letter ISO 639-1 language codes, i.e. "en".
        """
        self._require_idle()
        self._session.locale = language

    def cancel(self) -> None:
        """Stop before the next file."""
        self._session.cancel_requested = True

    def start_in_background(self) -> "asyncio.Task[BatchSummary]":
        """Schedule ``start`` on the running event loop and return its task."""
        return asyncio.create_task(self.start())

    async def start(self) -> BatchSummary:
        """Identify every file in the batch.

        Returns:
            Summary of the processed files.
        """
        session = self._session
        if session.state != SessionState.IDLE:
            self.logger.warning(f"Identification already {session.state.value}, not restarting")
            return self._summary

        session.state = SessionState.RUNNING
        started = time.time()
        mode = f"manual as {session.override_id}" if session.is_override else "automatic"
        self.logger.info(
            f"Identifying {len(session.descriptors)} file(s), {mode}, language={session.locale}"
        )

        for descriptor in session.descriptors:
            if session.cancel_requested:
                session.state = SessionState.CANCELLED
                self._summary.cancelled = True
                self.logger.info(f"Identification cancelled after {session.count} file(s)")
                break

            session.count += 1
            outcome = await self._identify(descriptor)
            self._summary.add_result(outcome)
            self._perform_callback(outcome)

        if session.state == SessionState.RUNNING:
            session.state = SessionState.COMPLETED

        self._summary.total_processing_time_seconds = time.time() - started
        return self._summary

    def _require_idle(self) -> None:
        if self._session.state != SessionState.IDLE:
            raise IdentificationError(
                f"Cannot change settings of a batch that is {self._session.state.value}"
            )

    async def _identify(self, descriptor: FileDescriptor) -> IdentificationOutcome:
        """Resolve and reconcile a single file."""
        session = self._session
        override_id = session.override_id if session.is_override else None

        try:
            resolution = await self._resolver.resolve(descriptor, session.locale, override_id)
            record = resolution.record
            reconciliation = await self._engine.reconcile(
                descriptor, record, override_id=override_id, previous_id=session.previous_id
            )
        except StoreError as e:
            self.logger.error(f"Could not store identification of {descriptor.filename}: {e}")
            return IdentificationOutcome(
                filepath=descriptor.filepath, status=ItemStatus.FAILED, error_message=str(e)
            )
        except Exception as e:
            self.logger.exception(f"Failed to identify {descriptor.filename}: {e}")
            return IdentificationOutcome(
                filepath=descriptor.filepath, status=ItemStatus.FAILED, error_message=str(e)
            )

        if override_id is not None and reconciliation.action == MappingAction.SKIPPED:
            return IdentificationOutcome(
                filepath=descriptor.filepath,
                status=ItemStatus.FAILED,
                movie_id=reconciliation.movie_id,
                action=reconciliation.action,
                error_message=f"Movie {override_id} could not be fetched",
            )

        identified = reconciliation.movie_id != UNIDENTIFIED_ID
        return IdentificationOutcome(
            filepath=descriptor.filepath,
            status=ItemStatus.IDENTIFIED if identified else ItemStatus.UNIDENTIFIED,
            movie_id=reconciliation.movie_id,
            title=record.title if reconciliation.movie_id == record.movie_id else "",
            strategy=resolution.strategy,
            action=reconciliation.action,
        )

    def _perform_callback(self, outcome: IdentificationOutcome) -> None:
        if self._callback is None:
            return
        try:
            self._callback.on_movie_added(
                outcome.title, outcome.movie_id, self._session.count, outcome.error_message
            )
        except Exception as e:
            self.logger.error(f"Progress callback failed: {e}")
