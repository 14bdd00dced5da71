"""Use case: send the snapshot and notes to the summarizer and keep the latest result."""

from __future__ import annotations

import logging

from video_notes.l1_entities.errors import NoSnapshotError, SubmissionInProgressError, SubmissionTransportError
from video_notes.l1_entities.snapshot import Snapshot
from video_notes.l1_entities.submission import SubmissionRequest, SubmissionResult
from video_notes.l2_use_cases.ports.state_observer import StateObserver
from video_notes.l2_use_cases.ports.summarizer import SummarizationService

log = logging.getLogger('vn.submit')


class SubmissionPipeline:
    """One request at a time, no automatic retry.

    Failures become ``SubmissionResult.failure`` rather than exceptions. The
    previous result stays visible until a new request completes.
    """

    def __init__(self, service: SummarizationService, observer: StateObserver | None = None) -> None:
        self._service = service
        self._observer = observer
        self.result: SubmissionResult | None = None
        self._in_flight = False

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    async def submit(self, snapshot: Snapshot | None, note: str) -> SubmissionResult:
        """Submit *snapshot* and *note*.

        Raises NoSnapshotError without touching the network when there is no
        snapshot, and SubmissionInProgressError while an earlier call is unresolved.
        """
        if snapshot is None:
            raise NoSnapshotError('Take a snapshot before submitting')
        if self._in_flight:
            raise SubmissionInProgressError('A submission is already in progress')

        request = SubmissionRequest(snapshot=snapshot, note=note)
        log.info(
            'Submitting %s (%d bytes) with %d chars of notes',
            snapshot.filename,
            len(snapshot.image_bytes),
            len(note),
        )
        self._set_pending(True)
        try:
            summary = await self._service.summarize(request)
            result = SubmissionResult.success(summary)
            log.info('Summary received (%d chars)', len(summary))
        except SubmissionTransportError as e:
            log.error('Submission failed: %s', e)
            result = SubmissionResult.failure(str(e))
        except Exception as e:
            log.error('Submission failed unexpectedly', exc_info=True)
            result = SubmissionResult.failure(f'{type(e).__name__}: {e}')
        finally:
            self._set_pending(False)

        self.result = result
        if self._observer is not None:
            self._observer.on_submission_result(result)
        return result

    def _set_pending(self, pending: bool) -> None:
        self._in_flight = pending
        if self._observer is not None:
            self._observer.on_submission_pending(pending)
