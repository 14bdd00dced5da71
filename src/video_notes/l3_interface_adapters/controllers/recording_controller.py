"""RecordingController -- orchestrates the core components behind the user actions."""

from __future__ import annotations

import logging

from video_notes.l1_entities.camera import CameraState, Facing
from video_notes.l1_entities.config import AppConfig
from video_notes.l1_entities.errors import (
    ErrorCategory,
    NoActiveStreamError,
    NoSnapshotError,
    SubmissionInProgressError,
)
from video_notes.l1_entities.session import Session, TranscriptionState
from video_notes.l1_entities.snapshot import Snapshot
from video_notes.l1_entities.submission import SubmissionResult
from video_notes.l2_use_cases.camera_controller import CameraController
from video_notes.l2_use_cases.error_reporter import ErrorReporter
from video_notes.l2_use_cases.ports.camera import CameraDevice
from video_notes.l2_use_cases.ports.image_encoder import ImageEncoder
from video_notes.l2_use_cases.ports.speech_recognizer import SpeechRecognizer
from video_notes.l2_use_cases.ports.speech_synthesizer import SpeechSynthesizer
from video_notes.l2_use_cases.ports.state_observer import StateObserver
from video_notes.l2_use_cases.ports.summarizer import SummarizationService
from video_notes.l2_use_cases.snapshot_capture import SnapshotCapture
from video_notes.l2_use_cases.speech_output import SpeechOutput
from video_notes.l2_use_cases.submission_pipeline import SubmissionPipeline
from video_notes.l2_use_cases.transcription_session import TranscriptionSession

log = logging.getLogger('vn.controller')


class RecordingController:
    """Central orchestrator bridging the core to the TUI.

    Owns one instance of each core component and wires them to a single
    ErrorReporter and StateObserver. The App (L4) delegates every user action
    to this controller.
    """

    def __init__(
        self,
        config: AppConfig,
        camera_device: CameraDevice,
        image_encoder: ImageEncoder,
        recognizer: SpeechRecognizer,
        synthesizer: SpeechSynthesizer,
        summarizer: SummarizationService,
        observer: StateObserver | None = None,
    ) -> None:
        self._config = config
        self.errors = ErrorReporter(observer)
        self.camera = CameraController(camera_device, self.errors, observer)
        self.transcription = TranscriptionSession(recognizer, self.errors, observer)
        self.snapshots = SnapshotCapture(image_encoder, observer)
        self.speech = SpeechOutput(synthesizer, self.errors, observer)
        self.submissions = SubmissionPipeline(summarizer, observer)

    # --- Read-only views ---

    @property
    def session(self) -> Session:
        return self.transcription.session

    @property
    def note(self) -> str:
        return self.transcription.session.note_buffer

    @property
    def snapshot(self) -> Snapshot | None:
        return self.snapshots.latest

    @property
    def result(self) -> SubmissionResult | None:
        return self.submissions.result

    @property
    def error_message(self) -> str | None:
        return self.errors.message

    # --- Lifecycle ---

    async def start_up(self, facing: Facing | None = None) -> bool:
        """Check recognition capability once and open the default camera."""
        self.transcription.initialize()
        return await self.camera.acquire(facing or self._config.camera.default_facing)

    async def shutdown(self) -> None:
        """Stop listening, silence speech, release the camera."""
        self.speech.cancel()
        await self.transcription.aclose()
        self.camera.release()
        log.info('Controller shut down')

    # --- Note taking ---

    def toggle_note_taking(self) -> TranscriptionState:
        """Start listening from Idle; otherwise stop (which also ends a pause)."""
        if self.transcription.state == TranscriptionState.IDLE:
            self.transcription.start()
        else:
            self.transcription.stop()
        return self.transcription.state

    def toggle_pause(self) -> TranscriptionState:
        """Pause while Listening, resume while Paused, no-op while Idle."""
        state = self.transcription.state
        if state == TranscriptionState.LISTENING:
            self.transcription.pause()
        elif state == TranscriptionState.PAUSED:
            self.transcription.resume()
        else:
            log.debug('toggle_pause ignored while idle')
        return self.transcription.state

    def toggle_mute(self) -> bool:
        return self.transcription.toggle_mute()

    # --- Camera ---

    async def flip_camera(self) -> bool:
        return await self.camera.flip()

    async def retry_camera(self) -> bool:
        """Re-acquire after a failed flip or start-up, using the last requested facing."""
        if self.camera.state == CameraState.ACTIVE:
            return True
        return await self.camera.acquire(self.camera.facing or self._config.camera.default_facing)

    def take_snapshot(self) -> Snapshot | None:
        """Capture the current frame. Returns None when no frame is available yet."""
        try:
            return self.snapshots.capture(self.camera.stream)
        except NoActiveStreamError as e:
            log.info('Snapshot skipped: %s', e)
            return None

    # --- Output ---

    def speak_note(self) -> bool:
        return self.speech.toggle(self.note)

    async def submit(self) -> SubmissionResult | None:
        """Submit the latest snapshot with the current notes.

        Snapshot and note are read before the first suspension point, so no
        other event-loop turn can interleave between the two reads.
        """
        snapshot = self.snapshots.latest
        note = self.transcription.session.note_buffer
        try:
            result = await self.submissions.submit(snapshot, note)
        except (NoSnapshotError, SubmissionInProgressError) as e:
            self.errors.report(ErrorCategory.SUBMISSION, str(e))
            return None
        if result.ok:
            self.errors.clear(ErrorCategory.SUBMISSION)
        return result
