"""Textual Message subclasses -- contracts between the controller and the App."""

from __future__ import annotations

import logging
from collections.abc import Callable

from textual.message import Message

from video_notes.l1_entities.camera import CameraState, Facing
from video_notes.l1_entities.errors import ErrorReport
from video_notes.l1_entities.session import Session
from video_notes.l1_entities.snapshot import Snapshot
from video_notes.l1_entities.submission import SubmissionResult

log = logging.getLogger('vn.app')


class SessionChanged(Message):
    """Posted when the transcription state, mute flag or note text changes."""

    def __init__(self, session: Session) -> None:
        super().__init__()
        self.session = session


class CameraChanged(Message):
    def __init__(self, state: CameraState, facing: Facing | None) -> None:
        super().__init__()
        self.state = state
        self.facing = facing


class SnapshotTaken(Message):
    def __init__(self, snapshot: Snapshot) -> None:
        super().__init__()
        self.snapshot = snapshot


class SubmissionPending(Message):
    def __init__(self, pending: bool) -> None:
        super().__init__()
        self.pending = pending


class SubmissionFinished(Message):
    """Posted when a submission resolves, successfully or not."""

    def __init__(self, result: SubmissionResult) -> None:
        super().__init__()
        self.result = result


class ErrorChanged(Message):
    """Posted when the current error is set or cleared (``report`` is None)."""

    def __init__(self, report: ErrorReport | None) -> None:
        super().__init__()
        self.report = report


class SpeakingChanged(Message):
    def __init__(self, speaking: bool) -> None:
        super().__init__()
        self.speaking = speaking


class MessagePostingObserver:
    """StateObserver that forwards every notification to a Textual message pump.

    Created before the App exists; notifications arriving before attach() are
    dropped because the App reads the controller state on mount anyway.
    """

    def __init__(self) -> None:
        self._post: Callable[[Message], object] | None = None

    def attach(self, post_message: Callable[[Message], object]) -> None:
        self._post = post_message

    def _emit(self, message: Message) -> None:
        if self._post is None:
            log.debug('Dropped %s before attach', type(message).__name__)
            return
        self._post(message)

    def on_session_changed(self, session: Session) -> None:
        self._emit(SessionChanged(session.model_copy()))

    def on_camera_changed(self, state: CameraState, facing: Facing | None) -> None:
        self._emit(CameraChanged(state, facing))

    def on_snapshot(self, snapshot: Snapshot) -> None:
        self._emit(SnapshotTaken(snapshot))

    def on_submission_pending(self, pending: bool) -> None:
        self._emit(SubmissionPending(pending))

    def on_submission_result(self, result: SubmissionResult) -> None:
        self._emit(SubmissionFinished(result))

    def on_error_changed(self, report: ErrorReport | None) -> None:
        self._emit(ErrorChanged(report))

    def on_speaking_changed(self, speaking: bool) -> None:
        self._emit(SpeakingChanged(speaking))
