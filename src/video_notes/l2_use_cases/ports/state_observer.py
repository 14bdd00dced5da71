"""Port: UI-facing state observer -- the core's only outbound notification channel."""

from __future__ import annotations

from typing import Protocol

from video_notes.l1_entities.camera import CameraState, Facing
from video_notes.l1_entities.errors import ErrorReport
from video_notes.l1_entities.session import Session
from video_notes.l1_entities.snapshot import Snapshot
from video_notes.l1_entities.submission import SubmissionResult


class StateObserver(Protocol):
    """Receives every user-visible state change. Called on the event loop thread."""

    def on_session_changed(self, session: Session) -> None: ...

    def on_camera_changed(self, state: CameraState, facing: Facing | None) -> None: ...

    def on_snapshot(self, snapshot: Snapshot) -> None: ...

    def on_submission_pending(self, pending: bool) -> None: ...

    def on_submission_result(self, result: SubmissionResult) -> None: ...

    def on_error_changed(self, report: ErrorReport | None) -> None: ...

    def on_speaking_changed(self, speaking: bool) -> None: ...
