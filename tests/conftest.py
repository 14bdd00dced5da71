"""Shared test fixtures and protocol-conforming fakes."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import datetime, timezone

import numpy as np
import pytest

from video_notes.l1_entities.camera import CameraState, Facing
from video_notes.l1_entities.config import AppConfig
from video_notes.l1_entities.errors import ErrorReport, MediaAcquisitionError
from video_notes.l1_entities.recognition import RecognitionEvent
from video_notes.l1_entities.session import Session
from video_notes.l1_entities.snapshot import Snapshot
from video_notes.l1_entities.submission import SubmissionRequest, SubmissionResult
from video_notes.l4_frameworks_and_drivers.infra_config import build_app_config

# --- Protocol-conforming Fakes ---


class FakeVideoStream:
    """Fake live stream; ``frame`` is what latest_frame() returns."""

    def __init__(self, facing: Facing, frame: np.ndarray | None = None, timeline: list[str] | None = None):
        self._facing = facing
        self.frame = frame if frame is not None else np.zeros((48, 64, 3), dtype=np.uint8)
        self._stopped = False
        self._timeline = timeline
        self.stop_calls = 0

    @property
    def facing(self) -> Facing:
        return self._facing

    @property
    def stopped(self) -> bool:
        return self._stopped

    def latest_frame(self) -> np.ndarray | None:
        return self.frame

    def stop(self) -> None:
        self.stop_calls += 1
        if not self._stopped and self._timeline is not None:
            self._timeline.append(f'stop:{self._facing.value}')
        self._stopped = True


class FakeCameraDevice:
    """Fake camera. ``timeline`` records request/stop order across streams."""

    def __init__(self):
        self.timeline: list[str] = []
        self.streams: list[FakeVideoStream] = []
        self.failures: dict[Facing, MediaAcquisitionError] = {}
        self.gate: asyncio.Event | None = None

    def fail_for(self, facing: Facing, error: MediaAcquisitionError) -> None:
        self.failures[facing] = error

    async def request_stream(self, facing: Facing) -> FakeVideoStream:
        self.timeline.append(f'request:{facing.value}')
        if self.gate is not None:
            await self.gate.wait()
        error = self.failures.get(facing)
        if error is not None:
            raise error
        stream = FakeVideoStream(facing, timeline=self.timeline)
        self.streams.append(stream)
        return stream

    def stop_stream(self, stream: FakeVideoStream) -> None:
        stream.stop()

    @property
    def live_streams(self) -> list[FakeVideoStream]:
        return [s for s in self.streams if not s.stopped]


class FakeImageEncoder:
    mime_type = 'image/jpeg'

    def __init__(self, payload: bytes = b'\xff\xd8fake-jpeg\xff\xd9'):
        self.payload = payload
        self.encoded_shapes: list[tuple[int, ...]] = []

    def encode(self, frame: np.ndarray) -> bytes:
        self.encoded_shapes.append(frame.shape)
        return self.payload


class FakeSpeechRecognizer:
    """Fake recognizer. Tests drive it through emit()/final()/interim()."""

    def __init__(self, supported: bool = True):
        self._supported = supported
        self.publish: Callable[[RecognitionEvent], None] | None = None
        self.publishers: list[Callable[[RecognitionEvent], None]] = []
        self.start_calls = 0
        self.stop_calls = 0
        self.is_supported_calls = 0

    @property
    def running(self) -> bool:
        return self.publish is not None

    def is_supported(self) -> bool:
        self.is_supported_calls += 1
        return self._supported

    def start_continuous(self, publish: Callable[[RecognitionEvent], None]) -> None:
        self.start_calls += 1
        self.publish = publish
        self.publishers.append(publish)

    def stop(self) -> None:
        self.stop_calls += 1
        self.publish = None

    def final(self, text: str) -> None:
        assert self.publish is not None, 'recognizer is not running'
        self.publish(RecognitionEvent(text=text, is_final=True))

    def interim(self, text: str) -> None:
        assert self.publish is not None, 'recognizer is not running'
        self.publish(RecognitionEvent(text=text, is_final=False))


class FakeSpeechSynthesizer:
    def __init__(self, supported: bool = True, error: Exception | None = None):
        self._supported = supported
        self._error = error
        self.spoken: list[str] = []
        self.cancel_calls = 0
        self.on_end: Callable[[], None] | None = None

    def is_supported(self) -> bool:
        return self._supported

    def speak(self, text: str, on_end: Callable[[], None]) -> None:
        if self._error is not None:
            raise self._error
        self.spoken.append(text)
        self.on_end = on_end

    def cancel(self) -> None:
        self.cancel_calls += 1
        self.on_end = None

    def finish(self) -> None:
        """Simulate the utterance ending naturally."""
        assert self.on_end is not None
        on_end, self.on_end = self.on_end, None
        on_end()


class FakeSummarizationService:
    """Fake summarizer: returns ``response`` or raises ``error``; optional gate to hold a request open."""

    def __init__(self, response: str = 'Fake summary', error: Exception | None = None):
        self.response = response
        self.error = error
        self.requests: list[SubmissionRequest] = []
        self.gate: asyncio.Event | None = None

    async def summarize(self, request: SubmissionRequest) -> str:
        self.requests.append(request)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.response


class RecordingObserver:
    """StateObserver that records every notification."""

    def __init__(self):
        self.sessions: list[Session] = []
        self.camera: list[tuple[CameraState, Facing | None]] = []
        self.snapshots: list[Snapshot] = []
        self.pending: list[bool] = []
        self.results: list[SubmissionResult] = []
        self.errors: list[ErrorReport | None] = []
        self.speaking: list[bool] = []

    def on_session_changed(self, session: Session) -> None:
        self.sessions.append(session.model_copy())

    def on_camera_changed(self, state: CameraState, facing: Facing | None) -> None:
        self.camera.append((state, facing))

    def on_snapshot(self, snapshot: Snapshot) -> None:
        self.snapshots.append(snapshot)

    def on_submission_pending(self, pending: bool) -> None:
        self.pending.append(pending)

    def on_submission_result(self, result: SubmissionResult) -> None:
        self.results.append(result)

    def on_error_changed(self, report: ErrorReport | None) -> None:
        self.errors.append(report)

    def on_speaking_changed(self, speaking: bool) -> None:
        self.speaking.append(speaking)


def make_snapshot(image_bytes: bytes = b'\xff\xd8jpeg\xff\xd9', width: int = 64, height: int = 48) -> Snapshot:
    return Snapshot(
        image_bytes=image_bytes,
        captured_at=datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc),
        width=width,
        height=height,
    )


# --- Fixtures ---


@pytest.fixture
def app_config() -> AppConfig:
    return build_app_config({})


@pytest.fixture
def camera_device() -> FakeCameraDevice:
    return FakeCameraDevice()


@pytest.fixture
def recognizer() -> FakeSpeechRecognizer:
    return FakeSpeechRecognizer()


@pytest.fixture
def synthesizer() -> FakeSpeechSynthesizer:
    return FakeSpeechSynthesizer()


@pytest.fixture
def summarizer() -> FakeSummarizationService:
    return FakeSummarizationService()


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()
