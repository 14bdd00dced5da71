"""Use case: own the single live camera stream -- acquire, flip, release."""

from __future__ import annotations

import logging

from video_notes.l1_entities.camera import CameraState, Facing
from video_notes.l1_entities.errors import ErrorCategory, MediaAcquisitionError
from video_notes.l2_use_cases.error_reporter import ErrorReporter
from video_notes.l2_use_cases.ports.camera import CameraDevice, VideoStream
from video_notes.l2_use_cases.ports.state_observer import StateObserver

log = logging.getLogger('vn.camera')


class CameraController:
    """State machine over NO_STREAM -> ACQUIRING -> ACTIVE.

    At most one stream is owned at a time. Acquisition failures are reported
    through the ErrorReporter and never raised to the caller.
    """

    def __init__(
        self,
        device: CameraDevice,
        errors: ErrorReporter,
        observer: StateObserver | None = None,
    ) -> None:
        self._device = device
        self._errors = errors
        self._observer = observer
        self._stream: VideoStream | None = None
        self._facing: Facing | None = None
        self._state = CameraState.NO_STREAM

    @property
    def state(self) -> CameraState:
        return self._state

    @property
    def facing(self) -> Facing | None:
        """Facing of the active stream, or of the last one requested."""
        return self._facing

    @property
    def stream(self) -> VideoStream | None:
        """The owned stream while ACTIVE, else None."""
        return self._stream if self._state == CameraState.ACTIVE else None

    async def acquire(self, facing: Facing) -> bool:
        """Request a stream for *facing*. Returns True when the new stream is active."""
        if self._state == CameraState.ACQUIRING:
            log.warning('Acquire(%s) rejected: another acquisition is in progress', facing.value)
            return False

        self._set_state(CameraState.ACQUIRING)
        log.info('Requesting %s camera', facing.value)
        try:
            stream = await self._device.request_stream(facing)
        except MediaAcquisitionError as e:
            log.debug('Media error kind: %s', e.kind.value)
            self._acquisition_failed(facing, str(e))
            return False
        except Exception as e:
            log.error('Unexpected camera error', exc_info=True)
            self._acquisition_failed(facing, f'{type(e).__name__}: {e}')
            return False

        previous = self._stream
        self._stream = stream
        self._facing = facing
        if previous is not None:
            self._device.stop_stream(previous)
        self._errors.clear(ErrorCategory.MEDIA)
        self._set_state(CameraState.ACTIVE)
        log.info('%s camera active', facing.value)
        return True

    async def flip(self) -> bool:
        """Switch to the opposite camera.

        The current stream is stopped before the new one is requested. If that
        request fails the controller stays without a stream; there is no rollback.
        """
        if self._state == CameraState.ACQUIRING:
            log.warning('Flip rejected: acquisition in progress')
            return False
        target = self._facing.opposite() if self._facing is not None else Facing.ENVIRONMENT
        self._stop_owned()
        return await self.acquire(target)

    def release(self) -> None:
        """Stop every track of the owned stream and drop ownership."""
        self._stop_owned()

    def _stop_owned(self) -> None:
        if self._stream is not None:
            log.info('Stopping %s camera', self._stream.facing.value)
            self._device.stop_stream(self._stream)
            self._stream = None
        if self._state != CameraState.NO_STREAM:
            self._set_state(CameraState.NO_STREAM)

    def _acquisition_failed(self, facing: Facing, message: str) -> None:
        log.error('Camera acquisition failed (%s): %s', facing.value, message)
        self._errors.report(ErrorCategory.MEDIA, message)
        self._set_state(CameraState.ACTIVE if self._stream is not None else CameraState.NO_STREAM)

    def _set_state(self, state: CameraState) -> None:
        self._state = state
        if self._observer is not None:
            self._observer.on_camera_changed(state, self._facing)
