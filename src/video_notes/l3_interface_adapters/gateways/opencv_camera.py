"""Gateway: OpenCV camera -- implements CameraDevice and VideoStream ports."""

from __future__ import annotations

import asyncio
import logging
import sys
import threading

import cv2
import numpy as np

from video_notes.l1_entities.camera import Facing
from video_notes.l1_entities.errors import MediaAcquisitionError, MediaErrorKind

log = logging.getLogger('vn.camera')


def _open_capture(index: int) -> cv2.VideoCapture:
    if sys.platform.startswith('win'):
        return cv2.VideoCapture(index, cv2.CAP_DSHOW)
    return cv2.VideoCapture(index)


class OpenCVVideoStream:
    """Wraps cv2.VideoCapture; a daemon thread keeps the most recent frame.

    stop() only signals the thread. The thread releases the capture once its
    current read returns, so stopping never blocks the caller on the device.
    """

    def __init__(self, capture: cv2.VideoCapture, facing: Facing, first_frame: np.ndarray | None = None) -> None:
        self._capture = capture
        self._facing = facing
        self._frame = first_frame
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._released = False
        self._release_lock = threading.Lock()
        self._thread = threading.Thread(target=self._grab_loop, name=f'vn-camera-{facing.value}', daemon=True)

    @property
    def facing(self) -> Facing:
        return self._facing

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def start(self) -> None:
        self._thread.start()

    def _grab_loop(self) -> None:
        try:
            while not self._stop_event.is_set():
                ok, frame = self._capture.read()
                if not ok or frame is None:
                    self._stop_event.wait(0.05)
                    continue
                with self._lock:
                    self._frame = frame
        finally:
            self._release()

    def _release(self) -> None:
        with self._release_lock:
            if self._released:
                return
            self._released = True
        self._capture.release()
        log.debug('Released %s capture', self._facing.value)

    def latest_frame(self) -> np.ndarray | None:
        with self._lock:
            return None if self._frame is None else self._frame.copy()

    def stop(self) -> None:
        if self._stop_event.is_set():
            return
        self._stop_event.set()
        if not self._thread.is_alive():
            self._release()

    def wait_released(self, timeout: float | None = None) -> bool:
        """Block until the grab thread has released the capture. Call off the event loop."""
        if self._thread.is_alive():
            self._thread.join(timeout)
        return self._released


class OpenCVCameraDevice:
    """Maps facing directions to OpenCV device indices and opens them off the event loop."""

    def __init__(
        self,
        device_indices: dict[Facing, int],
        width: int | None = None,
        height: int | None = None,
    ) -> None:
        self._indices = dict(device_indices)
        self._width = width
        self._height = height
        self._stopping: list[OpenCVVideoStream] = []

    async def request_stream(self, facing: Facing) -> OpenCVVideoStream:
        index = self._indices.get(facing)
        if index is None:
            raise MediaAcquisitionError(MediaErrorKind.NOT_FOUND, f'No camera configured for {facing.value}')
        return await asyncio.to_thread(self._open, facing, index)

    def _open(self, facing: Facing, index: int) -> OpenCVVideoStream:
        # some backends refuse to reopen a device whose previous capture is still held
        while self._stopping:
            pending = self._stopping.pop()
            if not pending.wait_released(timeout=1.0):
                log.warning('%s capture still held after stop', pending.facing.value)
        capture = _open_capture(index)
        if not capture.isOpened():
            capture.release()
            raise MediaAcquisitionError(
                MediaErrorKind.NOT_FOUND,
                f'Cannot open camera {index} ({facing.value}); check the device and camera permissions',
            )
        if self._width:
            capture.set(cv2.CAP_PROP_FRAME_WIDTH, self._width)
        if self._height:
            capture.set(cv2.CAP_PROP_FRAME_HEIGHT, self._height)

        ok, frame = capture.read()
        if not ok or frame is None:
            capture.release()
            raise MediaAcquisitionError(
                MediaErrorKind.DEVICE_BUSY,
                f'Camera {index} ({facing.value}) opened but returned no frame',
            )

        stream = OpenCVVideoStream(capture, facing, first_frame=frame)
        stream.start()
        log.info('Opened camera %d for %s: %dx%d', index, facing.value, frame.shape[1], frame.shape[0])
        return stream

    def stop_stream(self, stream: OpenCVVideoStream) -> None:
        stream.stop()
        self._stopping.append(stream)
