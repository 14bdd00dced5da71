"""Port: camera device and the live video stream it hands out."""

from __future__ import annotations

from typing import Protocol

import numpy as np

from video_notes.l1_entities.camera import Facing


class VideoStream(Protocol):
    """A live, video-only device stream."""

    @property
    def facing(self) -> Facing:
        """Which physical camera the stream is bound to."""
        ...

    @property
    def stopped(self) -> bool:
        """True once every underlying track has been stopped."""
        ...

    def latest_frame(self) -> np.ndarray | None:
        """Most recent decoded frame (H x W x C), or None before the first frame arrives."""
        ...

    def stop(self) -> None:
        """Stop all underlying tracks. Idempotent."""
        ...


class CameraDevice(Protocol):
    """Abstract camera capability. Zero framework types leak through."""

    async def request_stream(self, facing: Facing) -> VideoStream:
        """Open a stream for *facing*. Raises MediaAcquisitionError on failure."""
        ...

    def stop_stream(self, stream: VideoStream) -> None:
        """Release *stream* synchronously."""
        ...
