"""Use case: grab one still frame from the live stream and encode it."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from video_notes.l1_entities.errors import NoActiveStreamError
from video_notes.l1_entities.snapshot import Snapshot
from video_notes.l2_use_cases.ports.camera import VideoStream
from video_notes.l2_use_cases.ports.image_encoder import ImageEncoder
from video_notes.l2_use_cases.ports.state_observer import StateObserver

log = logging.getLogger('vn.snapshot')


class SnapshotCapture:
    """Produces Snapshots on demand. Reads the stream, never pauses or stops it."""

    def __init__(self, encoder: ImageEncoder, observer: StateObserver | None = None) -> None:
        self._encoder = encoder
        self._observer = observer
        self.latest: Snapshot | None = None

    def capture(self, stream: VideoStream | None) -> Snapshot:
        """Encode the stream's current frame. Raises NoActiveStreamError if there is none yet."""
        if stream is None or stream.stopped:
            raise NoActiveStreamError('No active camera stream')
        frame = stream.latest_frame()
        if frame is None or frame.ndim < 2 or frame.shape[0] == 0 or frame.shape[1] == 0:
            raise NoActiveStreamError('Camera stream has not produced a frame yet')

        height, width = frame.shape[:2]
        snapshot = Snapshot(
            image_bytes=self._encoder.encode(frame),
            mime_type=self._encoder.mime_type,
            captured_at=datetime.now(timezone.utc),
            width=width,
            height=height,
        )
        self.latest = snapshot
        log.info('Snapshot %dx%d (%d bytes)', width, height, len(snapshot.image_bytes))
        if self._observer is not None:
            self._observer.on_snapshot(snapshot)
        return snapshot
