"""Gateway: OpenCV JPEG encoder -- implements ImageEncoder port."""

from __future__ import annotations

import cv2
import numpy as np


class OpenCVJpegEncoder:
    """Encodes BGR frames to JPEG via cv2.imencode."""

    mime_type = 'image/jpeg'

    def __init__(self, quality: int = 90) -> None:
        self._quality = quality

    def encode(self, frame: np.ndarray) -> bytes:
        ok, buf = cv2.imencode('.jpg', frame, [int(cv2.IMWRITE_JPEG_QUALITY), self._quality])
        if not ok:
            raise ValueError(f'JPEG encoding failed for frame of shape {frame.shape}')
        return buf.tobytes()
