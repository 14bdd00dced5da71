"""Port: still-image encoder."""

from __future__ import annotations

from typing import Protocol

import numpy as np


class ImageEncoder(Protocol):
    """Encodes a raw frame into a fixed image format."""

    mime_type: str

    def encode(self, frame: np.ndarray) -> bytes:
        """Encode *frame* and return the file bytes."""
        ...
