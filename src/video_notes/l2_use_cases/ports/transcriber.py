"""Port: speech-to-text transcription engine."""

from __future__ import annotations

from typing import Protocol

import numpy as np


class Transcriber(Protocol):
    """Abstract batch transcription engine used behind the continuous recognizer."""

    def load_model(self, model: str) -> None:
        """Load the transcription model by name or path."""
        ...

    def transcribe(self, audio: np.ndarray, language: str) -> list[str]:
        """Transcribe an audio buffer into text fragments, in spoken order."""
        ...

    def close(self) -> None:
        """Release underlying resources."""
        ...
