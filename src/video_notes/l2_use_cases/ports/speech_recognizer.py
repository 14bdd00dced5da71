"""Port: continuous speech-to-text capability."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from video_notes.l1_entities.recognition import RecognitionEvent


class SpeechRecognizer(Protocol):
    """Push-based continuous recognizer.

    ``publish`` may be invoked from any thread; events must be published in
    recognition order.
    """

    def is_supported(self) -> bool:
        """Whether recognition is possible on this system. Checked once at startup."""
        ...

    def start_continuous(self, publish: Callable[[RecognitionEvent], None]) -> None:
        """Begin recognizing and publishing events."""
        ...

    def stop(self) -> None:
        """Stop recognizing. Already-finalized fragments may still be published."""
        ...
