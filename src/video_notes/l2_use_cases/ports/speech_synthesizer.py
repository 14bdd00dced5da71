"""Port: text-to-speech capability."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol


class SpeechSynthesizer(Protocol):
    """Abstract synthesizer. ``on_end`` fires once when an utterance finishes naturally."""

    def is_supported(self) -> bool:
        ...

    def speak(self, text: str, on_end: Callable[[], None]) -> None:
        """Start speaking *text* without blocking."""
        ...

    def cancel(self) -> None:
        """Stop speaking immediately. ``on_end`` is not called for the cancelled utterance."""
        ...
