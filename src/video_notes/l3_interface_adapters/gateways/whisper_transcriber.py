"""Gateway: whisper.cpp transcriber -- implements Transcriber port."""

from __future__ import annotations

import contextlib
import os

import numpy as np
from pywhispercpp.model import Model


@contextlib.contextmanager
def _suppress_c_stdout():
    """Redirect C-level stdout and stderr to /dev/null.

    whisper.cpp prints init/progress messages via C fprintf, bypassing
    Python's sys.stdout, which corrupts the TUI.
    """
    devnull = os.open(os.devnull, os.O_WRONLY)
    old_stdout = os.dup(1)
    old_stderr = os.dup(2)
    try:
        os.dup2(devnull, 1)
        os.dup2(devnull, 2)
        yield
    finally:
        os.dup2(old_stdout, 1)
        os.dup2(old_stderr, 2)
        os.close(devnull)
        os.close(old_stdout)
        os.close(old_stderr)


class WhisperTranscriber:
    """pywhispercpp adapter. Accepts a model name (downloaded on first use) or a local path."""

    def __init__(self) -> None:
        self._model: Model | None = None

    @property
    def loaded(self) -> bool:
        return self._model is not None

    def load_model(self, model: str) -> None:
        with _suppress_c_stdout():
            self._model = Model(model, print_progress=False, print_realtime=False)

    def transcribe(self, audio: np.ndarray, language: str) -> list[str]:
        if self._model is None:
            raise RuntimeError('Model not loaded. Call load_model() first.')

        with _suppress_c_stdout():
            raw_segments = self._model.transcribe(audio, language=language)

        return [text for text in (seg.text.strip() for seg in raw_segments) if text]

    def close(self) -> None:
        if self._model is not None:
            with _suppress_c_stdout():
                del self._model
                self._model = None
