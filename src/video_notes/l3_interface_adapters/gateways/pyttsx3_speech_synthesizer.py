"""Gateway: pyttsx3 text-to-speech -- implements SpeechSynthesizer port."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

import pyttsx3

from video_notes.l1_entities.errors import CapabilityUnavailableError

log = logging.getLogger('vn.speech')


class Pyttsx3SpeechSynthesizer:
    """Runs pyttsx3's blocking runAndWait() on a daemon thread per utterance."""

    def __init__(self, rate: int = 180, volume: float = 1.0) -> None:
        self._rate = rate
        self._volume = volume
        self._engine = None
        self._thread: threading.Thread | None = None
        self._cancelled = threading.Event()

    def _get_engine(self):
        if self._engine is None:
            try:
                engine = pyttsx3.init()
            except Exception as e:
                raise CapabilityUnavailableError(f'No usable TTS driver: {e}') from e
            engine.setProperty('rate', self._rate)
            engine.setProperty('volume', self._volume)
            self._engine = engine
        return self._engine

    def is_supported(self) -> bool:
        try:
            self._get_engine()
        except CapabilityUnavailableError as e:
            log.warning('%s', e)
            return False
        return True

    def speak(self, text: str, on_end: Callable[[], None]) -> None:
        engine = self._get_engine()
        previous = self._thread
        cancelled = threading.Event()
        self._cancelled = cancelled

        def _run() -> None:
            # The engine refuses a new run loop while a cancelled one is still unwinding.
            if previous is not None and previous.is_alive():
                previous.join(timeout=1.0)
            try:
                if not cancelled.is_set():
                    engine.say(text)
                    engine.runAndWait()
            except Exception:
                log.error('TTS playback failed', exc_info=True)
            if not cancelled.is_set():
                on_end()

        self._thread = threading.Thread(target=_run, name='vn-tts', daemon=True)
        self._thread.start()

    def cancel(self) -> None:
        self._cancelled.set()
        if self._engine is not None:
            self._engine.stop()
