"""Silence-based utterance segmentation for the batch whisper engine.

Accumulates microphone samples and decides when a spoken utterance has ended
(a pause after speech) or the buffer has grown too long, so the recognizer can
transcribe it as one committed fragment. Does no I/O itself.
"""

from __future__ import annotations

import numpy as np

from video_notes.l1_entities.audio_constants import SAMPLE_RATE

_MIN_SPEECH_SECONDS = 1.0


def _rms(samples: np.ndarray) -> float:
    if len(samples) == 0:
        return 0.0
    return float(np.sqrt(np.mean(samples**2)))


class UtteranceSegmenter:
    def __init__(
        self,
        chunk_duration: float = 15.0,
        silence_threshold: float = 0.01,
        pause_duration: float = 1.0,
    ) -> None:
        self._chunk_samples = int(SAMPLE_RATE * chunk_duration)
        self._pause_samples = int(SAMPLE_RATE * pause_duration)
        self._min_speech_samples = int(SAMPLE_RATE * _MIN_SPEECH_SECONDS)
        self._silence_threshold = silence_threshold
        self._buffer = np.array([], dtype=np.float32)

    @property
    def buffered_seconds(self) -> float:
        return len(self._buffer) / SAMPLE_RATE

    def feed(self, data: np.ndarray) -> None:
        """Append raw audio samples to the internal buffer."""
        self._buffer = np.concatenate([self._buffer, data.astype(np.float32).flatten()])

    def reset(self) -> None:
        self._buffer = np.array([], dtype=np.float32)

    def should_trigger(self) -> bool:
        """True when the buffer is full, or speech has been followed by a pause."""
        if len(self._buffer) >= self._chunk_samples:
            return True

        if len(self._buffer) >= self._min_speech_samples + self._pause_samples:
            tail_rms = _rms(self._buffer[-self._pause_samples :])
            body_rms = _rms(self._buffer[: -self._pause_samples])
            if tail_rms < self._silence_threshold and body_rms >= self._silence_threshold:
                return True

        return False

    def take(self) -> np.ndarray | None:
        """Return the buffered utterance and start a fresh buffer.

        Returns None (and still clears) when the buffer is silence only.
        """
        buf = self._buffer
        self.reset()
        if _rms(buf) < self._silence_threshold:
            return None
        return buf

    def flush(self) -> np.ndarray | None:
        """Return whatever speech is left on shutdown, if enough to transcribe."""
        if len(self._buffer) < self._min_speech_samples:
            self.reset()
            return None
        return self.take()
