"""Gateway: sounddevice audio source -- implements AudioSource port."""

from __future__ import annotations

import logging
import queue

import numpy as np
import sounddevice as sd

from video_notes.l1_entities.audio_constants import SAMPLE_RATE

log = logging.getLogger('vn.audio')


def has_input_device() -> bool:
    """True if at least one capture device is visible to PortAudio."""
    try:
        devices = sd.query_devices()
    except Exception as e:
        log.warning('Cannot query audio devices: %s', e)
        return False
    return any(d['max_input_channels'] > 0 for d in devices)


class SounddeviceAudioSource:
    """Wraps sounddevice.InputStream to provide microphone chunks."""

    def __init__(self) -> None:
        self._stream: sd.InputStream | None = None
        self._queue: queue.Queue[np.ndarray] = queue.Queue()

    def open(self, sample_rate: int = SAMPLE_RATE, channels: int = 1) -> None:
        def _callback(indata, frames, time_info, status):
            if status:
                log.debug('Input status: %s', status)
            self._queue.put(indata.copy())

        self._stream = sd.InputStream(
            samplerate=sample_rate,
            channels=channels,
            dtype='float32',
            callback=_callback,
        )
        self._stream.start()

    def read(self, timeout: float = 0.1) -> np.ndarray | None:
        try:
            return self._queue.get(timeout=timeout).flatten()
        except queue.Empty:
            return None

    def close(self) -> None:
        if self._stream is not None:
            self._stream.stop()
            self._stream.close()
            self._stream = None
