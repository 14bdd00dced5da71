"""Gateway: continuous recognizer built on a batch Transcriber -- implements SpeechRecognizer port.

Each start_continuous() call runs one capture thread with its own AudioSource.
A new thread publishes only after the previous one has flushed and exited, so
events from consecutive feeds reach the subscriber in order.
Utterances are cut at pauses by UtteranceSegmenter and published as final
fragments; a placeholder interim event marks that an utterance is being
transcribed.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

import numpy as np

from video_notes.l1_entities.audio_constants import SAMPLE_RATE
from video_notes.l1_entities.recognition import RecognitionEvent
from video_notes.l2_use_cases.ports.audio_source import AudioSource
from video_notes.l2_use_cases.ports.transcriber import Transcriber
from video_notes.l3_interface_adapters.gateways.utterance_segmenter import UtteranceSegmenter

log = logging.getLogger('vn.audio')

TRANSCRIBING_PLACEHOLDER = '…'


class WhisperSpeechRecognizer:
    def __init__(
        self,
        audio_source_factory: Callable[[], AudioSource],
        transcriber: Transcriber,
        model: str,
        language: str,
        chunk_duration: float = 15.0,
        silence_threshold: float = 0.01,
        pause_duration: float = 1.0,
        device_check: Callable[[], bool] | None = None,
    ) -> None:
        self._source_factory = audio_source_factory
        self._transcriber = transcriber
        self._model = model
        self._language = language
        self._chunk_duration = chunk_duration
        self._silence_threshold = silence_threshold
        self._pause_duration = pause_duration
        self._device_check = device_check
        # One transcriber is shared by overlapping threads after a quick restart.
        self._transcriber_lock = threading.Lock()
        self._model_loaded = False
        self._stop_event: threading.Event | None = None
        self._thread: threading.Thread | None = None

    def is_supported(self) -> bool:
        if self._device_check is None:
            return True
        return self._device_check()

    def start_continuous(self, publish: Callable[[RecognitionEvent], None]) -> None:
        """Start a capture thread. It waits for the previous one to finish flushing before publishing."""
        self.stop()
        previous = self._thread
        stop_event = threading.Event()
        thread = threading.Thread(
            target=self._run,
            args=(publish, stop_event, previous),
            name='vn-recognizer',
            daemon=True,
        )
        self._stop_event = stop_event
        self._thread = thread
        thread.start()

    def stop(self) -> None:
        """Signal the capture thread; it flushes buffered speech and exits on its own."""
        if self._stop_event is not None:
            self._stop_event.set()
        self._stop_event = None

    def join(self, timeout: float | None = None) -> None:
        """Wait for the most recently started capture thread. Used on shutdown and in tests."""
        thread = self._thread
        if thread is not None:
            thread.join(timeout)

    def _ensure_model(self) -> None:
        with self._transcriber_lock:
            if not self._model_loaded:
                log.info('Loading transcription model %s', self._model)
                self._transcriber.load_model(self._model)
                self._model_loaded = True

    def _publish_utterance(self, audio: np.ndarray, publish: Callable[[RecognitionEvent], None]) -> None:
        publish(RecognitionEvent(text=TRANSCRIBING_PLACEHOLDER, is_final=False))
        with self._transcriber_lock:
            fragments = self._transcriber.transcribe(audio, self._language)
        log.debug('Transcribed %.1fs of audio into %d fragment(s)', len(audio) / SAMPLE_RATE, len(fragments))
        if not fragments:
            publish(RecognitionEvent(text='', is_final=False))
        for text in fragments:
            publish(RecognitionEvent(text=text, is_final=True))

    def _run(
        self,
        publish: Callable[[RecognitionEvent], None],
        stop_event: threading.Event,
        previous: threading.Thread | None = None,
    ) -> None:
        segmenter = UtteranceSegmenter(
            chunk_duration=self._chunk_duration,
            silence_threshold=self._silence_threshold,
            pause_duration=self._pause_duration,
        )
        try:
            self._ensure_model()
            source = self._source_factory()
            source.open(SAMPLE_RATE, 1)
            try:
                if previous is not None and previous.is_alive():
                    # audio queues in the open source while the old thread flushes
                    log.debug('Waiting for previous recognition thread to flush')
                    previous.join()
                while not stop_event.is_set():
                    data = source.read(timeout=0.1)
                    if data is None:
                        continue
                    segmenter.feed(data)
                    if segmenter.should_trigger():
                        audio = segmenter.take()
                        if audio is not None:
                            self._publish_utterance(audio, publish)

                audio = segmenter.flush()
                if audio is not None:
                    self._publish_utterance(audio, publish)
            finally:
                source.close()
        except Exception:
            log.error('Recognition thread failed', exc_info=True)
