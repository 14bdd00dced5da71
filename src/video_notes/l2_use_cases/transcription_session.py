"""Use case: transcription session state machine and note buffer accumulation."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from video_notes.l1_entities.errors import ErrorCategory, InvalidTransitionError
from video_notes.l1_entities.recognition import RecognitionEvent
from video_notes.l1_entities.session import Session, TranscriptionState
from video_notes.l2_use_cases.error_reporter import ErrorReporter
from video_notes.l2_use_cases.ports.speech_recognizer import SpeechRecognizer
from video_notes.l2_use_cases.ports.state_observer import StateObserver

log = logging.getLogger('vn.transcribe')

UNSUPPORTED_MESSAGE = 'Speech recognition is not available on this system.'

_IDLE = TranscriptionState.IDLE
_LISTENING = TranscriptionState.LISTENING
_PAUSED = TranscriptionState.PAUSED

# operation -> (states it is valid from, resulting state)
_TRANSITIONS: dict[str, tuple[frozenset[TranscriptionState], TranscriptionState]] = {
    'start': (frozenset({_IDLE, _PAUSED}), _LISTENING),
    'stop': (frozenset({_LISTENING, _PAUSED}), _IDLE),
    'pause': (frozenset({_LISTENING}), _PAUSED),
    'resume': (frozenset({_PAUSED}), _LISTENING),
}


class TranscriptionSession:
    """Owns the Session: Idle/Listening/Paused, mute, note buffer, interim text.

    Recognition events travel through an ordered channel and are applied on the
    event loop by a single consumer task. Every feed start gets a new
    generation number. Finals flushed by a stopped feed are still committed
    until a newer feed has applied an event; after that the older feed is
    dropped, so two recognition sources never interleave in the buffer.
    """

    def __init__(
        self,
        recognizer: SpeechRecognizer,
        errors: ErrorReporter,
        observer: StateObserver | None = None,
    ) -> None:
        self._recognizer = recognizer
        self._errors = errors
        self._observer = observer
        self.session = Session()

        self._supported: bool | None = None
        self._feed_running = False
        self._generation = 0
        self._applied_generation = 0
        self._channel: asyncio.Queue[tuple[int, RecognitionEvent]] | None = None
        self._consumer: asyncio.Task | None = None

    @property
    def state(self) -> TranscriptionState:
        return self.session.state

    @property
    def supported(self) -> bool:
        return bool(self._supported)

    @property
    def feed_running(self) -> bool:
        return self._feed_running

    def initialize(self) -> bool:
        """Check recognition capability once. An unsupported platform is reported and not retried."""
        if self._supported is None:
            self._supported = self._recognizer.is_supported()
            if not self._supported:
                log.error('Recognizer reports no capability; session stays idle')
                self._errors.report(ErrorCategory.CAPABILITY, UNSUPPORTED_MESSAGE)
        return self._supported

    # --- Transitions ---

    def start(self) -> bool:
        """Idle/Paused -> Listening. Returns False if recognition is unavailable."""
        if not self.initialize():
            log.info('start() ignored: recognition unavailable')
            if self._errors.current is None or self._errors.current.category != ErrorCategory.CAPABILITY:
                self._errors.report(ErrorCategory.CAPABILITY, UNSUPPORTED_MESSAGE)
            return False
        self._transition('start')
        return True

    def stop(self) -> None:
        """Listening/Paused -> Idle. The note buffer is kept."""
        self._transition('stop')

    def pause(self) -> None:
        self._transition('pause')

    def resume(self) -> None:
        self._transition('resume')

    def toggle_mute(self) -> bool:
        """Flip the mute flag without touching the Listening/Paused state. Returns the new flag."""
        self.session.muted = not self.session.muted
        log.info('Mute %s', 'on' if self.session.muted else 'off')
        self._sync_feed()
        self._notify()
        return self.session.muted

    def _transition(self, op: str) -> None:
        allowed, target = _TRANSITIONS[op]
        current = self.session.state
        if current not in allowed:
            raise InvalidTransitionError(f'Cannot {op} while {current.value}')
        log.info('Transcription %s -> %s', current.value, target.value)
        self.session.state = target
        if target != _LISTENING:
            self.session.interim_text = ''
        self._sync_feed()
        self._notify()

    # --- Recognition feed ---

    def _sync_feed(self) -> None:
        """Start or stop the recognizer so it runs exactly when ``feed_active`` holds."""
        wanted = self.session.feed_active
        if wanted and not self._feed_running:
            self._ensure_consumer()
            self._generation += 1
            self._recognizer.start_continuous(self._publisher(self._generation))
            self._feed_running = True
            log.debug('Recognition feed started (generation %d)', self._generation)
        elif not wanted and self._feed_running:
            self._recognizer.stop()
            self._feed_running = False
            log.debug('Recognition feed stopped (generation %d)', self._generation)

    def _ensure_consumer(self) -> None:
        if self._channel is None:
            self._channel = asyncio.Queue()
        if self._consumer is None or self._consumer.done():
            self._consumer = asyncio.get_running_loop().create_task(self._consume())

    def _publisher(self, generation: int) -> Callable[[RecognitionEvent], None]:
        """Build a thread-safe publish callback bound to *generation*."""
        loop = asyncio.get_running_loop()
        channel = self._channel
        assert channel is not None

        def publish(event: RecognitionEvent) -> None:
            loop.call_soon_threadsafe(channel.put_nowait, (generation, event))

        return publish

    async def _consume(self) -> None:
        assert self._channel is not None
        while True:
            generation, event = await self._channel.get()
            try:
                live = generation == self._generation and self._feed_running
                if generation < self._applied_generation:
                    log.debug('Dropped event from superseded feed %d: %r', generation, event.text)
                elif event.is_final or live:
                    # interim text from a stopped feed is stale; finals are kept
                    self._applied_generation = generation
                    self.on_recognition_event(event.text, event.is_final)
            finally:
                self._channel.task_done()

    def on_recognition_event(self, fragment: str, is_final: bool) -> None:
        """Apply one recognition update. Must be called in recognition order."""
        if is_final:
            if fragment:
                self.session.note_buffer += fragment + '\n'
            self.session.interim_text = ''
        else:
            self.session.interim_text = fragment
        self._notify()

    async def drain(self) -> None:
        """Wait until every published event has been applied."""
        if self._channel is not None:
            await asyncio.sleep(0)  # let already-scheduled publishes land in the channel
            await self._channel.join()

    async def aclose(self) -> None:
        """Stop the feed and the consumer task."""
        if self._feed_running:
            self._recognizer.stop()
            self._feed_running = False
        if self._consumer is not None:
            self._consumer.cancel()
            try:
                await self._consumer
            except asyncio.CancelledError:
                pass
            self._consumer = None

    def _notify(self) -> None:
        if self._observer is not None:
            self._observer.on_session_changed(self.session)
