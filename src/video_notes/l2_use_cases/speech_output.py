"""Use case: read the note buffer aloud, toggled on and off."""

from __future__ import annotations

import asyncio
import logging

from video_notes.l1_entities.errors import CapabilityUnavailableError, ErrorCategory
from video_notes.l2_use_cases.error_reporter import ErrorReporter
from video_notes.l2_use_cases.ports.speech_synthesizer import SpeechSynthesizer
from video_notes.l2_use_cases.ports.state_observer import StateObserver

log = logging.getLogger('vn.speech')

UNSUPPORTED_MESSAGE = 'Speech synthesis is not available on this system.'


class SpeechOutput:
    """Speaking / not-speaking toggle over a SpeechSynthesizer.

    Cancellation is synchronous. Natural completion arrives through the
    synthesizer's callback and is applied on the event loop; a completion that
    belongs to an already-cancelled utterance is ignored.
    """

    def __init__(
        self,
        synthesizer: SpeechSynthesizer,
        errors: ErrorReporter,
        observer: StateObserver | None = None,
    ) -> None:
        self._synth = synthesizer
        self._errors = errors
        self._observer = observer
        self._speaking = False
        self._utterance = 0
        self._idle = asyncio.Event()
        self._idle.set()

    @property
    def speaking(self) -> bool:
        return self._speaking

    def toggle(self, text: str) -> bool:
        """Cancel if speaking, otherwise start speaking *text*. Returns the new speaking flag."""
        if self._speaking:
            self.cancel()
            return False

        if not text.strip():
            return False
        if not self._synth.is_supported():
            self._errors.report(ErrorCategory.SPEECH, UNSUPPORTED_MESSAGE)
            return False

        self._utterance += 1
        token = self._utterance
        loop = asyncio.get_running_loop()

        def on_end() -> None:
            loop.call_soon_threadsafe(self._finished, token)

        try:
            self._synth.speak(text, on_end)
        except CapabilityUnavailableError as e:
            log.warning('Speech synthesis unavailable: %s', e)
            self._errors.report(ErrorCategory.SPEECH, UNSUPPORTED_MESSAGE)
            return False
        except Exception as e:
            log.error('Speech synthesis failed to start', exc_info=True)
            self._errors.report(ErrorCategory.SPEECH, f'{type(e).__name__}: {e}')
            return False

        log.info('Speaking %d chars', len(text))
        self._errors.clear(ErrorCategory.SPEECH)
        self._set_speaking(True)
        return True

    def cancel(self) -> None:
        """Stop speaking immediately. No-op when silent."""
        if not self._speaking:
            return
        self._synth.cancel()
        self._utterance += 1
        log.info('Speech cancelled')
        self._set_speaking(False)

    async def wait_until_done(self) -> None:
        """Suspend until the current utterance finishes or is cancelled."""
        await self._idle.wait()

    def _finished(self, token: int) -> None:
        if token != self._utterance or not self._speaking:
            return
        log.info('Speech finished')
        self._set_speaking(False)

    def _set_speaking(self, speaking: bool) -> None:
        self._speaking = speaking
        if speaking:
            self._idle.clear()
        else:
            self._idle.set()
        if self._observer is not None:
            self._observer.on_speaking_changed(speaking)
