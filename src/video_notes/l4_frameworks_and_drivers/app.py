"""Textual App -- thin TUI shell: compose, key bindings and message routing only."""

from __future__ import annotations

import logging
from pathlib import Path

import pyperclip
from textual.app import App as TextualApp
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Static

from video_notes.l1_entities.camera import CameraState
from video_notes.l1_entities.session import TranscriptionState
from video_notes.l3_interface_adapters.controllers.recording_controller import RecordingController
from video_notes.l3_interface_adapters.gateways.paths import LOG_DIR
from video_notes.l4_frameworks_and_drivers.logging_setup import setup_file_logging
from video_notes.l4_frameworks_and_drivers.messages import (
    CameraChanged,
    ErrorChanged,
    MessagePostingObserver,
    SessionChanged,
    SnapshotTaken,
    SpeakingChanged,
    SubmissionFinished,
    SubmissionPending,
)
from video_notes.l4_frameworks_and_drivers.widgets.notes_panel import NotesPanel
from video_notes.l4_frameworks_and_drivers.widgets.status_bar import StatusBar
from video_notes.l4_frameworks_and_drivers.widgets.summary_panel import SummaryPanel

log = logging.getLogger('vn.app')

_HINTS = {
    TranscriptionState.IDLE: r'\[n] notes  \[f] flip  \[p] snap  \[v] speak  \[enter] submit  \[c] copy  \[q] quit',
    TranscriptionState.LISTENING: r'\[n] stop  \[space] pause  \[m] mute  \[p] snap  \[enter] submit  \[q] quit',
    TranscriptionState.PAUSED: r'\[n] stop  \[space] resume  \[m] mute  \[p] snap  \[enter] submit  \[q] quit',
}


class App(TextualApp):
    """Recording session TUI. Every action is delegated to the RecordingController."""

    CSS_PATH = 'app.tcss'

    BINDINGS = [
        Binding('q', 'quit_app', 'Quit', priority=True),
        Binding('n', 'toggle_notes', 'Notes', priority=True),
        Binding('space', 'toggle_pause', 'Pause', priority=True),
        Binding('m', 'toggle_mute', 'Mute', priority=True),
        Binding('f', 'flip_camera', 'Flip', priority=True),
        Binding('r', 'retry_camera', 'Retry camera', show=False),
        Binding('p', 'take_snapshot', 'Snapshot', priority=True),
        Binding('v', 'speak_note', 'Speak', priority=True),
        Binding('enter', 'submit', 'Submit', priority=True),
        Binding('c', 'copy_notes', 'Copy', priority=True),
        Binding('tab', 'focus_next', 'Switch Panel', show=False),
    ]

    def __init__(
        self,
        controller: RecordingController,
        observer: MessagePostingObserver | None = None,
        log_dir: Path | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._controller = controller
        self._shutting_down = False
        setup_file_logging(log_dir or LOG_DIR)
        if observer is not None:
            observer.attach(self.post_message)

    def compose(self) -> ComposeResult:
        yield Static('  video-notes', id='header')
        with Horizontal(id='main-panels'):
            yield NotesPanel(id='notes-panel')
            yield SummaryPanel(id='summary-panel')
        yield StatusBar(id='status-bar')

    def on_mount(self) -> None:
        self._update_hints(TranscriptionState.IDLE)
        self.run_worker(self._start_up_task, group='camera')

    async def _start_up_task(self) -> None:
        await self._controller.start_up()
        self._sync_from_controller()

    def _sync_from_controller(self) -> None:
        """Pull the full controller state into the widgets."""
        session = self._controller.session
        self.query_one('#notes-panel', NotesPanel).update_notes(session.note_buffer, session.interim_text)
        bar = self.query_one('#status-bar', StatusBar)
        bar.transcription = session.state.value
        bar.muted = session.muted
        camera = self._controller.camera
        bar.camera_state = camera.state.value
        bar.facing = camera.facing.value if camera.facing else ''
        bar.error_text = self._controller.error_message or ''
        self._update_hints(session.state)

    def _update_hints(self, state: TranscriptionState) -> None:
        bar = self.query_one('#status-bar', StatusBar)
        bar.keybinding_hints = _HINTS[state]

    # --- Message Handlers ---

    def on_session_changed(self, message: SessionChanged) -> None:
        session = message.session
        self.query_one('#notes-panel', NotesPanel).update_notes(session.note_buffer, session.interim_text)
        bar = self.query_one('#status-bar', StatusBar)
        bar.transcription = session.state.value
        bar.muted = session.muted
        self._update_hints(session.state)

    def on_camera_changed(self, message: CameraChanged) -> None:
        bar = self.query_one('#status-bar', StatusBar)
        bar.camera_state = message.state.value
        bar.facing = message.facing.value if message.facing else ''
        header = f'  video-notes | camera: {bar.facing}' if message.state == CameraState.ACTIVE else '  video-notes'
        self.query_one('#header', Static).update(header)

    def on_snapshot_taken(self, message: SnapshotTaken) -> None:
        bar = self.query_one('#status-bar', StatusBar)
        bar.snapshot_at = message.snapshot.captured_at.astimezone().strftime('%H:%M:%S')
        self.notify(f'Snapshot {message.snapshot.width}x{message.snapshot.height}', timeout=2)

    def on_submission_pending(self, message: SubmissionPending) -> None:
        self.query_one('#status-bar', StatusBar).submitting = message.pending

    def on_submission_finished(self, message: SubmissionFinished) -> None:
        self.query_one('#summary-panel', SummaryPanel).show_result(message.result)

    def on_error_changed(self, message: ErrorChanged) -> None:
        bar = self.query_one('#status-bar', StatusBar)
        bar.error_text = message.report.message if message.report else ''
        if message.report is not None:
            self.notify(message.report.message, severity='error', timeout=6)

    def on_speaking_changed(self, message: SpeakingChanged) -> None:
        self.query_one('#status-bar', StatusBar).speaking = message.speaking

    # --- Actions ---

    def action_toggle_notes(self) -> None:
        self._controller.toggle_note_taking()

    def action_toggle_pause(self) -> None:
        self._controller.toggle_pause()

    def action_toggle_mute(self) -> None:
        self._controller.toggle_mute()

    def action_flip_camera(self) -> None:
        if self._controller.camera.state == CameraState.ACQUIRING:
            self.notify('Camera is still starting', severity='warning', timeout=2)
            return
        self.run_worker(self._controller.flip_camera, group='camera')

    def action_retry_camera(self) -> None:
        self.run_worker(self._controller.retry_camera, group='camera')

    def action_take_snapshot(self) -> None:
        if self._controller.take_snapshot() is None:
            self.notify('No camera frame available yet', severity='warning', timeout=3)

    def action_speak_note(self) -> None:
        if not self._controller.note.strip() and not self._controller.speech.speaking:
            self.notify('Nothing to speak yet', timeout=2)
            return
        self._controller.speak_note()

    def action_submit(self) -> None:
        if self._controller.submissions.in_flight:
            self.notify('Submission already in progress', severity='warning', timeout=3)
            return
        self.run_worker(self._controller.submit, group='submit')

    def action_copy_notes(self) -> None:
        note = self._controller.note
        if not note:
            self.notify('No notes to copy', severity='warning', timeout=2)
            return
        try:
            pyperclip.copy(note)
        except pyperclip.PyperclipException as e:
            log.warning('Clipboard unavailable: %s', e)
            self.notify(f'Clipboard unavailable: {e}', severity='error', timeout=4)
            return
        self.notify('Notes copied', timeout=2)

    async def action_quit_app(self) -> None:
        if self._shutting_down:
            return
        self._shutting_down = True
        await self._controller.shutdown()
        self.exit()
