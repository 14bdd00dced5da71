"""Status bar -- bottom bar showing camera, transcription, output state and keybinding hints."""

from __future__ import annotations

from rich.cells import cell_len
from textual.reactive import reactive
from textual.widgets import Static

_CAMERA_ICONS = {
    'active': '● Cam',
    'acquiring': '⟳ Cam',
    'no_stream': '✗ No camera',
}

_TRANSCRIPTION_ICONS = {
    'listening': '● Listening',
    'paused': '❚❚ Paused',
    'idle': '○ Idle',
}


class StatusBar(Static):
    """Bottom status bar mirroring the controller's state."""

    DEFAULT_CSS = """
    StatusBar {
        dock: bottom;
        height: auto;
        background: $surface;
        color: $text;
        padding: 0 1;
        overflow: hidden hidden;
    }
    """

    camera_state: reactive[str] = reactive('no_stream')
    facing: reactive[str] = reactive('')
    transcription: reactive[str] = reactive('idle')
    muted: reactive[bool] = reactive(False)
    speaking: reactive[bool] = reactive(False)
    snapshot_at: reactive[str] = reactive('')
    submitting: reactive[bool] = reactive(False)
    error_text: reactive[str] = reactive('')
    keybinding_hints: reactive[str] = reactive('')

    def status_text(self) -> str:
        camera = _CAMERA_ICONS.get(self.camera_state, self.camera_state)
        if self.camera_state != 'no_stream' and self.facing:
            camera = f'{camera} {self.facing}'

        parts = [camera, _TRANSCRIPTION_ICONS.get(self.transcription, self.transcription)]
        if self.muted:
            parts.append('Muted')
        if self.speaking:
            parts.append('♪ Speaking')
        parts.append(f'snap {self.snapshot_at}' if self.snapshot_at else 'no snapshot')
        if self.submitting:
            parts.append('⟳ Submitting')
        if self.error_text:
            parts.append(f'✗ {self.error_text}')
        return ' │ '.join(parts)

    def render(self) -> str:
        left = self.status_text()
        content_width = (self.size.width or 80) - 2

        hints = self.keybinding_hints
        if hints:
            hints_width = cell_len(hints.replace(r'\[', '['))
            gap = content_width - cell_len(left) - hints_width
            if gap >= 2:
                return left + ' ' * gap + hints
            return hints + '\n' + left
        return left
