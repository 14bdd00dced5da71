"""Notes panel -- committed note buffer with the interim fragment dimmed after it."""

from __future__ import annotations

from rich.text import Text
from textual.widgets import Static


class NotesPanel(Static):
    """Live note display. Replaced wholesale on every session update."""

    can_focus = True

    DEFAULT_CSS = """
    NotesPanel {
        height: 1fr;
        border: solid $primary;
        overflow-y: auto;
        scrollbar-size: 1 1;
        padding: 0 1;
    }
    NotesPanel:focus {
        border: solid $accent;
    }
    """

    def __init__(self, title: str = 'Notes', **kwargs) -> None:
        super().__init__('', **kwargs)
        self.border_title = title
        self._note = ''
        self._interim = ''

    @property
    def note(self) -> str:
        return self._note

    @property
    def interim(self) -> str:
        return self._interim

    def update_notes(self, note: str, interim: str = '') -> None:
        self._note = note
        self._interim = interim
        text = Text(note)
        if interim:
            text.append(interim, style='dim italic')
        self.update(text)
        self.scroll_end(animate=False)
