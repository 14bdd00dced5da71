"""Summary panel -- renders the summarizer's reply or the failure details."""

from __future__ import annotations

from textual.binding import Binding
from textual.widgets import Markdown

from video_notes.l1_entities.submission import SubmissionResult

_PLACEHOLDER = '*Take a snapshot (p) and submit (enter) to get a summary.*'


class SummaryPanel(Markdown):
    can_focus = True

    DEFAULT_CSS = """
    SummaryPanel {
        height: 1fr;
        overflow-y: auto;
        border: solid $secondary;
        scrollbar-size: 1 1;
    }
    SummaryPanel:focus {
        border: solid $accent;
    }
    """

    BINDINGS = [
        Binding('up', 'scroll_up', 'Scroll up', show=False),
        Binding('down', 'scroll_down', 'Scroll down', show=False),
        Binding('pageup', 'page_up', 'Page up', show=False),
        Binding('pagedown', 'page_down', 'Page down', show=False),
    ]

    def __init__(self, title: str = 'Summary', **kwargs) -> None:
        super().__init__(_PLACEHOLDER, **kwargs)
        self.border_title = title
        self._current_markdown = ''

    @property
    def current_markdown(self) -> str:
        return self._current_markdown

    def show_result(self, result: SubmissionResult) -> None:
        if result.ok:
            markdown = result.message
        else:
            markdown = f'**{result.message}**\n\n`{result.error}`'
        self._current_markdown = markdown
        self.update(markdown)
