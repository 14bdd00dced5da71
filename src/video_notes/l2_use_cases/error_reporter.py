"""Use case: process-wide last-error slot surfaced to the UI."""

from __future__ import annotations

import logging

from video_notes.l1_entities.errors import ErrorCategory, ErrorReport
from video_notes.l2_use_cases.ports.state_observer import StateObserver

log = logging.getLogger('vn.errors')


class ErrorReporter:
    """Holds the single user-visible error.

    Any component may set it; only a later success of the same category clears
    it, so an unrelated success never hides a pending problem. A capability
    report is persistent: nothing can succeed it, so clearing a later error
    falls back to it instead of emptying the slot.
    """

    def __init__(self, observer: StateObserver | None = None) -> None:
        self._observer = observer
        self._current: ErrorReport | None = None
        self._persistent: ErrorReport | None = None

    @property
    def current(self) -> ErrorReport | None:
        return self._current

    @property
    def message(self) -> str | None:
        return self._current.message if self._current is not None else None

    def report(self, category: ErrorCategory, message: str) -> None:
        log.warning('%s error: %s', category.value, message)
        self._current = ErrorReport(category=category, message=message)
        if category == ErrorCategory.CAPABILITY:
            self._persistent = self._current
        self._notify()

    def clear(self, category: ErrorCategory) -> None:
        """Clear the slot if (and only if) it holds an error of *category*."""
        if self._current is None or self._current.category != category:
            return
        if self._current is self._persistent:
            return
        log.debug('%s error cleared', category.value)
        self._current = self._persistent
        self._notify()

    def _notify(self) -> None:
        if self._observer is not None:
            self._observer.on_error_changed(self._current)
