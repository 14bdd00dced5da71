"""Submission entities: the request sent to the summarizer and its outcome."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel

from video_notes.l1_entities.snapshot import Snapshot

ERROR_PROCESSING_MESSAGE = 'Error processing request'


class SubmissionRequest(BaseModel):
    """Latest snapshot plus the note buffer, frozen at submit time."""

    model_config = {'frozen': True}

    snapshot: Snapshot
    note: str


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of one submission -- a summary on success, an error message on failure."""

    message: str
    error: str = ''

    @property
    def ok(self) -> bool:
        return not self.error

    @classmethod
    def success(cls, summary: str) -> SubmissionResult:
        return cls(message=summary)

    @classmethod
    def failure(cls, details: str) -> SubmissionResult:
        return cls(message=ERROR_PROCESSING_MESSAGE, error=details or 'Unknown error')
