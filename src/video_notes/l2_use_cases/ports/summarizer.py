"""Port: remote summarization service."""

from __future__ import annotations

from typing import Protocol

from video_notes.l1_entities.submission import SubmissionRequest


class SummarizationService(Protocol):
    """Abstract summarizer. Zero framework types leak through."""

    async def summarize(self, request: SubmissionRequest) -> str:
        """Return the summary text. Raises SubmissionTransportError on any failure."""
        ...
