"""Transcription session entity."""

from __future__ import annotations

import enum

from pydantic import BaseModel


class TranscriptionState(enum.Enum):
    IDLE = 'idle'
    LISTENING = 'listening'
    PAUSED = 'paused'


class Session(BaseModel):
    """Live note-taking state: recognition state, mute flag, committed and interim text."""

    state: TranscriptionState = TranscriptionState.IDLE
    muted: bool = False
    note_buffer: str = ''
    interim_text: str = ''

    @property
    def feed_active(self) -> bool:
        """Whether the recognition feed should be running right now."""
        return self.state == TranscriptionState.LISTENING and not self.muted
