"""Speech recognition event entity."""

from __future__ import annotations

from pydantic import BaseModel


class RecognitionEvent(BaseModel):
    """One update from a continuous recognizer: interim text or a committed fragment."""

    text: str
    is_final: bool = False
