"""Snapshot entity -- one encoded still frame taken from the live stream."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

_EXTENSIONS = {
    'image/jpeg': 'jpg',
    'image/png': 'png',
}


class Snapshot(BaseModel):
    """Immutable encoded frame. A newer capture supersedes it, never merges into it."""

    model_config = {'frozen': True}

    image_bytes: bytes = Field(repr=False)
    mime_type: str = 'image/jpeg'
    captured_at: datetime
    width: int = 0
    height: int = 0

    @property
    def filename(self) -> str:
        """Upload filename, e.g. ``snapshot.jpg``."""
        return f'snapshot.{_EXTENSIONS.get(self.mime_type, "bin")}'
