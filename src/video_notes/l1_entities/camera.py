"""L1 entity: camera facing direction and stream lifecycle state."""

from __future__ import annotations

import enum


class Facing(enum.Enum):
    ENVIRONMENT = 'environment'
    USER = 'user'

    def opposite(self) -> Facing:
        return Facing.USER if self is Facing.ENVIRONMENT else Facing.ENVIRONMENT


class CameraState(enum.Enum):
    NO_STREAM = 'no_stream'
    ACQUIRING = 'acquiring'
    ACTIVE = 'active'
