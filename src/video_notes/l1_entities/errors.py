"""Domain error types and the last-error record shown to the user."""

from __future__ import annotations

import enum

from pydantic import BaseModel


class ErrorCategory(enum.Enum):
    CAPABILITY = 'capability'
    MEDIA = 'media'
    SPEECH = 'speech'
    SUBMISSION = 'submission'


class ErrorReport(BaseModel):
    """The current user-visible error and the kind of operation that produced it."""

    model_config = {'frozen': True}

    category: ErrorCategory
    message: str


class MediaErrorKind(enum.Enum):
    PERMISSION_DENIED = 'permission_denied'
    NOT_FOUND = 'not_found'
    DEVICE_BUSY = 'device_busy'


class CapabilityUnavailableError(Exception):
    """Raised when a platform capability (recognition, synthesis) is missing."""


class MediaAcquisitionError(Exception):
    """Raised when a camera stream cannot be acquired."""

    def __init__(self, kind: MediaErrorKind, message: str = '') -> None:
        super().__init__(message or kind.value.replace('_', ' '))
        self.kind = kind


class NoActiveStreamError(Exception):
    """Raised when a snapshot is requested before the stream has produced a frame."""


class NoSnapshotError(Exception):
    """Raised when a submission is attempted without a snapshot."""


class SubmissionTransportError(Exception):
    """Raised by the summarization gateway on network failure or a non-2xx response."""


class SubmissionInProgressError(Exception):
    """Raised when a submission is attempted while another is still unresolved."""


class InvalidTransitionError(Exception):
    """Raised when a state machine operation is not valid from the current state."""
