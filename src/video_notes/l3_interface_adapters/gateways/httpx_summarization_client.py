"""Gateway: HTTP summarization client -- implements SummarizationService port."""

from __future__ import annotations

import logging

import httpx

from video_notes.l1_entities.errors import SubmissionTransportError
from video_notes.l1_entities.submission import SubmissionRequest

log = logging.getLogger('vn.http')


class HttpxSummarizationClient:
    """Posts the snapshot and note as multipart form data; expects ``{"message": ...}`` back."""

    def __init__(
        self,
        base_url: str,
        endpoint: str = '/api/summarize',
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url
        self._endpoint = endpoint
        self._timeout = timeout
        self._transport = transport

    async def summarize(self, request: SubmissionRequest) -> str:
        snapshot = request.snapshot
        files = {'file': (snapshot.filename, snapshot.image_bytes, snapshot.mime_type)}
        data = {'note': request.note}

        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(self._endpoint, files=files, data=data)
        except httpx.HTTPError as e:
            raise SubmissionTransportError(f'{type(e).__name__}: {e}') from e

        if not response.is_success:
            log.warning('Summarize returned HTTP %d', response.status_code)
            raise SubmissionTransportError(f'HTTP error! status: {response.status_code}')

        try:
            payload = response.json()
        except ValueError as e:
            raise SubmissionTransportError(f'Invalid JSON response: {e}') from e

        message = payload.get('message') if isinstance(payload, dict) else None
        if not isinstance(message, str):
            raise SubmissionTransportError('Response has no "message" field')
        return message
