"""Tests for SounddeviceAudioSource gateway -- patches sd.InputStream."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import numpy as np

from video_notes.l3_interface_adapters.gateways.sounddevice_audio_source import (
    SounddeviceAudioSource,
    has_input_device,
)

MODULE = 'video_notes.l3_interface_adapters.gateways.sounddevice_audio_source'


class TestSounddeviceAudioSource:
    @patch(f'{MODULE}.sd.InputStream')
    def test_open_creates_and_starts_stream(self, mock_stream_cls):
        mock_stream = MagicMock()
        mock_stream_cls.return_value = mock_stream

        src = SounddeviceAudioSource()
        src.open(16000, 1)

        call_kwargs = mock_stream_cls.call_args.kwargs
        assert call_kwargs['samplerate'] == 16000
        assert call_kwargs['channels'] == 1
        assert call_kwargs['dtype'] == 'float32'
        mock_stream.start.assert_called_once()

    @patch(f'{MODULE}.sd.InputStream')
    def test_callback_wires_to_queue(self, mock_stream_cls):
        mock_stream_cls.return_value = MagicMock()
        src = SounddeviceAudioSource()
        src.open(16000, 1)

        callback = mock_stream_cls.call_args.kwargs['callback']
        callback(np.array([[0.1], [0.2]], dtype=np.float32), 2, None, None)

        result = src.read(timeout=0.1)
        assert result is not None
        np.testing.assert_allclose(result, [0.1, 0.2], atol=1e-6)

    @patch(f'{MODULE}.sd.InputStream')
    def test_callback_with_status_still_queues(self, mock_stream_cls):
        mock_stream_cls.return_value = MagicMock()
        src = SounddeviceAudioSource()
        src.open(16000, 1)

        callback = mock_stream_cls.call_args.kwargs['callback']
        callback(np.array([[0.3]], dtype=np.float32), 1, None, 'input overflow')

        assert src.read(timeout=0.1) is not None

    @patch(f'{MODULE}.sd.InputStream')
    def test_read_timeout_returns_none(self, mock_stream_cls):
        mock_stream_cls.return_value = MagicMock()
        src = SounddeviceAudioSource()
        src.open(16000, 1)
        assert src.read(timeout=0.01) is None

    @patch(f'{MODULE}.sd.InputStream')
    def test_close_stops_and_closes_stream(self, mock_stream_cls):
        mock_stream = MagicMock()
        mock_stream_cls.return_value = mock_stream

        src = SounddeviceAudioSource()
        src.open(16000, 1)
        src.close()

        mock_stream.stop.assert_called_once()
        mock_stream.close.assert_called_once()
        assert src._stream is None

    def test_close_when_none_stream_is_noop(self):
        src = SounddeviceAudioSource()
        src.close()
        assert src._stream is None


class TestHasInputDevice:
    @patch(f'{MODULE}.sd.query_devices')
    def test_true_with_input(self, mock_qd):
        mock_qd.return_value = [{'max_input_channels': 0}, {'max_input_channels': 2}]
        assert has_input_device()

    @patch(f'{MODULE}.sd.query_devices')
    def test_false_without_input(self, mock_qd):
        mock_qd.return_value = [{'max_input_channels': 0}]
        assert not has_input_device()

    @patch(f'{MODULE}.sd.query_devices', side_effect=OSError('PortAudio not initialized'))
    def test_false_on_query_error(self, _mock_qd):
        assert not has_input_device()
