"""Tests for CameraController -- uses FakeCameraDevice with a shared call timeline."""

from __future__ import annotations

import asyncio

import pytest

from video_notes.l1_entities.camera import CameraState, Facing
from video_notes.l1_entities.errors import ErrorCategory, MediaAcquisitionError, MediaErrorKind
from video_notes.l2_use_cases.camera_controller import CameraController
from video_notes.l2_use_cases.error_reporter import ErrorReporter
from tests.conftest import FakeCameraDevice, RecordingObserver


def make_controller(
    device: FakeCameraDevice,
    observer: RecordingObserver | None = None,
) -> tuple[CameraController, ErrorReporter]:
    errors = ErrorReporter(observer)
    return CameraController(device, errors, observer), errors


class TestAcquire:
    @pytest.mark.asyncio
    async def test_success_owns_one_active_stream(self, camera_device, observer):
        cam, _ = make_controller(camera_device, observer)

        assert await cam.acquire(Facing.ENVIRONMENT) is True

        assert cam.state == CameraState.ACTIVE
        assert cam.facing == Facing.ENVIRONMENT
        assert cam.stream is camera_device.streams[0]
        assert [s for s, _ in observer.camera] == [CameraState.ACQUIRING, CameraState.ACTIVE]

    @pytest.mark.asyncio
    async def test_permission_denied_reports_media_error(self, camera_device):
        camera_device.fail_for(Facing.ENVIRONMENT, MediaAcquisitionError(MediaErrorKind.PERMISSION_DENIED))
        cam, errors = make_controller(camera_device)

        assert await cam.acquire(Facing.ENVIRONMENT) is False

        assert cam.state == CameraState.NO_STREAM
        assert cam.stream is None
        assert errors.current is not None
        assert errors.current.category == ErrorCategory.MEDIA
        assert errors.message == 'permission denied'

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_reported_not_raised(self):
        class BrokenDevice(FakeCameraDevice):
            async def request_stream(self, facing):
                raise RuntimeError('driver crashed')

        cam, errors = make_controller(BrokenDevice())

        assert await cam.acquire(Facing.USER) is False
        assert cam.state == CameraState.NO_STREAM
        assert errors.message == 'RuntimeError: driver crashed'

    @pytest.mark.asyncio
    async def test_success_clears_media_error_only(self, camera_device):
        cam, errors = make_controller(camera_device)
        camera_device.fail_for(Facing.USER, MediaAcquisitionError(MediaErrorKind.NOT_FOUND))
        await cam.acquire(Facing.USER)
        assert errors.current is not None

        await cam.acquire(Facing.ENVIRONMENT)
        assert errors.current is None

        errors.report(ErrorCategory.SUBMISSION, 'HTTP error! status: 500')
        await cam.acquire(Facing.ENVIRONMENT)
        assert errors.message == 'HTTP error! status: 500'

    @pytest.mark.asyncio
    async def test_reacquire_replaces_previous_stream(self, camera_device):
        cam, _ = make_controller(camera_device)
        await cam.acquire(Facing.ENVIRONMENT)
        first = cam.stream

        await cam.acquire(Facing.USER)

        assert first.stopped
        assert camera_device.live_streams == [cam.stream]
        assert cam.facing == Facing.USER

    @pytest.mark.asyncio
    async def test_failed_reacquire_keeps_existing_stream(self, camera_device):
        cam, _ = make_controller(camera_device)
        await cam.acquire(Facing.ENVIRONMENT)
        camera_device.fail_for(Facing.USER, MediaAcquisitionError(MediaErrorKind.DEVICE_BUSY))

        assert await cam.acquire(Facing.USER) is False

        assert cam.state == CameraState.ACTIVE
        assert cam.facing == Facing.ENVIRONMENT
        assert not cam.stream.stopped

    @pytest.mark.asyncio
    async def test_overlapping_acquire_is_rejected(self, camera_device):
        camera_device.gate = asyncio.Event()
        cam, _ = make_controller(camera_device)

        first = asyncio.create_task(cam.acquire(Facing.ENVIRONMENT))
        await asyncio.sleep(0)
        assert cam.state == CameraState.ACQUIRING

        assert await cam.acquire(Facing.USER) is False
        assert await cam.flip() is False

        camera_device.gate.set()
        assert await first is True
        assert camera_device.timeline == ['request:environment']
        assert len(camera_device.live_streams) == 1


class TestFlip:
    @pytest.mark.asyncio
    async def test_stops_old_stream_before_requesting_new(self, camera_device):
        cam, _ = make_controller(camera_device)
        await cam.acquire(Facing.ENVIRONMENT)

        assert await cam.flip() is True

        assert camera_device.timeline == ['request:environment', 'stop:environment', 'request:user']
        assert cam.facing == Facing.USER
        assert len(camera_device.live_streams) == 1

    @pytest.mark.asyncio
    async def test_flip_back_and_forth(self, camera_device):
        cam, _ = make_controller(camera_device)
        await cam.acquire(Facing.USER)
        await cam.flip()
        await cam.flip()
        assert cam.facing == Facing.USER
        assert len(camera_device.live_streams) == 1

    @pytest.mark.asyncio
    async def test_failed_flip_leaves_no_stream(self, camera_device):
        cam, errors = make_controller(camera_device)
        await cam.acquire(Facing.ENVIRONMENT)
        camera_device.fail_for(Facing.USER, MediaAcquisitionError(MediaErrorKind.NOT_FOUND, 'no front camera'))

        assert await cam.flip() is False

        assert cam.state == CameraState.NO_STREAM
        assert cam.stream is None
        assert camera_device.live_streams == []
        assert errors.message == 'no front camera'

    @pytest.mark.asyncio
    async def test_flip_without_stream_targets_environment(self, camera_device):
        cam, _ = make_controller(camera_device)
        await cam.flip()
        assert cam.facing == Facing.ENVIRONMENT


class TestRelease:
    @pytest.mark.asyncio
    async def test_release_stops_stream(self, camera_device):
        cam, _ = make_controller(camera_device)
        await cam.acquire(Facing.ENVIRONMENT)
        stream = cam.stream

        cam.release()

        assert stream.stopped
        assert cam.state == CameraState.NO_STREAM
        assert cam.stream is None

    def test_release_without_stream_is_noop(self, camera_device, observer):
        cam, _ = make_controller(camera_device, observer)
        cam.release()
        cam.release()
        assert observer.camera == []
