"""Tests for RecordingController."""

from __future__ import annotations

from raksha.domains.safety.recording import (
    STATUS_FAILED,
    STATUS_IDLE,
    STATUS_RECORDING,
    STATUS_RESET_SECONDS,
    STATUS_SAVED,
    RecordingController,
)


class TestStart:
    def test_initial_state(self, recorder):
        assert recorder.status == STATUS_IDLE
        assert recorder.is_recording is False

    def test_start_records_to_timestamped_file(self, capture_device, scheduler, tmp_path):
        recorder = RecordingController(
            capture_device, scheduler, tmp_path, clock=lambda: 1767225600.25
        )
        assert recorder.start() is True
        assert recorder.status == STATUS_RECORDING
        assert recorder.is_recording is True
        handle = capture_device.handles[0]
        assert handle.recording is True
        assert handle.path == str(tmp_path / "emergency_1767225600.25.wav")

    def test_start_twice_is_noop(self, recorder, capture_device):
        recorder.start()
        assert recorder.start() is False
        assert len(capture_device.handles) == 1

    def test_open_failure_reports_status(self, failing_capture_device, scheduler, tmp_path):
        recorder = RecordingController(failing_capture_device, scheduler, tmp_path)
        assert recorder.start() is False
        assert recorder.status == STATUS_FAILED
        assert recorder.is_recording is False


class TestStop:
    def test_stop_saves_then_reverts(self, recorder, scheduler, capture_device):
        recorder.start()
        assert recorder.stop() is True
        assert capture_device.handles[0].stopped is True
        assert recorder.status == STATUS_SAVED
        scheduler.advance(STATUS_RESET_SECONDS - 1)
        assert recorder.status == STATUS_SAVED
        scheduler.advance(1)
        assert recorder.status == STATUS_IDLE

    def test_stop_when_idle_is_noop(self, recorder, scheduler):
        assert recorder.stop() is False
        assert recorder.status == STATUS_IDLE
        assert scheduler.pending() == 0

    def test_restart_before_revert_keeps_recording_status(self, recorder, scheduler):
        recorder.start()
        recorder.stop()
        recorder.start()
        scheduler.advance(STATUS_RESET_SECONDS * 2)
        assert recorder.status == STATUS_RECORDING

    def test_on_change_hook(self, recorder):
        seen = []
        recorder.on_change = lambda: seen.append(recorder.status)
        recorder.start()
        recorder.stop()
        assert seen == [STATUS_RECORDING, STATUS_SAVED]


class _NoTimerScheduler:
    def call_later(self, delay, callback):
        raise RuntimeError("no running event loop")

    def call_repeating(self, interval, callback):
        raise RuntimeError("no running event loop")


def test_stop_reverts_immediately_when_reset_cannot_be_scheduled(capture_device, tmp_path):
    recorder = RecordingController(capture_device, _NoTimerScheduler(), tmp_path)
    assert recorder.start() is True
    assert recorder.stop() is True
    assert recorder.status == STATUS_IDLE
    assert recorder.is_recording is False
    assert capture_device.handles[0].stopped is True
