"""Tests for the placeholder WAV capture device."""

from __future__ import annotations

import wave

import pytest

from raksha.domains.safety.connectors.capture import (
    CHANNELS,
    SAMPLE_RATE,
    PlaceholderWaveCaptureDevice,
)
from raksha.domains.safety.recording import STATUS_FAILED, STATUS_SAVED, RecordingController


def test_writes_valid_wav(tmp_path):
    device = PlaceholderWaveCaptureDevice()
    handle = device.open_for_write(str(tmp_path / "nested" / "clip.wav"))
    handle.record()
    assert handle.recording is True
    handle.stop()
    handle.stop()

    with wave.open(str(tmp_path / "nested" / "clip.wav"), "rb") as reader:
        assert reader.getnchannels() == CHANNELS
        assert reader.getframerate() == SAMPLE_RATE


def test_unwritable_target_raises(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    with pytest.raises(OSError):
        PlaceholderWaveCaptureDevice().open_for_write(str(blocker / "clip.wav"))


def test_controller_with_real_device(tmp_path, scheduler):
    recorder = RecordingController(PlaceholderWaveCaptureDevice(), scheduler, tmp_path)
    assert recorder.start() is True
    path = recorder.current_path
    recorder.stop()
    assert recorder.status == STATUS_SAVED
    assert path.exists()


def test_controller_reports_failure_for_bad_directory(tmp_path, scheduler):
    blocker = tmp_path / "blocker"
    blocker.write_text("x")
    recorder = RecordingController(PlaceholderWaveCaptureDevice(), scheduler, blocker)
    assert recorder.start() is False
    assert recorder.status == STATUS_FAILED


def test_placeholder_writes_no_audio_frames(tmp_path):
    path = tmp_path / "clip.wav"
    handle = PlaceholderWaveCaptureDevice().open_for_write(str(path))
    handle.record()
    handle.stop()
    with wave.open(str(path), "rb") as reader:
        assert reader.getnframes() == 0
