"""Placeholder audio capture device writing empty WAV containers.

Real microphone access is platform specific. This device only owns the
file lifecycle (create on open, finalize on stop), so each session leaves
a valid WAV header with no audio frames. Swap in a real ``CaptureDevice``
for evidence capture.
"""

from __future__ import annotations

import logging
import wave
from pathlib import Path

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100
CHANNELS = 1
SAMPLE_WIDTH = 2  # 16-bit PCM


class PlaceholderWaveCaptureHandle:
    def __init__(self, writer: wave.Wave_write, path: Path) -> None:
        self._writer = writer
        self.path = path
        self.recording = False
        self.closed = False

    def record(self) -> None:
        self.recording = True

    def stop(self) -> None:
        if self.closed:
            return
        self.recording = False
        self._writer.close()
        self.closed = True
        logger.info("Finalized recording %s", self.path)


class PlaceholderWaveCaptureDevice:
    """Opens one empty WAV file per capture session; no audio is captured."""

    def open_for_write(self, path: str) -> PlaceholderWaveCaptureHandle:
        target = Path(path).expanduser()
        target.parent.mkdir(parents=True, exist_ok=True)
        writer = wave.open(str(target), "wb")
        writer.setnchannels(CHANNELS)
        writer.setsampwidth(SAMPLE_WIDTH)
        writer.setframerate(SAMPLE_RATE)
        logger.warning("Placeholder capture device: %s will contain no audio", target)
        return PlaceholderWaveCaptureHandle(writer, target)
