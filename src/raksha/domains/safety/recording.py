"""Start/stop lifecycle of an audio evidence capture."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable

from raksha.core.scheduling.scheduler import ScheduledHandle, Scheduler
from raksha.domains.safety.connectors import CaptureDevice, CaptureHandle

logger = logging.getLogger(__name__)

STATUS_IDLE = "Not Recording"
STATUS_RECORDING = "Recording..."
STATUS_FAILED = "Recording failed"
STATUS_SAVED = "Recording saved"

# Seconds "Recording saved" stays visible before reverting.
STATUS_RESET_SECONDS = 3.0


class RecordingController:
    """Drives one capture session at a time and exposes its status text.

    Failures to open the device are absorbed into ``STATUS_FAILED``; no
    method raises.
    """

    def __init__(
        self,
        device: CaptureDevice,
        scheduler: Scheduler,
        recordings_dir: str | Path,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._device = device
        self._scheduler = scheduler
        self._dir = Path(recordings_dir).expanduser()
        self._clock = clock
        self._handle: CaptureHandle | None = None
        self._reset_handle: ScheduledHandle | None = None
        self._status = STATUS_IDLE
        self.current_path: Path | None = None
        self.on_change: Callable[[], None] | None = None

    @property
    def status(self) -> str:
        return self._status

    @property
    def is_recording(self) -> bool:
        return self._handle is not None

    def start(self) -> bool:
        """Begin a capture session. No-op if one is already running.

        Returns True if a new session started.
        """
        if self._handle is not None:
            return False
        self._cancel_reset()
        path = self._dir / f"emergency_{self._clock()}.wav"
        try:
            handle = self._device.open_for_write(str(path))
            handle.record()
        except Exception as exc:
            logger.warning("Could not start recording: %s", exc)
            self._set_status(STATUS_FAILED)
            return False
        self._handle = handle
        self.current_path = path
        self._set_status(STATUS_RECORDING)
        logger.info("Recording started: %s", path)
        return True

    def stop(self) -> bool:
        """End the running session. No-op if nothing is recording."""
        if self._handle is None:
            return False
        handle, self._handle = self._handle, None
        try:
            handle.stop()
        except Exception as exc:
            logger.warning("Capture device failed to stop cleanly: %s", exc)
        self._set_status(STATUS_SAVED)
        try:
            self._reset_handle = self._scheduler.call_later(
                STATUS_RESET_SECONDS, self._revert_status
            )
        except Exception:
            logger.exception("Could not schedule recording status reset")
            self._revert_status()
        return True

    def cancel_pending(self) -> None:
        self._cancel_reset()

    def _revert_status(self) -> None:
        self._reset_handle = None
        if self._handle is None:
            self._set_status(STATUS_IDLE)

    def _cancel_reset(self) -> None:
        if self._reset_handle is not None:
            self._reset_handle.cancel()
            self._reset_handle = None

    def _set_status(self, status: str) -> None:
        self._status = status
        if self.on_change is not None:
            self.on_change()
