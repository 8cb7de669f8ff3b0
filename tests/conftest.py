"""Shared test fixtures for Raksha tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Allow running tests without `pip install -e .` by making `src/` importable.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_SRC_DIR = _PROJECT_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from raksha.core.scheduling.manual import ManualScheduler  # noqa: E402
from raksha.core.storage.blob_store import MemoryBlobStore  # noqa: E402
from raksha.domains.safety.connectors.attention import LoggingAttentionCue  # noqa: E402
from raksha.domains.safety.connectors.channels import OutboxChannel  # noqa: E402
from raksha.domains.safety.contacts import ContactStore  # noqa: E402
from raksha.domains.safety.coordinator import EmergencyCoordinator  # noqa: E402
from raksha.domains.safety.history import HistoryLog  # noqa: E402
from raksha.domains.safety.recording import RecordingController  # noqa: E402


# ---------------------------------------------------------------------------
# Test hermeticity
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _force_hermetic_test_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("DB_PATH", ":memory:")
    monkeypatch.setenv("ENCRYPTION_KEY", "")
    monkeypatch.setenv("RECORDINGS_DIR", str(tmp_path / "recordings"))
    monkeypatch.setenv("SHAKE_TO_SOS_ENABLED", "true")


# ---------------------------------------------------------------------------
# Fake capture device
# ---------------------------------------------------------------------------

class FakeCaptureHandle:
    def __init__(self, path: str) -> None:
        self.path = path
        self.recording = False
        self.stopped = False

    def record(self) -> None:
        self.recording = True

    def stop(self) -> None:
        self.recording = False
        self.stopped = True


class FakeCaptureDevice:
    """Capture device that records every open; can be told to fail."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.handles: list[FakeCaptureHandle] = []

    def open_for_write(self, path: str) -> FakeCaptureHandle:
        if self.fail:
            raise OSError("microphone unavailable")
        handle = FakeCaptureHandle(path)
        self.handles.append(handle)
        return handle


class FailingChannel:
    """Raises for phone numbers in ``bad``; records the rest."""

    def __init__(self, bad: set[str]) -> None:
        self.bad = bad
        self.attempts: list[str] = []
        self.sent: list[tuple[str, str]] = []

    def dispatch(self, phone_number: str, body: str) -> bool:
        self.attempts.append(phone_number)
        if phone_number in self.bad:
            raise RuntimeError(f"cannot dial {phone_number}")
        self.sent.append((phone_number, body))
        return True


# ---------------------------------------------------------------------------
# Component fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def blob_store() -> MemoryBlobStore:
    return MemoryBlobStore()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def outbox() -> OutboxChannel:
    return OutboxChannel()


@pytest.fixture
def capture_device() -> FakeCaptureDevice:
    return FakeCaptureDevice()


@pytest.fixture
def attention() -> LoggingAttentionCue:
    return LoggingAttentionCue()


@pytest.fixture
def contact_store(blob_store) -> ContactStore:
    store = ContactStore(blob_store)
    store.load()
    return store


@pytest.fixture
def history_log(blob_store) -> HistoryLog:
    log = HistoryLog(blob_store)
    log.load()
    return log


@pytest.fixture
def recorder(capture_device, scheduler, tmp_path) -> RecordingController:
    return RecordingController(capture_device, scheduler, tmp_path / "recordings")


@pytest.fixture
def coordinator(contact_store, history_log, recorder, outbox, scheduler, attention):
    return EmergencyCoordinator(
        contact_store, history_log, recorder, outbox, scheduler, attention=attention
    )


@pytest.fixture
def safety_db():
    """Create an in-memory SafetyDatabase for testing."""
    from raksha.core.storage.database import SafetyDatabase

    db = SafetyDatabase(":memory:")
    db.initialize()
    yield db
    db.close()


@pytest.fixture
def failing_channel_cls():
    return FailingChannel


@pytest.fixture
def failing_capture_device() -> FakeCaptureDevice:
    return FakeCaptureDevice(fail=True)
