"""Wires the safety components for one app session."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from raksha.core.scheduling.scheduler import Scheduler
from raksha.core.storage.blob_store import BlobStore
from raksha.domains.safety.connectors import AttentionCue, CaptureDevice, NotificationChannel
from raksha.domains.safety.contacts import ContactStore
from raksha.domains.safety.coordinator import EmergencyCoordinator
from raksha.domains.safety.history import HistoryLog
from raksha.domains.safety.messaging import MessagingService
from raksha.domains.safety.profile import ProfileStore
from raksha.domains.safety.recording import RecordingController
from raksha.domains.safety.triggers import ShakeTrigger

logger = logging.getLogger(__name__)


@dataclass
class SafetySession:
    contacts: ContactStore
    history: HistoryLog
    profile: ProfileStore
    recorder: RecordingController
    coordinator: EmergencyCoordinator
    shake: ShakeTrigger
    messaging: MessagingService
    channel: NotificationChannel


def create_session(
    *,
    blob_store: BlobStore,
    scheduler: Scheduler,
    channel: NotificationChannel,
    capture_device: CaptureDevice,
    recordings_dir: str | Path,
    attention: AttentionCue | None = None,
    shake_enabled: bool = True,
) -> SafetySession:
    """Build empty stores, load each namespace independently, then wire the coordinator."""
    contacts = ContactStore(blob_store)
    history = HistoryLog(blob_store)
    profile = ProfileStore(blob_store)

    contacts.load()
    history.load()
    profile.load()

    recorder = RecordingController(capture_device, scheduler, recordings_dir)
    coordinator = EmergencyCoordinator(
        contacts, history, recorder, channel, scheduler, attention=attention
    )
    logger.info(
        "Safety session ready: %d contacts, %d past events", len(contacts), len(history)
    )
    return SafetySession(
        contacts=contacts,
        history=history,
        profile=profile,
        recorder=recorder,
        coordinator=coordinator,
        shake=ShakeTrigger(coordinator, enabled=shake_enabled),
        messaging=MessagingService(),
        channel=channel,
    )
