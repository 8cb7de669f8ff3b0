"""Append-only, most-recent-first record of fired alerts."""

from __future__ import annotations

import json
import logging

from raksha.core.storage.blob_store import HISTORY_KEY, BlobStore
from raksha.domains.safety.models import EmergencyEvent

logger = logging.getLogger(__name__)


class HistoryLog:
    """Emergency events, newest first. Consumers never need to sort.

    Events are only ever inserted at the front; the only removal is
    :meth:`clear`.
    """

    def __init__(self, blob_store: BlobStore) -> None:
        self._blobs = blob_store
        self._events: list[EmergencyEvent] = []

    def __len__(self) -> int:
        return len(self._events)

    def list(self) -> tuple[EmergencyEvent, ...]:
        return tuple(self._events)

    def latest(self) -> EmergencyEvent | None:
        return self._events[0] if self._events else None

    def record(self, event: EmergencyEvent) -> None:
        """Insert ``event`` at the front and persist."""
        self._events.insert(0, event)
        self._save()
        logger.info(
            "Recorded emergency event %s (contacts_notified=%d)",
            event.id,
            event.contacts_notified,
        )

    def clear(self) -> int:
        """Remove every event and persist. Returns the number removed."""
        count = len(self._events)
        self._events = []
        self._save()
        logger.warning("Cleared emergency history: %d events removed", count)
        return count

    def load(self) -> None:
        raw = self._blobs.load(HISTORY_KEY)
        if raw is None:
            self._events = []
            return
        try:
            items = json.loads(raw.decode("utf-8"))
            self._events = [EmergencyEvent.from_dict(item) for item in items]
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            logger.warning("Stored history unreadable, starting empty: %s", exc)
            self._events = []
            return
        logger.info("Loaded %d emergency events", len(self._events))

    def _save(self) -> None:
        payload = json.dumps(
            [e.to_dict() for e in self._events], separators=(",", ":")
        ).encode("utf-8")
        try:
            self._blobs.save(HISTORY_KEY, payload)
        except Exception:
            logger.exception("Failed to persist emergency history")
