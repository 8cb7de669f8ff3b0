"""Tests for HistoryLog ordering and persistence."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from raksha.core.storage.blob_store import HISTORY_KEY, MemoryBlobStore
from raksha.domains.safety.history import HistoryLog
from raksha.domains.safety.models import EmergencyEvent, Location

T0 = datetime(2026, 2, 1, 12, 0, 0, tzinfo=timezone.utc)


def _event(minutes: int, location: Location | None = None, notified: int = 2) -> EmergencyEvent:
    return EmergencyEvent.create(T0 + timedelta(minutes=minutes), location, notified)


class TestRecord:
    def test_record_inserts_at_front(self, history_log):
        first = _event(0)
        second = _event(5)
        third = _event(10)
        for event in (first, second, third):
            history_log.record(event)
        assert history_log.list() == (third, second, first)
        assert history_log.latest() is third

    def test_empty_log(self, history_log):
        assert history_log.list() == ()
        assert history_log.latest() is None

    def test_clear(self, blob_store):
        log = HistoryLog(blob_store)
        log.record(_event(0))
        log.record(_event(1))
        assert log.clear() == 2
        assert len(log) == 0

        reloaded = HistoryLog(blob_store)
        reloaded.load()
        assert reloaded.list() == ()


class TestPersistence:
    def test_round_trip(self, blob_store):
        log = HistoryLog(blob_store)
        log.record(_event(0, Location(12.97, 77.59), notified=3))
        log.record(_event(1, None, notified=0))

        reloaded = HistoryLog(blob_store)
        reloaded.load()
        assert reloaded.list() == log.list()
        assert reloaded.list()[0].location is None
        assert reloaded.list()[1].location == Location(12.97, 77.59)
        assert reloaded.list()[1].contacts_notified == 3

    @pytest.mark.parametrize("raw", [b"", b"[", b'[{"timestamp": "yesterday"}]', b"42"])
    def test_corrupt_data_loads_empty(self, raw):
        blobs = MemoryBlobStore()
        blobs.save(HISTORY_KEY, raw)
        log = HistoryLog(blobs)
        log.load()
        assert log.list() == ()

    def test_naive_timestamp_treated_as_utc(self):
        blobs = MemoryBlobStore()
        blobs.save(
            HISTORY_KEY,
            b'[{"id": "e1", "timestamp": "2026-02-01T12:00:00", '
            b'"latitude": null, "longitude": null, "contacts_notified": 1}]',
        )
        log = HistoryLog(blobs)
        log.load()
        assert log.latest().timestamp == T0
