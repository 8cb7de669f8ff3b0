"""Key/value blob persistence for the safety stores.

Each store (contacts, history, profile) owns one logical key and
round-trips a self-describing serialized form through a ``BlobStore``.
``load`` never raises: missing or unreadable data yields ``None``.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone
from typing import Protocol, runtime_checkable

from raksha.core.storage.database import DatabaseError, SafetyDatabase
from raksha.core.storage.encryption import BlobEncryptor, EncryptionError

logger = logging.getLogger(__name__)

# Logical namespaces
CONTACTS_KEY = "emergencyContacts"
HISTORY_KEY = "emergencyHistory"
PROFILE_KEY = "userProfile"


@runtime_checkable
class BlobStore(Protocol):
    """Persistence collaborator: opaque bytes under string keys."""

    def save(self, key: str, data: bytes) -> None:
        """Store ``data`` under ``key``, replacing any previous value."""
        ...

    def load(self, key: str) -> bytes | None:
        """Return the stored bytes, or None if absent or unreadable."""
        ...


class MemoryBlobStore:
    """In-process blob store. Used for tests and when no database is configured."""

    def __init__(self) -> None:
        self._blobs: dict[str, bytes] = {}

    def save(self, key: str, data: bytes) -> None:
        self._blobs[key] = bytes(data)

    def load(self, key: str) -> bytes | None:
        return self._blobs.get(key)

    def keys(self) -> list[str]:
        return sorted(self._blobs)


class SQLiteBlobStore:
    """Blob store backed by the ``blobs`` table of a :class:`SafetyDatabase`."""

    def __init__(self, database: SafetyDatabase) -> None:
        self._db = database

    def save(self, key: str, data: bytes) -> None:
        conn = self._db.connection
        conn.execute(
            """INSERT INTO blobs (key, value, updated_at) VALUES (?, ?, ?)
               ON CONFLICT(key) DO UPDATE SET
                   value = excluded.value,
                   updated_at = excluded.updated_at""",
            (key, sqlite3.Binary(data), datetime.now(timezone.utc).isoformat()),
        )
        conn.commit()
        logger.debug("Saved blob %s (%d bytes)", key, len(data))

    def load(self, key: str) -> bytes | None:
        try:
            row = self._db.connection.execute(
                "SELECT value FROM blobs WHERE key = ?", (key,)
            ).fetchone()
        except (DatabaseError, sqlite3.Error) as exc:
            logger.warning("Could not read blob %s: %s", key, exc)
            return None
        if row is None:
            return None
        return bytes(row[0])


class EncryptedBlobStore:
    """Wraps another blob store, sealing every value with Fernet.

    A blob that cannot be decrypted (corrupt, or written under another key)
    loads as ``None`` so callers fall back to their empty state.
    """

    def __init__(self, inner: BlobStore, encryptor: BlobEncryptor) -> None:
        self._inner = inner
        self._enc = encryptor

    def save(self, key: str, data: bytes) -> None:
        self._inner.save(key, self._enc.encrypt(data))

    def load(self, key: str) -> bytes | None:
        token = self._inner.load(key)
        if token is None:
            return None
        try:
            return self._enc.decrypt(token)
        except EncryptionError as exc:
            logger.warning("Discarding unreadable blob %s: %s", key, exc)
            return None
