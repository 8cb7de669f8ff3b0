"""Tests for the blob store implementations."""

from __future__ import annotations

from raksha.core.storage.blob_store import (
    CONTACTS_KEY,
    BlobStore,
    EncryptedBlobStore,
    MemoryBlobStore,
    SQLiteBlobStore,
)
from raksha.core.storage.database import SafetyDatabase
from raksha.core.storage.encryption import BlobEncryptor
from raksha.domains.safety.contacts import ContactStore
from raksha.domains.safety.models import EmergencyContact


class TestMemoryBlobStore:
    def test_missing_key_is_none(self):
        assert MemoryBlobStore().load(CONTACTS_KEY) is None

    def test_save_replaces(self):
        store = MemoryBlobStore()
        store.save("k", b"one")
        store.save("k", b"two")
        assert store.load("k") == b"two"
        assert store.keys() == ["k"]


class TestSQLiteBlobStore:
    def test_round_trip(self, safety_db):
        store = SQLiteBlobStore(safety_db)
        store.save(CONTACTS_KEY, b"[]")
        assert store.load(CONTACTS_KEY) == b"[]"

    def test_upsert_keeps_single_row(self, safety_db):
        store = SQLiteBlobStore(safety_db)
        store.save("k", b"one")
        store.save("k", b"two")
        assert store.load("k") == b"two"
        count = safety_db.connection.execute("SELECT COUNT(*) FROM blobs").fetchone()[0]
        assert count == 1

    def test_missing_key_is_none(self, safety_db):
        assert SQLiteBlobStore(safety_db).load("absent") is None

    def test_closed_database_loads_none(self):
        db = SafetyDatabase(":memory:")
        db.initialize()
        store = SQLiteBlobStore(db)
        store.save("k", b"v")
        db.close()
        assert store.load("k") is None

    def test_survives_reopen(self, tmp_path):
        path = str(tmp_path / "raksha.db")
        with SafetyDatabase(path) as db:
            SQLiteBlobStore(db).save("k", b"persisted")
        with SafetyDatabase(path) as db:
            assert SQLiteBlobStore(db).load("k") == b"persisted"


class TestEncryptedBlobStore:
    def test_inner_store_holds_ciphertext(self):
        inner = MemoryBlobStore()
        store = EncryptedBlobStore(inner, BlobEncryptor(BlobEncryptor.generate_key()))
        store.save("k", b"plain")
        assert inner.load("k") != b"plain"
        assert store.load("k") == b"plain"

    def test_wrong_key_loads_none(self):
        inner = MemoryBlobStore()
        EncryptedBlobStore(inner, BlobEncryptor(BlobEncryptor.generate_key())).save("k", b"v")
        other = EncryptedBlobStore(inner, BlobEncryptor(BlobEncryptor.generate_key()))
        assert other.load("k") is None

    def test_missing_key_is_none(self):
        store = EncryptedBlobStore(MemoryBlobStore(), BlobEncryptor(BlobEncryptor.generate_key()))
        assert store.load("absent") is None

    def test_contacts_survive_encrypted_sqlite(self, safety_db):
        key = BlobEncryptor.generate_key()
        store = EncryptedBlobStore(SQLiteBlobStore(safety_db), BlobEncryptor(key))
        contacts = ContactStore(store)
        contacts.add(EmergencyContact(name="Asha", phone_number="+15550100"))

        reloaded = ContactStore(EncryptedBlobStore(SQLiteBlobStore(safety_db), BlobEncryptor(key)))
        reloaded.load()
        assert [c.name for c in reloaded.list()] == ["Asha"]


def test_implementations_satisfy_protocol(safety_db):
    assert isinstance(MemoryBlobStore(), BlobStore)
    assert isinstance(SQLiteBlobStore(safety_db), BlobStore)
