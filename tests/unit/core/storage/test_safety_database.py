"""Tests for SafetyDatabase — schema creation, versioning, lifecycle."""

from __future__ import annotations

import pytest

from raksha.core.storage.database import SCHEMA_VERSION, DatabaseError, SafetyDatabase


class TestInitialization:
    def test_in_memory_initialize(self):
        db = SafetyDatabase(":memory:")
        db.initialize()
        assert db.connection is not None
        db.close()

    def test_double_initialize_is_idempotent(self):
        db = SafetyDatabase(":memory:")
        db.initialize()
        conn1 = db.connection
        db.initialize()
        assert db.connection is conn1
        db.close()

    def test_connection_before_init_raises(self):
        db = SafetyDatabase(":memory:")
        with pytest.raises(DatabaseError, match="not initialized"):
            _ = db.connection

    def test_context_manager(self):
        with SafetyDatabase(":memory:") as db:
            assert db.connection is not None
        with pytest.raises(DatabaseError):
            _ = db.connection

    def test_file_database_creates_parent_dirs(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "raksha.db"
        with SafetyDatabase(str(path)) as db:
            assert db.get_schema_version() == SCHEMA_VERSION
        assert path.exists()


class TestSchema:
    def test_schema_version_recorded(self, safety_db):
        assert safety_db.get_schema_version() == SCHEMA_VERSION

    def test_tables_created(self, safety_db):
        rows = safety_db.connection.execute(
            "SELECT name FROM sqlite_master WHERE type='table'"
        ).fetchall()
        names = {row[0] for row in rows}
        assert {"blobs", "schema_version"} <= names

    def test_reopen_does_not_duplicate_version(self, tmp_path):
        path = str(tmp_path / "raksha.db")
        with SafetyDatabase(path):
            pass
        with SafetyDatabase(path) as db:
            count = db.connection.execute("SELECT COUNT(*) FROM schema_version").fetchone()[0]
        assert count == 1
