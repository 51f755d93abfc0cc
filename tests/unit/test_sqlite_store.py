"""Tests for the SQLite settings store."""

import sqlite3
from datetime import datetime, timedelta, timezone

import pytest

from storebacked.core.errors import StoreError, UnsupportedPrimitiveType
from storebacked.storage import SettingsStore, SQLiteStore


class TestSQLiteStore:
    """Tests for SQLiteStore."""

    def test_satisfies_protocol(self, sqlite_store):
        """Test SQLiteStore is a SettingsStore."""
        assert isinstance(sqlite_store, SettingsStore)

    @pytest.mark.parametrize(
        "value",
        [
            True,
            False,
            0,
            -(2**53),
            2.5,
            b"\x00\x01\xfe\xff",
            b"",
            "unicode ✓",
            "",
            datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc),
            datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone(timedelta(hours=-5))),
            datetime(2024, 1, 2, 3, 4, 5),
        ],
    )
    def test_round_trip_primitives(self, sqlite_store, value):
        """Test every primitive kind keeps its value and type."""
        sqlite_store.set("key", value)
        fetched = sqlite_store.get("key")
        assert fetched == value
        assert type(fetched) is type(value)

    def test_round_trip_nested(self, sqlite_store):
        """Test lists and dicts of primitives round-trip."""
        value = {
            "recent": ["a", "b"],
            "optional": [],
            "nested": {"blob": [b"x"], "flags": [True, 0, 1.0]},
        }
        sqlite_store.set("tree", value)
        fetched = sqlite_store.get("tree")
        assert fetched == value
        assert type(fetched["nested"]["flags"][0]) is bool
        assert type(fetched["nested"]["flags"][1]) is int
        assert type(fetched["nested"]["flags"][2]) is float

    def test_overwrite_and_remove(self, sqlite_store):
        """Test set overwrites and remove deletes."""
        sqlite_store.set("key", 1)
        sqlite_store.set("key", 2)
        assert sqlite_store.get("key") == 2

        sqlite_store.remove("key")
        assert sqlite_store.get("key") is None
        sqlite_store.remove("key")

    def test_persists_across_instances(self, temp_data_dir):
        """Test values survive reopening the database."""
        path = temp_data_dir / "prefs.sqlite"
        SQLiteStore(path, domain="app").set("launches", 3)
        assert SQLiteStore(path, domain="app").get("launches") == 3

    def test_domains_are_isolated(self, temp_data_dir):
        """Test two domains in one file don't share keys."""
        path = temp_data_dir / "prefs.sqlite"
        first = SQLiteStore(path, domain="first")
        second = SQLiteStore(path, domain="second")

        first.set("key", "one")
        second.set("key", "two")
        first.set("only-first", True)

        assert first.get("key") == "one"
        assert second.get("key") == "two"
        assert second.get("only-first") is None

        first.clear()
        assert first.keys() == []
        assert second.keys() == ["key"]

    def test_keys_and_snapshot(self, sqlite_store):
        """Test listing keys and reading the whole domain."""
        sqlite_store.set("b", 2)
        sqlite_store.set("a", [1])
        assert sqlite_store.keys() == ["a", "b"]
        assert sqlite_store.snapshot() == {"a": [1], "b": 2}

    def test_rejects_unsupported_values(self, sqlite_store):
        """Test values outside the primitive kinds are never written."""
        with pytest.raises(UnsupportedPrimitiveType):
            sqlite_store.set("bad", {"when": object()})
        assert sqlite_store.keys() == []

    def test_unreadable_row_is_absent(self, sqlite_store):
        """Test a corrupt row reads as absent instead of raising."""
        with sqlite3.connect(sqlite_store.db_path) as conn:
            conn.execute(
                "INSERT INTO settings (domain, key, value, updated_at) VALUES (?, ?, ?, ?)",
                (sqlite_store.domain, "corrupt", "{not json", "2024-01-01T00:00:00"),
            )
            conn.execute(
                "INSERT INTO settings (domain, key, value, updated_at) VALUES (?, ?, ?, ?)",
                (sqlite_store.domain, "unknown", '{"t": "color", "v": "red"}', "2024-01-01T00:00:00"),
            )
        assert sqlite_store.get("corrupt") is None
        assert sqlite_store.get("unknown") is None
        assert sqlite_store.snapshot() == {}

    def test_unopenable_database(self, temp_data_dir):
        """Test backend failures surface as StoreError."""
        with pytest.raises(StoreError):
            SQLiteStore(temp_data_dir, domain="test")
