"""
SQLite Settings Store - persistent key-value settings.

Entries are grouped by domain (a settings "suite"), so several stores can
share one database file without seeing each other's keys.

Values are kept as a tagged JSON tree so every primitive kind survives the
trip through a TEXT column:

    {"t": "data", "v": "<base64>"}
    {"t": "date", "v": "2024-01-02T03:04:05+00:00"}
    {"t": "array", "v": [...]}
    {"t": "dict", "v": {...}}
"""

import base64
import binascii
import json
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Generator

from storebacked.core.config import settings, get_logger
from storebacked.core.errors import StoreError
from storebacked.core.types import PrimitiveKind, StoredValue, primitive_kind, validate_stored_value

logger = get_logger("storage.sqlite")

_ARRAY = "array"
_DICT = "dict"


class SQLiteStore:
    """
    SQLite-backed settings store.

    Tables:
    - settings: (domain, key) -> tagged JSON value
    """

    def __init__(self, db_path: Path | None = None, domain: str | None = None):
        """Initialize the settings store."""
        self.db_path = Path(db_path) if db_path else settings.database_path
        self.domain = domain or settings.default_domain
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        """Initialize the database schema."""
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS settings (
                    domain TEXT NOT NULL,
                    key TEXT NOT NULL,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    PRIMARY KEY (domain, key)
                )
            """)
            conn.commit()

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a database connection with row factory."""
        try:
            conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as error:
            raise StoreError(f"Cannot open settings database {self.db_path}: {error}") from error
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        except sqlite3.Error as error:
            raise StoreError(f"Settings database error in {self.db_path}: {error}") from error
        finally:
            conn.close()

    # ==========================================
    # SettingsStore
    # ==========================================

    def get(self, key: str) -> StoredValue | None:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT value FROM settings WHERE domain = ? AND key = ?",
                (self.domain, key),
            ).fetchone()
        if row is None:
            return None
        try:
            return _unpack(json.loads(row["value"]))
        except (ValueError, KeyError, TypeError, AttributeError, binascii.Error) as error:
            logger.warning(f"Ignoring unreadable setting {self.domain}/{key}: {error}")
            return None

    def set(self, key: str, value: StoredValue) -> None:
        validate_stored_value(value)
        payload = json.dumps(_pack(value))
        now = datetime.now(timezone.utc).isoformat()
        with self._get_connection() as conn:
            conn.execute(
                """
                INSERT INTO settings (domain, key, value, updated_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT (domain, key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (self.domain, key, payload, now),
            )
            conn.commit()
        logger.debug(f"Set {self.domain}/{key}")

    def remove(self, key: str) -> None:
        with self._get_connection() as conn:
            conn.execute(
                "DELETE FROM settings WHERE domain = ? AND key = ?",
                (self.domain, key),
            )
            conn.commit()

    # ==========================================
    # Inspection
    # ==========================================

    def keys(self) -> list[str]:
        """List the keys stored in this domain."""
        with self._get_connection() as conn:
            rows = conn.execute(
                "SELECT key FROM settings WHERE domain = ? ORDER BY key",
                (self.domain,),
            ).fetchall()
        return [row["key"] for row in rows]

    def snapshot(self) -> dict[str, StoredValue]:
        """Read every readable entry in this domain."""
        entries: dict[str, StoredValue] = {}
        for key in self.keys():
            value = self.get(key)
            if value is not None:
                entries[key] = value
        return entries

    def clear(self) -> None:
        """Delete every entry in this domain."""
        with self._get_connection() as conn:
            conn.execute("DELETE FROM settings WHERE domain = ?", (self.domain,))
            conn.commit()
        logger.info(f"Cleared settings domain {self.domain}")


# ============================================
# Value Serialization
# ============================================

def _pack(value: StoredValue) -> dict[str, Any]:
    if isinstance(value, list):
        return {"t": _ARRAY, "v": [_pack(item) for item in value]}
    if isinstance(value, dict):
        return {"t": _DICT, "v": {key: _pack(item) for key, item in value.items()}}

    kind = primitive_kind(value)
    if kind is PrimitiveKind.DATA:
        return {"t": kind.value, "v": base64.b64encode(value).decode("ascii")}
    if kind is PrimitiveKind.DATE:
        return {"t": kind.value, "v": value.isoformat()}
    return {"t": kind.value, "v": value}


def _unpack(node: dict[str, Any]) -> StoredValue:
    tag = node["t"]
    raw = node["v"]
    if tag == _ARRAY:
        return [_unpack(item) for item in raw]
    if tag == _DICT:
        return {key: _unpack(item) for key, item in raw.items()}

    kind = PrimitiveKind(tag)
    if kind is PrimitiveKind.DATA:
        return base64.b64decode(raw, validate=True)
    if kind is PrimitiveKind.DATE:
        return datetime.fromisoformat(raw)
    if kind in (PrimitiveKind.FLOAT, PrimitiveKind.DOUBLE):
        return float(raw)
    if kind is PrimitiveKind.BOOL and not isinstance(raw, bool):
        raise TypeError(f"expected a JSON boolean, got {raw!r}")
    if kind is PrimitiveKind.INT and (isinstance(raw, bool) or not isinstance(raw, int)):
        raise TypeError(f"expected a JSON integer, got {raw!r}")
    if kind is PrimitiveKind.STRING and not isinstance(raw, str):
        raise TypeError(f"expected a JSON string, got {raw!r}")
    return raw
