"""
Storage Layer - settings stores bindings read and write through.

1. SettingsStore → The protocol bindings depend on
2. MemoryStore → In-process dict (tests, ephemeral state)
3. SQLiteStore → Persistent store grouped by domain

Bindings without an explicit store use get_default_store().
"""

from storebacked.storage.base import SettingsStore
from storebacked.storage.memory import MemoryStore
from storebacked.storage.sqlite import SQLiteStore
from storebacked.storage.defaults import get_default_store, set_default_store

__all__ = [
    "SettingsStore",
    "MemoryStore",
    "SQLiteStore",
    "get_default_store",
    "set_default_store",
]
