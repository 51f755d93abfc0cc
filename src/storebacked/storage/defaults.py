"""
Process-wide default settings store.

Bindings declared without an explicit store use this one. It is created
lazily from the global settings so importing the library never touches
the filesystem.
"""

from storebacked.core.config import settings, get_logger
from storebacked.storage.base import SettingsStore
from storebacked.storage.sqlite import SQLiteStore

logger = get_logger("storage.defaults")

_default_store: SettingsStore | None = None


def get_default_store() -> SettingsStore:
    """Get the default store, creating the SQLite store on first use."""
    global _default_store
    if _default_store is None:
        settings.ensure_directories()
        _default_store = SQLiteStore(settings.database_path, settings.default_domain)
        logger.info(f"Using default settings store at {settings.database_path}")
    return _default_store


def set_default_store(store: SettingsStore | None) -> None:
    """Replace the default store; None resets it to lazy creation."""
    global _default_store
    _default_store = store
