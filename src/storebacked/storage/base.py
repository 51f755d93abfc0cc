"""
Settings store port.

Bindings depend only on this protocol: a key-value store holding stored
values (primitives nested in lists and string-keyed dicts). Individual
calls are expected to be thread-safe; nothing is atomic across calls.
"""

from typing import Protocol, runtime_checkable

from storebacked.core.types import StoredValue


@runtime_checkable
class SettingsStore(Protocol):
    """Key-value settings store interface."""

    def get(self, key: str) -> StoredValue | None:
        """Get the stored value for a key, or None if absent."""
        ...

    def set(self, key: str, value: StoredValue) -> None:
        """Store a value under a key, overwriting any previous value."""
        ...

    def remove(self, key: str) -> None:
        """Delete the entry for a key; no-op if absent."""
        ...
