"""
In-memory settings store.

Holds deep copies of stored values so callers can't mutate stored state
through aliases, which mirrors a real store serializing on write.
"""

import copy
import threading
from collections.abc import Iterator

from storebacked.core.config import get_logger
from storebacked.core.types import StoredValue, validate_stored_value

logger = get_logger("storage.memory")


class MemoryStore:
    """Process-local settings store backed by a dict."""

    def __init__(self, initial: dict[str, StoredValue] | None = None):
        self._values: dict[str, StoredValue] = {}
        self._lock = threading.Lock()
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str) -> StoredValue | None:
        with self._lock:
            value = self._values.get(key)
        return copy.deepcopy(value)

    def set(self, key: str, value: StoredValue) -> None:
        validate_stored_value(value)
        stored = copy.deepcopy(value)
        with self._lock:
            self._values[key] = stored
        logger.debug(f"Set {key}")

    def remove(self, key: str) -> None:
        with self._lock:
            self._values.pop(key, None)

    def keys(self) -> list[str]:
        with self._lock:
            return sorted(self._values)

    def clear(self) -> None:
        with self._lock:
            self._values.clear()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._values

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())
