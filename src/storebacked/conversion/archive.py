"""
Secure archive storables - object graphs stored as restricted pickles.

Only classes that opt in by subclassing SecureArchivable can be archived,
and unarchiving resolves nothing but the declared class, the classes it
explicitly allows, and a fixed set of plain value types. A blob that
references any other global is rejected as malformed instead of being
imported.
"""

import io
import pickle
from collections.abc import Iterable
from typing import Any, Generic, TypeVar

from storebacked.conversion.base import Storable
from storebacked.core.config import get_logger
from storebacked.core.errors import MalformedRecord, TypeMismatch, UnsupportedStorableType
from storebacked.core.types import StoredValue

logger = get_logger("conversion.archive")

A = TypeVar("A", bound="SecureArchivable")

_SAFE_GLOBALS: frozenset[tuple[str, str]] = frozenset({
    ("builtins", "bool"),
    ("builtins", "bytearray"),
    ("builtins", "bytes"),
    ("builtins", "complex"),
    ("builtins", "dict"),
    ("builtins", "float"),
    ("builtins", "frozenset"),
    ("builtins", "int"),
    ("builtins", "list"),
    ("builtins", "set"),
    ("builtins", "str"),
    ("builtins", "tuple"),
    ("datetime", "date"),
    ("datetime", "datetime"),
    ("datetime", "time"),
    ("datetime", "timedelta"),
    ("datetime", "timezone"),
})


class SecureArchivable:
    """
    Marker base for classes whose instances may be archived into a store.

    Subclasses list the other archivable classes their graphs contain in
    `archive_allowed` so the unarchiver can resolve them.
    """

    archive_allowed: tuple[type, ...] = ()


class _RestrictedUnpickler(pickle.Unpickler):
    """Unpickler that only resolves an explicit allowlist of globals."""

    def __init__(self, blob: bytes, allowed: frozenset[tuple[str, str]]):
        super().__init__(io.BytesIO(blob))
        self.allowed = allowed

    def find_class(self, module: str, name: str) -> Any:
        if (module, name) in self.allowed or (module, name) in _SAFE_GLOBALS:
            return super().find_class(module, name)
        raise pickle.UnpicklingError(f"global '{module}.{name}' is not allowed")


class Archived(Storable[A], Generic[A]):
    """A SecureArchivable object graph stored as a pickle blob."""

    def __init__(self, archived_type: type[A], allowed: Iterable[type] = ()):
        if not (isinstance(archived_type, type) and issubclass(archived_type, SecureArchivable)):
            raise UnsupportedStorableType(archived_type, "must subclass SecureArchivable")
        self.archived_type = archived_type
        classes = {archived_type, *archived_type.archive_allowed, *allowed}
        self.allowed = frozenset((cls.__module__, cls.__qualname__) for cls in classes)

    @property
    def name(self) -> str:
        return self.archived_type.__qualname__

    def encode(self, value: A) -> StoredValue:
        if not isinstance(value, self.archived_type):
            raise TypeMismatch(value, self.name, f"expected a {self.name} instance")
        try:
            return pickle.dumps(value, protocol=pickle.HIGHEST_PROTOCOL)
        except (pickle.PicklingError, TypeError, AttributeError) as error:
            raise TypeMismatch(value, self.name, str(error)) from error

    def decode(self, stored: StoredValue) -> A:
        if not isinstance(stored, bytes):
            raise TypeMismatch(stored, self.name, "expected data")
        try:
            value = _RestrictedUnpickler(stored, self.allowed).load()
        except (
            pickle.UnpicklingError,
            EOFError,
            AttributeError,
            ImportError,
            IndexError,
            KeyError,
            TypeError,
            ValueError,
        ) as error:
            logger.debug(f"Failed to unarchive {self.name}: {error}")
            raise MalformedRecord(self.archived_type, str(error)) from error
        if not isinstance(value, self.archived_type):
            raise TypeMismatch(value, self.name, f"archive holds a {type(value).__name__}")
        return value
