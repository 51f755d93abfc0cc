"""
store-backed

Typed properties transparently backed by a key-value settings store.
Structured values (records, enums, optionals, lists, maps, URLs, colors)
are converted to and from the few primitive kinds the store can hold.
"""

__version__ = "0.1.0"

from storebacked.binding import Binding, BindingFailure, StoreBacked, binding_of
from storebacked.conversion import (
    Archived,
    Color,
    EnumOf,
    MapOf,
    OptionalOf,
    RecordOf,
    SecureArchivable,
    SequenceOf,
    Storable,
    register_storable,
    storable_for,
)
from storebacked.core.config import settings
from storebacked.core.errors import (
    ConversionError,
    MalformedRecord,
    StoreBackedError,
    StoreError,
    TypeMismatch,
    UnsupportedPrimitiveType,
    UnsupportedStorableType,
)
from storebacked.storage import (
    MemoryStore,
    SettingsStore,
    SQLiteStore,
    get_default_store,
    set_default_store,
)

__all__ = [
    "settings",
    "Binding",
    "BindingFailure",
    "StoreBacked",
    "binding_of",
    "Archived",
    "Color",
    "EnumOf",
    "MapOf",
    "OptionalOf",
    "RecordOf",
    "SecureArchivable",
    "SequenceOf",
    "Storable",
    "register_storable",
    "storable_for",
    "ConversionError",
    "MalformedRecord",
    "StoreBackedError",
    "StoreError",
    "TypeMismatch",
    "UnsupportedPrimitiveType",
    "UnsupportedStorableType",
    "MemoryStore",
    "SettingsStore",
    "SQLiteStore",
    "get_default_store",
    "set_default_store",
]
