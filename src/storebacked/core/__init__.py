"""
Core module - Configuration, errors, and primitive type definitions.
"""

from storebacked.core.config import settings, get_logger, setup_logging
from storebacked.core.errors import (
    ConversionError,
    MalformedRecord,
    StoreBackedError,
    StoreError,
    TypeMismatch,
    UnsupportedPrimitiveType,
    UnsupportedStorableType,
)
from storebacked.core.types import (
    Primitive,
    PrimitiveKind,
    StoredValue,
    is_primitive,
    primitive_kind,
    validate_stored_value,
)

__all__ = [
    "settings",
    "get_logger",
    "setup_logging",
    "ConversionError",
    "MalformedRecord",
    "StoreBackedError",
    "StoreError",
    "TypeMismatch",
    "UnsupportedPrimitiveType",
    "UnsupportedStorableType",
    "Primitive",
    "PrimitiveKind",
    "StoredValue",
    "is_primitive",
    "primitive_kind",
    "validate_stored_value",
]
