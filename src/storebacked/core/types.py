"""
Core type definitions for store-backed.

These types describe what a settings store can physically hold:
- Primitive kinds (bool, int, float32, float64, bytes, str, timestamp)
- Stored values (primitives nested in lists and string-keyed dicts)
"""

from datetime import datetime
from enum import Enum
from typing import Any, Union

from storebacked.core.errors import UnsupportedPrimitiveType


# ============================================
# Primitive Kinds
# ============================================

class PrimitiveKind(str, Enum):
    """Kinds of value a settings store accepts natively."""
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"     # 32-bit; shares the Python float runtime type
    DOUBLE = "double"
    DATA = "data"
    STRING = "string"
    DATE = "date"

    @property
    def python_type(self) -> type:
        return _PYTHON_TYPES[self]


_PYTHON_TYPES: dict[PrimitiveKind, type] = {
    PrimitiveKind.BOOL: bool,
    PrimitiveKind.INT: int,
    PrimitiveKind.FLOAT: float,
    PrimitiveKind.DOUBLE: float,
    PrimitiveKind.DATA: bytes,
    PrimitiveKind.STRING: str,
    PrimitiveKind.DATE: datetime,
}


Primitive = Union[bool, int, float, bytes, str, datetime]
"""A single store-native value."""

StoredValue = Union[Primitive, list["StoredValue"], dict[str, "StoredValue"]]
"""Anything a store holds: primitives nested in lists and string-keyed dicts."""


def primitive_kind(value: Any) -> PrimitiveKind:
    """
    Classify a value as one of the primitive kinds.

    Floats always classify as DOUBLE; the FLOAT kind only exists on the
    storable side, where it narrows precision on encode.

    Raises:
        UnsupportedPrimitiveType: If the value is not store-native.
    """
    # bool must be checked before int: bool is an int subclass
    if isinstance(value, bool):
        return PrimitiveKind.BOOL
    if isinstance(value, int):
        return PrimitiveKind.INT
    if isinstance(value, float):
        return PrimitiveKind.DOUBLE
    if isinstance(value, bytes):
        return PrimitiveKind.DATA
    if isinstance(value, str):
        return PrimitiveKind.STRING
    if isinstance(value, datetime):
        return PrimitiveKind.DATE
    raise UnsupportedPrimitiveType(value)


def is_primitive(value: Any) -> bool:
    """Check whether a value is one of the primitive kinds."""
    try:
        primitive_kind(value)
    except UnsupportedPrimitiveType:
        return False
    return True


def validate_stored_value(value: Any) -> None:
    """
    Check a whole stored value tree before it is handed to a store.

    Raises:
        UnsupportedPrimitiveType: If any leaf is not store-native or a dict
            key is not a string.
    """
    if isinstance(value, list):
        for item in value:
            validate_stored_value(item)
    elif isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise UnsupportedPrimitiveType(key, expected=str)
            validate_stored_value(item)
    else:
        primitive_kind(value)
