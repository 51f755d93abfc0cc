"""
Storable protocol and the direct (store-native) storables.

A Storable[T] converts values of T to a stored representation and back:

    encode: T -> StoredValue          (total for well-typed values)
    decode: StoredValue -> T          (partial, raises ConversionError)

Composite storables (containers, records, enums) are parameterized over
other storables, so every chain ends at one of the Direct storables below.
"""

import math
import struct
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime
from typing import Any, Generic, TypeVar

from storebacked.core.errors import TypeMismatch, UnsupportedPrimitiveType
from storebacked.core.types import PrimitiveKind, StoredValue

T = TypeVar("T")
R = TypeVar("R")


class Storable(ABC, Generic[T]):
    """Capability to convert values of one type to and from stored values."""

    @abstractmethod
    def encode(self, value: T) -> StoredValue:
        """Convert a value to its stored representation."""

    @abstractmethod
    def decode(self, stored: StoredValue) -> T:
        """Convert a stored representation back to a value."""

    @property
    def name(self) -> str:
        """Human-readable name used in error messages."""
        return type(self).__name__

    def __repr__(self) -> str:
        return self.name


# ============================================
# Direct Storables
# ============================================

class Direct(Storable[Any]):
    """
    A store-native primitive stored as-is.

    Encode and decode both type-check the value against the declared kind,
    so a value that merely claims to be primitive never reaches the store.
    """

    def __init__(self, kind: PrimitiveKind):
        self.kind = kind

    @property
    def name(self) -> str:
        return self.kind.value

    def encode(self, value: Any) -> StoredValue:
        try:
            return self._coerce(value)
        except (TypeError, ValueError, OverflowError):
            raise UnsupportedPrimitiveType(value, expected=self.kind.python_type) from None

    def decode(self, stored: StoredValue) -> Any:
        try:
            return self._coerce(stored)
        except (TypeError, ValueError, OverflowError):
            raise TypeMismatch(stored, self.kind.python_type) from None

    def _coerce(self, value: Any) -> Any:
        kind = self.kind
        if kind is PrimitiveKind.BOOL:
            if isinstance(value, bool):
                return value
        elif kind is PrimitiveKind.INT:
            if isinstance(value, int) and not isinstance(value, bool):
                return value
        elif kind is PrimitiveKind.DOUBLE:
            if _is_number(value):
                return float(value)
        elif kind is PrimitiveKind.FLOAT:
            if _is_number(value):
                return _to_float32(float(value))
        elif kind is PrimitiveKind.DATA:
            if isinstance(value, (bytes, bytearray, memoryview)):
                return bytes(value)
        elif kind is PrimitiveKind.STRING:
            if isinstance(value, str):
                return value
        elif kind is PrimitiveKind.DATE:
            if isinstance(value, datetime):
                return value
        raise TypeError(f"expected {kind.value}, got {type(value).__name__}")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _to_float32(value: float) -> float:
    """Round a float to the nearest IEEE-754 single precision value."""
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


BOOL = Direct(PrimitiveKind.BOOL)
INT = Direct(PrimitiveKind.INT)
FLOAT = Direct(PrimitiveKind.FLOAT)
DOUBLE = Direct(PrimitiveKind.DOUBLE)
DATA = Direct(PrimitiveKind.DATA)
STRING = Direct(PrimitiveKind.STRING)
DATE = Direct(PrimitiveKind.DATE)


# ============================================
# Value-Representable Mapping
# ============================================

class Mapped(Storable[T], Generic[T, R]):
    """
    A type stored through another storable via a pair of conversions.

    `to_value` turns a T into the base storable's value type, and
    `from_value` turns it back. A `from_value` raising ValueError or
    TypeError means the stored value has no T counterpart.
    """

    def __init__(
        self,
        base: Storable[R],
        to_value: Callable[[T], R],
        from_value: Callable[[R], T],
        name: str | None = None,
    ):
        self.base = base
        self.to_value = to_value
        self.from_value = from_value
        self._name = name

    @property
    def name(self) -> str:
        return self._name or f"Mapped[{self.base.name}]"

    def encode(self, value: T) -> StoredValue:
        try:
            raw = self.to_value(value)
        except (TypeError, ValueError, AttributeError) as error:
            raise TypeMismatch(value, self.name, str(error)) from error
        return self.base.encode(raw)

    def decode(self, stored: StoredValue) -> T:
        raw = self.base.decode(stored)
        try:
            return self.from_value(raw)
        except (TypeError, ValueError) as error:
            raise TypeMismatch(stored, self.name, str(error)) from error
