"""
Enumeration storables - enums stored as their raw values.

An enum is stored exactly as its raw value would be. Decoding looks the
raw value up among the enum's cases; a value with no matching case (for
example one written by an older version that has since dropped it) is a
TypeMismatch, never a crash. For Flag enums any combination of declared
bits is a valid value, and a bit outside them is a TypeMismatch.
"""

from enum import Enum, Flag
from typing import Any, TypeVar

from storebacked.conversion.base import BOOL, DATA, DOUBLE, INT, STRING, Mapped, Storable
from storebacked.core.errors import UnsupportedStorableType

E = TypeVar("E", bound=Enum)

_RAW_STORABLES: dict[type, Storable[Any]] = {
    bool: BOOL,
    int: INT,
    float: DOUBLE,
    bytes: DATA,
    str: STRING,
}


class EnumOf(Mapped[E, Any]):
    """An enum stored through the storable of its raw value type."""

    def __init__(self, enum_type: type[E], raw: Storable[Any] | None = None):
        self.enum_type = enum_type
        super().__init__(
            base=raw or _raw_storable(enum_type),
            to_value=self._to_raw,
            from_value=self._from_raw,
            name=enum_type.__qualname__,
        )

    def _to_raw(self, member: E) -> Any:
        if not isinstance(member, self.enum_type):
            raise TypeError(f"{member!r} is not a {self.enum_type.__qualname__} member")
        return member.value

    def _from_raw(self, raw: Any) -> E:
        if issubclass(self.enum_type, Flag):
            declared = 0
            for member in self.enum_type:
                declared |= member.value
            if raw & ~declared:
                raise ValueError(f"{raw!r} has bits outside {self.enum_type.__qualname__}")
        return self.enum_type(raw)


def _raw_storable(enum_type: type[Enum]) -> Storable[Any]:
    """Pick the direct storable shared by every raw value of an enum."""
    raw_types = {type(member.value) for member in enum_type}
    if len(raw_types) != 1:
        raise UnsupportedStorableType(
            enum_type, "raw values must all share one primitive type"
        )
    raw_type = raw_types.pop()
    storable = _RAW_STORABLES.get(raw_type)
    if storable is None:
        raise UnsupportedStorableType(
            enum_type, f"raw value type {raw_type.__name__} is not a primitive"
        )
    return storable
