"""
Container storables - sequences, string-keyed maps, and optionals.

Each container is parameterized over the storable of its elements and
derives its representation from theirs:

    SequenceOf(T)  ->  list of T's representation
    MapOf(T)       ->  dict[str, T's representation]
    OptionalOf(T)  ->  [] when absent, [T's representation] when present
"""

from collections.abc import Mapping, Sequence
from typing import Any, Generic, TypeVar

from storebacked.conversion.base import Storable
from storebacked.core.errors import TypeMismatch, UnsupportedPrimitiveType
from storebacked.core.types import StoredValue

T = TypeVar("T")


class SequenceOf(Storable[Sequence[T]], Generic[T]):
    """An ordered sequence stored as a list of element representations."""

    def __init__(self, element: Storable[T], container: type = list):
        self.element = element
        self.container = container
        """Type the decoded elements are collected into (list or tuple)."""

    @property
    def name(self) -> str:
        return f"{self.container.__name__}[{self.element.name}]"

    def encode(self, value: Sequence[T]) -> StoredValue:
        if not _is_sequence(value):
            raise TypeMismatch(value, self.name, "expected a sequence")
        return [self.element.encode(item) for item in value]

    def decode(self, stored: StoredValue) -> Sequence[T]:
        if not isinstance(stored, list):
            raise TypeMismatch(stored, self.name, "expected a list")
        items = [self.element.decode(item) for item in stored]
        if self.container is list:
            return items
        return self.container(items)


class MapOf(Storable[Mapping[str, T]], Generic[T]):
    """A string-keyed map stored as a dict of value representations."""

    def __init__(self, value: Storable[T]):
        self.value = value

    @property
    def name(self) -> str:
        return f"dict[str, {self.value.name}]"

    def encode(self, value: Mapping[str, T]) -> StoredValue:
        if not isinstance(value, Mapping):
            raise TypeMismatch(value, self.name, "expected a mapping")
        encoded: dict[str, StoredValue] = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise UnsupportedPrimitiveType(key, expected=str)
            encoded[key] = self.value.encode(item)
        return encoded

    def decode(self, stored: StoredValue) -> dict[str, T]:
        if not isinstance(stored, dict):
            raise TypeMismatch(stored, self.name, "expected a dict")
        decoded: dict[str, T] = {}
        for key, item in stored.items():
            if not isinstance(key, str):
                raise TypeMismatch(stored, self.name, f"non-string key {key!r}")
            decoded[key] = self.value.decode(item)
        return decoded


class OptionalOf(Storable[T | None], Generic[T]):
    """
    An optional value stored as a zero- or one-element list.

    The list form keeps "absent" distinguishable from any present value,
    including falsy ones. A stored list with two or more elements is
    rejected rather than truncated.
    """

    def __init__(self, wrapped: Storable[T]):
        self.wrapped = wrapped

    @property
    def name(self) -> str:
        return f"Optional[{self.wrapped.name}]"

    def encode(self, value: T | None) -> StoredValue:
        if value is None:
            return []
        return [self.wrapped.encode(value)]

    def decode(self, stored: StoredValue) -> T | None:
        if not isinstance(stored, list):
            raise TypeMismatch(stored, self.name, "expected a list")
        if not stored:
            return None
        if len(stored) > 1:
            raise TypeMismatch(
                stored, self.name, f"optional holds at most one element, found {len(stored)}"
            )
        return self.wrapped.decode(stored[0])


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))
