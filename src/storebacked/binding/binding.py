"""
Binding - a typed value cached in memory and written through to a store.

Lifecycle:
- Construction reads the store once and decodes the stored value. A
  missing key, or a stored value that fails to decode, yields the default.
- Reads return the cached value without touching the store.
- Writes update the cached value, then encode and store it. A value that
  fails to encode is reported and not stored; the cached value still changes.
- reset() restores the default and erases the stored entry.

Conversion failures never escape a binding; they are delivered to the
binding's diagnostic callable instead. Callers that need strict failures
should use the storable directly.
"""

import copy
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar

from storebacked.conversion.base import Storable
from storebacked.conversion.containers import OptionalOf
from storebacked.conversion.registry import storable_for
from storebacked.core.config import get_logger
from storebacked.core.errors import ConversionError
from storebacked.storage.base import SettingsStore
from storebacked.storage.defaults import get_default_store

logger = get_logger("binding")

T = TypeVar("T")


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()
"""Sentinel for a default that was not given."""


@dataclass(frozen=True)
class BindingFailure:
    """A conversion failure absorbed by a binding."""

    key: str
    """The store key the binding is bound to."""

    operation: Literal["decode", "encode"]
    """Whether the failure happened reading the store or writing it."""

    error: ConversionError
    """The underlying conversion error."""


Diagnostic = Callable[[BindingFailure], None]


def log_failure(failure: BindingFailure) -> None:
    """Default diagnostic: log the failure as a warning."""
    if failure.operation == "decode":
        logger.warning(f"Falling back to default for '{failure.key}': {failure.error}")
    else:
        logger.warning(f"Not storing value for '{failure.key}': {failure.error}")


def resolve_default(storable: Storable[Any], default: Any) -> Any:
    """Return the effective default; optional storables default to None."""
    if default is not MISSING:
        return default
    if isinstance(storable, OptionalOf):
        return None
    raise TypeError(f"A default is required for non-optional {storable.name} bindings")


class Binding(Generic[T]):
    """A typed value bound to one key of a settings store."""

    def __init__(
        self,
        key: str,
        storable: Storable[T] | Any,
        default: T = MISSING,
        store: SettingsStore | None = None,
        on_failure: Diagnostic | None = None,
    ):
        """
        Bind a key and read its current value.

        Args:
            key: Store key, shared with everything else using the store.
            storable: A Storable, or a type annotation resolved with storable_for().
            default: Value used when nothing usable is stored. May be omitted
                for optional types, where it is None.
            store: Settings store; defaults to the process default store.
            on_failure: Diagnostic callable for absorbed conversion failures.

        Raises:
            UnsupportedStorableType: If the type has no conversion chain.
            TypeError: If the default is omitted for a non-optional type.
        """
        self.key = key
        self.storable: Storable[T] = storable_for(storable)
        self.default: T = resolve_default(self.storable, default)
        self.store = store if store is not None else get_default_store()
        self.on_failure = on_failure or log_failure
        self._value: T = self._load()

    def _load(self) -> T:
        stored = self.store.get(self.key)
        if stored is None:
            return self._fresh_default()
        try:
            return self.storable.decode(stored)
        except ConversionError as error:
            self._report("decode", error)
            return self._fresh_default()

    @property
    def value(self) -> T:
        """
        A copy of the cached value.

        Mutating the returned object changes neither the cache nor the store;
        assign the changed value back to write it through.
        """
        return copy.deepcopy(self._value)

    @value.setter
    def value(self, new_value: T) -> None:
        self._value = copy.deepcopy(new_value)
        try:
            stored = self.storable.encode(new_value)
            self.store.set(self.key, stored)
        except ConversionError as error:
            self._report("encode", error)

    def reset(self) -> None:
        """Restore the default and erase the stored entry."""
        self._value = self._fresh_default()
        self.store.remove(self.key)

    def _fresh_default(self) -> T:
        # Defaults may be mutable containers; never hand out the shared one.
        return copy.deepcopy(self.default)

    def _report(self, operation: Literal["decode", "encode"], error: ConversionError) -> None:
        failure = BindingFailure(key=self.key, operation=operation, error=error)
        try:
            self.on_failure(failure)
        except Exception:
            logger.exception(f"Diagnostic handler failed for '{self.key}'")

    def __repr__(self) -> str:
        return f"Binding(key={self.key!r}, storable={self.storable.name}, value={self._value!r})"
