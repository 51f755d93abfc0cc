"""
StoreBacked descriptor - declare store-backed attributes on a class.

    class Preferences:
        theme: Theme = StoreBacked("theme", default=Theme.SYSTEM)
        recent: list[str] = StoreBacked("recent", default=[])
        account: Account | None = StoreBacked("account")

The storable is resolved from the annotation when the class is created.
An annotation naming something not yet defined (a model declared later in
the module, with `from __future__ import annotations`) is resolved on first
access instead.
Each instance gets its own Binding, constructed on first access.
"""

import inspect
import typing
from typing import Any, Generic, TypeVar

from storebacked.binding.binding import MISSING, Binding, Diagnostic, resolve_default
from storebacked.conversion.base import Storable
from storebacked.conversion.registry import storable_for
from storebacked.core.errors import UnsupportedStorableType
from storebacked.storage.base import SettingsStore
from storebacked.storage.defaults import get_default_store

T = TypeVar("T")


class StoreBacked(Generic[T]):
    """Descriptor exposing a per-instance Binding as a plain attribute."""

    def __init__(
        self,
        key: str | None = None,
        default: T = MISSING,
        *,
        store: SettingsStore | None = None,
        storable: Storable[T] | Any = None,
        store_attr: str = "store",
        on_failure: Diagnostic | None = None,
    ):
        """
        Args:
            key: Store key; defaults to the attribute name.
            default: Default value; may be omitted for optional types.
            store: Explicit store for every instance.
            storable: Explicit storable or annotation, instead of the
                attribute's annotation.
            store_attr: Instance attribute holding a store, used when no
                explicit store is given.
            on_failure: Diagnostic callable for absorbed conversion failures.
        """
        self.key = key
        self.default = default
        self.store = store
        self.storable: Storable[T] | None = storable_for(storable) if storable is not None else None
        self.store_attr = store_attr
        self.on_failure = on_failure
        self.name: str | None = None
        self._owner: type | None = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        if self.key is None:
            self.key = name
        if self.storable is None:
            try:
                annotation = _annotation(owner, name)
            except NameError:
                self._owner = owner
                return
            self.storable = storable_for(annotation)
        resolve_default(self.storable, self.default)

    def _resolve_deferred(self) -> None:
        try:
            annotation = _annotation(self._owner, self.name)
        except NameError as error:
            raise UnsupportedStorableType(
                self._owner,
                f"annotation of '{self.name}' can't be resolved ({error}); "
                "pass storable= explicitly",
            ) from error
        storable = storable_for(annotation)
        resolve_default(storable, self.default)
        self.storable = storable
        self._owner = None

    @property
    def _slot(self) -> str:
        return f"_storebacked_{self.name}"

    def binding(self, obj: Any) -> Binding[T]:
        """Get the instance's binding, constructing it on first use."""
        if self.name is None:
            raise TypeError("StoreBacked must be declared in a class body")
        if self.storable is None:
            self._resolve_deferred()
        bound = obj.__dict__.get(self._slot)
        if bound is None:
            bound = Binding(
                self.key,
                self.storable,
                default=self.default,
                store=self._store_for(obj),
                on_failure=self.on_failure,
            )
            obj.__dict__[self._slot] = bound
        return bound

    def _store_for(self, obj: Any) -> SettingsStore:
        if self.store is not None:
            return self.store
        candidate = getattr(obj, self.store_attr, None)
        if isinstance(candidate, SettingsStore):
            return candidate
        return get_default_store()

    def __get__(self, obj: Any, objtype: type | None = None) -> Any:
        if obj is None:
            return self
        return self.binding(obj).value

    def __set__(self, obj: Any, value: T) -> None:
        self.binding(obj).value = value

    def __repr__(self) -> str:
        return f"StoreBacked(key={self.key!r}, storable={self.storable!r})"


def binding_of(obj: Any, name: str) -> Binding[Any]:
    """
    Get the Binding behind a StoreBacked attribute.

    Raises:
        AttributeError: If the attribute is not a StoreBacked descriptor.
    """
    descriptor = inspect.getattr_static(type(obj), name, None)
    if not isinstance(descriptor, StoreBacked):
        raise AttributeError(f"{type(obj).__qualname__}.{name} is not a StoreBacked attribute")
    return descriptor.binding(obj)


def _annotation(owner: type, name: str) -> Any:
    """
    Evaluate the annotation of one attribute.

    Raises:
        NameError: If the annotation refers to a name not defined yet.
        UnsupportedStorableType: If the attribute has no annotation.
    """
    annotations = inspect.get_annotations(owner)
    if name not in annotations:
        raise UnsupportedStorableType(
            owner, f"'{name}' needs a type annotation or an explicit storable"
        )
    annotation = annotations[name]
    if isinstance(annotation, str):
        annotation = typing.get_type_hints(owner, include_extras=True)[name]
    return annotation
