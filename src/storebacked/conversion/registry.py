"""
Storable resolution - map Python type annotations to storables.

Resolution is recursive over the annotation: `list[Theme] | None` becomes
OptionalOf(SequenceOf(EnumOf(Theme))). It runs once per declaration, so a
type with no chain down to the primitive kinds is reported where it is
declared instead of on first read or write.
"""

import collections.abc
import dataclasses
import types
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Union, get_args, get_origin, is_typeddict

from pydantic import BaseModel

from storebacked.conversion.archive import Archived, SecureArchivable
from storebacked.conversion.base import BOOL, DATA, DATE, DOUBLE, INT, STRING, Storable
from storebacked.conversion.containers import MapOf, OptionalOf, SequenceOf
from storebacked.conversion.enums import EnumOf
from storebacked.conversion.records import RecordOf
from storebacked.core.config import get_logger
from storebacked.core.errors import UnsupportedStorableType

logger = get_logger("conversion.registry")

_DIRECT: dict[type, Storable[Any]] = {
    bool: BOOL,
    int: INT,
    float: DOUBLE,
    bytes: DATA,
    str: STRING,
    datetime: DATE,
}

_SEQUENCE_ORIGINS = (list, collections.abc.Sequence, collections.abc.MutableSequence)
_MAPPING_ORIGINS = (dict, collections.abc.Mapping, collections.abc.MutableMapping)

# Extension storables, looked up by exact type
_registry: dict[Any, Storable[Any]] = {}


def register_storable(tp: Any, storable: Storable[Any]) -> None:
    """Register the storable used for an extension type."""
    if tp in _registry:
        logger.debug(f"Replacing storable registered for {tp!r}")
    _registry[tp] = storable


def unregister_storable(tp: Any) -> None:
    """Remove an extension registration (no-op if absent)."""
    _registry.pop(tp, None)


def storable_for(tp: Any) -> Storable[Any]:
    """
    Resolve the storable for a type annotation.

    Args:
        tp: A type annotation, or a Storable which is returned unchanged.
            `Annotated[T, storable]` selects an explicit storable for T.

    Returns:
        The storable that converts values of the annotated type.

    Raises:
        UnsupportedStorableType: If the annotation has no conversion chain.
    """
    if isinstance(tp, Storable):
        return tp

    try:
        registered = _registry.get(tp)
    except TypeError:  # unhashable annotation
        registered = None
    if registered is not None:
        return registered

    origin = get_origin(tp)
    if origin is not None:
        return _resolve_generic(tp, origin, get_args(tp))

    if tp is None or tp is type(None):
        raise UnsupportedStorableType(tp, "None alone is not storable; use Optional")

    if not isinstance(tp, type):
        raise UnsupportedStorableType(tp, "not a type")

    if issubclass(tp, Enum):
        return EnumOf(tp)
    if issubclass(tp, SecureArchivable):
        return Archived(tp)
    if issubclass(tp, BaseModel) or dataclasses.is_dataclass(tp) or is_typeddict(tp):
        return RecordOf(tp)

    direct = _DIRECT.get(tp)
    if direct is not None:
        return direct

    if tp in (list, tuple, dict):
        raise UnsupportedStorableType(tp, "container annotations need element types")
    raise UnsupportedStorableType(tp)


def _resolve_generic(tp: Any, origin: Any, args: tuple[Any, ...]) -> Storable[Any]:
    if origin is Annotated:
        explicit = [arg for arg in args[1:] if isinstance(arg, Storable)]
        if explicit:
            return explicit[-1]
        return storable_for(args[0])

    if origin is Union or origin is types.UnionType:
        members = [arg for arg in args if arg is not type(None)]
        if len(members) == 1 and len(args) == 2:
            return OptionalOf(storable_for(members[0]))
        raise UnsupportedStorableType(tp, "only Optional unions are storable")

    if origin in _SEQUENCE_ORIGINS:
        return SequenceOf(storable_for(args[0]) if args else _missing(tp))

    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return SequenceOf(storable_for(args[0]), container=tuple)
        raise UnsupportedStorableType(tp, "only homogeneous tuple[T, ...] is storable")

    if origin in _MAPPING_ORIGINS:
        if len(args) != 2:
            _missing(tp)
        if args[0] is not str:
            raise UnsupportedStorableType(tp, "map keys must be str")
        return MapOf(storable_for(args[1]))

    raise UnsupportedStorableType(tp)


def _missing(tp: Any) -> Storable[Any]:
    raise UnsupportedStorableType(tp, "container annotations need element types")
