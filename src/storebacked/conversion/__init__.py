"""
Conversion Layer - storables and their composition rules.

    Direct       store-native primitives (bool, int, float, bytes, str, datetime)
    Mapped       a type stored through another storable
    SequenceOf   list[T]          -> list of T's representation
    MapOf        dict[str, T]     -> dict of T's representation
    OptionalOf   T | None         -> [] or [T's representation]
    RecordOf     models/dataclasses -> blob via pydantic
    EnumOf       Enum             -> raw value's representation
    Archived     SecureArchivable -> restricted pickle blob

Use storable_for() to resolve a storable from a type annotation.
"""

from storebacked.conversion.base import (
    BOOL,
    DATA,
    DATE,
    DOUBLE,
    FLOAT,
    INT,
    STRING,
    Direct,
    Mapped,
    Storable,
)
from storebacked.conversion.containers import MapOf, OptionalOf, SequenceOf
from storebacked.conversion.records import JsonRecordCodec, RecordCodec, RecordEnvelope, RecordOf
from storebacked.conversion.enums import EnumOf
from storebacked.conversion.archive import Archived, SecureArchivable
from storebacked.conversion.registry import register_storable, storable_for, unregister_storable
from storebacked.conversion.extensions import Color

__all__ = [
    "BOOL",
    "DATA",
    "DATE",
    "DOUBLE",
    "FLOAT",
    "INT",
    "STRING",
    "Direct",
    "Mapped",
    "Storable",
    "MapOf",
    "OptionalOf",
    "SequenceOf",
    "JsonRecordCodec",
    "RecordCodec",
    "RecordEnvelope",
    "RecordOf",
    "EnumOf",
    "Archived",
    "SecureArchivable",
    "register_storable",
    "storable_for",
    "unregister_storable",
    "Color",
]
