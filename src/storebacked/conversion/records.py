"""
Record storables - structured values serialized into an opaque blob.

Records are anything pydantic can validate and serialize: BaseModel
subclasses, dataclasses, TypedDicts, and pydantic's own value types.

Every record is wrapped in an envelope before encoding:

    {"value": <record>}

so that a record whose serialized form is not a container (a URL, a
constrained string) is still a valid top-level document.

Non-finite floats are written as the JSON constants Infinity and NaN so
they read back. Dataclasses and TypedDicts inherit that from the envelope;
a BaseModel serializes with its own config and needs
`ser_json_inf_nan="constants"` set on the model to do the same.
"""

from typing import Generic, Protocol, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.errors import PydanticSchemaGenerationError
from pydantic_core import PydanticSerializationError

from storebacked.conversion.base import Storable
from storebacked.core.config import get_logger
from storebacked.core.errors import MalformedRecord, TypeMismatch, UnsupportedStorableType
from storebacked.core.types import StoredValue

logger = get_logger("conversion.records")

T = TypeVar("T")


class RecordEnvelope(BaseModel, Generic[T]):
    """Top-level wrapper every record is serialized inside."""

    model_config = ConfigDict(ser_json_inf_nan="constants")

    value: T


# ============================================
# Structured Codecs
# ============================================

class RecordCodec(Protocol):
    """Structured encoder/decoder pair turning envelopes into blobs."""

    def dump(self, envelope: BaseModel) -> bytes:
        """Serialize an envelope to bytes."""
        ...

    def load(self, envelope_type: type[BaseModel], blob: bytes) -> BaseModel:
        """
        Parse bytes into an envelope.

        Raises:
            ValidationError: If the blob is corrupt or doesn't match the schema.
        """
        ...


class JsonRecordCodec:
    """Default codec: pydantic's JSON serializer."""

    def dump(self, envelope: BaseModel) -> bytes:
        return envelope.model_dump_json().encode("utf-8")

    def load(self, envelope_type: type[BaseModel], blob: bytes) -> BaseModel:
        return envelope_type.model_validate_json(blob)


default_codec = JsonRecordCodec()


# ============================================
# Record Storable
# ============================================

class RecordOf(Storable[T], Generic[T]):
    """A structured record stored as a blob produced by a RecordCodec."""

    def __init__(self, record_type: type[T], codec: RecordCodec | None = None):
        self.record_type = record_type
        self.codec = codec or default_codec
        try:
            self.envelope_type = RecordEnvelope[record_type]
        except PydanticSchemaGenerationError as error:
            raise UnsupportedStorableType(record_type, str(error)) from error

    @property
    def name(self) -> str:
        return getattr(self.record_type, "__qualname__", str(self.record_type))

    def encode(self, value: T) -> StoredValue:
        try:
            envelope = self.envelope_type(value=value)
        except ValidationError as error:
            raise TypeMismatch(value, self.name, _first_error(error)) from error
        try:
            return self.codec.dump(envelope)
        except PydanticSerializationError as error:
            raise TypeMismatch(value, self.name, str(error)) from error

    def decode(self, stored: StoredValue) -> T:
        if not isinstance(stored, bytes):
            raise TypeMismatch(stored, self.name, "expected data")
        try:
            envelope = self.codec.load(self.envelope_type, stored)
        except ValidationError as error:
            logger.debug(f"Failed to decode {self.name} record: {error}")
            raise MalformedRecord(self.record_type, _first_error(error)) from error
        return envelope.value


def _first_error(error: ValidationError) -> str:
    errors = error.errors()
    if not errors:
        return str(error)
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first.get('msg', 'invalid')}" if location else first.get("msg", "invalid")
