"""
Error types for store-backed.

Conversion errors are raised by storables on encode/decode and absorbed
only by bindings. Configuration errors surface when a storable is resolved
for a declaration. Store errors wrap backend I/O failures.
"""

from typing import Any


class StoreBackedError(Exception):
    """Base class for all store-backed errors."""


# ============================================
# Conversion Errors
# ============================================

class ConversionError(StoreBackedError):
    """A value could not be converted to or from its stored representation."""

    def __init__(self, message: str, found: Any = None, expected: Any = None):
        super().__init__(message)
        self.found = found
        """The offending value (or a description of it)."""

        self.expected = expected
        """The type or representation that was expected."""


class UnsupportedPrimitiveType(ConversionError):
    """A value claimed to be store-native but is not one of the primitive kinds."""

    def __init__(self, found: Any, expected: Any = None):
        type_name = type(found).__name__
        message = f"{type_name} is not a directly storable primitive"
        if expected is not None:
            message += f" (expected {_describe(expected)})"
        super().__init__(message, found=found, expected=expected)


class TypeMismatch(ConversionError):
    """A stored representation does not have the shape the storable expects."""

    def __init__(self, found: Any, expected: Any, reason: str | None = None):
        message = f"illegal value {_preview(found)} for {_describe(expected)}"
        if reason:
            message += f": {reason}"
        super().__init__(message, found=found, expected=expected)


class MalformedRecord(ConversionError):
    """A blob could not be parsed by the structured decoder or archive reader."""

    def __init__(self, expected: Any, reason: str):
        super().__init__(
            f"malformed record for {_describe(expected)}: {reason}",
            expected=expected,
        )


# ============================================
# Configuration and Store Errors
# ============================================

class UnsupportedStorableType(StoreBackedError):
    """A type has no conversion chain down to the primitive kinds."""

    def __init__(self, tp: Any, reason: str | None = None):
        message = f"{_describe(tp)} is not storable"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.type = tp


class StoreError(StoreBackedError):
    """The settings store backend failed to read or write an entry."""


def _describe(tp: Any) -> str:
    if isinstance(tp, type):
        return tp.__qualname__
    return str(tp)


def _preview(value: Any, limit: int = 80) -> str:
    text = repr(value)
    if len(text) > limit:
        return text[: limit - 3] + "..."
    return text
