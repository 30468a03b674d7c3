"""Exception hierarchy for tempestwx.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from TempestError for easy catching of any tempestwx-specific error.
Every way a packet can be rejected has its own DecodeError subclass, so callers can
tell a corrupted datagram from a packet type this library does not know about.
"""

from __future__ import annotations


class TempestError(Exception):
    """Base exception for all tempestwx errors."""

    pass


class SchemaError(TempestError):
    """Raised when a record model or the record registry is declared incorrectly.

    Examples:
        - Unsupported field annotation on a record model
        - Record class registered without a ``record_type`` tag
        - Two record classes registered under the same tag
    """

    pass


class EncodeError(TempestError):
    """Raised when encoding a record fails.

    Examples:
        - Object passed to encode() is not a record
        - Non-finite float in a record built with ``model_construct``, which
          skips the validation that rejects NaN and infinity
    """

    pass


class DecodeError(TempestError):
    """Base class for every packet rejection raised by decode()."""

    pass


class MalformedInput(DecodeError):
    """Raised when the packet is not a UTF-8 JSON object.

    Examples:
        - Invalid JSON syntax or truncated text
        - Bytes that are not valid UTF-8
        - Non-standard constants such as ``NaN``
        - A top-level array or scalar instead of an object
    """

    pass


class MissingDiscriminator(DecodeError):
    """Raised when the ``type`` field is absent or not a string."""

    pass


class UnknownVariant(DecodeError):
    """Raised when the ``type`` field names no known record kind.

    Attributes:
        tag: The unrecognized discriminator string
    """

    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(f"Unknown record type: {tag!r}")


class MissingField(DecodeError):
    """Raised when a required field is absent from the packet.

    Attributes:
        field: Name of the missing field
    """

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Missing required field: {field}")


class TypeMismatch(DecodeError):
    """Raised when a field or slot holds a value of the wrong type or width.

    Attributes:
        field: Path of the offending value (e.g. ``obs[0].rain_day``)
        expected: Description of the accepted type
        actual: Description of the value found
    """

    def __init__(self, field: str, expected: str, actual: str) -> None:
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(f"Field {field}: expected {expected}, got {actual}")


class ArityMismatch(DecodeError):
    """Raised when a positional array has the wrong number of slots.

    Attributes:
        field: Path of the array (e.g. ``evt`` or ``obs[3]``)
        expected: Number of slots the schema declares
        actual: Number of slots found
    """

    def __init__(self, field: str, expected: int, actual: int) -> None:
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(f"Field {field}: expected {expected} slots, got {actual}")
