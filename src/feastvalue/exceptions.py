"""Exception hierarchy for feastvalue.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from FeastValueError for easy catching of any feastvalue-specific error.

None of them derive from ValueError: pydantic converts ValueError raised inside
validators into ValidationError, and these must reach the caller unchanged.
"""

from __future__ import annotations


class FeastValueError(Exception):
    """Base exception for all feastvalue errors."""

    pass


class SchemaError(FeastValueError):
    """Raised when the static variant tag table is inconsistent.

    Examples:
        - A variant is assigned a reserved tag (9 or 10)
        - Two variants share a tag
    """

    pass


class InvalidVariant(FeastValueError):
    """Raised when a Value is constructed with a payload that does not match its variant.

    Examples:
        - String payload for the int32 variant
        - Integer outside the 32-bit range for int32
        - Float too large for float32
        - ValueType.INVALID used as a variant
    """

    pass


class EncodeError(FeastValueError):
    """Raised when encoding a Value fails.

    Examples:
        - Payload of the wrong Python type (state built with model_construct)
    """

    pass


class MultipleVariantsSet(EncodeError):
    """Raised when a Value holds more than one populated variant.

    A correctly constructed Value can never reach this state; it signals a bug
    at the construction site.
    """

    pass


class DecodeError(FeastValueError):
    """Raised when decoding binary data fails."""

    pass


class MalformedWire(DecodeError):
    """Raised when a buffer is structurally corrupt.

    Examples:
        - Length prefix larger than the remaining buffer
        - Varint without a terminating byte within 10 bytes
        - Truncated fixed32/fixed64 field
        - Field number 0 or an unsupported wire type
        - Invalid UTF-8 in a string field
    """

    pass
