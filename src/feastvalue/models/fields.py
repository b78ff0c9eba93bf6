"""Payload type aliases for Value variants.

This module provides the constrained pydantic types used for the variant
payloads and list elements. Each alias pins the Python type strictly (no
coercion between variants) and bounds integers to their declared width.
"""

from __future__ import annotations

import struct
from typing import Annotated, Any

from pydantic import (
    AfterValidator,
    Field,
    PlainValidator,
    StrictBool,
    StrictBytes,
    StrictFloat,
    StrictInt,
    StrictStr,
)

from .enums import Null

INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1
INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

# Largest finite float32
FLOAT32_MAX = struct.unpack("<f", b"\xff\xff\x7f\x7f")[0]


def to_float32(value: float) -> float:
    """Round a Python float to the nearest IEEE-754 single precision value.

    Args:
        value: Float to round

    Returns:
        The float32 value widened back to a Python float

    Raises:
        ValueError: If the value is finite but rounds past the float32 range
    """
    try:
        packed = struct.pack("<f", value)
    except OverflowError as err:
        raise ValueError(f"{value!r} is out of range for float32") from err
    return struct.unpack("<f", packed)[0]


def _check_utf8(value: str) -> str:
    # Lone surrogates cannot be written to the wire
    value.encode("utf-8")
    return value


def _validate_null(value: Any) -> Null | int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"expected Null or int, got {type(value).__name__}")
    if value < INT32_MIN or value > INT32_MAX:
        raise ValueError(f"enum number {value} out of int32 range")
    try:
        return Null(value)
    except ValueError:
        return int(value)


Int32 = Annotated[StrictInt, Field(ge=INT32_MIN, le=INT32_MAX)]
Int64 = Annotated[StrictInt, Field(ge=INT64_MIN, le=INT64_MAX)]
Double = StrictFloat
Float32 = Annotated[StrictFloat, AfterValidator(to_float32)]
Bool = StrictBool
Bytes = StrictBytes
Utf8Str = Annotated[StrictStr, AfterValidator(_check_utf8)]
NullPayload = Annotated[Null | int, PlainValidator(_validate_null)]

__all__ = [
    "INT32_MIN",
    "INT32_MAX",
    "INT64_MIN",
    "INT64_MAX",
    "FLOAT32_MAX",
    "to_float32",
    "Int32",
    "Int64",
    "Double",
    "Float32",
    "Bool",
    "Bytes",
    "Utf8Str",
    "NullPayload",
]
