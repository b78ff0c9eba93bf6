"""Binary wire codec for feastvalue.

This module provides encoding and decoding of Value and RepeatedValue to the
tag-delimited, protobuf-compatible wire format.
"""

from __future__ import annotations

from .decoder import decode, decode_repeated
from .encoder import encode, encode_container, encode_repeated
from .schema import RESERVED_TAGS, VALUE_SCHEMA, ScalarKind, VariantSchema, schema_for
from .wire import WireReader, WireType, WireWriter

__all__ = [
    "encode",
    "decode",
    "encode_repeated",
    "decode_repeated",
    "encode_container",
    "VALUE_SCHEMA",
    "RESERVED_TAGS",
    "VariantSchema",
    "ScalarKind",
    "schema_for",
    "WireType",
    "WireReader",
    "WireWriter",
]
