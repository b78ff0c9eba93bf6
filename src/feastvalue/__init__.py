"""feastvalue: Feature Value Codec

Typed, self-describing feature values and their binary wire encoding, for
exchanging feature data between feature store clients and servers.

A Value holds at most one of 17 variants (scalars, homogeneous lists and an
explicit null). The wire format is protobuf-compatible: stable field tags,
varint/fixed-width/length-delimited payloads, and unknown fields preserved
across a decode/encode round trip.

Key Features:
- Pydantic-based immutable value models
- Strict payload validation (no coercion between variants)
- Forward-compatible decoding of unknown fields
- Pure Python implementation

Quick Start:
    >>> from feastvalue import Value, ValueType, encode, decode
    >>>
    >>> value = Value.of(ValueType.STRING_LIST, ["a", "bb", "ccc"])
    >>> data = encode(value)
    >>> decoded = decode(data)
    >>> decoded.get(ValueType.STRING_LIST).val
    ('a', 'bb', 'ccc')
"""

from __future__ import annotations

from .codec import (
    RESERVED_TAGS,
    VALUE_SCHEMA,
    decode,
    decode_repeated,
    encode,
    encode_repeated,
)
from .exceptions import (
    DecodeError,
    EncodeError,
    FeastValueError,
    InvalidVariant,
    MalformedWire,
    MultipleVariantsSet,
    SchemaError,
)
from .models import (
    BoolList,
    BytesList,
    DoubleList,
    FloatList,
    Int32List,
    Int64List,
    Null,
    RepeatedValue,
    StringList,
    UnknownField,
    Value,
    ValueType,
)
from .utils import encoded_size, field_sizes

__version__ = "0.1.0"

__all__ = [
    # Core API
    "Value",
    "RepeatedValue",
    "ValueType",
    "Null",
    "encode",
    "decode",
    "encode_repeated",
    "decode_repeated",
    # List containers
    "BytesList",
    "StringList",
    "Int32List",
    "Int64List",
    "DoubleList",
    "FloatList",
    "BoolList",
    "UnknownField",
    # Tag table
    "VALUE_SCHEMA",
    "RESERVED_TAGS",
    # Exceptions
    "FeastValueError",
    "SchemaError",
    "InvalidVariant",
    "EncodeError",
    "MultipleVariantsSet",
    "DecodeError",
    "MalformedWire",
    # Sizing
    "encoded_size",
    "field_sizes",
    # Version
    "__version__",
]
