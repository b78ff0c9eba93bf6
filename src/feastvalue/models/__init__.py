"""Value model for feastvalue.

This module provides the Value union, its list containers and RepeatedValue,
all implemented as immutable pydantic models.
"""

from __future__ import annotations

from .base import UnknownField, WireMessage
from .enums import VARIANTS, Null, ValueType
from .lists import (
    LIST_CONTAINERS,
    BoolList,
    BytesList,
    DoubleList,
    FloatList,
    Int32List,
    Int64List,
    ScalarList,
    StringList,
)
from .value import RepeatedValue, Value

__all__ = [
    "Value",
    "RepeatedValue",
    "ValueType",
    "VARIANTS",
    "Null",
    "UnknownField",
    "WireMessage",
    "ScalarList",
    "BytesList",
    "StringList",
    "Int32List",
    "Int64List",
    "DoubleList",
    "FloatList",
    "BoolList",
    "LIST_CONTAINERS",
]
