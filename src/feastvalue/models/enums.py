"""Enumerations shared by the value model and the codec."""

from __future__ import annotations

import enum


class Null(enum.IntEnum):
    """Payload of the null variant. NULL is the only defined member."""

    NULL = 0


class ValueType(enum.IntEnum):
    """Variant identifiers.

    Every member except INVALID names one Value variant and its number is the
    variant's field tag on the wire. Numbers 9 and 10 are reserved and must
    never be assigned.

    INVALID marks an unknown or unset type in feature metadata; it is never a
    populated variant.
    """

    INVALID = 0
    BYTES = 1
    STRING = 2
    INT32 = 3
    INT64 = 4
    DOUBLE = 5
    FLOAT = 6
    BOOL = 7
    UNIX_TIMESTAMP = 8
    BYTES_LIST = 11
    STRING_LIST = 12
    INT32_LIST = 13
    INT64_LIST = 14
    DOUBLE_LIST = 15
    FLOAT_LIST = 16
    BOOL_LIST = 17
    UNIX_TIMESTAMP_LIST = 18
    NULL = 19

    @property
    def field_name(self) -> str:
        """Attribute name of the variant on Value (e.g. ``int32_val``)."""
        return f"{self.name.lower()}_val"

    @property
    def is_list(self) -> bool:
        return self.name.endswith("_LIST")


VARIANTS: tuple[ValueType, ...] = tuple(t for t in ValueType if t is not ValueType.INVALID)
