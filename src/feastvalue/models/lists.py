"""Homogeneous list containers.

Each container wraps a single ordered tuple ``val`` of one scalar type. The
wrapper gives the list its own wire type, distinct from a bare repeated field,
so an empty list is still a present value.
"""

from __future__ import annotations

from typing import Any, cast

from .base import WireMessage
from .enums import ValueType
from .fields import Bool, Bytes, Double, Float32, Int32, Int64, Utf8Str


class ScalarList(WireMessage):
    """Common behaviour of the list containers.

    Equality is element-wise with ``==`` so float elements follow IEEE-754
    comparison: a NaN element never equals anything, including itself.
    """

    val: tuple[Any, ...] = ()

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        other_val = cast(ScalarList, other).val
        if len(self.val) != len(other_val):
            return False
        return all(a == b for a, b in zip(self.val, other_val))

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.val))


class BytesList(ScalarList):
    val: tuple[Bytes, ...] = ()


class StringList(ScalarList):
    val: tuple[Utf8Str, ...] = ()


class Int32List(ScalarList):
    val: tuple[Int32, ...] = ()


class Int64List(ScalarList):
    val: tuple[Int64, ...] = ()


class DoubleList(ScalarList):
    val: tuple[Double, ...] = ()


class FloatList(ScalarList):
    val: tuple[Float32, ...] = ()


class BoolList(ScalarList):
    val: tuple[Bool, ...] = ()


# Container class carried by each list variant
LIST_CONTAINERS: dict[ValueType, type[ScalarList]] = {
    ValueType.BYTES_LIST: BytesList,
    ValueType.STRING_LIST: StringList,
    ValueType.INT32_LIST: Int32List,
    ValueType.INT64_LIST: Int64List,
    ValueType.DOUBLE_LIST: DoubleList,
    ValueType.FLOAT_LIST: FloatList,
    ValueType.BOOL_LIST: BoolList,
    ValueType.UNIX_TIMESTAMP_LIST: Int64List,
}
