"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from feastvalue import (
    BoolList,
    BytesList,
    DoubleList,
    FloatList,
    Int32List,
    Int64List,
    Null,
    StringList,
    Value,
    ValueType,
)

# One representative payload per variant
SAMPLE_PAYLOADS = {
    ValueType.BYTES: b"\x00\x01\xfe\xff",
    ValueType.STRING: "héllo wörld",
    ValueType.INT32: -123456,
    ValueType.INT64: 1 << 40,
    ValueType.DOUBLE: 3.141592653589793,
    ValueType.FLOAT: 0.5,
    ValueType.BOOL: True,
    ValueType.UNIX_TIMESTAMP: 1_700_000_000,
    ValueType.BYTES_LIST: BytesList(val=(b"a", b"", b"\x00\xff")),
    ValueType.STRING_LIST: StringList(val=("a", "bb", "ccc")),
    ValueType.INT32_LIST: Int32List(val=(0, -1, 2**31 - 1, -(2**31))),
    ValueType.INT64_LIST: Int64List(val=(0, -1, 2**63 - 1, -(2**63))),
    ValueType.DOUBLE_LIST: DoubleList(val=(0.0, -2.5, 1e300)),
    ValueType.FLOAT_LIST: FloatList(val=(0.25, -8.0)),
    ValueType.BOOL_LIST: BoolList(val=(True, False, True)),
    ValueType.UNIX_TIMESTAMP_LIST: Int64List(val=(1_600_000_000, 1_700_000_000)),
    ValueType.NULL: Null.NULL,
}


@pytest.fixture(params=list(SAMPLE_PAYLOADS), ids=lambda t: t.name)
def sample_value(request: pytest.FixtureRequest) -> Value:
    """A populated Value, one per variant."""
    return Value.of(request.param, SAMPLE_PAYLOADS[request.param])


@pytest.fixture
def unknown_field_bytes() -> bytes:
    """Field 99 (varint) holding 5, a number no variant uses."""
    return b"\x98\x06\x05"
