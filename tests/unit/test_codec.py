"""Unit tests for encoding/decoding."""

from __future__ import annotations

import math
import struct

import pytest

from feastvalue import (
    EncodeError,
    FeastValueError,
    Int32List,
    MalformedWire,
    MultipleVariantsSet,
    Null,
    RepeatedValue,
    StringList,
    UnknownField,
    Value,
    ValueType,
    decode,
    decode_repeated,
    encode,
    encode_repeated,
)
from feastvalue.codec import encode_container


class TestEncodeDecode:
    """Test basic encode/decode functionality."""

    def test_roundtrip(self, sample_value: Value) -> None:
        """Every variant survives encode then decode."""
        data = encode(sample_value)
        decoded = decode(data)

        assert decoded == sample_value
        assert decoded.which() is sample_value.which()

    def test_int32_scenario(self) -> None:
        """Test the int32 probe scenario."""
        decoded = decode(encode(Value.of(ValueType.INT32, 42)))

        assert decoded.which() is ValueType.INT32
        assert decoded.get(ValueType.INT32) == 42
        assert decoded.get(ValueType.STRING) is None

    def test_string_list_scenario(self) -> None:
        """List order is reproduced exactly."""
        decoded = decode(encode(Value.of(ValueType.STRING_LIST, ["a", "bb", "ccc"])))

        assert decoded.get(ValueType.STRING_LIST).val == ("a", "bb", "ccc")

    def test_unset_roundtrip(self) -> None:
        """The unset value encodes to nothing and decodes back to unset."""
        assert encode(Value()) == b""

        decoded = decode(b"")
        assert decoded.which() is None
        assert decoded == Value()

    def test_empty_list_roundtrip(self) -> None:
        """An empty list stays a present, empty list."""
        decoded = decode(encode(Value.of(ValueType.INT64_LIST, [])))

        assert decoded.which() is ValueType.INT64_LIST
        assert decoded.int64_list_val.val == ()

    def test_nan_roundtrip(self) -> None:
        """NaN survives the wire but, as IEEE-754 requires, is not equal to itself."""
        for value_type in (ValueType.DOUBLE, ValueType.FLOAT):
            value = Value.of(value_type, math.nan)
            decoded = decode(encode(value))

            assert decoded.which() is value_type
            assert math.isnan(decoded.payload)
            assert decoded != value

    def test_infinities_roundtrip(self) -> None:
        for value_type in (ValueType.DOUBLE, ValueType.FLOAT):
            for payload in (math.inf, -math.inf):
                assert decode(encode(Value.of(value_type, payload))).payload == payload

    def test_negative_zero_keeps_sign(self) -> None:
        decoded = decode(encode(Value.of(ValueType.DOUBLE, -0.0)))

        assert math.copysign(1.0, decoded.double_val) == -1.0

    def test_integer_extremes(self) -> None:
        for value_type, payload in [
            (ValueType.INT32, -(2**31)),
            (ValueType.INT32, 2**31 - 1),
            (ValueType.INT64, -(2**63)),
            (ValueType.INT64, 2**63 - 1),
            (ValueType.UNIX_TIMESTAMP, -1),
        ]:
            assert decode(encode(Value.of(value_type, payload))).payload == payload

    def test_encoding_is_deterministic(self, sample_value: Value) -> None:
        assert encode(sample_value) == encode(sample_value.model_copy())


class TestGoldenEncodings:
    """Byte-exact encodings shared with other protobuf implementations."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (Value.of(ValueType.BYTES, b"\x00\x01"), b"\x0a\x02\x00\x01"),
            (Value.of(ValueType.STRING, "hi"), b"\x12\x02hi"),
            (Value.of(ValueType.INT32, 42), b"\x18\x2a"),
            (Value.of(ValueType.INT32, 0), b"\x18\x00"),
            (Value.of(ValueType.INT32, -1), b"\x18" + b"\xff" * 9 + b"\x01"),
            (Value.of(ValueType.INT64, 300), b"\x20\xac\x02"),
            (Value.of(ValueType.DOUBLE, 1.0), b"\x29" + struct.pack("<d", 1.0)),
            (Value.of(ValueType.FLOAT, 1.0), b"\x35\x00\x00\x80\x3f"),
            (Value.of(ValueType.BOOL, True), b"\x38\x01"),
            (Value.of(ValueType.BOOL, False), b"\x38\x00"),
            (Value.of(ValueType.UNIX_TIMESTAMP, 1), b"\x40\x01"),
            (Value.of(ValueType.BYTES_LIST, [b"x"]), b"\x5a\x03\x0a\x01x"),
            (
                Value.of(ValueType.STRING_LIST, ["a", "bb", "ccc"]),
                b"\x62\x0c\x0a\x01a\x0a\x02bb\x0a\x03ccc",
            ),
            (Value.of(ValueType.STRING_LIST, []), b"\x62\x00"),
            (Value.of(ValueType.INT32_LIST, [1, 2, 3]), b"\x6a\x05\x0a\x03\x01\x02\x03"),
            (Value.of(ValueType.INT64_LIST, [300]), b"\x72\x04\x0a\x02\xac\x02"),
            (
                Value.of(ValueType.DOUBLE_LIST, [1.0]),
                b"\x7a\x0a\x0a\x08" + struct.pack("<d", 1.0),
            ),
            (Value.of(ValueType.FLOAT_LIST, [1.0]), b"\x82\x01\x06\x0a\x04\x00\x00\x80\x3f"),
            (Value.of(ValueType.BOOL_LIST, [True, False]), b"\x8a\x01\x04\x0a\x02\x01\x00"),
            (Value.of(ValueType.UNIX_TIMESTAMP_LIST, [1]), b"\x92\x01\x03\x0a\x01\x01"),
            (Value.of(ValueType.NULL, Null.NULL), b"\x98\x01\x00"),
        ],
        ids=lambda v: v.which().name if isinstance(v, Value) else None,
    )
    def test_encoding(self, value: Value, expected: bytes) -> None:
        assert encode(value) == expected
        assert decode(expected) == value

    def test_container_body(self) -> None:
        """Numeric lists are packed; string lists get one entry per element."""
        assert encode_container(Int32List(val=(1, 2))) == b"\x0a\x02\x01\x02"
        assert encode_container(StringList(val=("a", "b"))) == b"\x0a\x01a\x0a\x01b"
        assert encode_container(Int32List()) == b""


class TestDecodeSemantics:
    """Test duplicate tags, unknown fields and alternative encodings."""

    def test_duplicate_tag_last_wins(self) -> None:
        """The last occurrence of a field overwrites earlier ones."""
        decoded = decode(b"\x18\x01\x18\x02")

        assert decoded.get(ValueType.INT32) == 2

    def test_last_variant_wins(self) -> None:
        """A later variant replaces an earlier one."""
        decoded = decode(b"\x18\x01\x12\x01a")

        assert decoded.which() is ValueType.STRING
        assert decoded.get(ValueType.INT32) is None
        assert decoded.string_val == "a"

    def test_duplicate_list_field_last_wins(self) -> None:
        decoded = decode(b"\x62\x03\x0a\x01a" + b"\x62\x03\x0a\x01b")

        assert decoded.string_list_val.val == ("b",)

    def test_unknown_tag_tolerated(self, unknown_field_bytes: bytes) -> None:
        """An unassigned field number is kept, not rejected."""
        decoded = decode(b"\x18\x2a" + unknown_field_bytes)

        assert decoded.get(ValueType.INT32) == 42
        assert decoded.unknown_fields == (UnknownField(99, 0, unknown_field_bytes),)

    def test_unknown_fields_reencoded(self, unknown_field_bytes: bytes) -> None:
        """Re-encoding keeps data from newer producers."""
        data = b"\x18\x2a" + unknown_field_bytes

        assert encode(decode(data)) == data

    def test_unknown_fields_ignored_by_equality(self, unknown_field_bytes: bytes) -> None:
        assert decode(b"\x18\x2a" + unknown_field_bytes) == Value.of(ValueType.INT32, 42)

    def test_unknown_only(self, unknown_field_bytes: bytes) -> None:
        """A buffer holding only unknown data decodes to an unset value carrying it."""
        decoded = decode(unknown_field_bytes)

        assert decoded.which() is None
        assert encode(decoded) == unknown_field_bytes

    def test_reserved_tag_is_unknown(self) -> None:
        """Tags 9 and 10 are never mapped to a variant."""
        data = b"\x4a\x01x\x50\x01"
        decoded = decode(data)

        assert decoded.which() is None
        assert [f.number for f in decoded.unknown_fields] == [9, 10]

    def test_unknown_wire_types(self) -> None:
        """Unknown fields of every wire type are skipped and kept."""
        data = (
            b"\xa8\x06\x01"  # field 101, varint
            + b"\xb1\x06" + b"\x00" * 8  # field 102, fixed64
            + b"\xba\x06\x02ab"  # field 103, length-delimited
            + b"\xc5\x06" + b"\x00" * 4  # field 104, fixed32
            + b"\xcb\x06\x08\x01\xcc\x06"  # field 105, group
        )
        decoded = decode(data)

        assert [(f.number, f.wire_type) for f in decoded.unknown_fields] == [
            (101, 0),
            (102, 1),
            (103, 2),
            (104, 5),
            (105, 3),
        ]
        assert encode(decoded) == data

    def test_unknown_group_preserved(self) -> None:
        """An unknown group is kept whole and re-encoded unchanged."""
        group = b"\x9b\x06" + b"\xa0\x06\x07" + b"\x9c\x06"
        data = b"\x18\x2a" + group
        decoded = decode(data)

        assert decoded.int32_val == 42
        assert decoded.unknown_fields == (UnknownField(99, 3, group),)
        assert encode(decoded) == data

    def test_nested_unknown_group(self) -> None:
        group = b"\x9b\x06" + b"\xa3\x06\x08\x01\xa4\x06" + b"\x9c\x06"
        decoded = decode(group + b"\x12\x01x")

        assert decoded.string_val == "x"
        assert decoded.unknown_fields == (UnknownField(99, 3, group),)

    def test_known_tag_as_group_is_unknown(self) -> None:
        """A variant tag opening a group is preserved, not decoded."""
        decoded = decode(b"\x1b\x1c")

        assert decoded.which() is None
        assert decoded.unknown_fields == (UnknownField(3, 3, b"\x1b\x1c"),)

    def test_discard_unknown(self, unknown_field_bytes: bytes) -> None:
        decoded = decode(b"\x18\x2a" + unknown_field_bytes, discard_unknown=True)

        assert decoded.unknown_fields == ()
        assert encode(decoded) == b"\x18\x2a"

    def test_known_tag_wrong_wire_type_is_unknown(self) -> None:
        """A variant tag carrying an unexpected wire type is preserved, not decoded."""
        decoded = decode(b"\x1a\x01\x00")

        assert decoded.which() is None
        assert decoded.unknown_fields == (UnknownField(3, 2, b"\x1a\x01\x00"),)

    def test_unpacked_numeric_list(self) -> None:
        """Numeric list elements may arrive one per field."""
        decoded = decode(b"\x6a\x04\x08\x01\x08\x02")

        assert decoded.int32_list_val.val == (1, 2)

    def test_mixed_packed_runs_concatenate(self) -> None:
        decoded = decode(b"\x6a\x06\x0a\x02\x01\x02\x08\x03")

        assert decoded.int32_list_val.val == (1, 2, 3)

    def test_container_unknown_fields_preserved(self) -> None:
        data = b"\x62\x05\x0a\x01a\x10\x07"
        decoded = decode(data)

        assert decoded.string_list_val.val == ("a",)
        assert decoded.string_list_val.unknown_fields == (UnknownField(2, 0, b"\x10\x07"),)
        assert encode(decoded) == data

    def test_unknown_null_number(self) -> None:
        """Future Null enum numbers decode as raw integers."""
        decoded = decode(b"\x98\x01\x05")

        assert decoded.which() is ValueType.NULL
        assert decoded.null_val == 5
        assert encode(decoded) == b"\x98\x01\x05"

    def test_int32_truncated_from_wide_varint(self) -> None:
        """int32 fields keep the low 32 bits of a wider varint."""
        decoded = decode(b"\x18\xff\xff\xff\xff\x0f")

        assert decoded.int32_val == -1

    def test_bool_nonzero_is_true(self) -> None:
        assert decode(b"\x38\x05").bool_val is True

    def test_decode_accepts_bytearray(self) -> None:
        assert decode(bytearray(b"\x18\x2a")).int32_val == 42


class TestDecodeErrors:
    """Test decoding error handling."""

    def test_truncation_rejected(self, sample_value: Value) -> None:
        """Dropping the last byte of any populated encoding is detected."""
        data = encode(sample_value)

        with pytest.raises(MalformedWire):
            decode(data[:-1])

    @pytest.mark.parametrize(
        "data,message",
        [
            (b"\x12\x05ab", "[Tt]runcated"),
            (b"\x18" + b"\xff" * 10 + b"\x01", "10 bytes"),
            (b"\x18\x80", "[Tt]runcated"),
            (b"\x29\x00\x00\x00", "[Tt]runcated"),
            (b"\x35\x00", "[Tt]runcated"),
            (b"\x00\x01", "field number 0"),
            (b"\x1e", "wire type 6"),
            (b"\x9c\x06", "Unmatched end group"),
            (b"\x18\x2a\x9b\x06\x18\x01", "[Tt]runcated"),
            (b"\x9b\x06\xa4\x06", "does not close group 99"),
            (b"\x80\x80\x80\x80\x10", "exceeds"),
            (b"\x12\x01\xff", "utf-8"),
            (b"\x62\x02\x0a\x05", "[Tt]runcated"),
            (b"\x6a\x03\x0a\x01\x80", "[Tt]runcated"),
        ],
    )
    def test_malformed(self, data: bytes, message: str) -> None:
        with pytest.raises(MalformedWire, match=message):
            decode(data)

    def test_error_hierarchy(self) -> None:
        """MalformedWire is catchable as the package base error."""
        with pytest.raises(FeastValueError):
            decode(b"\x12\x05")


class TestEncodeErrors:
    """Test encoding error handling."""

    def test_multiple_variants_set(self) -> None:
        """Corrupted state holding two variants is refused."""
        # Use model_construct to bypass validation
        value = Value.model_construct(int32_val=1, string_val="a")

        with pytest.raises(MultipleVariantsSet):
            encode(value)

    def test_wrong_payload_type(self) -> None:
        value = Value.model_construct(int32_val="42")

        with pytest.raises(EncodeError, match="expected int"):
            encode(value)

    def test_out_of_range_payload(self) -> None:
        value = Value.model_construct(int32_val=2**40)

        with pytest.raises(EncodeError, match="out of bounds"):
            encode(value)

    def test_wrong_container(self) -> None:
        value = Value.model_construct(int32_list_val=StringList(val=("a",)))

        with pytest.raises(EncodeError, match="expected Int32List"):
            encode(value)


class TestRepeatedValue:
    """Test RepeatedValue encoding."""

    def test_order_preserved(self) -> None:
        values = [
            Value.of(ValueType.INT32, 1),
            Value.of(ValueType.STRING, "a"),
            Value.of(ValueType.DOUBLE_LIST, [0.5, 1.5]),
        ]
        decoded = decode_repeated(encode_repeated(RepeatedValue(val=values)))

        assert list(decoded.val) == values

    def test_golden_encoding(self) -> None:
        repeated = RepeatedValue(
            val=[Value.of(ValueType.INT32, 1), Value.of(ValueType.STRING, "a")]
        )

        assert encode_repeated(repeated) == b"\x0a\x02\x18\x01\x0a\x03\x12\x01a"

    def test_unset_elements_kept(self) -> None:
        """Unset elements occupy a slot as empty embedded messages."""
        repeated = RepeatedValue(val=[Value(), Value.of(ValueType.BOOL, True), Value()])
        data = encode_repeated(repeated)

        assert data == b"\x0a\x00\x0a\x02\x38\x01\x0a\x00"
        assert decode_repeated(data) == repeated

    def test_empty(self) -> None:
        assert encode_repeated(RepeatedValue()) == b""
        assert decode_repeated(b"") == RepeatedValue()

    def test_element_error_reports_index(self) -> None:
        repeated = RepeatedValue(
            val=[Value.of(ValueType.INT32, 1), Value.model_construct(int32_val=1, bool_val=True)]
        )

        with pytest.raises(MultipleVariantsSet, match="Element 1"):
            encode_repeated(repeated)

    def test_malformed_element(self) -> None:
        with pytest.raises(MalformedWire):
            decode_repeated(b"\x0a\x02\x18")

    def test_unknown_fields_preserved(self) -> None:
        data = b"\x0a\x02\x18\x01\x10\x07"
        decoded = decode_repeated(data)

        assert len(decoded.val) == 1
        assert decoded.unknown_fields == (UnknownField(2, 0, b"\x10\x07"),)
        assert encode_repeated(decoded) == data
