"""Wire encoder for Value and RepeatedValue.

This module provides the encode() and encode_repeated() functions that
convert value models to their protobuf-compatible binary form.
"""

from __future__ import annotations

from typing import Any

from ..exceptions import EncodeError, MultipleVariantsSet
from ..models import RepeatedValue, ScalarList, UnknownField, Value
from ..models.fields import INT32_MAX, INT32_MIN, INT64_MAX, INT64_MIN
from .schema import CONTAINER_KINDS, LIST_FIELD, VALUE_SCHEMA, ScalarKind, VariantSchema
from .wire import WireType, WireWriter


def encode(value: Value) -> bytes:
    """Encode a Value to its binary wire form.

    The populated variant is written as a single tagged field, followed by any
    unknown fields the value carried from an earlier decode. Variant fields are
    always written, even for zero payloads, so presence survives the round
    trip. An unset Value encodes to ``b""``.

    Args:
        value: Value to encode

    Returns:
        Encoded bytes

    Raises:
        MultipleVariantsSet: If more than one variant is populated
        EncodeError: If a payload does not match its variant's type

    Examples:
        ```python
        from feastvalue import Null, Value, ValueType, encode

        encode(Value.of(ValueType.INT32, 42))      # b"\\x18\\x2a"
        encode(Value.of(ValueType.NULL, Null.NULL))  # b"\\x98\\x01\\x00"
        encode(Value())                            # b""
        ```
    """
    writer = WireWriter()
    schema = _populated_variant(value)
    if schema is not None:
        _encode_variant(writer, schema, getattr(value, schema.field_name))
    _write_unknown(writer, value.unknown_fields)
    return writer.to_bytes()


def encode_repeated(repeated: RepeatedValue) -> bytes:
    """Encode a RepeatedValue as a sequence of embedded Values.

    Each element is written under field 1 as a length-delimited Value, in
    sequence order.

    Args:
        repeated: RepeatedValue to encode

    Returns:
        Encoded bytes

    Raises:
        MultipleVariantsSet: If any element has more than one variant populated
        EncodeError: If any element payload does not match its variant's type
    """
    writer = WireWriter()
    for index, element in enumerate(repeated.val):
        try:
            body = encode(element)
        except EncodeError as err:
            raise type(err)(f"Element {index}: {err}") from err
        writer.write_tag(LIST_FIELD, WireType.LEN)
        writer.write_length_delimited(body)
    _write_unknown(writer, repeated.unknown_fields)
    return writer.to_bytes()


def encode_container(container: ScalarList) -> bytes:
    """Encode a list container on its own (the body of a list variant field).

    Numeric and bool elements are written as one packed run; bytes and string
    elements get one length-delimited entry each. An empty container encodes
    to ``b""``.

    Raises:
        EncodeError: If an element does not match the container's element type
    """
    kind = CONTAINER_KINDS.get(type(container))
    if kind is None:
        raise EncodeError(f"Unsupported list container {type(container).__name__}")

    writer = WireWriter()
    name = type(container).__name__
    if kind.packable:
        if container.val:
            packed = WireWriter()
            for element in container.val:
                _write_scalar(packed, kind, element, name)
            writer.write_tag(LIST_FIELD, WireType.LEN)
            writer.write_length_delimited(packed.to_bytes())
    else:
        for element in container.val:
            writer.write_tag(LIST_FIELD, WireType.LEN)
            _write_scalar(writer, kind, element, name)
    _write_unknown(writer, container.unknown_fields)
    return writer.to_bytes()


def _populated_variant(value: Value) -> VariantSchema | None:
    """Return the schema of the single populated variant, or None when unset.

    Raises:
        MultipleVariantsSet: If more than one variant is populated
    """
    populated = [
        schema
        for schema in VALUE_SCHEMA.values()
        if getattr(value, schema.field_name) is not None
    ]
    if len(populated) > 1:
        names = ", ".join(schema.field_name for schema in populated)
        raise MultipleVariantsSet(f"Value has {len(populated)} variants set: {names}")
    return populated[0] if populated else None


def _encode_variant(writer: WireWriter, schema: VariantSchema, payload: Any) -> None:
    """Write one variant field (tag and payload)."""
    if schema.container is not None:
        if not isinstance(payload, schema.container):
            raise EncodeError(
                f"Field {schema.field_name}: expected {schema.container.__name__}, "
                f"got {type(payload).__name__}"
            )
        writer.write_tag(schema.tag, WireType.LEN)
        writer.write_length_delimited(encode_container(payload))
        return

    writer.write_tag(schema.tag, schema.wire_type)
    _write_scalar(writer, schema.kind, payload, schema.field_name)


def _write_scalar(writer: WireWriter, kind: ScalarKind, value: Any, name: str) -> None:
    """Write a scalar payload without its tag.

    Raises:
        EncodeError: If the value does not match the kind
    """
    # Boolean
    if kind is ScalarKind.BOOL:
        if not isinstance(value, bool):
            raise EncodeError(f"Field {name}: expected bool, got {type(value).__name__}")
        writer.write_varint(1 if value else 0)
        return

    # Integers and enum numbers
    if kind in (ScalarKind.INT32, ScalarKind.INT64, ScalarKind.ENUM):
        if isinstance(value, bool) or not isinstance(value, int):
            raise EncodeError(f"Field {name}: expected int, got {type(value).__name__}")
        low, high = (INT64_MIN, INT64_MAX) if kind is ScalarKind.INT64 else (INT32_MIN, INT32_MAX)
        if value < low or value > high:
            raise EncodeError(f"Field {name}: value {value} out of bounds [{low}, {high}]")
        writer.write_varint(int(value))
        return

    # IEEE-754 floats
    if kind in (ScalarKind.DOUBLE, ScalarKind.FLOAT):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise EncodeError(f"Field {name}: expected float, got {type(value).__name__}")
        try:
            if kind is ScalarKind.DOUBLE:
                writer.write_fixed64(value)
            else:
                writer.write_fixed32(value)
        except OverflowError as err:
            raise EncodeError(f"Field {name}: {value!r} out of range for float32") from err
        return

    if kind is ScalarKind.BYTES:
        if not isinstance(value, bytes):
            raise EncodeError(f"Field {name}: expected bytes, got {type(value).__name__}")
        writer.write_length_delimited(value)
        return

    # String
    if not isinstance(value, str):
        raise EncodeError(f"Field {name}: expected str, got {type(value).__name__}")
    try:
        writer.write_length_delimited(value.encode("utf-8"))
    except UnicodeEncodeError as err:
        raise EncodeError(f"Field {name}: not encodable as UTF-8: {err}") from err


def _write_unknown(writer: WireWriter, unknown_fields: tuple[UnknownField, ...]) -> None:
    for field in unknown_fields:
        writer.write_raw(field.data)
