"""Wire decoder for Value and RepeatedValue.

This module provides the decode() and decode_repeated() functions that
convert binary data back to value models.
"""

from __future__ import annotations

from typing import Any

from ..exceptions import InvalidVariant, MalformedWire
from ..models import Null, RepeatedValue, ScalarList, UnknownField, Value
from .schema import CONTAINER_KINDS, LIST_FIELD, VALUE_SCHEMA, ScalarKind, VariantSchema
from .wire import WireReader, WireType, to_signed32, to_signed64


def decode(data: bytes, *, discard_unknown: bool = False) -> Value:
    """Decode binary data to a Value.

    Fields are read in buffer order. When a variant appears more than once, or
    several variants appear, the last one read wins. Fields with an
    unrecognized number, or a known number with an unexpected wire type, are
    kept verbatim in ``unknown_fields`` so re-encoding does not lose them. An
    unknown group is kept as one field spanning through its end tag.

    Args:
        data: Encoded Value
        discard_unknown: If True, drop unrecognized fields instead of keeping them

    Returns:
        Decoded Value (the unset Value for ``b""``)

    Raises:
        MalformedWire: If the buffer is truncated or structurally invalid

    Examples:
        ```python
        from feastvalue import ValueType, decode

        value = decode(b"\\x18\\x2a")
        value.which()                  # ValueType.INT32
        value.get(ValueType.INT32)     # 42
        value.get(ValueType.STRING)    # None
        ```
    """
    reader = WireReader(data)
    variant: tuple[str, Any] | None = None
    unknown: list[UnknownField] = []

    start = 0
    try:
        while not reader.at_end():
            start = reader.position()
            field_number, wire_type = reader.read_tag()
            schema = VALUE_SCHEMA.get(field_number)
            if schema is None or schema.wire_type is not wire_type:
                _skip_unknown(reader, start, field_number, wire_type, unknown, discard_unknown)
                continue
            variant = (schema.field_name, _read_variant(reader, schema, discard_unknown))
    except IndexError as e:
        raise MalformedWire(f"Truncated data while decoding field at byte {start}: {e}") from e
    except ValueError as e:
        raise MalformedWire(f"Invalid data while decoding field at byte {start}: {e}") from e

    fields: dict[str, Any] = {"unknown_fields": tuple(unknown)}
    if variant is not None:
        fields[variant[0]] = variant[1]

    try:
        return Value(**fields)
    except InvalidVariant as e:
        raise MalformedWire(f"Failed to construct Value: {e}") from e


def decode_repeated(data: bytes, *, discard_unknown: bool = False) -> RepeatedValue:
    """Decode binary data to a RepeatedValue.

    Elements are accumulated in the order they appear in the buffer.

    Args:
        data: Encoded RepeatedValue
        discard_unknown: If True, drop unrecognized fields at every level

    Returns:
        Decoded RepeatedValue

    Raises:
        MalformedWire: If the buffer or any embedded Value is malformed
    """
    reader = WireReader(data)
    elements: list[Value] = []
    unknown: list[UnknownField] = []

    start = 0
    try:
        while not reader.at_end():
            start = reader.position()
            field_number, wire_type = reader.read_tag()
            if field_number == LIST_FIELD and wire_type is WireType.LEN:
                body = reader.read_length_delimited()
                elements.append(decode(body, discard_unknown=discard_unknown))
                continue
            _skip_unknown(reader, start, field_number, wire_type, unknown, discard_unknown)
    except IndexError as e:
        raise MalformedWire(f"Truncated data while decoding element at byte {start}: {e}") from e
    except ValueError as e:
        raise MalformedWire(f"Invalid data while decoding element at byte {start}: {e}") from e

    return RepeatedValue(val=tuple(elements), unknown_fields=tuple(unknown))


def _read_variant(reader: WireReader, schema: VariantSchema, discard_unknown: bool) -> Any:
    """Read the payload of a variant field whose tag was already consumed."""
    if schema.container is not None:
        body = reader.read_length_delimited()
        return _decode_container(body, schema.container, discard_unknown)
    return _read_scalar(reader, schema.kind)


def _decode_container(
    data: bytes, container_class: type[ScalarList], discard_unknown: bool
) -> ScalarList:
    """Decode the body of a list variant.

    Numeric and bool elements are accepted both packed and one per field;
    consecutive runs are concatenated in buffer order.

    Raises:
        IndexError: If the body is truncated
        ValueError: If the body is structurally invalid
    """
    kind = CONTAINER_KINDS[container_class]
    reader = WireReader(data)
    elements: list[Any] = []
    unknown: list[UnknownField] = []

    while not reader.at_end():
        start = reader.position()
        field_number, wire_type = reader.read_tag()
        if field_number == LIST_FIELD:
            if kind.packable and wire_type is WireType.LEN:
                packed = WireReader(reader.read_length_delimited())
                while not packed.at_end():
                    elements.append(_read_scalar(packed, kind))
                continue
            if wire_type is kind.wire_type:
                elements.append(_read_scalar(reader, kind))
                continue
        _skip_unknown(reader, start, field_number, wire_type, unknown, discard_unknown)

    return container_class(val=tuple(elements), unknown_fields=tuple(unknown))


def _read_scalar(reader: WireReader, kind: ScalarKind) -> Any:
    """Read a single scalar without its tag.

    Integers are truncated to their declared width, as protobuf readers do.
    """
    if kind is ScalarKind.BOOL:
        return reader.read_varint() != 0
    if kind is ScalarKind.INT32:
        return to_signed32(reader.read_varint())
    if kind is ScalarKind.INT64:
        return to_signed64(reader.read_varint())
    if kind is ScalarKind.ENUM:
        number = to_signed32(reader.read_varint())
        # Unknown enum numbers are kept as raw integers
        try:
            return Null(number)
        except ValueError:
            return number
    if kind is ScalarKind.DOUBLE:
        return reader.read_fixed64()
    if kind is ScalarKind.FLOAT:
        return reader.read_fixed32()
    if kind is ScalarKind.BYTES:
        return reader.read_length_delimited()

    raw = reader.read_length_delimited()
    # UnicodeDecodeError is a ValueError and surfaces as MalformedWire
    return raw.decode("utf-8")


def _skip_unknown(
    reader: WireReader,
    start: int,
    field_number: int,
    wire_type: WireType,
    unknown: list[UnknownField],
    discard: bool,
) -> None:
    reader.skip_field(wire_type, field_number)
    if not discard:
        unknown.append(
            UnknownField(field_number, int(wire_type), reader.slice(start, reader.position()))
        )
