"""Buffer inspection CLI command."""

from __future__ import annotations

import logging

from ..codec import VALUE_SCHEMA, decode, decode_repeated
from ..models import RepeatedValue, UnknownField, Value
from ..utils.sizing import field_sizes

logger = logging.getLogger(__name__)


def inspect_bytes(data: bytes, *, repeated: bool = False) -> None:
    """Decode a buffer and print a breakdown of its fields.

    Args:
        data: Encoded Value, or RepeatedValue when ``repeated`` is True
        repeated: Decode the buffer as a RepeatedValue

    Raises:
        MalformedWire: If the buffer cannot be decoded
    """
    logger.debug("Decoding %d bytes as %s", len(data), "RepeatedValue" if repeated else "Value")

    print("|" * 7, "feastvalue: Feature Value Codec", "|" * 7)
    if repeated:
        message = decode_repeated(data)
        count = len(message.val)
        print(f"RepeatedValue: {count} value{'s' if count != 1 else ''}, {len(data)} bytes")
        print()
        for index, element in enumerate(message.val):
            print(f"[{index}]")
            describe_value(element, indent="  ")
        _print_unknown(message, indent="")
    else:
        value = decode(data)
        print(f"Value: {len(data)} bytes")
        print()
        describe_value(value, indent="")


def describe_value(value: Value, *, indent: str) -> None:
    """Print the discriminant, payload and field sizes of one Value."""
    value_type = value.which()
    if value_type is None:
        print(f"{indent}variant: (unset)")
    else:
        schema = VALUE_SCHEMA[int(value_type)]
        print(
            f"{indent}variant: {value_type.name} "
            f"(tag {schema.tag}, wire type {schema.wire_type.name})"
        )
        payload = value.payload
        if schema.container is not None:
            payload = list(payload.val)
        print(f"{indent}payload: {payload!r}")

    for name, size in field_sizes(value).items():
        print(f"{indent}  {name}: {size} byte{'s' if size != 1 else ''}")
    _print_unknown(value, indent=indent)


def _print_unknown(message: Value | RepeatedValue, *, indent: str) -> None:
    fields: tuple[UnknownField, ...] = message.unknown_fields
    if not fields:
        return
    print(f"{indent}unknown fields: {len(fields)}")
    for field in fields:
        print(
            f"{indent}  field {field.number} (wire type {field.wire_type}): "
            f"{field.data.hex()}"
        )
