"""Encoded size calculation utilities.

This module provides functions to calculate the encoded size of values
without actually encoding them.
"""

from __future__ import annotations

from typing import Any

from ..codec.schema import CONTAINER_KINDS, LIST_FIELD, VALUE_SCHEMA, ScalarKind
from ..codec.wire import WireType, make_tag, varint_size
from ..models import RepeatedValue, ScalarList, UnknownField, Value


def encoded_size(message: Value | RepeatedValue) -> int:
    """Calculate the encoded size of a Value or RepeatedValue in bytes.

    Args:
        message: Value or RepeatedValue to measure

    Returns:
        Size in bytes, equal to ``len(encode(message))``

    Example:
        >>> encoded_size(Value.of(ValueType.INT32, 42))
        2
        >>> encoded_size(Value())
        0
    """
    return sum(field_sizes(message).values())


def field_sizes(message: Value | RepeatedValue) -> dict[str, int]:
    """Get the encoded size in bytes of each field, tag included.

    Args:
        message: Value or RepeatedValue to analyze

    Returns:
        Dictionary mapping field names to their size in bytes. A Value maps its
        populated variant (e.g. ``int32_val``); a RepeatedValue maps each
        element as ``val[i]``. Preserved unknown fields are grouped under
        ``unknown_fields``. Empty for the unset Value.

    Example:
        >>> field_sizes(Value.of(ValueType.STRING, "abc"))
        {'string_val': 5}
    """
    sizes: dict[str, int] = {}
    if isinstance(message, RepeatedValue):
        for index, element in enumerate(message.val):
            sizes[f"val[{index}]"] = _embedded_size(LIST_FIELD, _value_size(element))
    else:
        value_type = message.which()
        if value_type is not None:
            schema = VALUE_SCHEMA[int(value_type)]
            payload = message.payload
            if schema.container is not None:
                sizes[schema.field_name] = _embedded_size(schema.tag, _container_size(payload))
            else:
                sizes[schema.field_name] = _tag_size(schema.tag, schema.wire_type) + _scalar_size(
                    schema.kind, payload
                )

    unknown = _unknown_size(message.unknown_fields)
    if unknown:
        sizes["unknown_fields"] = unknown
    return sizes


def _value_size(value: Value) -> int:
    return sum(field_sizes(value).values())


def _container_size(container: ScalarList) -> int:
    kind = CONTAINER_KINDS[type(container)]
    if kind.packable:
        size = 0
        if container.val:
            body = sum(_scalar_size(kind, element) for element in container.val)
            size = _embedded_size(LIST_FIELD, body)
    else:
        tag = _tag_size(LIST_FIELD, WireType.LEN)
        size = sum(tag + _scalar_size(kind, element) for element in container.val)
    return size + _unknown_size(container.unknown_fields)


def _scalar_size(kind: ScalarKind, value: Any) -> int:
    if kind is ScalarKind.BOOL:
        return 1
    if kind in (ScalarKind.INT32, ScalarKind.INT64, ScalarKind.ENUM):
        return varint_size(int(value))
    if kind is ScalarKind.DOUBLE:
        return 8
    if kind is ScalarKind.FLOAT:
        return 4
    raw = value if kind is ScalarKind.BYTES else value.encode("utf-8")
    return varint_size(len(raw)) + len(raw)


def _embedded_size(field_number: int, body_size: int) -> int:
    """Size of a length-delimited field: tag, length prefix and body."""
    return _tag_size(field_number, WireType.LEN) + varint_size(body_size) + body_size


def _tag_size(field_number: int, wire_type: WireType) -> int:
    return varint_size(make_tag(field_number, wire_type))


def _unknown_size(unknown_fields: tuple[UnknownField, ...]) -> int:
    return sum(len(field.data) for field in unknown_fields)
