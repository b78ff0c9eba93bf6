"""Static variant table for the wire codec.

This module maps every Value variant to its field tag, wire type and payload
kind. The table is a module constant, checked once at import time: tags 9 and
10 are reserved and no two variants may share a tag.

Example:
    >>> VALUE_SCHEMA[3].value_type
    <ValueType.INT32: 3>
    >>> VALUE_SCHEMA[3].wire_type
    <WireType.VARINT: 0>
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable

from ..exceptions import SchemaError
from ..models import LIST_CONTAINERS, VARIANTS, ScalarList, ValueType
from .wire import WireType

RESERVED_TAGS = frozenset({9, 10})

# Field number of ``val`` in the list containers and RepeatedValue
LIST_FIELD = 1


class ScalarKind(enum.Enum):
    """Encoding of a single scalar, either a variant payload or a list element."""

    BYTES = "bytes"
    STRING = "string"
    INT32 = "int32"
    INT64 = "int64"
    DOUBLE = "double"
    FLOAT = "float"
    BOOL = "bool"
    ENUM = "enum"

    @property
    def wire_type(self) -> WireType:
        return _KIND_WIRE_TYPES[self]

    @property
    def packable(self) -> bool:
        """Whether repeated elements of this kind are written as one packed run."""
        return self.wire_type is not WireType.LEN


_KIND_WIRE_TYPES = {
    ScalarKind.BYTES: WireType.LEN,
    ScalarKind.STRING: WireType.LEN,
    ScalarKind.INT32: WireType.VARINT,
    ScalarKind.INT64: WireType.VARINT,
    ScalarKind.DOUBLE: WireType.FIXED64,
    ScalarKind.FLOAT: WireType.FIXED32,
    ScalarKind.BOOL: WireType.VARINT,
    ScalarKind.ENUM: WireType.VARINT,
}


@dataclass(frozen=True)
class VariantSchema:
    """Wire description of one Value variant.

    Attributes:
        value_type: Variant identifier; its number is the field tag
        kind: Scalar kind of the payload, or of the elements for list variants
        container: List container class for list variants, None for scalars
    """

    value_type: ValueType
    kind: ScalarKind
    container: type[ScalarList] | None = None

    @property
    def tag(self) -> int:
        return int(self.value_type)

    @property
    def field_name(self) -> str:
        return self.value_type.field_name

    @property
    def is_list(self) -> bool:
        return self.container is not None

    @property
    def wire_type(self) -> WireType:
        """Wire type of the variant field itself (containers are length-delimited)."""
        if self.container is not None:
            return WireType.LEN
        return self.kind.wire_type


_VARIANT_KINDS = {
    ValueType.BYTES: ScalarKind.BYTES,
    ValueType.STRING: ScalarKind.STRING,
    ValueType.INT32: ScalarKind.INT32,
    ValueType.INT64: ScalarKind.INT64,
    ValueType.DOUBLE: ScalarKind.DOUBLE,
    ValueType.FLOAT: ScalarKind.FLOAT,
    ValueType.BOOL: ScalarKind.BOOL,
    ValueType.UNIX_TIMESTAMP: ScalarKind.INT64,
    ValueType.BYTES_LIST: ScalarKind.BYTES,
    ValueType.STRING_LIST: ScalarKind.STRING,
    ValueType.INT32_LIST: ScalarKind.INT32,
    ValueType.INT64_LIST: ScalarKind.INT64,
    ValueType.DOUBLE_LIST: ScalarKind.DOUBLE,
    ValueType.FLOAT_LIST: ScalarKind.FLOAT,
    ValueType.BOOL_LIST: ScalarKind.BOOL,
    ValueType.UNIX_TIMESTAMP_LIST: ScalarKind.INT64,
    ValueType.NULL: ScalarKind.ENUM,
}


def build_table(schemas: Iterable[VariantSchema]) -> dict[int, VariantSchema]:
    """Index variant schemas by tag.

    Args:
        schemas: Variant schemas to index

    Returns:
        Mapping of tag to schema

    Raises:
        SchemaError: If a tag is reserved, not positive, or used twice
    """
    table: dict[int, VariantSchema] = {}
    for schema in schemas:
        if schema.tag < 1:
            raise SchemaError(f"{schema.value_type.name}: tag must be positive, got {schema.tag}")
        if schema.tag in RESERVED_TAGS:
            raise SchemaError(f"{schema.value_type.name}: tag {schema.tag} is reserved")
        if schema.tag in table:
            raise SchemaError(
                f"{schema.value_type.name}: tag {schema.tag} already used by "
                f"{table[schema.tag].value_type.name}"
            )
        table[schema.tag] = schema
    return table


VALUE_SCHEMA: dict[int, VariantSchema] = build_table(
    VariantSchema(value_type, _VARIANT_KINDS[value_type], LIST_CONTAINERS.get(value_type))
    for value_type in VARIANTS
)

# Element kind of each list container class
CONTAINER_KINDS: dict[type[ScalarList], ScalarKind] = {
    schema.container: schema.kind
    for schema in VALUE_SCHEMA.values()
    if schema.container is not None
}


def schema_for(value_type: ValueType) -> VariantSchema:
    """Return the schema of a variant.

    Raises:
        SchemaError: If ``value_type`` is not a variant (e.g. INVALID)
    """
    try:
        return VALUE_SCHEMA[int(value_type)]
    except KeyError as err:
        raise SchemaError(f"{value_type!r} is not a Value variant") from err
