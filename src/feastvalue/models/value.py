"""The Value union and RepeatedValue.

A Value populates at most one variant. Each variant is a named attribute
(``bytes_val``, ``int32_val``, ..., ``null_val``) whose payload type is pinned
by the aliases in ``fields``; all other variant attributes are None.

Example:
    >>> v = Value.of(ValueType.INT32, 42)
    >>> v.which()
    <ValueType.INT32: 3>
    >>> v.get(ValueType.INT32)
    42
    >>> v.get(ValueType.STRING) is None
    True
"""

from __future__ import annotations

from typing import Any, Iterable

from pydantic import model_validator

from ..exceptions import InvalidVariant, MultipleVariantsSet
from .base import WireMessage
from .enums import VARIANTS, ValueType
from .fields import Bool, Bytes, Double, Float32, Int32, Int64, NullPayload, Utf8Str
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

_FIELD_NAMES = tuple(t.field_name for t in VARIANTS)


class Value(WireMessage):
    """Tagged union of the feature value types.

    Construct with :meth:`of` or with a single keyword argument
    (``Value(string_val="a")``). ``Value()`` is the unset value.

    Equality compares the discriminant and the payload. Floats use IEEE-754
    ``==`` (NaN never equal, ``0.0 == -0.0``). Unknown fields are ignored.
    """

    bytes_val: Bytes | None = None
    string_val: Utf8Str | None = None
    int32_val: Int32 | None = None
    int64_val: Int64 | None = None
    double_val: Double | None = None
    float_val: Float32 | None = None
    bool_val: Bool | None = None
    unix_timestamp_val: Int64 | None = None
    bytes_list_val: BytesList | None = None
    string_list_val: StringList | None = None
    int32_list_val: Int32List | None = None
    int64_list_val: Int64List | None = None
    double_list_val: DoubleList | None = None
    float_list_val: FloatList | None = None
    bool_list_val: BoolList | None = None
    unix_timestamp_list_val: Int64List | None = None
    null_val: NullPayload | None = None

    @model_validator(mode="before")
    @classmethod
    def _check_oneof(cls, data: Any) -> Any:
        if isinstance(data, dict):
            populated = [name for name in _FIELD_NAMES if data.get(name) is not None]
            if len(populated) > 1:
                raise MultipleVariantsSet(
                    f"Value accepts one variant, got {', '.join(populated)}"
                )
        return data

    @classmethod
    def of(cls, value_type: ValueType, payload: Any) -> Value:
        """Build a Value holding ``payload`` in the given variant.

        List variants accept either their container or any iterable of
        elements.

        Args:
            value_type: Variant to populate (not INVALID)
            payload: Payload matching the variant's declared type

        Returns:
            New Value

        Raises:
            InvalidVariant: If the variant is INVALID or the payload does not match it
        """
        if not isinstance(value_type, ValueType) or value_type is ValueType.INVALID:
            raise InvalidVariant(f"Not a Value variant: {value_type!r}")
        if payload is None:
            raise InvalidVariant(f"{value_type.name} requires a payload, got None")

        if value_type.is_list and not isinstance(payload, ScalarList):
            if isinstance(payload, (str, bytes)):
                raise InvalidVariant(
                    f"{value_type.name} expects a sequence of elements, "
                    f"got {type(payload).__name__}"
                )
            try:
                elements = tuple(payload)
            except TypeError as err:
                raise InvalidVariant(
                    f"{value_type.name} expects a sequence, got {type(payload).__name__}"
                ) from err
            payload = LIST_CONTAINERS[value_type](val=elements)

        return cls(**{value_type.field_name: payload})

    def which(self) -> ValueType | None:
        """Return the populated variant, or None for the unset value."""
        for value_type in VARIANTS:
            if getattr(self, value_type.field_name) is not None:
                return value_type
        return None

    def get(self, value_type: ValueType) -> Any:
        """Return the payload if ``value_type`` is the populated variant, else None."""
        try:
            value_type = ValueType(value_type)
        except ValueError:
            return None
        if value_type is ValueType.INVALID:
            return None
        return getattr(self, value_type.field_name)

    @property
    def payload(self) -> Any:
        """Payload of the populated variant, or None when unset."""
        value_type = self.which()
        if value_type is None:
            return None
        return getattr(self, value_type.field_name)

    def is_set(self) -> bool:
        return self.which() is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        value_type = self.which()
        if value_type != other.which():
            return False
        return value_type is None or bool(self.payload == other.payload)

    def __hash__(self) -> int:
        return hash((self.which(), self.payload))

    def __repr_args__(self) -> Iterable[tuple[str | None, Any]]:
        value_type = self.which()
        if value_type is not None:
            yield value_type.field_name, self.payload


class RepeatedValue(WireMessage):
    """Ordered sequence of independent Values, possibly of different variants."""

    val: tuple[Value, ...] = ()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RepeatedValue):
            return NotImplemented
        if len(self.val) != len(other.val):
            return False
        return all(a == b for a, b in zip(self.val, other.val))

    def __hash__(self) -> int:
        return hash(self.val)
