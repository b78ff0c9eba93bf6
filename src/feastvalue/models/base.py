"""Base message class and shared pydantic configuration.

This module provides the WireMessage class that every wire-level model
(Value, the list containers, RepeatedValue) inherits from, and the
UnknownField record used to carry fields the codec does not recognize.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..exceptions import InvalidVariant


@dataclass(frozen=True)
class UnknownField:
    """A field the decoder did not recognize, kept verbatim.

    Attributes:
        number: Field number read from the tag
        wire_type: Wire type read from the tag (0, 1, 2, 3 or 5)
        data: Raw bytes of the whole field as found on the wire, tag included
            (for a group, everything through its end tag)
    """

    number: int
    wire_type: int
    data: bytes


class WireMessage(BaseModel):
    """Base class for all models with a wire representation.

    Models are immutable once constructed. Validation failures surface as
    InvalidVariant rather than pydantic's ValidationError so callers only deal
    with the package's own exception hierarchy.

    Attributes:
        unknown_fields: Unrecognized fields preserved by the decoder, in wire order.
            They are re-emitted on encode and ignored by equality.
    """

    model_config = ConfigDict(
        # Immutable data-transfer objects
        frozen=True,
        # Forbid extra fields not defined in schema
        extra="forbid",
    )

    unknown_fields: tuple[UnknownField, ...] = Field(default=(), repr=False)

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as err:
            raise InvalidVariant(
                f"Invalid payload for {type(self).__name__}: {err}"
            ) from err
