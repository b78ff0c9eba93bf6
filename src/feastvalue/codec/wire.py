"""Low-level wire primitives.

This module provides tag/varint/fixed-width reading and writing for the
protobuf-compatible wire format. Fixed-width values are little-endian;
varints carry 7 bits per byte, least significant group first.
"""

from __future__ import annotations

import enum
import struct

MASK32 = (1 << 32) - 1
MASK64 = (1 << 64) - 1

# A 64-bit varint never needs more than 10 bytes
MAX_VARINT_BYTES = 10

# Largest field number a tag may carry
MAX_FIELD_NUMBER = (1 << 29) - 1


class WireType(enum.IntEnum):
    """Encoding category stored in the low 3 bits of every tag."""

    VARINT = 0
    FIXED64 = 1
    LEN = 2
    START_GROUP = 3
    END_GROUP = 4
    FIXED32 = 5


def make_tag(field_number: int, wire_type: WireType) -> int:
    """Pack a field number and wire type into a tag value."""
    return (field_number << 3) | int(wire_type)


def varint_size(value: int) -> int:
    """Return the number of bytes needed to write ``value`` as a varint.

    Negative values are sign-extended to 64 bits and always take 10 bytes.
    """
    if value < 0:
        value &= MASK64
    size = 1
    while value > 0x7F:
        value >>= 7
        size += 1
    return size


def to_signed32(value: int) -> int:
    """Interpret the low 32 bits of ``value`` as a two's complement integer."""
    value &= MASK32
    return value - (1 << 32) if value & (1 << 31) else value


def to_signed64(value: int) -> int:
    """Interpret the low 64 bits of ``value`` as a two's complement integer."""
    value &= MASK64
    return value - (1 << 64) if value & (1 << 63) else value


class WireWriter:
    """Appends wire-format primitives to a byte buffer.

    Example:
        >>> writer = WireWriter()
        >>> writer.write_tag(3, WireType.VARINT)
        >>> writer.write_varint(42)
        >>> writer.to_bytes()
        b'\\x18*'
    """

    def __init__(self) -> None:
        """Initialize an empty writer."""
        self._buffer = bytearray()

    def write_varint(self, value: int) -> None:
        """Write an integer as a base-128 varint.

        Negative values are written as their 64-bit two's complement, which is
        how int32, int64 and enum fields carry negative numbers.

        Args:
            value: Integer in the signed or unsigned 64-bit range

        Raises:
            ValueError: If the value does not fit in 64 bits
        """
        if value < -(1 << 63) or value > MASK64:
            raise ValueError(f"Value {value} does not fit in a 64-bit varint")
        value &= MASK64
        while value > 0x7F:
            self._buffer.append((value & 0x7F) | 0x80)
            value >>= 7
        self._buffer.append(value)

    def write_tag(self, field_number: int, wire_type: WireType) -> None:
        """Write a field tag.

        Raises:
            ValueError: If the field number is not positive or exceeds MAX_FIELD_NUMBER
        """
        if field_number < 1:
            raise ValueError(f"Field number must be positive, got {field_number}")
        if field_number > MAX_FIELD_NUMBER:
            raise ValueError(f"Field number {field_number} exceeds {MAX_FIELD_NUMBER}")
        self.write_varint(make_tag(field_number, wire_type))

    def write_fixed32(self, value: float) -> None:
        """Write a float as 4 little-endian IEEE-754 bytes."""
        self._buffer.extend(struct.pack("<f", value))

    def write_fixed64(self, value: float) -> None:
        """Write a double as 8 little-endian IEEE-754 bytes."""
        self._buffer.extend(struct.pack("<d", value))

    def write_length_delimited(self, data: bytes) -> None:
        """Write a varint length prefix followed by ``data``."""
        self.write_varint(len(data))
        self._buffer.extend(data)

    def write_raw(self, data: bytes) -> None:
        """Append bytes verbatim (used to re-emit preserved unknown fields)."""
        self._buffer.extend(data)

    def byte_length(self) -> int:
        return len(self._buffer)

    def to_bytes(self) -> bytes:
        """Return the bytes written so far."""
        return bytes(self._buffer)


class WireReader:
    """Reads wire-format primitives from a byte buffer.

    The cursor only moves forward. Reading past the end raises IndexError;
    structurally invalid input (overlong varint, bad tag) raises ValueError.

    Example:
        >>> reader = WireReader(b"\\x18*")
        >>> reader.read_tag()
        (3, <WireType.VARINT: 0>)
        >>> reader.read_varint()
        42
    """

    def __init__(self, data: bytes) -> None:
        """Initialize a reader over ``data``. The buffer is never modified."""
        self._data = bytes(data)
        self._position = 0

    def read_varint(self) -> int:
        """Read a base-128 varint as an unsigned 64-bit integer.

        Raises:
            IndexError: If the buffer ends before the varint terminates
            ValueError: If the varint runs past 10 bytes
        """
        result = 0
        for index in range(MAX_VARINT_BYTES):
            if self._position >= len(self._data):
                raise IndexError("Attempted to read past end of buffer inside a varint")
            byte = self._data[self._position]
            self._position += 1
            result |= (byte & 0x7F) << (7 * index)
            if not byte & 0x80:
                return result & MASK64
        raise ValueError(f"Varint exceeds {MAX_VARINT_BYTES} bytes")

    def read_tag(self) -> tuple[int, WireType]:
        """Read a field tag.

        Returns:
            Tuple of (field_number, wire_type)

        Raises:
            IndexError: If the buffer is truncated
            ValueError: If the field number is 0 or too large, or the wire type
                is unsupported
        """
        tag = self.read_varint()
        field_number = tag >> 3
        if field_number == 0:
            raise ValueError("Invalid field number 0")
        if field_number > MAX_FIELD_NUMBER:
            raise ValueError(f"Invalid field number {field_number} exceeds {MAX_FIELD_NUMBER}")
        try:
            wire_type = WireType(tag & 0x7)
        except ValueError as err:
            raise ValueError(
                f"Unsupported wire type {tag & 0x7} for field {field_number}"
            ) from err
        return field_number, wire_type

    def read_bytes(self, num_bytes: int) -> bytes:
        """Read exactly ``num_bytes`` raw bytes.

        Raises:
            IndexError: If fewer bytes remain
        """
        if num_bytes > self.bytes_remaining():
            raise IndexError(
                f"Not enough bytes: need {num_bytes}, have {self.bytes_remaining()}"
            )
        start = self._position
        self._position += num_bytes
        return self._data[start : self._position]

    def read_fixed32(self) -> float:
        """Read 4 little-endian bytes as a float."""
        return struct.unpack("<f", self.read_bytes(4))[0]

    def read_fixed64(self) -> float:
        """Read 8 little-endian bytes as a double."""
        return struct.unpack("<d", self.read_bytes(8))[0]

    def read_length_delimited(self) -> bytes:
        """Read a varint length prefix and the bytes it covers.

        Raises:
            IndexError: If the length exceeds the remaining buffer
        """
        length = self.read_varint()
        return self.read_bytes(length)

    def skip_field(self, wire_type: WireType, field_number: int = 0) -> None:
        """Advance past the payload of a field whose tag was already read.

        A group is consumed through its matching end tag, nested groups
        included.

        Args:
            wire_type: Wire type read from the tag
            field_number: Field number read from the tag (needed for groups)

        Raises:
            IndexError: If the buffer ends inside the field
            ValueError: If an end-group tag does not close an open group
        """
        if wire_type is WireType.VARINT:
            self.read_varint()
        elif wire_type is WireType.FIXED64:
            self.read_bytes(8)
        elif wire_type is WireType.LEN:
            self.read_length_delimited()
        elif wire_type is WireType.FIXED32:
            self.read_bytes(4)
        elif wire_type is WireType.START_GROUP:
            self._skip_group(field_number)
        else:
            raise ValueError(f"Unmatched end group tag for field {field_number}")

    def _skip_group(self, field_number: int) -> None:
        open_groups = [field_number]
        while open_groups:
            if self.at_end():
                raise IndexError(f"Buffer ends inside group for field {open_groups[-1]}")
            number, wire_type = self.read_tag()
            if wire_type is WireType.START_GROUP:
                open_groups.append(number)
            elif wire_type is WireType.END_GROUP:
                expected = open_groups.pop()
                if number != expected:
                    raise ValueError(
                        f"End group tag for field {number} does not close group {expected}"
                    )
            else:
                self.skip_field(wire_type)

    def slice(self, start: int, end: int) -> bytes:
        """Return the raw bytes between two cursor positions."""
        return self._data[start:end]

    def at_end(self) -> bool:
        return self._position >= len(self._data)

    def bytes_remaining(self) -> int:
        """Return the number of unread bytes."""
        return len(self._data) - self._position

    def position(self) -> int:
        """Return the current read position in bytes."""
        return self._position
