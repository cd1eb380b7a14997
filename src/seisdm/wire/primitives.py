"""Low-level wire primitives: varints, fixed-width numbers and length-delimited payloads."""

from __future__ import annotations

import struct
from typing import TYPE_CHECKING

import numpy as np

from seisdm.exceptions import MalformedInputError
from seisdm.wire.fields import MAX_FIELD_NUMBER
from seisdm.wire.fields import WireType

if TYPE_CHECKING:
    from collections.abc import Iterable

    from numpy.typing import NDArray

MAX_VARINT_BYTES = 10
UINT64_MASK = (1 << 64) - 1
UINT32_MASK = (1 << 32) - 1

FLOAT32_LE = np.dtype("<f4")

_FLOAT = struct.Struct("<f")
_DOUBLE = struct.Struct("<d")


def to_int32(value: int) -> int:
    """Truncate a decoded varint to a signed 32-bit integer."""
    value &= UINT32_MASK
    return value - (1 << 32) if value & 0x80000000 else value


class WireWriter:
    """Append-only buffer that writes protobuf wire primitives."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    def write_varint(self, value: int) -> None:
        """Write an unsigned varint. Negative values are sign-extended to 64 bits."""
        value &= UINT64_MASK
        while value > 0x7F:
            self._buffer.append((value & 0x7F) | 0x80)
            value >>= 7
        self._buffer.append(value)

    def write_key(self, number: int, wire_type: WireType) -> None:
        """Write a field key."""
        self.write_varint((number << 3) | wire_type)

    def write_float(self, value: float) -> None:
        """Write a little-endian IEEE-754 single."""
        self._buffer += _FLOAT.pack(value)

    def write_double(self, value: float) -> None:
        """Write a little-endian IEEE-754 double."""
        self._buffer += _DOUBLE.pack(value)

    def write_length_delimited(self, payload: bytes) -> None:
        """Write a varint length prefix followed by the payload."""
        self.write_varint(len(payload))
        self._buffer += payload

    def write_packed_floats(self, values: Iterable[float]) -> None:
        """Write a packed run of float32 values as one length-delimited payload."""
        packed = np.asarray(values, dtype=FLOAT32_LE).tobytes()
        self.write_length_delimited(packed)

    def getvalue(self) -> bytes:
        """Return the bytes written so far."""
        return bytes(self._buffer)


class WireReader:
    """Cursor over an immutable buffer that reads protobuf wire primitives.

    Args:
        data: Buffer to read from.
        type_name: Name of the message being read, used in error messages.
    """

    def __init__(self, data: bytes, type_name: str | None = None) -> None:
        self._data = memoryview(data)
        self.type_name = type_name
        self.pos = 0

    def at_end(self) -> bool:
        """Return True if the whole buffer has been consumed."""
        return self.pos >= len(self._data)

    def _error(self, message: str, offset: int | None = None) -> MalformedInputError:
        return MalformedInputError(message, type_name=self.type_name, offset=self.pos if offset is None else offset)

    def _take(self, size: int) -> bytes:
        end = self.pos + size
        if end > len(self._data):
            msg = f"Truncated input: need {size} bytes, {len(self._data) - self.pos} left"
            raise self._error(msg)
        chunk = self._data[self.pos : end].tobytes()
        self.pos = end
        return chunk

    def read_varint(self) -> int:
        """Read an unsigned varint of at most 10 bytes."""
        start = self.pos
        result = 0
        for index in range(MAX_VARINT_BYTES):
            if self.pos >= len(self._data):
                raise self._error("Truncated varint", offset=start)
            byte = self._data[self.pos]
            self.pos += 1
            result |= (byte & 0x7F) << (7 * index)
            if not byte & 0x80:
                return result & UINT64_MASK
        raise self._error("Varint longer than 10 bytes", offset=start)

    def read_key(self) -> tuple[int, WireType]:
        """Read a field key and validate its number and wire type."""
        start = self.pos
        key = self.read_varint()
        number = key >> 3
        if not 1 <= number <= MAX_FIELD_NUMBER:
            raise self._error(f"Invalid field number {number}", offset=start)

        try:
            wire_type = WireType(key & 0x07)
        except ValueError:
            raise self._error(f"Invalid wire type {key & 0x07}", offset=start) from None

        if wire_type in {WireType.START_GROUP, WireType.END_GROUP}:
            raise self._error(f"Unsupported group wire type {wire_type.value}", offset=start)

        return number, wire_type

    def read_float(self) -> float:
        """Read a little-endian IEEE-754 single."""
        return _FLOAT.unpack(self._take(4))[0]

    def read_double(self) -> float:
        """Read a little-endian IEEE-754 double."""
        return _DOUBLE.unpack(self._take(8))[0]

    def read_length_delimited(self) -> bytes:
        """Read a length-prefixed payload."""
        size = self.read_varint()
        return self._take(size)

    def read_string(self) -> str:
        """Read a length-prefixed UTF-8 string."""
        start = self.pos
        payload = self.read_length_delimited()
        try:
            return payload.decode("utf-8")
        except UnicodeDecodeError as err:
            raise self._error(f"Invalid UTF-8 in string field: {err.reason}", offset=start) from err

    def read_packed_floats(self) -> NDArray[np.float32]:
        """Read a packed run of float32 values."""
        start = self.pos
        payload = self.read_length_delimited()
        if len(payload) % FLOAT32_LE.itemsize:
            raise self._error(f"Packed float payload of {len(payload)} bytes", offset=start)
        return np.frombuffer(payload, dtype=FLOAT32_LE)

    def skip(self, wire_type: WireType) -> None:
        """Skip over one value of the given wire type."""
        if wire_type is WireType.VARINT:
            self.read_varint()
        elif wire_type is WireType.FIXED64:
            self._take(8)
        elif wire_type is WireType.LEN:
            self.read_length_delimited()
        elif wire_type is WireType.FIXED32:
            self._take(4)
        else:
            raise self._error(f"Can't skip wire type {wire_type.value}")
