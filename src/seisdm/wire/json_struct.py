"""Codec for ``google.protobuf.Struct`` payloads.

GeoJSON documents travel as a ``Struct``: a map of string keys to ``Value``
messages, where a ``Value`` is a oneof over null, number, string, bool, a
nested ``Struct`` or a ``ListValue``. Numbers are always doubles on the wire,
so integers come back as floats.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from typing import Any

from seisdm.exceptions import SchemaVersionSkewError
from seisdm.wire.fields import WireType
from seisdm.wire.policy import resolve_oneof
from seisdm.wire.primitives import WireReader
from seisdm.wire.primitives import WireWriter

if TYPE_CHECKING:
    from seisdm.wire.policy import DecodePolicy

logger = logging.getLogger(__name__)

# Struct
STRUCT_FIELDS = 1
# Struct.FieldsEntry
ENTRY_KEY = 1
ENTRY_VALUE = 2
# Value
NULL_VALUE = 1
NUMBER_VALUE = 2
STRING_VALUE = 3
BOOL_VALUE = 4
STRUCT_VALUE = 5
LIST_VALUE = 6
# ListValue
LIST_VALUES = 1

_VALUE_KINDS = {
    NULL_VALUE: ("null_value", WireType.VARINT),
    NUMBER_VALUE: ("number_value", WireType.FIXED64),
    STRING_VALUE: ("string_value", WireType.LEN),
    BOOL_VALUE: ("bool_value", WireType.VARINT),
    STRUCT_VALUE: ("struct_value", WireType.LEN),
    LIST_VALUE: ("list_value", WireType.LEN),
}


def encode_struct(document: dict[str, Any]) -> bytes:
    """Encode a JSON object as a ``Struct`` message body. Keys are written sorted."""
    writer = WireWriter()
    for key in sorted(document):
        if not isinstance(key, str):
            msg = f"Struct keys must be strings, got {type(key).__name__}"
            raise TypeError(msg)

        entry = WireWriter()
        if key:
            entry.write_key(ENTRY_KEY, WireType.LEN)
            entry.write_length_delimited(key.encode("utf-8"))
        entry.write_key(ENTRY_VALUE, WireType.LEN)
        entry.write_length_delimited(encode_value(document[key]))

        writer.write_key(STRUCT_FIELDS, WireType.LEN)
        writer.write_length_delimited(entry.getvalue())

    return writer.getvalue()


def encode_value(value: Any) -> bytes:
    """Encode a JSON value as a ``Value`` message body."""
    writer = WireWriter()

    # bool before numbers, bool is an int subclass
    if value is None:
        writer.write_key(NULL_VALUE, WireType.VARINT)
        writer.write_varint(0)
    elif isinstance(value, bool):
        writer.write_key(BOOL_VALUE, WireType.VARINT)
        writer.write_varint(int(value))
    elif isinstance(value, int | float):
        writer.write_key(NUMBER_VALUE, WireType.FIXED64)
        writer.write_double(float(value))
    elif isinstance(value, str):
        writer.write_key(STRING_VALUE, WireType.LEN)
        writer.write_length_delimited(value.encode("utf-8"))
    elif isinstance(value, dict):
        writer.write_key(STRUCT_VALUE, WireType.LEN)
        writer.write_length_delimited(encode_struct(value))
    elif isinstance(value, list | tuple):
        items = WireWriter()
        for item in value:
            items.write_key(LIST_VALUES, WireType.LEN)
            items.write_length_delimited(encode_value(item))
        writer.write_key(LIST_VALUE, WireType.LEN)
        writer.write_length_delimited(items.getvalue())
    else:
        msg = f"Can't encode {type(value).__name__} as a JSON value"
        raise TypeError(msg)

    return writer.getvalue()


def decode_struct(data: bytes, policy: DecodePolicy) -> dict[str, Any]:
    """Decode a ``Struct`` message body into a JSON object. Duplicate keys: last wins."""
    policy = policy.nested("Struct")
    reader = WireReader(data, "Struct")
    document: dict[str, Any] = {}

    while not reader.at_end():
        number, wire_type = reader.read_key()
        if number != STRUCT_FIELDS:
            reader.skip(wire_type)
            continue
        _expect(wire_type, WireType.LEN, "Struct", "fields")

        key, value = _decode_entry(reader.read_length_delimited(), policy)
        if key in document:
            logger.debug("Duplicate Struct key '%s', keeping last value", key)
        document[key] = value

    return document


def _decode_entry(data: bytes, policy: DecodePolicy) -> tuple[str, Any]:
    reader = WireReader(data, "Struct.FieldsEntry")
    key = ""
    chunks: list[bytes] = []

    while not reader.at_end():
        number, wire_type = reader.read_key()
        if number == ENTRY_KEY:
            _expect(wire_type, WireType.LEN, "Struct.FieldsEntry", "key")
            key = reader.read_string()
        elif number == ENTRY_VALUE:
            _expect(wire_type, WireType.LEN, "Struct.FieldsEntry", "value")
            chunks.append(reader.read_length_delimited())
        else:
            reader.skip(wire_type)

    return key, decode_value(b"".join(chunks), policy)


def decode_value(data: bytes, policy: DecodePolicy) -> Any:
    """Decode a ``Value`` message body into a JSON value."""
    policy = policy.nested("Value")
    reader = WireReader(data, "Value")
    seen: list[str] = []
    current: Any = None
    message_chunks: list[bytes] = []

    while not reader.at_end():
        number, wire_type = reader.read_key()
        if number not in _VALUE_KINDS:
            reader.skip(wire_type)
            continue

        name, expected = _VALUE_KINDS[number]
        _expect(wire_type, expected, "Value", name)

        # Switching variant clears the previous one, as in a fresh assignment
        if not seen or seen[-1] != name:
            message_chunks = []
        seen.append(name)

        if number == NULL_VALUE:
            reader.read_varint()
            current = None
        elif number == NUMBER_VALUE:
            current = reader.read_double()
        elif number == STRING_VALUE:
            current = reader.read_string()
        elif number == BOOL_VALUE:
            current = reader.read_varint() != 0
        else:
            message_chunks.append(reader.read_length_delimited())

    kind = resolve_oneof("Value", "kind", seen, policy)
    if kind == "struct_value":
        return decode_struct(b"".join(message_chunks), policy)
    if kind == "list_value":
        return _decode_list(b"".join(message_chunks), policy)
    return current


def _decode_list(data: bytes, policy: DecodePolicy) -> list[Any]:
    policy = policy.nested("ListValue")
    reader = WireReader(data, "ListValue")
    values = []

    while not reader.at_end():
        number, wire_type = reader.read_key()
        if number != LIST_VALUES:
            reader.skip(wire_type)
            continue
        _expect(wire_type, WireType.LEN, "ListValue", "values")
        values.append(decode_value(reader.read_length_delimited(), policy))

    return values


def _expect(observed: WireType, expected: WireType, type_name: str, field_name: str) -> None:
    if observed is not expected:
        raise SchemaVersionSkewError(type_name, field_name, expected.name, observed.name)
