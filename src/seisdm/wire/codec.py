"""Binary encoding and decoding of seismic data model messages.

The wire format is protobuf's (proto3 rules). Field numbers, kinds and target
types come from the :class:`~seisdm.wire.fields.WireField` descriptors on each
model, so there is no generated code.

Encoding is deterministic: fields go out in ascending field number, default
scalars are omitted and map entries are sorted by key.

Decoding is lenient where protobuf is lenient and strict where the data model
requires it:

- Unknown fields are skipped.
- Repeated occurrences of a singular message field are merged, singular scalars
  keep the last value.
- A oneof group with no variant set is rejected. One with several variants set
  is rejected in strict mode, or resolved to the last variant in lenient mode.
- A known field with an unexpected wire type raises
  :class:`~seisdm.exceptions.SchemaVersionSkewError`.
"""

from __future__ import annotations

import logging
import math
from enum import IntEnum
from typing import TYPE_CHECKING
from typing import Any
from typing import TypeVar

from pydantic import ValidationError

from seisdm.exceptions import MalformedInputError
from seisdm.exceptions import SchemaVersionSkewError
from seisdm.schemas.core import OneofModel
from seisdm.schemas.core import SeismicModel
from seisdm.wire.fields import FieldKind
from seisdm.wire.fields import WireField
from seisdm.wire.fields import WireType
from seisdm.wire.fields import wire_fields
from seisdm.wire.json_struct import decode_struct
from seisdm.wire.json_struct import encode_struct
from seisdm.wire.policy import DecodePolicy
from seisdm.wire.policy import resolve_oneof
from seisdm.wire.primitives import WireReader
from seisdm.wire.primitives import WireWriter
from seisdm.wire.primitives import to_int32

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)

MessageT = TypeVar("MessageT", bound=SeismicModel)
EnumT = TypeVar("EnumT", bound=IntEnum)

# Map entry fields
MAP_KEY = 1
MAP_VALUE = 2
# Wrapper field
WRAPPER_VALUE = 1


def encode(value: SeismicModel | IntEnum) -> bytes:
    """Serialize a message or an enum member to its wire form.

    Args:
        value: A data model message, or an enum member.

    Returns:
        The wire bytes.
    """
    if isinstance(value, IntEnum):
        return encode_enum(value)

    if not isinstance(value, SeismicModel):
        msg = f"Can't encode object of type {type(value).__name__}"
        raise TypeError(msg)

    writer = WireWriter()
    for field, field_value, in_oneof in _iter_wire_values(value):
        _write_field(writer, field, field_value, in_oneof)
    return writer.getvalue()


def decode(message_type: type[MessageT], data: bytes, *, strict: bool | None = None) -> MessageT:
    """Deserialize wire bytes into a message or enum member.

    Args:
        message_type: Message model class or enum class to decode into.
        data: Wire bytes.
        strict: Reject oneof groups with several variants set. Defaults to the
            ``SEISDM__DECODE__UNION_POLICY`` setting.

    Returns:
        The decoded value.

    Raises:
        MalformedInputError: If the bytes violate the wire contract.
    """
    if isinstance(message_type, type) and issubclass(message_type, IntEnum):
        return decode_enum(message_type, data)

    policy = DecodePolicy.from_settings(strict)
    return _decode_message(message_type, bytes(data), policy)


def encode_enum(member: IntEnum) -> bytes:
    """Serialize an enum member as a single varint."""
    writer = WireWriter()
    writer.write_varint(int(member))
    return writer.getvalue()


def decode_enum(enum_type: type[EnumT], data: bytes) -> EnumT:
    """Deserialize a single varint into an enum member.

    Raises:
        MalformedInputError: On truncated or trailing bytes, or an unknown number.
    """
    reader = WireReader(bytes(data), enum_type.__name__)
    number = to_int32(reader.read_varint())
    if not reader.at_end():
        raise MalformedInputError("Trailing bytes after enum value", type_name=enum_type.__name__, offset=reader.pos)
    return _to_enum(enum_type, number)


def _to_enum(enum_type: type[EnumT], number: int) -> EnumT:
    try:
        return enum_type(number)
    except ValueError:
        msg = f"Unknown enum number {number}"
        raise MalformedInputError(msg, type_name=enum_type.__name__) from None


def _iter_wire_values(message: SeismicModel) -> Iterator[tuple[WireField, Any, bool]]:
    """Yield (descriptor, value, in_oneof) in ascending field number."""
    entries = [(field, getattr(message, name), False) for name, field in wire_fields(type(message))]
    if isinstance(message, OneofModel):
        entries.append((message.oneof_variants[message.which], message.value, True))
    yield from sorted(entries, key=lambda entry: entry[0].number)


def _is_default_float(value: float) -> bool:
    return value == 0.0 and math.copysign(1.0, value) > 0


def _write_field(writer: WireWriter, field: WireField, value: Any, in_oneof: bool) -> None:  # noqa: C901
    """Write one field. Oneof members are written even when they hold a default."""
    kind = field.kind

    if kind is FieldKind.INT32 or kind is FieldKind.ENUM:
        if value or in_oneof:
            writer.write_key(field.number, WireType.VARINT)
            writer.write_varint(int(value))
    elif kind is FieldKind.BOOL:
        if value or in_oneof:
            writer.write_key(field.number, WireType.VARINT)
            writer.write_varint(int(value))
    elif kind is FieldKind.FLOAT:
        if not _is_default_float(value) or in_oneof:
            writer.write_key(field.number, WireType.FIXED32)
            writer.write_float(value)
    elif kind is FieldKind.STRING:
        if value or in_oneof:
            writer.write_key(field.number, WireType.LEN)
            writer.write_length_delimited(value.encode("utf-8"))
    elif kind is FieldKind.BYTES:
        if value or in_oneof:
            writer.write_key(field.number, WireType.LEN)
            writer.write_length_delimited(value)
    elif kind is FieldKind.MESSAGE:
        if value is not None:
            writer.write_key(field.number, WireType.LEN)
            writer.write_length_delimited(encode(value))
    elif kind is FieldKind.REPEATED_MESSAGE:
        for item in value:
            writer.write_key(field.number, WireType.LEN)
            writer.write_length_delimited(encode(item))
    elif kind is FieldKind.PACKED_FLOAT:
        if len(value):
            writer.write_key(field.number, WireType.LEN)
            writer.write_packed_floats(value)
    elif kind is FieldKind.INT32_VALUE:
        if value is not None:
            writer.write_key(field.number, WireType.LEN)
            writer.write_length_delimited(_encode_int32_value(value))
    elif kind is FieldKind.STRING_MAP:
        for key in sorted(value):
            writer.write_key(field.number, WireType.LEN)
            writer.write_length_delimited(_encode_map_entry(key, value[key]))
    elif kind is FieldKind.STRUCT:
        if value:
            writer.write_key(field.number, WireType.LEN)
            writer.write_length_delimited(encode_struct(value))


def _encode_int32_value(value: int) -> bytes:
    writer = WireWriter()
    if value:
        writer.write_key(WRAPPER_VALUE, WireType.VARINT)
        writer.write_varint(value)
    return writer.getvalue()


def _encode_map_entry(key: str, value: str) -> bytes:
    writer = WireWriter()
    if key:
        writer.write_key(MAP_KEY, WireType.LEN)
        writer.write_length_delimited(key.encode("utf-8"))
    if value:
        writer.write_key(MAP_VALUE, WireType.LEN)
        writer.write_length_delimited(value.encode("utf-8"))
    return writer.getvalue()


class _FieldState:
    """Values collected for one message while scanning its bytes."""

    def __init__(self) -> None:
        self.values: dict[str, Any] = {}
        self.chunks: dict[str, list[bytes]] = {}
        self.repeated: dict[str, list[bytes]] = {}
        self.variants_seen: list[str] = []
        self.variant_value: Any = None
        self.variant_chunks: list[bytes] = []


def _decode_message(message_type: type[MessageT], data: bytes, policy: DecodePolicy) -> MessageT:  # noqa: C901
    type_name = message_type.__name__
    policy = policy.nested(type_name)

    fields = {field.number: (name, field) for name, field in wire_fields(message_type)}
    variants = {}
    if issubclass(message_type, OneofModel):
        variants = {field.number: (name, field) for name, field in message_type.oneof_variants.items()}

    reader = WireReader(data, type_name)
    state = _FieldState()

    while not reader.at_end():
        offset = reader.pos
        number, wire_type = reader.read_key()

        if number in fields:
            name, field = fields[number]
            _check_wire_type(type_name, name, field, wire_type)
            _read_field(reader, state, name, field, wire_type)
        elif number in variants:
            name, field = variants[number]
            _check_wire_type(type_name, name, field, wire_type)
            _read_variant(reader, state, name, field)
        else:
            logger.debug(
                "Skipping unknown field %s (wire type %s) of %s at offset %s", number, wire_type.name, type_name, offset
            )
            reader.skip(wire_type)

    values = state.values
    by_name = dict(wire_fields(message_type))
    for name, chunks in state.chunks.items():
        field = by_name[name]
        if len(chunks) > 1:
            logger.debug("Merging %s occurrences of field '%s' of %s", len(chunks), name, type_name)
        values[name] = _decode_mergeable(field, b"".join(chunks), policy)
    for name, items in state.repeated.items():
        target = by_name[name].target
        values[name] = [_decode_message(target, item, policy) for item in items]

    if variants:
        group = message_type.oneof_group
        winner = resolve_oneof(type_name, group, state.variants_seen, policy)
        field = message_type.oneof_variants[winner]
        values[group] = winner
        if field.kind is FieldKind.MESSAGE:
            values["value"] = _decode_message(field.target, b"".join(state.variant_chunks), policy)
        else:
            values["value"] = state.variant_value

    try:
        return message_type.model_validate(values)
    except ValidationError as err:
        msg = f"Decoded {type_name} is invalid: {err.error_count()} error(s), {err.errors()[0]['msg']}"
        raise MalformedInputError(msg, type_name=type_name) from err


def _check_wire_type(type_name: str, name: str, field: WireField, wire_type: WireType) -> None:
    if wire_type not in field.kind.wire_types:
        expected = "|".join(accepted.name for accepted in field.kind.wire_types)
        raise SchemaVersionSkewError(type_name, name, expected, wire_type.name)


def _read_scalar(reader: WireReader, field: WireField) -> Any:
    """Read a single-valued scalar field."""
    kind = field.kind
    if kind is FieldKind.INT32:
        return to_int32(reader.read_varint())
    if kind is FieldKind.ENUM:
        return _to_enum(field.target, to_int32(reader.read_varint()))
    if kind is FieldKind.BOOL:
        return reader.read_varint() != 0
    if kind is FieldKind.FLOAT:
        return reader.read_float()
    if kind is FieldKind.STRING:
        return reader.read_string()
    if kind is FieldKind.BYTES:
        return reader.read_length_delimited()

    msg = f"Field kind {kind} is not a scalar"
    raise ValueError(msg)


def _read_field(reader: WireReader, state: _FieldState, name: str, field: WireField, wire_type: WireType) -> None:
    kind = field.kind

    if kind.is_mergeable:
        state.chunks.setdefault(name, []).append(reader.read_length_delimited())
    elif kind is FieldKind.REPEATED_MESSAGE:
        state.repeated.setdefault(name, []).append(reader.read_length_delimited())
    elif kind is FieldKind.PACKED_FLOAT:
        samples = state.values.setdefault(name, [])
        if wire_type is WireType.LEN:
            samples.extend(reader.read_packed_floats().tolist())
        else:
            samples.append(reader.read_float())
    elif kind is FieldKind.STRING_MAP:
        key, value = _decode_map_entry(reader.read_length_delimited(), reader.type_name)
        mapping = state.values.setdefault(name, {})
        if key in mapping:
            logger.debug("Duplicate map key '%s' in field '%s', keeping last value", key, name)
        mapping[key] = value
    else:
        state.values[name] = _read_scalar(reader, field)


def _read_variant(reader: WireReader, state: _FieldState, name: str, field: WireField) -> None:
    # Switching variant clears the previous one, as in a fresh assignment
    if not state.variants_seen or state.variants_seen[-1] != name:
        state.variant_chunks = []
    state.variants_seen.append(name)

    if field.kind is FieldKind.MESSAGE:
        state.variant_chunks.append(reader.read_length_delimited())
    else:
        state.variant_value = _read_scalar(reader, field)


def _decode_mergeable(field: WireField, data: bytes, policy: DecodePolicy) -> Any:
    if field.kind is FieldKind.MESSAGE:
        return _decode_message(field.target, data, policy)
    if field.kind is FieldKind.INT32_VALUE:
        return _decode_int32_value(data)
    return decode_struct(data, policy)


def _decode_int32_value(data: bytes) -> int:
    reader = WireReader(data, "Int32Value")
    value = 0
    while not reader.at_end():
        number, wire_type = reader.read_key()
        if number != WRAPPER_VALUE:
            reader.skip(wire_type)
            continue
        if wire_type is not WireType.VARINT:
            raise SchemaVersionSkewError("Int32Value", "value", WireType.VARINT.name, wire_type.name)
        value = to_int32(reader.read_varint())
    return value


def _decode_map_entry(data: bytes, type_name: str | None) -> tuple[str, str]:
    reader = WireReader(data, type_name)
    key = value = ""
    while not reader.at_end():
        number, wire_type = reader.read_key()
        if number not in (MAP_KEY, MAP_VALUE):
            reader.skip(wire_type)
            continue
        if wire_type is not WireType.LEN:
            field_name = "key" if number == MAP_KEY else "value"
            raise SchemaVersionSkewError(f"{type_name}.MapEntry", field_name, WireType.LEN.name, wire_type.name)
        if number == MAP_KEY:
            key = reader.read_string()
        else:
            value = reader.read_string()
    return key, value
