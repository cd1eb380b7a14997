"""Wire descriptors attached to model fields.

Every field that goes on the wire carries a :class:`WireField` in its
``Annotated`` metadata. The codec reads these descriptors back from the
pydantic field info, so the model classes are the single source of truth for
tag numbers.

Important Objects:
    - WireType: The protobuf wire types.
    - FieldKind: How a field's value is laid out on the wire.
    - WireField: Tag number, kind and target type of one field.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from enum import StrEnum
from functools import cache
from typing import TYPE_CHECKING
from typing import Any

if TYPE_CHECKING:
    from pydantic import BaseModel

MAX_FIELD_NUMBER = 2**29 - 1


class WireType(IntEnum):
    """Protobuf wire types."""

    VARINT = 0
    FIXED64 = 1
    LEN = 2
    START_GROUP = 3
    END_GROUP = 4
    FIXED32 = 5


class FieldKind(StrEnum):
    """Layout of a field value on the wire."""

    INT32 = "int32"
    BOOL = "bool"
    ENUM = "enum"
    FLOAT = "float"
    STRING = "string"
    BYTES = "bytes"
    MESSAGE = "message"
    REPEATED_MESSAGE = "repeated_message"
    PACKED_FLOAT = "packed_float"
    INT32_VALUE = "int32_value"
    STRING_MAP = "string_map"
    STRUCT = "struct"

    @property
    def wire_types(self) -> tuple[WireType, ...]:
        """Wire types a decoder accepts for this kind."""
        return _ACCEPTED_WIRE_TYPES[self]

    @property
    def is_mergeable(self) -> bool:
        """True if repeated occurrences of a singular field merge as messages."""
        return self in {FieldKind.MESSAGE, FieldKind.INT32_VALUE, FieldKind.STRUCT}


_ACCEPTED_WIRE_TYPES = {
    FieldKind.INT32: (WireType.VARINT,),
    FieldKind.BOOL: (WireType.VARINT,),
    FieldKind.ENUM: (WireType.VARINT,),
    FieldKind.FLOAT: (WireType.FIXED32,),
    FieldKind.STRING: (WireType.LEN,),
    FieldKind.BYTES: (WireType.LEN,),
    FieldKind.MESSAGE: (WireType.LEN,),
    FieldKind.REPEATED_MESSAGE: (WireType.LEN,),
    # Parsers must accept both packed and unpacked encodings of repeated scalars
    FieldKind.PACKED_FLOAT: (WireType.LEN, WireType.FIXED32),
    FieldKind.INT32_VALUE: (WireType.LEN,),
    FieldKind.STRING_MAP: (WireType.LEN,),
    FieldKind.STRUCT: (WireType.LEN,),
}


@dataclass(frozen=True)
class WireField:
    """Wire descriptor of a single message field.

    Args:
        number: Field number (tag). Never reassigned across schema versions.
        kind: Layout of the value on the wire.
        target: Model class for message kinds, enum class for enum kinds.
    """

    number: int
    kind: FieldKind
    target: Any = None

    def __post_init__(self) -> None:
        """Check the field number range and the target requirement."""
        if not 1 <= self.number <= MAX_FIELD_NUMBER:
            msg = f"Field number {self.number} out of range"
            raise ValueError(msg)

        needs_target = self.kind in {FieldKind.MESSAGE, FieldKind.REPEATED_MESSAGE, FieldKind.ENUM}
        if needs_target and self.target is None:
            msg = f"Field kind {self.kind} requires a target type"
            raise ValueError(msg)

    @property
    def wire_type(self) -> WireType:
        """Wire type used when encoding."""
        return self.kind.wire_types[0]


def wire(number: int, kind: FieldKind, target: Any = None) -> WireField:
    """Shorthand to build a :class:`WireField` inside ``Annotated``."""
    return WireField(number=number, kind=kind, target=target)


@cache
def wire_fields(model: type[BaseModel]) -> tuple[tuple[str, WireField], ...]:
    """Collect (field name, descriptor) pairs of a model, sorted by field number."""
    fields = []
    for name, info in model.model_fields.items():
        descriptor = next((meta for meta in info.metadata if isinstance(meta, WireField)), None)
        if descriptor is not None:
            fields.append((name, descriptor))

    return tuple(sorted(fields, key=lambda item: item[1].number))
