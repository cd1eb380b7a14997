"""Protobuf wire format codec for the seismic data model."""

from seisdm.wire.codec import decode
from seisdm.wire.codec import decode_enum
from seisdm.wire.codec import encode
from seisdm.wire.codec import encode_enum

__all__ = [
    "decode",
    "decode_enum",
    "encode",
    "encode_enum",
]
