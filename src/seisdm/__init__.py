"""Seismic datastore data model and wire codec."""

from __future__ import annotations

from importlib import metadata

from seisdm.exceptions import InvalidUnionError
from seisdm.exceptions import MalformedInputError
from seisdm.exceptions import SchemaVersionSkewError
from seisdm.exceptions import SeisDMError
from seisdm.wire.codec import decode
from seisdm.wire.codec import decode_enum
from seisdm.wire.codec import encode
from seisdm.wire.codec import encode_enum

try:
    __version__ = metadata.version("seisdm")
except metadata.PackageNotFoundError:
    __version__ = "unknown"


__all__ = [
    "__version__",
    "InvalidUnionError",
    "MalformedInputError",
    "SchemaVersionSkewError",
    "SeisDMError",
    "decode",
    "decode_enum",
    "encode",
    "encode_enum",
]
