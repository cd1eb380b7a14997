"""Trace and sample schemas returned by trace, slice and volume queries."""

from __future__ import annotations

from typing import Annotated
from typing import Self

import numpy as np
from numpy.typing import NDArray
from pydantic import Field
from pydantic import model_validator

from seisdm.schemas.core import Float32
from seisdm.schemas.core import Float32Samples
from seisdm.schemas.core import Int32
from seisdm.schemas.core import SeismicModel
from seisdm.wire.fields import FieldKind
from seisdm.wire.fields import wire


class Coordinate(SeismicModel):
    """An (x, y) coordinate in the given CRS."""

    crs: Annotated[str, wire(1, FieldKind.STRING)] = Field(
        default="", description="Coordinate Reference System, generally an EPSG code such as `EPSG:23031`."
    )
    x: Annotated[Float32, wire(2, FieldKind.FLOAT)] = Field(default=0.0, description="The x value.")
    y: Annotated[Float32, wire(3, FieldKind.FLOAT)] = Field(default=0.0, description="The y value.")

    @property
    def is_georeferenced(self) -> bool:
        """True if the coordinate names its CRS."""
        return bool(self.crs)


class Trace(SeismicModel):
    """A seismic trace: samples and positioning.

    The raw trace header is only carried by original traces in a file, never by
    traces synthesized through interpolation, so consumers must not assume it.
    Inline and crossline are nullable: absent is distinct from line zero.
    """

    trace_header: Annotated[bytes, wire(1, FieldKind.BYTES)] = Field(default=b"", description="Raw trace header.")
    iline: Annotated[Int32 | None, wire(2, FieldKind.INT32_VALUE)] = Field(default=None, description="Inline number.")
    xline: Annotated[Int32 | None, wire(3, FieldKind.INT32_VALUE)] = Field(
        default=None, description="Crossline number."
    )
    trace: Annotated[Float32Samples, wire(4, FieldKind.PACKED_FLOAT)] = Field(
        default=(), description="Sample amplitudes."
    )
    coordinate: Annotated[Coordinate | None, wire(5, FieldKind.MESSAGE, Coordinate)] = None

    @property
    def has_header(self) -> bool:
        """True if the raw trace header is present."""
        return bool(self.trace_header)

    @property
    def samples(self) -> NDArray[np.float32]:
        """Sample amplitudes as a float32 array."""
        return np.asarray(self.trace, dtype=np.float32)


class SlabTrace(SeismicModel):
    """A trace together with the inclusive range of z values it covers."""

    trace: Annotated[Trace | None, wire(1, FieldKind.MESSAGE, Trace)] = None
    z_from: Annotated[Int32, wire(2, FieldKind.INT32)] = 0
    z_to: Annotated[Int32, wire(3, FieldKind.INT32)] = 0

    @model_validator(mode="after")
    def check_z_range(self) -> Self:
        """Ensure the z range is not reversed."""
        if self.z_from > self.z_to:
            msg = f"z_from ({self.z_from}) must not exceed z_to ({self.z_to})"
            raise ValueError(msg)
        return self


class SurfacePoint(SeismicModel):
    """A sample on a horizontal grid, used in horizontal slice queries."""

    iline: Annotated[Int32, wire(1, FieldKind.INT32)] = 0
    xline: Annotated[Int32, wire(2, FieldKind.INT32)] = 0
    value: Annotated[Float32, wire(3, FieldKind.FLOAT)] = 0.0
