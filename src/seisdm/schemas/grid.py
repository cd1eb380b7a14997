"""Survey grid schemas: the affine transformation between line indices and coordinates."""

from __future__ import annotations

from typing import Annotated
from typing import ClassVar
from typing import Literal

from pydantic import Field

from seisdm.schemas.core import Float32
from seisdm.schemas.core import Int32
from seisdm.schemas.core import OneofModel
from seisdm.schemas.core import SeismicModel
from seisdm.schemas.enums import Handedness
from seisdm.wire.fields import FieldKind
from seisdm.wire.fields import wire


class DoubleTraceCoordinates(SeismicModel):
    """Correlated grid indices and projected coordinates."""

    iline: Annotated[Int32, wire(1, FieldKind.INT32)] = Field(default=0, description="Inline number.")
    xline: Annotated[Int32, wire(2, FieldKind.INT32)] = Field(default=0, description="Crossline number.")
    x: Annotated[Float32, wire(3, FieldKind.FLOAT)] = Field(default=0.0, description="The x value.")
    y: Annotated[Float32, wire(4, FieldKind.FLOAT)] = Field(default=0.0, description="The y value.")


class P6Transformation(SeismicModel):
    """Transformation given by an origin point and the crossline azimuth.

    Format follows IOGP guidance note 373-7-2 section 2.3.2.4.
    """

    handedness: Annotated[Handedness, wire(1, FieldKind.ENUM, Handedness)] = Handedness.RIGHTHANDED
    origin: Annotated[DoubleTraceCoordinates | None, wire(2, FieldKind.MESSAGE, DoubleTraceCoordinates)] = Field(
        default=None, description="A point in the grid."
    )
    iline_bin_width: Annotated[Float32, wire(3, FieldKind.FLOAT)] = Field(
        default=0.0, description="Bin width along the inline axis."
    )
    xline_bin_width: Annotated[Float32, wire(4, FieldKind.FLOAT)] = Field(
        default=0.0, description="Bin width along the crossline axis."
    )
    xline_azimuth: Annotated[Float32, wire(5, FieldKind.FLOAT)] = Field(
        default=0.0, description="Map bearing of the crossline axis in clockwise degrees from north."
    )
    iline_bin_inc: Annotated[Int32, wire(6, FieldKind.INT32)] = Field(
        default=0, description="Inline increment corresponding to a bin."
    )
    xline_bin_inc: Annotated[Int32, wire(7, FieldKind.INT32)] = Field(
        default=0, description="Crossline increment corresponding to a bin."
    )


class TraceCorners(SeismicModel):
    """Transformation given by the coordinates of three or more grid corners."""

    corners: Annotated[
        tuple[DoubleTraceCoordinates, ...],
        wire(1, FieldKind.REPEATED_MESSAGE, DoubleTraceCoordinates),
    ] = Field(..., min_length=3)


class DeduceFromTraces(SeismicModel):
    """Deduce the transformation of each file from its trace coordinates at ingestion."""


class SurveyGridTransformation(OneofModel):
    """The affine transformation between line indices and coordinates."""

    oneof_group: ClassVar[str] = "transformation"
    oneof_variants: ClassVar[dict] = {
        "p6_transformation": wire(1, FieldKind.MESSAGE, P6Transformation),
        "trace_corners": wire(2, FieldKind.MESSAGE, TraceCorners),
        "deduce_from_traces": wire(3, FieldKind.MESSAGE, DeduceFromTraces),
    }

    transformation: Literal["p6_transformation", "trace_corners", "deduce_from_traces"]
    value: P6Transformation | TraceCorners | DeduceFromTraces

    @classmethod
    def p6(cls, transformation: P6Transformation) -> SurveyGridTransformation:
        """Specify the grid with a P6 transformation."""
        return cls(transformation="p6_transformation", value=transformation)

    @classmethod
    def from_corners(cls, corners: list[DoubleTraceCoordinates]) -> SurveyGridTransformation:
        """Specify the grid with three or more corners."""
        return cls(transformation="trace_corners", value=TraceCorners(corners=corners))

    @classmethod
    def deduce(cls) -> SurveyGridTransformation:
        """Let the service deduce the grid from trace coordinates."""
        return cls(transformation="deduce_from_traces", value=DeduceFromTraces())
