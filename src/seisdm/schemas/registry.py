"""Lookup of message and enum types by name."""

from __future__ import annotations

from enum import IntEnum

from seisdm.exceptions import UnknownMessageTypeError
from seisdm.schemas import catalog
from seisdm.schemas import enums
from seisdm.schemas import geometry
from seisdm.schemas import grid
from seisdm.schemas import lines
from seisdm.schemas import trace
from seisdm.schemas.core import SeismicModel

MESSAGE_TYPES: dict[str, type[SeismicModel]] = {
    model.__name__: model
    for model in (
        trace.Coordinate,
        trace.Trace,
        trace.SlabTrace,
        trace.SurfacePoint,
        grid.DoubleTraceCoordinates,
        grid.P6Transformation,
        grid.TraceCorners,
        grid.DeduceFromTraces,
        grid.SurveyGridTransformation,
        catalog.Survey,
        catalog.File,
        catalog.Project,
        catalog.Identifier,
        catalog.ExternalId,
        lines.LineDescriptor,
        lines.LineSelect,
        lines.LineRange,
        lines.CoverageParameters,
        lines.PositionQuery,
        lines.LineBasedRectangle,
        geometry.CRS,
        geometry.Wkt,
        geometry.GeoJson,
        geometry.Geometry,
        geometry.NoCustomCoverage,
        geometry.CustomSurveyCoverage,
    )
}

ENUM_TYPES: dict[str, type[IntEnum]] = {
    enum.__name__: enum
    for enum in (
        enums.Handedness,
        enums.JobStatus,
        enums.FileStep,
        enums.InterpolationMethod,
        enums.IngestionSource,
    )
}


def get_type(name: str) -> type[SeismicModel] | type[IntEnum]:
    """Get a message or enum type by its name.

    Args:
        name: Type name, e.g. "Trace" or "FileStep".

    Returns:
        The registered model or enum class.

    Raises:
        UnknownMessageTypeError: If no type is registered under the name.
    """
    if name in MESSAGE_TYPES:
        return MESSAGE_TYPES[name]
    if name in ENUM_TYPES:
        return ENUM_TYPES[name]
    raise UnknownMessageTypeError(name)


def list_types() -> list[str]:
    """Return all registered type names, messages first, each group sorted."""
    return sorted(MESSAGE_TYPES) + sorted(ENUM_TYPES)
