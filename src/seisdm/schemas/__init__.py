"""Seismic data model schemas."""

from seisdm.schemas.catalog import ExternalId
from seisdm.schemas.catalog import File
from seisdm.schemas.catalog import Identifier
from seisdm.schemas.catalog import Project
from seisdm.schemas.catalog import Survey
from seisdm.schemas.enums import FileStep
from seisdm.schemas.enums import Handedness
from seisdm.schemas.enums import IngestionSource
from seisdm.schemas.enums import InterpolationMethod
from seisdm.schemas.enums import JobStatus
from seisdm.schemas.geometry import CRS
from seisdm.schemas.geometry import CustomSurveyCoverage
from seisdm.schemas.geometry import GeoJson
from seisdm.schemas.geometry import Geometry
from seisdm.schemas.geometry import NoCustomCoverage
from seisdm.schemas.geometry import Wkt
from seisdm.schemas.grid import DeduceFromTraces
from seisdm.schemas.grid import DoubleTraceCoordinates
from seisdm.schemas.grid import P6Transformation
from seisdm.schemas.grid import SurveyGridTransformation
from seisdm.schemas.grid import TraceCorners
from seisdm.schemas.lines import CoverageParameters
from seisdm.schemas.lines import LineBasedRectangle
from seisdm.schemas.lines import LineDescriptor
from seisdm.schemas.lines import LineRange
from seisdm.schemas.lines import LineSelect
from seisdm.schemas.lines import PositionQuery
from seisdm.schemas.trace import Coordinate
from seisdm.schemas.trace import SlabTrace
from seisdm.schemas.trace import SurfacePoint
from seisdm.schemas.trace import Trace

__all__ = [
    "CRS",
    "Coordinate",
    "CoverageParameters",
    "CustomSurveyCoverage",
    "DeduceFromTraces",
    "DoubleTraceCoordinates",
    "ExternalId",
    "File",
    "FileStep",
    "GeoJson",
    "Geometry",
    "Handedness",
    "Identifier",
    "IngestionSource",
    "InterpolationMethod",
    "JobStatus",
    "LineBasedRectangle",
    "LineDescriptor",
    "LineRange",
    "LineSelect",
    "NoCustomCoverage",
    "P6Transformation",
    "PositionQuery",
    "Project",
    "SlabTrace",
    "Survey",
    "SurveyGridTransformation",
    "SurfacePoint",
    "Trace",
    "TraceCorners",
    "Wkt",
]
