"""Test configuration before everything runs."""

from __future__ import annotations

import os
from collections.abc import Iterator
from unittest.mock import patch

import pytest

from seisdm.schemas import CRS
from seisdm.schemas import Coordinate
from seisdm.schemas import CustomSurveyCoverage
from seisdm.schemas import DoubleTraceCoordinates
from seisdm.schemas import ExternalId
from seisdm.schemas import File
from seisdm.schemas import Geometry
from seisdm.schemas import Handedness
from seisdm.schemas import P6Transformation
from seisdm.schemas import Survey
from seisdm.schemas import SurveyGridTransformation
from seisdm.schemas import Trace


@pytest.fixture(autouse=True)
def clean_seisdm_env() -> Iterator[None]:
    """Keep decoder settings from the outer environment out of the tests."""
    env = {key: value for key, value in os.environ.items() if not key.startswith("SEISDM__")}
    with patch.dict(os.environ, env, clear=True):
        yield


@pytest.fixture
def corners() -> list[DoubleTraceCoordinates]:
    """Four corners of a small survey grid."""
    return [
        DoubleTraceCoordinates(iline=1, xline=1, x=431000.0, y=6348000.0),
        DoubleTraceCoordinates(iline=1, xline=188, x=431000.0, y=6352700.0),
        DoubleTraceCoordinates(iline=345, xline=188, x=439600.0, y=6352700.0),
        DoubleTraceCoordinates(iline=345, xline=1, x=439600.0, y=6348000.0),
    ]


@pytest.fixture
def p6_transformation() -> P6Transformation:
    """A left-handed P6 transformation."""
    return P6Transformation(
        handedness=Handedness.LEFTHANDED,
        origin=DoubleTraceCoordinates(iline=1, xline=1, x=431000.0, y=6348000.0),
        iline_bin_width=25.0,
        xline_bin_width=12.5,
        xline_azimuth=37.5,
        iline_bin_inc=1,
        xline_bin_inc=2,
    )


@pytest.fixture
def trace() -> Trace:
    """An original file trace with header and coordinate."""
    return Trace(
        trace_header=bytes(range(240)),
        iline=101,
        xline=-3,
        trace=[0.0, 0.5, -1.25, 3.0e-5, 1.0e10],
        coordinate=Coordinate(crs="EPSG:23031", x=431012.5, y=6348123.0),
    )


@pytest.fixture
def geojson_geometry() -> Geometry:
    """A polygon coverage given as GeoJSON."""
    document = {
        "type": "Polygon",
        "coordinates": [[[0.0, 0.0], [10.0, 0.0], [10.0, 10.0], [0.0, 0.0]]],
    }
    return Geometry.from_geojson("EPSG:4326", document)


@pytest.fixture
def survey(corners: list[DoubleTraceCoordinates], geojson_geometry: Geometry) -> Survey:
    """A fully populated survey."""
    return Survey(
        id="7",
        name="Volve",
        metadata={"area": "North Sea", "operator": "Equinor", "": "empty key"},
        external_id=ExternalId(external_id="volve-3d"),
        crs=CRS(crs="EPSG:23031"),
        grid_transformation=SurveyGridTransformation.from_corners(corners),
        custom_coverage=CustomSurveyCoverage.override(geojson_geometry),
    )


@pytest.fixture
def file() -> File:
    """A temporary file registered in a survey."""
    return File(
        id="42",
        name="ST10010ZC11_PZ_PSDM_KIRCH_FULL_T.MIG_FIN.POST_STACK.3D.JS-017536.segy",
        metadata={"processing": "PSDM"},
        is_temporary=True,
        external_id=ExternalId(external_id="file-42"),
    )
