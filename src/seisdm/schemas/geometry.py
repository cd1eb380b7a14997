"""Geometry schemas: CRS, WKT and GeoJSON shapes, and custom survey coverage."""

from __future__ import annotations

from typing import Annotated
from typing import ClassVar
from typing import Literal

from pydantic import Field
from pydantic import JsonValue

from seisdm.schemas.core import OneofModel
from seisdm.schemas.core import SeismicModel
from seisdm.wire.fields import FieldKind
from seisdm.wire.fields import wire


class CRS(SeismicModel):
    """Coordinate Reference System identifier, such as `EPSG:23031`."""

    crs: Annotated[str, wire(1, FieldKind.STRING)] = ""


class Wkt(SeismicModel):
    """Well-known text representation of a geometry."""

    geometry: Annotated[str, wire(1, FieldKind.STRING)] = ""


class GeoJson(SeismicModel):
    """A GeoJSON (RFC 7946) geometry document.

    Supported geometry types are Point, MultiPoint, LineString, MultiLineString,
    Polygon, MultiPolygon and GeometryCollection. The document shape itself is
    not validated. Numbers always come back from the wire as floats.
    """

    document: Annotated[dict[str, JsonValue], wire(1, FieldKind.STRUCT)] = Field(default_factory=dict, alias="json")


class Geometry(OneofModel):
    """A geometry as either WKT or GeoJSON. The CRS is always required."""

    oneof_group: ClassVar[str] = "format"
    oneof_variants: ClassVar[dict] = {
        "wkt": wire(2, FieldKind.MESSAGE, Wkt),
        "geo": wire(3, FieldKind.MESSAGE, GeoJson),
    }

    crs: Annotated[CRS, wire(1, FieldKind.MESSAGE, CRS)]
    format: Literal["wkt", "geo"]
    value: Wkt | GeoJson

    @classmethod
    def from_wkt(cls, crs: str, geometry: str) -> Geometry:
        """Build a geometry from WKT text."""
        return cls(crs=CRS(crs=crs), format="wkt", value=Wkt(geometry=geometry))

    @classmethod
    def from_geojson(cls, crs: str, document: dict[str, JsonValue]) -> Geometry:
        """Build a geometry from a GeoJSON document."""
        return cls(crs=CRS(crs=crs), format="geo", value=GeoJson(json=document))


class NoCustomCoverage(SeismicModel):
    """Marker: survey coverage is computed from the data in the survey."""


class CustomSurveyCoverage(OneofModel):
    """Customer-provided coverage override for a survey."""

    oneof_group: ClassVar[str] = "custom"
    oneof_variants: ClassVar[dict] = {
        "custom_coverage": wire(1, FieldKind.MESSAGE, Geometry),
        "no_custom_coverage": wire(2, FieldKind.MESSAGE, NoCustomCoverage),
    }

    custom: Literal["custom_coverage", "no_custom_coverage"]
    value: Geometry | NoCustomCoverage

    @classmethod
    def override(cls, geometry: Geometry) -> CustomSurveyCoverage:
        """Override the survey coverage with the given geometry."""
        return cls(custom="custom_coverage", value=geometry)

    @classmethod
    def computed(cls) -> CustomSurveyCoverage:
        """Compute the survey coverage from the underlying data."""
        return cls(custom="no_custom_coverage", value=NoCustomCoverage())
