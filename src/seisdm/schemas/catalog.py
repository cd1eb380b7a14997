"""Catalog schemas: surveys, files, projects and the keys that identify them."""

from __future__ import annotations

from typing import Annotated
from typing import ClassVar
from typing import Literal

from pydantic import Field

from seisdm.schemas.core import OneofModel
from seisdm.schemas.core import SeismicModel
from seisdm.schemas.geometry import CRS
from seisdm.schemas.geometry import CustomSurveyCoverage
from seisdm.schemas.grid import SurveyGridTransformation
from seisdm.wire.fields import FieldKind
from seisdm.wire.fields import wire


class ExternalId(SeismicModel):
    """Identifier used by other systems, distinct from the internal id."""

    external_id: Annotated[str, wire(1, FieldKind.STRING)] = ""


class Identifier(OneofModel):
    """Find a file or survey by either id or name."""

    oneof_group: ClassVar[str] = "findby"
    oneof_variants: ClassVar[dict] = {
        "id": wire(1, FieldKind.STRING),
        "name": wire(2, FieldKind.STRING),
    }

    findby: Literal["id", "name"]
    value: str

    @classmethod
    def by_id(cls, id: str) -> Identifier:  # noqa: A002
        """Look up by internal id."""
        return cls(findby="id", value=id)

    @classmethod
    def by_name(cls, name: str) -> Identifier:
        """Look up by name."""
        return cls(findby="name", value=name)


class Survey(SeismicModel):
    """A collection of files in the same area."""

    id: Annotated[str, wire(1, FieldKind.STRING)] = Field(default="", description="Survey ID.")
    name: Annotated[str, wire(2, FieldKind.STRING)] = Field(default="", description="Survey name.")
    metadata: Annotated[dict[str, str], wire(3, FieldKind.STRING_MAP)] = Field(default_factory=dict)
    external_id: Annotated[ExternalId | None, wire(4, FieldKind.MESSAGE, ExternalId)] = None
    crs: Annotated[CRS | None, wire(5, FieldKind.MESSAGE, CRS)] = Field(
        default=None, description="The Coordinate Reference System of the survey."
    )
    grid_transformation: Annotated[
        SurveyGridTransformation | None, wire(6, FieldKind.MESSAGE, SurveyGridTransformation)
    ] = None
    custom_coverage: Annotated[CustomSurveyCoverage | None, wire(7, FieldKind.MESSAGE, CustomSurveyCoverage)] = None


class File(SeismicModel):
    """A file, dataset or cube derived from a single SEG-Y file."""

    id: Annotated[str, wire(1, FieldKind.STRING)] = ""
    name: Annotated[str, wire(2, FieldKind.STRING)] = ""
    metadata: Annotated[dict[str, str], wire(3, FieldKind.STRING_MAP)] = Field(default_factory=dict)
    is_temporary: Annotated[bool, wire(4, FieldKind.BOOL)] = False
    external_id: Annotated[ExternalId | None, wire(5, FieldKind.MESSAGE, ExternalId)] = None


class Project(SeismicModel):
    """A project and its alias."""

    id: Annotated[str, wire(1, FieldKind.STRING)] = ""
    alias: Annotated[str, wire(2, FieldKind.STRING)] = ""
