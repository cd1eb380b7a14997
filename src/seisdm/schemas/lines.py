"""Line addressing schemas: line selectors, ranges, grid positions and rectangles."""

from __future__ import annotations

from typing import Annotated
from typing import ClassVar
from typing import Literal

from seisdm.schemas.core import Int32
from seisdm.schemas.core import OneofModel
from seisdm.schemas.core import SeismicModel
from seisdm.schemas.geometry import CRS
from seisdm.wire.fields import FieldKind
from seisdm.wire.fields import wire


class LineDescriptor(SeismicModel):
    """A subsampled line range. Any absent bound means unbounded or default."""

    min: Annotated[Int32 | None, wire(1, FieldKind.INT32_VALUE)] = None
    max: Annotated[Int32 | None, wire(2, FieldKind.INT32_VALUE)] = None
    step: Annotated[Int32 | None, wire(3, FieldKind.INT32_VALUE)] = None


class LineSelect(OneofModel):
    """Select a single inline OR crossline."""

    oneof_group: ClassVar[str] = "direction"
    oneof_variants: ClassVar[dict] = {
        "iline": wire(1, FieldKind.INT32),
        "xline": wire(2, FieldKind.INT32),
    }

    direction: Literal["iline", "xline"]
    value: Int32

    @classmethod
    def inline(cls, line: int) -> LineSelect:
        """Select an inline."""
        return cls(direction="iline", value=line)

    @classmethod
    def crossline(cls, line: int) -> LineSelect:
        """Select a crossline."""
        return cls(direction="xline", value=line)


class LineRange(SeismicModel):
    """Inclusive line range. Both bounds are optional."""

    from_line: Annotated[Int32 | None, wire(1, FieldKind.INT32_VALUE)] = None
    to_line: Annotated[Int32 | None, wire(2, FieldKind.INT32_VALUE)] = None

    def __contains__(self, line: int) -> bool:
        """Check if a line falls within the range."""
        above_lower = self.from_line is None or line >= self.from_line
        below_upper = self.to_line is None or line <= self.to_line
        return above_lower and below_upper


class CoverageParameters(SeismicModel):
    """Parameters for requesting the coverage of a survey."""

    crs: Annotated[CRS | None, wire(1, FieldKind.MESSAGE, CRS)] = None  # None keeps the survey's CRS
    in_wkt: Annotated[bool, wire(2, FieldKind.BOOL)] = False  # GeoJSON otherwise


class PositionQuery(SeismicModel):
    """A point defined by its inline and crossline indices."""

    iline: Annotated[Int32, wire(1, FieldKind.INT32)] = 0
    xline: Annotated[Int32, wire(2, FieldKind.INT32)] = 0


class LineBasedRectangle(SeismicModel):
    """Range of inline and crossline indices defining a 2D region.

    Producers should keep ``top_left`` at or below ``bottom_right`` on both axes.
    This is not enforced, see :attr:`is_well_formed`.
    """

    top_left: Annotated[PositionQuery | None, wire(1, FieldKind.MESSAGE, PositionQuery)] = None
    bottom_right: Annotated[PositionQuery | None, wire(2, FieldKind.MESSAGE, PositionQuery)] = None

    @property
    def is_well_formed(self) -> bool:
        """True if both corners are set and ordered on both axes."""
        if self.top_left is None or self.bottom_right is None:
            return False
        return self.top_left.iline <= self.bottom_right.iline and self.top_left.xline <= self.bottom_right.xline
