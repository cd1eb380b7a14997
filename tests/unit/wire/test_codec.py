"""Tests for message encoding and decoding."""

from __future__ import annotations

import struct

import pytest

from seisdm import decode
from seisdm import encode
from seisdm.exceptions import MalformedInputError
from seisdm.exceptions import SchemaVersionSkewError
from seisdm.schemas import CRS
from seisdm.schemas import Coordinate
from seisdm.schemas import CoverageParameters
from seisdm.schemas import CustomSurveyCoverage
from seisdm.schemas import DoubleTraceCoordinates
from seisdm.schemas import ExternalId
from seisdm.schemas import File
from seisdm.schemas import GeoJson
from seisdm.schemas import Geometry
from seisdm.schemas import Identifier
from seisdm.schemas import LineBasedRectangle
from seisdm.schemas import LineDescriptor
from seisdm.schemas import LineRange
from seisdm.schemas import LineSelect
from seisdm.schemas import NoCustomCoverage
from seisdm.schemas import P6Transformation
from seisdm.schemas import PositionQuery
from seisdm.schemas import Project
from seisdm.schemas import SlabTrace
from seisdm.schemas import SurfacePoint
from seisdm.schemas import Survey
from seisdm.schemas import SurveyGridTransformation
from seisdm.schemas import Trace
from seisdm.schemas import TraceCorners
from seisdm.schemas import Wkt
from seisdm.schemas.core import SeismicModel


def _float(value: float) -> bytes:
    return struct.pack("<f", value)


class TestRoundTrip:
    """Decoding the encoding of a value yields the same value."""

    @pytest.mark.parametrize(
        "value",
        [
            Coordinate(crs="EPSG:23031", x=431012.5, y=-6348123.25),
            DoubleTraceCoordinates(iline=-5, xline=2**31 - 1, x=0.1, y=-0.0),
            TraceCorners(corners=[DoubleTraceCoordinates(iline=i, xline=i * 2) for i in range(3)]),
            SurfacePoint(iline=10, xline=20, value=-3.5),
            SlabTrace(trace=Trace(trace=[1.0, 2.0]), z_from=-4, z_to=400),
            Project(id="p1", alias="volve"),
            ExternalId(external_id="ext-1"),
            Identifier.by_id("1234"),
            Identifier.by_name(""),
            LineDescriptor(min=0, max=300, step=-2),
            LineDescriptor(),
            LineSelect.inline(0),
            LineSelect.crossline(-7),
            LineRange(from_line=10),
            CoverageParameters(crs=CRS(crs="EPSG:4326"), in_wkt=True),
            CoverageParameters(),
            LineBasedRectangle(top_left=PositionQuery(iline=1, xline=2), bottom_right=PositionQuery(iline=3, xline=4)),
            Wkt(geometry="POINT (30 10)"),
            GeoJson(json={"type": "Point", "coordinates": [100.0, 0.0], "properties": None}),
            Geometry.from_wkt("EPSG:23031", "POLYGON ((0 0, 1 0, 1 1, 0 0))"),
            CustomSurveyCoverage.computed(),
            SurveyGridTransformation.deduce(),
            Survey(),
            File(name="empty-metadata"),
        ],
        ids=lambda value: type(value).__name__,
    )
    def test_value(self, value: SeismicModel) -> None:
        """Round trip of representative values of every message type."""
        assert decode(type(value), encode(value)) == value

    def test_trace(self, trace: Trace) -> None:
        """Trace with header, lines, samples and coordinate."""
        assert decode(Trace, encode(trace)) == trace

    def test_p6(self, p6_transformation: P6Transformation) -> None:
        """P6 transformation inside a grid transformation."""
        grid = SurveyGridTransformation.p6(p6_transformation)
        assert decode(SurveyGridTransformation, encode(grid)) == grid

    def test_survey(self, survey: Survey) -> None:
        """Fully populated survey with nested oneofs and GeoJSON."""
        assert decode(Survey, encode(survey)) == survey

    def test_file(self, file: File) -> None:
        """File with metadata and external id."""
        assert decode(File, encode(file)) == file


class TestEncoding:
    """Check exact wire bytes."""

    def test_default_message_is_empty(self) -> None:
        """Proto3 defaults are not written."""
        assert encode(Trace()) == b""
        assert encode(P6Transformation()) == b""
        assert encode(File(metadata={})) == b""

    def test_trace_example(self) -> None:
        """Absent inline, crossline 12, three samples, no header."""
        trace = Trace(xline=12, trace=[0.1, 0.2, 0.3])
        samples = _float(0.1) + _float(0.2) + _float(0.3)
        assert encode(trace) == b"\x1a\x02\x08\x0c" + b"\x22\x0c" + samples

    def test_wrapper_zero_is_written(self) -> None:
        """A present zero goes on the wire as an empty wrapper."""
        assert encode(Trace(iline=0)) == b"\x12\x00"

    def test_negative_int32(self) -> None:
        """Negative int32 is sign-extended to ten bytes."""
        assert encode(PositionQuery(iline=-1)) == b"\x08" + b"\xff" * 9 + b"\x01"

    def test_oneof_default_is_written(self) -> None:
        """A oneof member holding its default value is still present."""
        assert encode(LineSelect.inline(0)) == b"\x08\x00"
        assert encode(Identifier.by_name("")) == b"\x12\x00"
        assert encode(SurveyGridTransformation.deduce()) == b"\x1a\x00"

    def test_fields_in_tag_order(self) -> None:
        """Geometry CRS (1) goes before the format variant (2 or 3)."""
        geometry = Geometry.from_wkt("A", "B")
        assert encode(geometry) == b"\x0a\x03\x0a\x01A" + b"\x12\x03\x0a\x01B"

    def test_map_is_deterministic(self) -> None:
        """Map entries are written sorted by key whatever the insertion order."""
        first = File(metadata={"b": "2", "a": "1"})
        second = File(metadata={"a": "1", "b": "2"})
        assert encode(first) == encode(second)
        assert encode(first) == b"\x1a\x06\x0a\x01a\x12\x011" + b"\x1a\x06\x0a\x01b\x12\x012"

    def test_negative_zero_float(self) -> None:
        """-0.0 is distinct from the default and is written."""
        assert encode(SurfacePoint(value=-0.0)) == b"\x1d" + _float(-0.0)

    def test_rejects_foreign_objects(self) -> None:
        """Only models and enum members are encodable."""
        with pytest.raises(TypeError):
            encode({"iline": 1})


class TestPresence:
    """Nullable wrappers distinguish absent from zero, plain scalars don't."""

    def test_trace_example(self) -> None:
        """Absent inline stays absent, crossline keeps its value."""
        decoded = decode(Trace, encode(Trace(xline=12, trace=[0.1, 0.2, 0.3])))

        assert decoded.iline is None
        assert decoded.xline == 12
        assert decoded.trace == Trace(trace=[0.1, 0.2, 0.3]).trace
        assert len(decoded.trace) == 3
        assert decoded.trace_header == b""
        assert not decoded.has_header

    @pytest.mark.parametrize("field", ["iline", "xline"])
    def test_zero_is_not_absent(self, field: str) -> None:
        """Line zero decodes as zero, not absent."""
        decoded = decode(Trace, encode(Trace(**{field: 0})))
        assert getattr(decoded, field) == 0

    @pytest.mark.parametrize("field", ["min", "max", "step"])
    def test_line_descriptor(self, field: str) -> None:
        """Each bound keeps its own presence."""
        decoded = decode(LineDescriptor, encode(LineDescriptor(**{field: 0})))
        for name in ("min", "max", "step"):
            assert getattr(decoded, name) == (0 if name == field else None)

    def test_line_range(self) -> None:
        """Open lower bound, zero upper bound."""
        decoded = decode(LineRange, encode(LineRange(to_line=0)))
        assert decoded.from_line is None
        assert decoded.to_line == 0

    def test_plain_scalar_has_no_presence(self) -> None:
        """Zero and absent plain scalars encode the same."""
        assert encode(PositionQuery(iline=0, xline=5)) == encode(PositionQuery(xline=5))

    def test_absent_message_field(self) -> None:
        """Unset message fields decode as None."""
        decoded = decode(Survey, encode(Survey(name="bare")))
        assert decoded.crs is None
        assert decoded.grid_transformation is None
        assert decoded.custom_coverage is None


class TestUnknownFields:
    """Unknown fields are skipped."""

    @pytest.mark.parametrize(
        "extra",
        [
            b"\xf8\x01\x05",  # field 31, varint
            b"\xa2\x06\x03abc",  # field 100, length-delimited
            b"\x95\x03\x00\x00\x80\x3f",  # field 50, fixed32
            b"\x31" + b"\x00" * 8,  # field 6, fixed64
        ],
    )
    def test_appended(self, extra: bytes, trace: Trace) -> None:
        """Unknown tags after the known fields."""
        assert decode(Trace, encode(trace) + extra) == trace

    def test_prepended_in_nested_message(self, survey: Survey) -> None:
        """Unknown tags inside a nested message."""
        external = b"\xf8\x01\x05" + encode(survey.external_id)
        payload = b"\x22" + bytes([len(external)]) + external
        assert decode(Survey, payload).external_id == survey.external_id

    def test_unknown_field_must_be_well_framed(self, trace: Trace) -> None:
        """A truncated unknown field is still malformed."""
        with pytest.raises(MalformedInputError):
            decode(Trace, encode(trace) + b"\xa2\x06\x05ab")


class TestMerging:
    """Repeated occurrences of singular fields."""

    def test_message_fields_merge(self) -> None:
        """Two partial coordinates merge into one."""
        payload = b"\x2a\x06\x0a\x04EPSG" + b"\x2a\x05\x15" + _float(1.0)
        decoded = decode(Trace, payload)
        assert decoded.coordinate == Coordinate(crs="EPSG", x=1.0)

    def test_scalar_last_wins(self) -> None:
        """The last occurrence of a scalar wins."""
        assert decode(PositionQuery, b"\x08\x01\x08\x02").iline == 2

    def test_unpacked_samples(self) -> None:
        """Packed and unpacked sample encodings are both accepted."""
        payload = b"\x25" + _float(1.0) + b"\x22\x08" + _float(2.0) + _float(3.0) + b"\x25" + _float(4.0)
        assert decode(Trace, payload).trace == (1.0, 2.0, 3.0, 4.0)

    def test_duplicate_map_keys(self) -> None:
        """Duplicate map keys: last write wins."""
        payload = b"\x1a\x06\x0a\x01a\x12\x011" + b"\x1a\x06\x0a\x01a\x12\x012"
        assert decode(File, payload).metadata == {"a": "2"}


class TestMalformed:
    """Bytes that violate the wire contract are reported."""

    def test_wire_type_skew(self) -> None:
        """Inline sent as a plain varint instead of a wrapper."""
        with pytest.raises(SchemaVersionSkewError) as exc_info:
            decode(Trace, b"\x10\x05")

        assert exc_info.value.field_name == "iline"
        assert exc_info.value.observed == "VARINT"

    def test_wrapper_value_skew(self) -> None:
        """Wrapper value sent as fixed32."""
        with pytest.raises(SchemaVersionSkewError):
            decode(LineRange, b"\x0a\x05\x0d" + _float(1.0))

    def test_invalid_utf8(self) -> None:
        """CRS string with invalid UTF-8."""
        with pytest.raises(MalformedInputError, match="UTF-8"):
            decode(Coordinate, b"\x0a\x02\xff\xfe")

    def test_truncated(self, trace: Trace) -> None:
        """A trace cut short inside its last field fails."""
        payload = encode(trace)
        with pytest.raises(MalformedInputError):
            decode(Trace, payload[:-1])

    def test_invalid_tag(self) -> None:
        """Field number zero."""
        with pytest.raises(MalformedInputError, match="Invalid field number"):
            decode(Coordinate, b"\x00\x01")

    def test_unknown_enum_number(self) -> None:
        """Handedness 5 is not defined."""
        with pytest.raises(MalformedInputError, match="Unknown enum number 5"):
            decode(P6Transformation, b"\x08\x05")

    def test_invariant_violation(self) -> None:
        """z_from after z_to."""
        with pytest.raises(MalformedInputError, match="SlabTrace"):
            decode(SlabTrace, b"\x10\x05")

    def test_too_few_corners(self) -> None:
        """Two corners are not enough."""
        with pytest.raises(MalformedInputError):
            decode(TraceCorners, b"\x0a\x00\x0a\x00")

    def test_geometry_requires_crs(self) -> None:
        """Geometry without a CRS."""
        with pytest.raises(MalformedInputError, match="Geometry"):
            decode(Geometry, b"\x12\x00")

    def test_nesting_limit(self, monkeypatch: pytest.MonkeyPatch, survey: Survey) -> None:
        """Nesting deeper than the configured limit."""
        monkeypatch.setenv("SEISDM__DECODE__MAX_DEPTH", "2")
        with pytest.raises(MalformedInputError, match="nesting exceeds"):
            decode(Survey, encode(survey))

    def test_nested_error_propagates(self) -> None:
        """Errors deep inside a survey surface to the caller."""
        bad_geometry = b"\x12\x00"
        coverage = b"\x0a" + bytes([len(bad_geometry)]) + bad_geometry
        payload = b"\x3a" + bytes([len(coverage)]) + coverage
        with pytest.raises(MalformedInputError, match="Geometry"):
            decode(Survey, payload)


def test_decode_accepts_memoryview(trace: Trace) -> None:
    """Any bytes-like input is accepted."""
    assert decode(Trace, memoryview(encode(trace))) == trace


def test_no_custom_coverage_marker() -> None:
    """The empty marker survives inside a survey."""
    survey = Survey(custom_coverage=CustomSurveyCoverage.computed())
    decoded = decode(Survey, encode(survey))
    assert isinstance(decoded.custom_coverage.value, NoCustomCoverage)
