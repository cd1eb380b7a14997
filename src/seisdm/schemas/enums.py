"""Enumerations shared by ingestion and query messages.

Values are the wire numbers and are never reassigned. Some domains are sparse
(see :class:`FileStep`), so callers must not assume a dense range.
"""

from __future__ import annotations

from enum import IntEnum


class Handedness(IntEnum):
    """Orientation of the inline axis relative to the crossline axis."""

    RIGHTHANDED = 0  # inline axis is 90 deg clockwise from crossline, EPSG code 9666
    LEFTHANDED = 1  # inline axis is 90 deg counterclockwise from crossline, EPSG code 1049


class JobStatus(IntEnum):
    """Status of an asynchronous job."""

    NONE = 0
    QUEUED = 1
    IN_PROGRESS = 2
    SUCCESS = 3
    FAILED = 4
    TIMEOUT = 5


class FileStep(IntEnum):
    """Stage of the file ingestion pipeline.

    254 and 255 are reserved for the deletion terminal states.
    """

    REGISTER = 0
    INSERT_FILE_HEADERS = 1
    INSERT_TRACE_HEADERS = 2
    INSERT_DATA = 3
    COMPUTE_COVERAGE = 4
    COMPUTE_GRID = 5
    COMPUTE_TRACE_INDICES = 6
    DELETING = 254
    DELETE = 255

    @property
    def is_deletion(self) -> bool:
        """True for the deletion terminal states."""
        return self in {FileStep.DELETING, FileStep.DELETE}


class InterpolationMethod(IntEnum):
    """How traces are synthesized between grid positions."""

    NEAREST_TRACE = 0
    INVERSE_DISTANCE_WEIGHTING = 1


class IngestionSource(IntEnum):
    """Where ingested trace data came from."""

    INVALID_SOURCE = 0
    FILE_SOURCE = 1
    TRACE_WRITER = 2
