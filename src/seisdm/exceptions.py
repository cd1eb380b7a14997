"""Custom exceptions related to seismic data model functionality."""

from __future__ import annotations


class SeisDMError(Exception):
    """Base exceptions class."""


class MalformedInputError(SeisDMError):
    """Raised when bytes don't parse as a valid instance of the declared type.

    Args:
        message: Message to show with the exception.
        type_name: Name of the message type being decoded.
        offset: Byte offset in the buffer where decoding failed.
    """

    def __init__(self, message: str, type_name: str | None = None, offset: int | None = None):
        self.type_name = type_name
        self.offset = offset

        extras = []
        if type_name is not None:
            extras.append(f"type: {type_name}")
        if offset is not None:
            extras.append(f"offset: {offset}")
        if extras:
            message = f"{message} - {', '.join(extras)}"

        super().__init__(message)


class InvalidUnionError(MalformedInputError):
    """Raised when a oneof group doesn't have exactly one populated variant.

    Args:
        type_name: Name of the message type holding the oneof.
        group: Name of the oneof group.
        populated: Variant names found on the wire, in wire order.
    """

    def __init__(self, type_name: str, group: str, populated: list[str]):
        self.group = group
        self.populated = populated

        if populated:
            message = f"Oneof '{group}' has {len(populated)} variants set: {populated}"
        else:
            message = f"Oneof '{group}' has no variant set"

        super().__init__(message, type_name=type_name)


class SchemaVersionSkewError(MalformedInputError):
    """Raised when a known field arrives with an unexpected wire type.

    Args:
        type_name: Name of the message type being decoded.
        field_name: Name of the field whose tag was recognized.
        expected: Wire types accepted for the field.
        observed: Wire type found on the wire.
    """

    def __init__(self, type_name: str, field_name: str, expected: str, observed: str):
        self.field_name = field_name
        self.expected = expected
        self.observed = observed
        message = f"Field '{field_name}' has wire type {observed}, expected {expected}"
        super().__init__(message, type_name=type_name)


class UnknownMessageTypeError(SeisDMError):
    """Raised when a message or enum type name is not registered.

    Args:
        name: The name that was looked up.
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown message type: {name}")


class EnvironmentFormatError(SeisDMError):
    """Raised when environment variable is of the wrong format."""

    def __init__(self, name: str, format: str, msg: str = ""):  # noqa: A002
        """Initialize error."""
        self.message = f"Environment variable: {name} not of expected format: {format}. "
        self.message += f"\n{msg}" if msg else ""
        super().__init__(self.message)
