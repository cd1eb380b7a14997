"""This module implements the core components of the seismic data model schemas."""

from __future__ import annotations

from typing import Annotated
from typing import Any
from typing import ClassVar
from typing import Self

import numpy as np
from pydantic import AfterValidator
from pydantic import BaseModel
from pydantic import BeforeValidator
from pydantic import ConfigDict
from pydantic import Field
from pydantic import model_validator
from pydantic.alias_generators import to_camel

from seisdm.wire.fields import FieldKind
from seisdm.wire.fields import WireField

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


def _to_float32(value: float) -> float:
    """Round a Python float to the nearest float32 so it survives the wire unchanged."""
    return float(np.float32(value))


def _to_float32_samples(value: Any) -> tuple[float, ...]:
    """Coerce a 1-D sequence or array of samples to float32 values."""
    samples = np.asarray(value, dtype=np.float32)
    if samples.ndim != 1:
        msg = f"Samples must be one-dimensional, got shape {samples.shape}"
        raise ValueError(msg)
    return tuple(samples.tolist())


Int32 = Annotated[int, Field(ge=INT32_MIN, le=INT32_MAX)]
Float32 = Annotated[float, AfterValidator(_to_float32)]
Float32Samples = Annotated[tuple[float, ...], BeforeValidator(_to_float32_samples)]


class SeismicModel(BaseModel):
    """An immutable message model with forbidden extras and camel case aliases.

    Camel case aliases match the protobuf JSON mapping, and bytes are carried as
    base64 in JSON.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        validate_by_name=True,
        serialize_by_alias=True,
        extra="forbid",
        frozen=True,
        ser_json_bytes="base64",
        val_json_bytes="base64",
    )


class OneofModel(SeismicModel):
    """A message holding one oneof group as an explicit tag plus a payload.

    Subclasses declare a tag field named after the group (a ``Literal`` of the
    variant names) and a ``value`` field for the payload, and describe each
    variant with a :class:`WireField` in ``oneof_variants``.
    """

    oneof_group: ClassVar[str]
    oneof_variants: ClassVar[dict[str, WireField]]

    @model_validator(mode="before")
    @classmethod
    def _build_message_payload(cls, data: Any) -> Any:
        """Validate a mapping payload against the message type its tag names."""
        if not isinstance(data, dict):
            return data

        variant = cls.oneof_variants.get(data.get(cls.oneof_group))
        payload = data.get("value")
        if variant is not None and variant.kind is FieldKind.MESSAGE and isinstance(payload, dict):
            data = {**data, "value": variant.target.model_validate(payload)}

        return data

    @model_validator(mode="after")
    def _check_payload_type(self) -> Self:
        """Ensure a message payload is an instance of the variant's type."""
        variant = self.oneof_variants[self.which]
        if variant.kind is FieldKind.MESSAGE and not isinstance(self.value, variant.target):
            msg = f"Variant '{self.which}' expects {variant.target.__name__}, got {type(self.value).__name__}"
            raise ValueError(msg)
        return self

    @property
    def which(self) -> str:
        """Name of the populated variant."""
        return getattr(self, self.oneof_group)

    @classmethod
    def from_variant(cls, name: str, value: Any, **fields: Any) -> Self:
        """Build the message with the named variant populated."""
        return cls.model_validate({**fields, cls.oneof_group: name, "value": value})
