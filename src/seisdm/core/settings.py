"""Environment variable management for seisdm operations."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic import ValidationError
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict

from seisdm.exceptions import EnvironmentFormatError

UnionPolicy = Literal["strict", "lenient"]


class SeisDMSettings(BaseSettings):
    """Seisdm environment configuration settings."""

    # Decoding configuration
    union_policy: UnionPolicy = Field(
        default="strict",
        description="How to resolve a oneof group with several variants set on the wire",
        alias="SEISDM__DECODE__UNION_POLICY",
    )
    max_depth: int = Field(
        default=100,
        gt=0,
        description="Maximum nesting depth of messages accepted by the decoder",
        alias="SEISDM__DECODE__MAX_DEPTH",
    )

    model_config = SettingsConfigDict(case_sensitive=True)


_ENV_VAR_MAPPING = {
    "SEISDM__DECODE__UNION_POLICY": "SEISDM__DECODE__UNION_POLICY",
    "SEISDM__DECODE__MAX_DEPTH": "SEISDM__DECODE__MAX_DEPTH",
    "union_policy": "SEISDM__DECODE__UNION_POLICY",
    "max_depth": "SEISDM__DECODE__MAX_DEPTH",
}


def get_settings() -> SeisDMSettings:
    """Get current seisdm settings from environment variables."""
    try:
        return SeisDMSettings()
    except ValidationError as e:
        error_details = e.errors()[0]
        field_name = error_details.get("loc", [None])[0]
        error_type = error_details.get("type", "unknown")

        type_mapping = {
            "int_parsing": "int",
            "literal_error": "strict|lenient",
            "greater_than": "positive int",
        }
        mapped_type = type_mapping.get(error_type, error_type)
        env_var = _ENV_VAR_MAPPING.get(field_name, field_name)

        raise EnvironmentFormatError(env_var, mapped_type) from e


def union_policy() -> UnionPolicy:
    """Oneof conflict resolution policy used when decoding."""
    return get_settings().union_policy


def max_depth() -> int:
    """Maximum message nesting depth accepted when decoding."""
    return get_settings().max_depth
