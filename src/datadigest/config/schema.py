"""Configuration schema and validation using Pydantic.

This module defines the settings schema that validates and coerces
configuration values from JSON, the environment, and programmatic overrides.
Missing or type-mismatched values fall back to the field default; values of
the right type that break a constraint (``batch_size < 1``) are rejected.
"""

import json
import logging
import math
from typing import Any

from pydantic import Field, ValidationInfo, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    EnvSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from datadigest.constants import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_DEBUG,
    DEFAULT_OPERATION,
    DEFAULT_USER_ID,
)
from datadigest.core.models import Operation

log = logging.getLogger(__name__)


def decode_scalar(raw: str) -> Any:
    """Decode an environment string as a JSON scalar, else keep the string.

    ``"15"`` becomes ``15`` and ``"true"`` becomes ``True`` so environment
    values go through the same type checks as values read from JSON.
    """
    try:
        value = json.loads(raw)
    except ValueError:
        return raw
    if isinstance(value, dict | list):
        return raw
    return value


class JSONScalarEnvSettingsSource(EnvSettingsSource):
    """Environment source that decodes each value as a JSON scalar."""

    def prepare_field_value(
        self, field_name: str, field: FieldInfo, value: Any, value_is_complex: bool
    ) -> Any:
        value = super().prepare_field_value(field_name, field, value, value_is_complex)
        if isinstance(value, str):
            return decode_scalar(value)
        return value


class DigestSettings(BaseSettings):
    """Pydantic settings schema for a digest run.

    Environment variables use the ``DATADIGEST_`` prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="DATADIGEST_",
        case_sensitive=False,
        extra="ignore",  # Unknown keys in JSON configs are ignored
    )

    user_id: int = Field(
        default=DEFAULT_USER_ID,
        description="Identifier of the user the run is attributed to",
    )

    batch_size: int = Field(
        default=DEFAULT_BATCH_SIZE,
        description="Maximum number of values per batch",
        ge=1,
    )

    operation: Operation = Field(
        default=Operation(DEFAULT_OPERATION),
        description="Which digest operation to run",
    )

    debug: bool = Field(
        default=DEFAULT_DEBUG,
        description="Enable verbose logging for the run",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, JSONScalarEnvSettingsSource(settings_cls))

    @classmethod
    def field_defaults(cls) -> dict[str, Any]:
        """Return the declared default for every field."""
        return {name: info.default for name, info in cls.model_fields.items()}

    # --- Validation Rules ---

    @field_validator("user_id", "batch_size", mode="before")
    @classmethod
    def coerce_int(cls, v: Any, info: ValidationInfo) -> Any:
        """Accept JSON numbers, truncating toward zero; default otherwise."""
        if isinstance(v, bool):
            return cls._default_for(info)
        if isinstance(v, int):
            return v
        if isinstance(v, float) and math.isfinite(v):
            return int(v)
        return cls._default_for(info)

    @field_validator("operation", mode="before")
    @classmethod
    def coerce_operation(cls, v: Any, info: ValidationInfo) -> Operation:
        """Accept known operation names; anything else falls back to the default."""
        if isinstance(v, Operation):
            return v
        if isinstance(v, str):
            try:
                return Operation(v)
            except ValueError:
                log.warning(
                    "Unknown operation %r; using %r", v, DEFAULT_OPERATION
                )
        return cls._default_for(info)

    @field_validator("debug", mode="before")
    @classmethod
    def coerce_bool(cls, v: Any, info: ValidationInfo) -> bool:
        """Only real booleans enable debug; other values use the default."""
        if isinstance(v, bool):
            return v
        return cls._default_for(info)

    @classmethod
    def _default_for(cls, info: ValidationInfo) -> Any:
        return cls.model_fields[info.field_name].default

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary keyed by field name."""
        return {
            "user_id": self.user_id,
            "batch_size": self.batch_size,
            "operation": self.operation,
            "debug": self.debug,
        }
