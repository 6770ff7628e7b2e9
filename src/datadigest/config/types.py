"""Core configuration data types.

Configuration is resolved once, then frozen and attached to pipeline
commands.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal, NamedTuple

from datadigest.core.models import Operation

# --- Source Tracking Types ---

ConfigOrigin = Literal["programmatic", "env", "file", "default"]
SourceMap = Mapping[str, ConfigOrigin]

FIELD_ORDER: tuple[str, ...] = ("user_id", "batch_size", "operation", "debug")

# --- Core Configuration Data ---


class ResolvedConfig(NamedTuple):
    """Configuration after resolution from all sources, before freezing.

    Carries the validated values plus a source map recording where each one
    came from.
    """

    user_id: int
    batch_size: int
    operation: Operation
    debug: bool

    # Audit metadata - tracks where each field value came from
    origin: SourceMap

    def to_frozen(self) -> "FrozenConfig":
        """Convert to the immutable configuration used in the pipeline."""
        return FrozenConfig(
            user_id=self.user_id,
            batch_size=self.batch_size,
            operation=self.operation,
            debug=self.debug,
        )

    def with_overrides(self, **overrides: object) -> "ResolvedConfig":
        """Return a copy with programmatic overrides applied.

        Unknown fields are ignored. Values are not re-validated; resolve again
        through `ConfigResolver` when validation matters.
        """
        new_values = self._asdict()
        new_origin = dict(self.origin)

        for field, value in overrides.items():
            if field in FIELD_ORDER:
                new_values[field] = value
                new_origin[field] = "programmatic"

        new_values["origin"] = new_origin
        return ResolvedConfig(**new_values)

    def audit(self) -> str:
        """Return a report of each field's value and origin, one per line."""
        lines = []
        for field in FIELD_ORDER:
            if field not in self.origin:
                continue
            origin = self.origin[field]
            value = getattr(self, field)
            if isinstance(value, Operation):
                value = value.value
            if origin == "env":
                lines.append(f"{field}: env:DATADIGEST_{field.upper()}={value}")
            else:
                lines.append(f"{field}: {origin}:{value}")
        return "\n".join(lines)


@dataclass(frozen=True)
class FrozenConfig:
    """Immutable configuration attached to commands in the pipeline."""

    user_id: int
    batch_size: int
    operation: Operation
    debug: bool
