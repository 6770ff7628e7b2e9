"""Public API for the configuration system."""

from pathlib import Path
import sys
from typing import Any

from .resolver import ConfigResolver
from .types import ResolvedConfig

# Global resolver instance for efficient reuse
_resolver = ConfigResolver()


def resolve_config(
    programmatic: dict[str, Any] | None = None,
    *,
    config_file: str | Path | None = None,
    config_json: str | None = None,
) -> ResolvedConfig:
    """Resolve configuration from all sources with proper precedence.

    Precedence: Programmatic > Environment > JSON config > Defaults

    Args:
        programmatic: Dictionary of overrides (highest precedence). Only known
            configuration fields are used.
        config_file: Path to a JSON config file. If None, the file named by
            ``DATADIGEST_CONFIG_FILE`` is used when set.
        config_json: JSON config text, used instead of any file.

    Returns:
        ResolvedConfig with merged values and source tracking for audit.

    Raises:
        ConfigurationError: If the config is malformed or fails validation.

    Example:
        config = resolve_config(config_json='{"operation": "transform"}')
        frozen = config.to_frozen()
    """
    return _resolver.resolve(
        programmatic=programmatic,
        config_file=config_file,
        config_json=config_json,
    )


def print_config_audit(config: ResolvedConfig, *, file: Any = None) -> None:
    """Print where each configuration value came from."""
    print(config.audit(), file=file if file is not None else sys.stdout)  # noqa: T201


def check_environment() -> dict[str, str]:
    """Return the ``DATADIGEST_*`` environment variables currently set."""
    return _resolver.env_loader.get_env_summary()
