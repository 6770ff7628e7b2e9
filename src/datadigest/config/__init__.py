"""Configuration management for data-digest.

Configuration is resolved once from defaults, a JSON config, the environment
and programmatic overrides, then frozen and attached to the pipeline.

Key components:
- ResolvedConfig: Post-resolution configuration with audit metadata
- FrozenConfig: Immutable configuration for pipeline execution
- SourceMap: Audit tracking of configuration value origins
"""

from .api import check_environment, print_config_audit, resolve_config
from .audit import SourceTracker
from .env_loader import EnvironmentConfigLoader
from .file_loader import ConfigFileError, JSONConfigLoader, load_config_json
from .resolver import ConfigResolver
from .schema import DigestSettings
from .types import ConfigOrigin, FrozenConfig, ResolvedConfig, SourceMap

__all__ = [  # noqa: RUF022
    # Main API
    "resolve_config",
    "print_config_audit",
    "check_environment",
    # Core types
    "ResolvedConfig",
    "FrozenConfig",
    "SourceMap",
    "ConfigOrigin",
    # Advanced usage
    "DigestSettings",
    "ConfigResolver",
    "JSONConfigLoader",
    "EnvironmentConfigLoader",
    "ConfigFileError",
    "SourceTracker",
    "load_config_json",
]
