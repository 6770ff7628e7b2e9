"""Configuration resolution with precedence handling.

Sources are merged in this order, later ones winning:
Defaults < JSON config (file or text) < Environment < Programmatic
"""

import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from datadigest.exceptions import ConfigurationError

from .audit import SourceTracker
from .env_loader import EnvironmentConfigLoader
from .file_loader import JSONConfigLoader
from .schema import DigestSettings
from .types import ResolvedConfig

log = logging.getLogger(__name__)


class ConfigResolver:
    """Resolves configuration from multiple sources with proper precedence."""

    def __init__(self) -> None:
        self.file_loader = JSONConfigLoader()
        self.env_loader = EnvironmentConfigLoader()

    def resolve(
        self,
        programmatic: dict[str, Any] | None = None,
        *,
        config_file: str | Path | None = None,
        config_json: str | None = None,
    ) -> ResolvedConfig:
        """Resolve configuration from all sources with proper precedence.

        Args:
            programmatic: Programmatic overrides (highest precedence).
            config_file: JSON config file. Defaults to ``DATADIGEST_CONFIG_FILE``.
            config_json: JSON config text; takes the place of ``config_file``.

        Returns:
            ResolvedConfig with merged values and source tracking.

        Raises:
            ConfigFileError: If the JSON config cannot be read or parsed.
            ConfigurationError: If the merged values fail validation.
        """
        source_tracker = SourceTracker()
        merged_config: dict[str, Any] = {}

        # Step 1: Schema defaults
        for field, value in DigestSettings.field_defaults().items():
            merged_config[field] = value
            source_tracker.set_origin(field, "default")

        # Step 2: JSON configuration
        file_config = self._load_json_config(config_file, config_json)
        self._overlay(merged_config, file_config, source_tracker, "file")

        # Step 3: Environment variables
        env_config = self.env_loader.load_env_config()
        self._overlay(merged_config, env_config, source_tracker, "env")

        # Step 4: Programmatic overrides
        if programmatic:
            self._overlay(merged_config, programmatic, source_tracker, "programmatic")

        # Step 5: Validate the merged configuration
        try:
            final_config = DigestSettings(**merged_config).to_dict()
        except PydanticValidationError as e:
            raise ConfigurationError(f"Configuration validation failed: {e}") from e

        log.debug("Resolved configuration: %s", final_config)
        return ResolvedConfig(
            user_id=final_config["user_id"],
            batch_size=final_config["batch_size"],
            operation=final_config["operation"],
            debug=final_config["debug"],
            origin=source_tracker.get_source_map(),
        )

    def _load_json_config(
        self, config_file: str | Path | None, config_json: str | None
    ) -> dict[str, Any]:
        if config_json is not None:
            return self.file_loader.load_text(config_json)
        path = config_file
        if path is None:
            path = self.file_loader.default_config_path()
        if path is None:
            return {}
        return self.file_loader.load_file(path)

    @staticmethod
    def _overlay(
        merged: dict[str, Any],
        values: dict[str, Any],
        tracker: SourceTracker,
        origin: Any,
    ) -> None:
        for field, value in values.items():
            if field in merged:  # Only override known fields
                merged[field] = value
                tracker.set_origin(field, origin)
