"""JSON configuration loading.

A run is configured by a single JSON object, supplied either as text (for
example injected by a host process or piped on stdin) or as a file path.
"""

import json
import os
from pathlib import Path
from typing import Any

from datadigest.exceptions import ConfigurationError

CONFIG_FILE_ENV_VAR = "DATADIGEST_CONFIG_FILE"


class ConfigFileError(ConfigurationError):
    """Raised when configuration text or a configuration file cannot be loaded."""

    def __init__(
        self, source: Path | str, message: str, cause: Exception | None = None
    ) -> None:
        """Initialize with the config source, message, and optional cause.

        Args:
            source: The file path, or a label such as ``"<string>"``
            message: Human-readable error message
            cause: The underlying exception that caused the failure
        """
        self.source = source
        self.message = message
        self.cause = cause
        super().__init__(f"Config error in {source}: {message}")


class JSONConfigLoader:
    """Loads a configuration mapping from JSON text or a JSON file."""

    def load_text(self, text: str, source: Path | str = "<string>") -> dict[str, Any]:
        """Parse JSON text into a configuration mapping.

        Raises:
            ConfigFileError: If the text is not JSON or not a JSON object.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigFileError(source, f"Failed to parse JSON: {e}", cause=e) from e

        if not isinstance(data, dict):
            raise ConfigFileError(
                source,
                f"Expected a JSON object at the top level, got {type(data).__name__}",
            )
        return data

    def load_file(self, path: str | Path) -> dict[str, Any]:
        """Read and parse a JSON configuration file.

        Raises:
            ConfigFileError: If the file cannot be read or parsed.
        """
        config_path = Path(path)
        try:
            text = config_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigFileError(
                config_path, f"Failed to read file: {e}", cause=e
            ) from e
        return self.load_text(text, source=config_path)

    def default_config_path(self) -> Path | None:
        """Return the path named by ``DATADIGEST_CONFIG_FILE``, if set."""
        value = os.getenv(CONFIG_FILE_ENV_VAR)
        return Path(value) if value else None


def load_config_json(text: str) -> dict[str, Any]:
    """Parse configuration JSON text; see `JSONConfigLoader.load_text`."""
    return JSONConfigLoader().load_text(text)
