"""Environment variable configuration loading.

Reads ``DATADIGEST_*`` variables through the settings schema's environment
source, so values are decoded exactly as `DigestSettings` would decode them.
"""

import os
from typing import Any

from .schema import DigestSettings, JSONScalarEnvSettingsSource

ENV_PREFIX = "DATADIGEST_"


class EnvironmentConfigLoader:
    """Loads configuration values that are set in the environment."""

    def load_env_config(self) -> dict[str, Any]:
        """Return decoded values for the fields set in the environment.

        Only fields that are actually set appear in the result; type checks
        and defaults are applied later by the resolver.
        """
        source = JSONScalarEnvSettingsSource(DigestSettings)
        values = source()
        return {
            field: value
            for field, value in values.items()
            if field in DigestSettings.model_fields
        }

    def get_env_summary(self) -> dict[str, str]:
        """Return the raw ``DATADIGEST_*`` variables for each schema field."""
        summary = {}
        for field in DigestSettings.model_fields:
            env_var = f"{ENV_PREFIX}{field.upper()}"
            if env_var in os.environ:
                summary[env_var] = os.environ[env_var]
        return summary
