"""
Global test configuration with support for different test types.
"""

import logging
import os

import pytest

from datadigest.config import FrozenConfig
from datadigest.core.models import Operation


# --- Environment Isolation (Autouse) ---
@pytest.fixture(autouse=True)
def isolate_datadigest_env(request, monkeypatch):
    """Ensure a clean DATADIGEST_* environment for each test.

    Escape hatch: @pytest.mark.allow_env_pollution keeps the current env.
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return

    for key in list(os.environ.keys()):
        if key.startswith("DATADIGEST_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("DEBUG", raising=False)


# --- Logging Fixtures ---
@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Sets the log level for noisy external libraries to WARNING."""
    logging.getLogger("pydantic").setLevel(logging.WARNING)


# --- Test Environment Markers ---
def pytest_configure(config):
    """Configure custom markers for test organization."""
    markers = [
        "unit: Fast, isolated unit tests",
        "contract: Behavioral guarantees that must hold for every input",
        "integration: End-to-end runs through the executor and CLI",
        "allow_env_pollution: Keep DATADIGEST_* variables from the real environment",
    ]
    for marker in markers:
        config.addinivalue_line("markers", marker)


# --- Core Fixtures ---


@pytest.fixture
def sample_values():
    """A small dataset spanning every aggregation bucket."""
    return [5.0, 30.0, 60.0, 90.0, 150.0]


@pytest.fixture
def frozen_config():
    """Build a FrozenConfig with overridable fields."""

    def _make(**overrides):
        values = {
            "user_id": 12345,
            "batch_size": 10,
            "operation": Operation.ANALYZE,
            "debug": False,
        }
        values.update(overrides)
        return FrozenConfig(**values)

    return _make
