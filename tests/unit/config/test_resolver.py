"""Unit tests for configuration resolution and precedence."""

import json

import pytest

from datadigest.config import (
    ConfigFileError,
    FrozenConfig,
    ResolvedConfig,
    check_environment,
    print_config_audit,
    resolve_config,
)
from datadigest.core.models import Operation
from datadigest.exceptions import ConfigurationError

pytestmark = pytest.mark.unit

INJECTED = '{"user_id": 12345, "batch_size": 15, "operation": "analyze", "debug": true}'


def test_defaults_only():
    config = resolve_config()

    assert isinstance(config, ResolvedConfig)
    assert (config.user_id, config.batch_size) == (0, 10)
    assert config.operation is Operation.ANALYZE
    assert config.debug is False
    assert set(config.origin.values()) == {"default"}


def test_json_text():
    config = resolve_config(config_json=INJECTED)

    assert config.user_id == 12345
    assert config.batch_size == 15
    assert config.debug is True
    assert config.origin["batch_size"] == "file"


def test_partial_json_keeps_defaults():
    config = resolve_config(config_json='{"operation": "aggregate"}')

    assert config.operation is Operation.AGGREGATE
    assert config.batch_size == 10
    assert config.origin["operation"] == "file"
    assert config.origin["batch_size"] == "default"


def test_mistyped_json_values_use_defaults():
    config = resolve_config(config_json='{"user_id": "abc", "debug": "yes"}')
    assert config.user_id == 0
    assert config.debug is False


def test_config_file(tmp_path):
    path = tmp_path / "run.json"
    path.write_text(json.dumps({"operation": "transform", "batch_size": 4}))

    config = resolve_config(config_file=path)

    assert config.operation is Operation.TRANSFORM
    assert config.batch_size == 4


def test_config_file_from_environment(tmp_path, monkeypatch):
    path = tmp_path / "env.json"
    path.write_text('{"user_id": 42}')
    monkeypatch.setenv("DATADIGEST_CONFIG_FILE", str(path))

    assert resolve_config().user_id == 42


def test_environment_overrides_json(monkeypatch):
    monkeypatch.setenv("DATADIGEST_BATCH_SIZE", "20")

    config = resolve_config(config_json=INJECTED)

    assert config.batch_size == 20
    assert config.origin["batch_size"] == "env"
    assert config.origin["user_id"] == "file"


def test_programmatic_overrides_environment(monkeypatch):
    monkeypatch.setenv("DATADIGEST_OPERATION", "transform")

    config = resolve_config({"operation": "aggregate"})

    assert config.operation is Operation.AGGREGATE
    assert config.origin["operation"] == "programmatic"


def test_unknown_programmatic_keys_are_ignored():
    config = resolve_config({"colour": "blue"})
    assert "colour" not in config.origin


@pytest.mark.parametrize("text", ["{not json", "[1, 2, 3]", '"analyze"'])
def test_bad_json_is_a_config_file_error(text):
    with pytest.raises(ConfigFileError):
        resolve_config(config_json=text)


def test_missing_file_is_a_config_file_error(tmp_path):
    with pytest.raises(ConfigFileError) as ei:
        resolve_config(config_file=tmp_path / "missing.json")
    assert isinstance(ei.value.cause, OSError)


@pytest.mark.parametrize("batch_size", [0, -4])
def test_non_positive_batch_size_is_rejected(batch_size):
    with pytest.raises(ConfigurationError, match="batch_size"):
        resolve_config(config_json=json.dumps({"batch_size": batch_size}))


class TestResolvedConfig:
    def test_to_frozen_is_immutable(self):
        frozen = resolve_config().to_frozen()

        assert isinstance(frozen, FrozenConfig)
        with pytest.raises(AttributeError):
            frozen.batch_size = 3  # type: ignore[misc]

    def test_with_overrides_marks_origin(self):
        config = resolve_config().with_overrides(user_id=5, unknown=1)

        assert config.user_id == 5
        assert config.origin["user_id"] == "programmatic"
        assert "unknown" not in config.origin

    def test_audit_lists_every_field(self, monkeypatch):
        monkeypatch.setenv("DATADIGEST_DEBUG", "true")
        lines = resolve_config(config_json='{"batch_size": 3}').audit().splitlines()

        assert lines == [
            "user_id: default:0",
            "batch_size: file:3",
            "operation: default:analyze",
            "debug: env:DATADIGEST_DEBUG=True",
        ]


def test_print_config_audit_writes_report(capsys):
    print_config_audit(resolve_config({"batch_size": 4}))

    assert "batch_size: programmatic:4" in capsys.readouterr().out


def test_check_environment_lists_set_variables(monkeypatch):
    monkeypatch.setenv("DATADIGEST_OPERATION", "transform")
    monkeypatch.setenv("DATADIGEST_UNRELATED", "x")

    assert check_environment() == {"DATADIGEST_OPERATION": "transform"}
