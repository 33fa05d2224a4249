"""Unit tests for rpcschema config loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from rpcschema.config import ConfigError, load_config


@pytest.mark.unit
def test_load_config_defaults_when_missing(tmp_path: Path) -> None:
    """Missing config file should yield deterministic defaults."""
    config = load_config(tmp_path / "missing.yaml")

    assert config.schema_path is None
    assert config.validator.max_depth == 64
    assert config.validator.log_failures is False
    assert config.resolve_schema_path(tmp_path) is None


@pytest.mark.unit
def test_load_config_reads_yaml_payload(tmp_path: Path) -> None:
    """Config loader should parse YAML payloads and resolve relative paths."""
    config_path = tmp_path / "rpcschema.yaml"
    config_path.write_text(
        yaml.safe_dump(
            {
                "schema_path": "schema.json",
                "validator": {"max_depth": 16, "log_failures": True},
            },
            sort_keys=False,
        ),
        encoding="utf-8",
    )

    config = load_config(config_path)

    assert config.validator.max_depth == 16
    assert config.validator.log_failures is True
    assert config.resolve_schema_path(tmp_path) == tmp_path / "schema.json"


@pytest.mark.unit
def test_load_config_keeps_absolute_schema_path(tmp_path: Path) -> None:
    """Absolute schema paths are not re-rooted."""
    config_path = tmp_path / "rpcschema.json"
    absolute = tmp_path / "elsewhere" / "schema.json"
    config_path.write_text(
        json.dumps({"schema_path": absolute.as_posix()}), encoding="utf-8"
    )

    config = load_config(config_path)

    assert config.resolve_schema_path(Path("/unrelated")) == absolute


@pytest.mark.unit
def test_load_config_empty_yaml_is_default(tmp_path: Path) -> None:
    """An empty YAML file means defaults."""
    config_path = tmp_path / "rpcschema.yaml"
    config_path.write_text("", encoding="utf-8")

    assert load_config(config_path).validator.max_depth == 64


@pytest.mark.unit
@pytest.mark.parametrize(
    "filename,content,match",
    [
        ("rpcschema.json", "{not-json", "Invalid config JSON"),
        ("rpcschema.yaml", "validator: [unclosed", "Invalid config YAML"),
        ("rpcschema.yaml", "- 1\n- 2\n", "root must be an object"),
        ("rpcschema.json", '{"validator": {"max_depth": 0}}', "Invalid config payload"),
        (
            "rpcschema.json",
            '{"validator": {"max_depth": 201}}',
            "Invalid config payload",
        ),
        ("rpcschema.json", '{"unknown": true}', "Invalid config payload"),
    ],
    ids=[
        "bad_json",
        "bad_yaml",
        "list_root",
        "depth_zero",
        "depth_over_limit",
        "extra_key",
    ],
)
def test_load_config_rejects_invalid(
    tmp_path: Path, filename: str, content: str, match: str
) -> None:
    """Invalid payloads raise a deterministic config error."""
    config_path = tmp_path / filename
    config_path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError, match=match):
        load_config(config_path)


@pytest.mark.unit
def test_load_config_rejects_non_utf8(tmp_path: Path) -> None:
    """Undecodable bytes raise a config error instead of a decode traceback."""
    config_path = tmp_path / "rpcschema.yaml"
    config_path.write_bytes(b"schema_path: \xff\n")

    with pytest.raises(ConfigError, match="not UTF-8"):
        load_config(config_path)


@pytest.mark.unit
def test_load_config_rejects_unreadable_path(tmp_path: Path) -> None:
    """A path that exists but cannot be read as a file is a config error."""
    config_path = tmp_path / "rpcschema.yaml"
    config_path.mkdir()

    with pytest.raises(ConfigError, match="Cannot read config file"):
        load_config(config_path)
