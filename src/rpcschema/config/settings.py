"""rpcschema config models and loading helpers."""

from __future__ import annotations

import json
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from rpcschema.schema.facade import DEFAULT_MAX_DEPTH, MAX_DEPTH_LIMIT


class ValidatorSettings(BaseModel):
    """Validator behaviour knobs."""

    model_config = ConfigDict(extra="forbid")

    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1, le=MAX_DEPTH_LIMIT)
    log_failures: bool = False


class RpcSchemaConfig(BaseModel):
    """Root rpcschema configuration model."""

    model_config = ConfigDict(extra="forbid")

    schema_path: str | None = None
    validator: ValidatorSettings = ValidatorSettings()

    def resolve_schema_path(self, base_dir: Path) -> Path | None:
        """Return schema path, resolving relative paths against base_dir.

        Args:
            base_dir: Directory the config file lives in.

        Returns:
            Absolute-or-relative schema path, or None when unset.
        """
        if self.schema_path is None:
            return None
        path = Path(self.schema_path).expanduser()
        return path if path.is_absolute() else base_dir / path


class ConfigError(RuntimeError):
    """Raised when config cannot be decoded or validated."""


def _decode_config_payload(path: Path) -> dict[str, object]:
    """Decode config payload from JSON or YAML.

    Args:
        path: Config file path.

    Returns:
        Parsed mapping payload.

    Raises:
        ConfigError: If the file is unreadable, decode fails, or payload is not
            an object.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise ConfigError(f"Config file {path} is not UTF-8: {exc}") from exc
    if path.suffix.lower() == ".json":
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid config JSON: {exc}") from exc
    else:
        try:
            payload = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid config YAML: {exc}") from exc
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ConfigError("Invalid config payload: root must be an object")
    return payload


def load_config(path: Path) -> RpcSchemaConfig:
    """Load rpcschema config from disk, defaulting when missing.

    Args:
        path: Config file path.

    Returns:
        Parsed config, or defaults when file does not exist.

    Raises:
        ConfigError: If payload decode or validation fails.
    """
    if not path.exists():
        return RpcSchemaConfig()
    payload = _decode_config_payload(path)
    try:
        return RpcSchemaConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config payload: {exc}") from exc
