"""rpcschema configuration loading."""

from rpcschema.config.settings import (
    ConfigError,
    RpcSchemaConfig,
    ValidatorSettings,
    load_config,
)

__all__ = [
    "ConfigError",
    "RpcSchemaConfig",
    "ValidatorSettings",
    "load_config",
]
