"""Shared configuration helpers and dataclasses."""

from .errors import ConfigurationError
from .hydra_config import AiHandlerConfig, HydraConfig, McpServerConfig
from .runtime import (
    default_hydra_dir,
    env_float,
    env_str,
    home_dir,
    resolve_hydra_path,
)

__all__ = [
    "AiHandlerConfig",
    "ConfigurationError",
    "HydraConfig",
    "McpServerConfig",
    "default_hydra_dir",
    "env_float",
    "env_str",
    "home_dir",
    "resolve_hydra_path",
]
