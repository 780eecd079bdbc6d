"""
Runtime Configuration Module

Provides configuration loading and management for dropvault.
"""

from .runtime import (
    ApiConfig,
    ChainConfig,
    RuntimeConfig,
    WindowConfig,
    default_config_paths,
    get_default_config,
    get_default_config_template,
    load_runtime_config,
    set_default_config,
)

__all__ = [
    "ApiConfig",
    "ChainConfig",
    "RuntimeConfig",
    "WindowConfig",
    "default_config_paths",
    "get_default_config",
    "get_default_config_template",
    "load_runtime_config",
    "set_default_config",
]
