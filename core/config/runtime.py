"""
Runtime Configuration

Central configuration for the devnet, window limits, API and logging.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Any, Optional
from pathlib import Path

from dotenv import load_dotenv

from core.vault.window import MAX_DURATION, MAX_START_OFFSET, WindowLimits

load_dotenv()


ENV_PREFIX = "DROPVAULT_"


@dataclass
class ChainConfig:
    """Configuration for the in-memory ledger."""
    chain_id: int = 1
    genesis_timestamp: Optional[int] = None  # None = wall clock at startup


@dataclass
class WindowConfig:
    """Bounds applied to every distribution window."""
    max_duration_s: int = MAX_DURATION
    max_start_offset_s: int = MAX_START_OFFSET

    def to_limits(self) -> WindowLimits:
        return WindowLimits(
            max_duration=self.max_duration_s,
            max_start_offset=self.max_start_offset_s,
        )


@dataclass
class ApiConfig:
    """Configuration for the sandbox HTTP service."""
    host: str = "127.0.0.1"
    port: int = 8000


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for dropvault.

    Can be loaded from:
    - Environment variables
    - YAML or JSON file
    - Programmatic construction
    """
    chain: ChainConfig = field(default_factory=ChainConfig)
    window: WindowConfig = field(default_factory=WindowConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    log_level: str = "INFO"
    log_file: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the SINGLE source of truth for all env var reading.

        Supported variables:
        - DROPVAULT_CHAIN_ID: Chain id mixed into vault salts
        - DROPVAULT_GENESIS_TIMESTAMP: Initial ledger time (epoch seconds)
        - DROPVAULT_MAX_DURATION: Longest allowed window (seconds)
        - DROPVAULT_MAX_START_OFFSET: Furthest allowed window start (seconds ahead)
        - DROPVAULT_API_HOST / DROPVAULT_API_PORT: Sandbox bind address
        - DROPVAULT_LOG_LEVEL / DROPVAULT_LOG_FILE: Logging
        """
        overrides: dict[str, Any] = {}

        # Chain settings
        if os.getenv(f"{ENV_PREFIX}CHAIN_ID"):
            overrides.setdefault("chain", {})["chain_id"] = int(os.getenv(f"{ENV_PREFIX}CHAIN_ID"))
        if os.getenv(f"{ENV_PREFIX}GENESIS_TIMESTAMP"):
            overrides.setdefault("chain", {})["genesis_timestamp"] = int(
                os.getenv(f"{ENV_PREFIX}GENESIS_TIMESTAMP")
            )

        # Window limits
        if os.getenv(f"{ENV_PREFIX}MAX_DURATION"):
            overrides.setdefault("window", {})["max_duration_s"] = int(
                os.getenv(f"{ENV_PREFIX}MAX_DURATION")
            )
        if os.getenv(f"{ENV_PREFIX}MAX_START_OFFSET"):
            overrides.setdefault("window", {})["max_start_offset_s"] = int(
                os.getenv(f"{ENV_PREFIX}MAX_START_OFFSET")
            )

        # API
        if os.getenv(f"{ENV_PREFIX}API_HOST"):
            overrides.setdefault("api", {})["host"] = os.getenv(f"{ENV_PREFIX}API_HOST")
        if os.getenv(f"{ENV_PREFIX}API_PORT"):
            overrides.setdefault("api", {})["port"] = int(os.getenv(f"{ENV_PREFIX}API_PORT"))

        # Logging
        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_json(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r") as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        chain_data = data.get("chain", {})
        window_data = data.get("window", {})
        api_data = data.get("api", {})

        chain = ChainConfig(**chain_data) if chain_data else ChainConfig()
        window = WindowConfig(**window_data) if window_data else WindowConfig()
        api = ApiConfig(**api_data) if api_data else ApiConfig()

        return cls(
            chain=chain,
            window=window,
            api=api,
            log_level=data.get("log_level", "INFO"),
            log_file=data.get("log_file"),
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        import copy
        new_config = copy.deepcopy(self)

        for section in ("chain", "window", "api"):
            for key, value in overrides.get(section, {}).items():
                setattr(getattr(new_config, section), key, value)

        if "log_level" in overrides:
            new_config.log_level = overrides["log_level"]
        if "log_file" in overrides:
            new_config.log_file = overrides["log_file"]

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "chain": {
                "chain_id": self.chain.chain_id,
                "genesis_timestamp": self.chain.genesis_timestamp,
            },
            "window": {
                "max_duration_s": self.window.max_duration_s,
                "max_start_offset_s": self.window.max_start_offset_s,
            },
            "api": {
                "host": self.api.host,
                "port": self.api.port,
            },
            "log_level": self.log_level,
            "log_file": self.log_file,
            "extra": self.extra,
        }


def default_config_paths() -> list[Path]:
    """Locations searched when no config path is given."""
    return [
        Path.cwd() / "dropvault.json",
        Path.cwd() / ".dropvault.json",
        Path.home() / ".config" / "dropvault" / "config.json",
    ]


def load_runtime_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings. Files ending in .yaml or
    .yml are read as YAML, anything else as JSON.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    config = RuntimeConfig()

    path = config_path
    if path is None:
        path = next((p for p in default_config_paths() if p.exists()), None)

    if path is not None and Path(path).exists():
        if Path(path).suffix in (".yaml", ".yml"):
            config = RuntimeConfig.from_yaml(path)
        else:
            config = RuntimeConfig.from_json(path)

    return config.with_env_overrides()


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return json.dumps(RuntimeConfig().to_dict(), indent=2) + "\n"


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration (config file, then env overrides)."""
    global _default_config
    if _default_config is None:
        _default_config = load_runtime_config()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set the default runtime configuration (None resets to env-derived)."""
    global _default_config
    _default_config = config
