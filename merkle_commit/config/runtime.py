"""
Runtime Configuration

Central configuration for leaf encoding and library logging.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from merkle_commit.schemas.canonical import DEFAULT_TEXT_ENCODING, validate_text_encoding
from merkle_commit.schemas.errors import ConfigurationException

load_dotenv()

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


@dataclass
class HashingConfig:
    """Configuration for turning leaves into bytes."""
    text_encoding: str = DEFAULT_TEXT_ENCODING

    def __post_init__(self):
        self.text_encoding = validate_text_encoding(self.text_encoding)


@dataclass
class LoggingConfig:
    """Configuration for the library's loggers."""
    level: str = "WARNING"
    debug: bool = False

    def __post_init__(self):
        self.level = self.level.upper()
        if self.level not in _LOG_LEVELS:
            raise ConfigurationException(
                message=f"Unknown log level: {self.level!r}",
                field_path="logging.level",
            )

    @property
    def effective_level(self) -> str:
        return "DEBUG" if self.debug else self.level


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables (a local .env file is read on import)
    - YAML file
    - Programmatic construction
    """
    hashing: HashingConfig = field(default_factory=HashingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def text_encoding(self) -> str:
        return self.hashing.text_encoding

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the SINGLE source of truth for all env var reading.

        Supported variables:
        - MERKLE_TEXT_ENCODING: encoding applied to str leaves
        - MERKLE_LOG_LEVEL: level for the merkle_commit logger
        - MERKLE_DEBUG: force DEBUG logging (true/false)
        """
        overrides: dict[str, Any] = {}

        if os.getenv("MERKLE_TEXT_ENCODING"):
            overrides.setdefault("hashing", {})["text_encoding"] = os.getenv("MERKLE_TEXT_ENCODING")

        if os.getenv("MERKLE_LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv("MERKLE_LOG_LEVEL")
        if os.getenv("MERKLE_DEBUG"):
            overrides.setdefault("logging", {})["debug"] = _env_flag("MERKLE_DEBUG")

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
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        hashing_data = data.get("hashing", {}) or {}
        logging_data = data.get("logging", {}) or {}

        try:
            hashing = HashingConfig(**hashing_data)
            logging_conf = LoggingConfig(**logging_data)
        except TypeError as e:
            raise ConfigurationException(
                message=f"Invalid configuration: {e}",
                details={"error": str(e)},
            ) from e

        return cls(
            hashing=hashing,
            logging=logging_conf,
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        if "hashing" in overrides:
            new_config.hashing = HashingConfig(
                **{**vars(new_config.hashing), **overrides["hashing"]}
            )

        if "logging" in overrides:
            new_config.logging = LoggingConfig(
                **{**vars(new_config.logging), **overrides["logging"]}
            )

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "hashing": {
                "text_encoding": self.hashing.text_encoding,
            },
            "logging": {
                "level": self.logging.level,
                "debug": self.logging.debug,
            },
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: RuntimeConfig | None) -> None:
    """Set the default runtime configuration (None resets to env defaults)."""
    global _default_config
    _default_config = config
